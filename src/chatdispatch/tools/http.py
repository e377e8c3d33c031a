"""Shared HTTP plumbing for tools backed by a JSON web API."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from chatdispatch.errors import DataNotFoundError, ExternalServiceError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0


class JsonService:
    """Base for upstream JSON APIs.

    A shared ``httpx.AsyncClient`` may be injected; otherwise one is opened
    per request.
    """

    service_name: str = "upstream"

    def __init__(self, *, timeout: float = DEFAULT_TIMEOUT, client: httpx.AsyncClient | None = None):
        self._timeout = timeout
        self._client = client

    async def get_json(
        self,
        url: str,
        *,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        not_found: str | None = None,
    ) -> Any:
        """GET ``url`` and decode the JSON body.

        Raises:
            DataNotFoundError: upstream answered 404 and ``not_found`` is given.
            ExternalServiceError: network failure, other non-2xx status or invalid JSON.
        """
        if self._client is not None:
            return await self._fetch(self._client, url, params, headers, not_found)
        async with httpx.AsyncClient(timeout=self._timeout) as client:
            return await self._fetch(client, url, params, headers, not_found)

    async def _fetch(
        self,
        client: httpx.AsyncClient,
        url: str,
        params: dict[str, Any] | None,
        headers: dict[str, str] | None,
        not_found: str | None,
    ) -> Any:
        try:
            response = await client.get(url, params=params, headers=headers)
        except httpx.HTTPError as exc:
            raise ExternalServiceError(f"{self.service_name} API is unreachable: {exc}") from exc

        if response.status_code == 404 and not_found is not None:
            raise DataNotFoundError(not_found)
        if response.is_error:
            logger.warning("%s API returned HTTP %d", self.service_name, response.status_code)
            raise ExternalServiceError(
                f"Error fetching {self.service_name.lower()} data: HTTP {response.status_code}"
            )
        try:
            return response.json()
        except ValueError as exc:
            raise ExternalServiceError(f"{self.service_name} API returned invalid JSON") from exc
