"""Currency conversion tool backed by freecurrencyapi.com."""

from __future__ import annotations

import httpx
from pydantic import BaseModel, ConfigDict, Field

from chatdispatch.errors import DataNotFoundError, ExternalServiceError
from chatdispatch.kernel.tool import ToolDefinition, ToolOutcome, ToolParameter
from chatdispatch.runtime.tools import RegisteredTool

from .http import DEFAULT_TIMEOUT, JsonService

FREE_CURRENCY_URL = "https://api.freecurrencyapi.com/v1/latest"

DEFINITION = ToolDefinition(
    name="convertCurrencies",
    description="Convert a value from one currency to another",
    parameters={
        "currency": ToolParameter(
            name="currency",
            type="string",
            description="The currency to convert to",
            required=True,
        ),
        "value": ToolParameter(
            name="value",
            type="number",
            description="The value to convert",
            required=True,
        ),
        "baseCurrency": ToolParameter(
            name="baseCurrency",
            type="string",
            description="The currency to convert from",
            required=True,
        ),
    },
)


class ConvertArgs(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    currency: str
    value: float
    base_currency: str = Field(alias="baseCurrency")


class Conversion(BaseModel):
    base_currency: str
    currency: str
    value: float
    rate: float
    converted_value: float


class CurrencyClient(JsonService):
    service_name = "Currency"

    def __init__(
        self,
        api_key: str,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        client: httpx.AsyncClient | None = None,
    ):
        super().__init__(timeout=timeout, client=client)
        self._api_key = api_key

    async def get_exchange_rate(self, base: str, target: str) -> float:
        """Rate quoted for ``target`` against ``base``."""
        data = await self.get_json(
            FREE_CURRENCY_URL,
            params={"apikey": self._api_key, "currencies": target, "base_currency": base},
            not_found=f"Currency {base} is not supported",
        )
        rates = data.get("data") if isinstance(data, dict) else None
        if not isinstance(rates, dict) or rates.get(target) is None:
            raise DataNotFoundError(f"Currency {target} not found in the response")
        try:
            return float(rates[target])
        except (TypeError, ValueError) as exc:
            raise ExternalServiceError(
                f"Unexpected currency response: rate for {target} is {rates[target]!r}"
            ) from exc

    async def convert(self, base: str, target: str, value: float) -> Conversion:
        base, target = base.upper(), target.upper()
        rate = await self.get_exchange_rate(base, target)
        return Conversion(
            base_currency=base,
            currency=target,
            value=value,
            rate=rate,
            converted_value=value * rate,
        )


def summarize(args: ConvertArgs, outcome: ToolOutcome) -> str:
    conversion: Conversion = outcome.payload
    return (
        f"Convert {conversion.value:g} {conversion.base_currency} to {conversion.currency}: "
        f"{conversion.converted_value} {conversion.currency}"
    )


def make_tool(client: CurrencyClient) -> RegisteredTool:
    async def handler(args: ConvertArgs) -> ToolOutcome:
        return ToolOutcome.success(await client.convert(args.base_currency, args.currency, args.value))

    return RegisteredTool(
        definition=DEFINITION,
        arguments=ConvertArgs,
        handler=handler,
        summarize=summarize,
    )
