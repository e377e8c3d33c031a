"""Product search tool over a flat CSV record store."""

from __future__ import annotations

import asyncio
import csv
import logging
from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    ValidationInfo,
    ValidatorFunctionWrapHandler,
    field_validator,
)

from chatdispatch.errors import ExternalServiceError
from chatdispatch.kernel.tool import ToolDefinition, ToolOutcome, ToolParameter
from chatdispatch.runtime.tools import RegisteredTool

logger = logging.getLogger(__name__)

DEFINITION = ToolDefinition(
    name="searchProduct",
    description="Search for a product",
    parameters={
        "search": ToolParameter(
            name="search",
            type="string",
            description="Search for products by name",
            required=True,
        ),
    },
)

RECOMMEND_INSTRUCTION = "check the list of products and recommend one to the user"


class SearchArgs(BaseModel):
    model_config = ConfigDict(extra="forbid")

    search: str


class ProductRecord(BaseModel):
    """One row of the product store; aliases are the CSV column names."""

    model_config = ConfigDict(populate_by_name=True)

    title: str = Field(alias="displayTitle")
    embedding_text: str = Field(default="", alias="embeddingText")
    url: str = ""
    image_url: str = Field(default="", alias="imageUrl")
    category: str = Field(default="", alias="productType")
    discount: str = ""
    price: str = ""
    variants: str = ""
    created_at: datetime | None = Field(default=None, alias="createDate")

    @field_validator("created_at", mode="wrap")
    @classmethod
    def _lenient_date(
        cls, value: Any, handler: ValidatorFunctionWrapHandler, info: ValidationInfo
    ) -> datetime | None:
        # Undated and unparseable rows sort after every dated row.
        if isinstance(value, str) and not value.strip():
            return None
        try:
            return handler(value)
        except ValidationError:
            logger.warning(
                "Unparseable createDate %r for product %r, treating it as undated",
                value,
                info.data.get("title"),
            )
            return None


def _created_key(record: ProductRecord) -> float:
    return record.created_at.timestamp() if record.created_at else float("-inf")


def search_records(records: list[ProductRecord], query: str) -> list[ProductRecord]:
    """Case-insensitive substring match on the title, most recent first.

    Records created at the same time keep their store order.
    """
    needle = query.lower()
    matches = [record for record in records if record.title and needle in record.title.lower()]
    return sorted(matches, key=_created_key, reverse=True)


class ProductStore(ABC):
    """Read side of the append-only product store."""

    @abstractmethod
    async def records(self) -> list[ProductRecord]:
        ...

    async def search(self, query: str) -> list[ProductRecord]:
        """Zero matches is a valid, empty result."""
        return search_records(await self.records(), query)


class InMemoryProductStore(ProductStore):
    def __init__(self, records: list[ProductRecord] | None = None) -> None:
        self._records = list(records or [])

    def append(self, record: ProductRecord) -> None:
        self._records.append(record)

    async def records(self) -> list[ProductRecord]:
        return list(self._records)


class CsvProductStore(ProductStore):
    """Reads the CSV file on every search so appended rows are picked up."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def _load(self) -> list[ProductRecord]:
        with self.path.open(newline="", encoding="utf-8") as fh:
            return [
                ProductRecord.model_validate(
                    {key: value for key, value in row.items() if key and value is not None}
                )
                for row in csv.DictReader(fh)
                if row.get("displayTitle")
            ]

    async def records(self) -> list[ProductRecord]:
        try:
            return await asyncio.to_thread(self._load)
        except (OSError, csv.Error, ValidationError) as exc:
            logger.error("Error reading CSV file %s: %s", self.path, exc)
            raise ExternalServiceError("Error processing CSV file") from exc


def summarize(args: SearchArgs, outcome: ToolOutcome) -> str:
    products: list[ProductRecord] = outcome.payload
    if not products:
        return (
            f'No products matched "{args.search}". '
            "Tell the user nothing was found and suggest searching for something else."
        )
    summaries = "\n\n".join(
        f"Product: {product.title}\n"
        f"Price: {product.price}\n"
        f"Discount: {product.discount}\n"
        f"Type: {product.category}\n"
        f"URL: {product.url}"
        for product in products
    )
    return f"{summaries}\n\n{RECOMMEND_INSTRUCTION}"


def make_tool(store: ProductStore) -> RegisteredTool:
    async def handler(args: SearchArgs) -> ToolOutcome:
        return ToolOutcome.success(await store.search(args.search))

    return RegisteredTool(
        definition=DEFINITION,
        arguments=SearchArgs,
        handler=handler,
        summarize=summarize,
    )
