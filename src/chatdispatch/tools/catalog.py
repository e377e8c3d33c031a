"""Tool catalogs served by the application.

``ai`` answers questions about cities (weather, population); ``products``
searches the product store and converts prices between currencies.
"""

from __future__ import annotations

from collections.abc import Callable

import httpx

from chatdispatch.config import Settings
from chatdispatch.runtime.tools import ToolRegistry

from . import currency, population, products, weather


def build_ai_registry(settings: Settings, client: httpx.AsyncClient | None = None) -> ToolRegistry:
    return ToolRegistry(
        [
            weather.make_tool(
                weather.WeatherClient(
                    settings.open_weather_api_key, timeout=settings.http_timeout, client=client
                )
            ),
            population.make_tool(
                population.PopulationClient(
                    settings.rapid_api_key, timeout=settings.http_timeout, client=client
                )
            ),
        ]
    )


def build_products_registry(
    settings: Settings,
    client: httpx.AsyncClient | None = None,
    store: products.ProductStore | None = None,
) -> ToolRegistry:
    return ToolRegistry(
        [
            currency.make_tool(
                currency.CurrencyClient(
                    settings.free_currency_api_key, timeout=settings.http_timeout, client=client
                )
            ),
            products.make_tool(store or products.CsvProductStore(settings.products_csv)),
        ]
    )


CATALOGS: dict[str, Callable[[Settings], ToolRegistry]] = {
    "ai": build_ai_registry,
    "products": build_products_registry,
}


def build_registry(name: str, settings: Settings) -> ToolRegistry:
    try:
        factory = CATALOGS[name]
    except KeyError:
        raise ValueError(f"Unknown catalog: {name}") from None
    return factory(settings)
