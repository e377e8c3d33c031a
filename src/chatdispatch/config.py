"""Process-wide settings.

Settings are read once at start-up (environment, then an optional ``.env``
file) and handed to collaborators explicitly; nothing looks them up at call
time.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from chatdispatch.conversation import DEFAULT_SYSTEM_PROMPT


class Settings(BaseSettings):
    """
    Configuration of the chat completion transport and of the tools.

    Attributes:
        model: LiteLLM model identifier used for both completion rounds
        openai_api_key: key for the completion provider
        open_weather_api_key: OpenWeatherMap key (getWeather)
        rapid_api_key: RapidAPI key (getPopulation)
        free_currency_api_key: freecurrencyapi.com key (convertCurrencies)
        products_csv: path of the product record store (searchProduct)
        http_timeout: timeout in seconds for tool HTTP calls
        system_prompt: system preamble opening every conversation
        log_level: root logging level
    """

    model: str = Field(default="openai/gpt-4o-mini", description="LiteLLM model name")
    openai_api_key: str | None = Field(default=None, description="Completion provider key")
    open_weather_api_key: str = Field(default="", description="OpenWeatherMap key")
    rapid_api_key: str = Field(default="", description="RapidAPI key")
    free_currency_api_key: str = Field(default="", description="freecurrencyapi.com key")
    products_csv: Path = Field(
        default=Path("data") / "products_list.csv",
        description="Product record store",
    )
    http_timeout: float = Field(default=10.0, gt=0, description="Tool HTTP timeout (s)")
    system_prompt: str = Field(default=DEFAULT_SYSTEM_PROMPT, description="System preamble")
    log_level: str = Field(default="INFO", description="Root logging level")

    model_config = SettingsConfigDict(
        env_prefix="CHATDISPATCH_",
        env_file=".env",
        env_file_encoding="utf-8",
        frozen=True,
        extra="ignore",
    )
