"""Weather lookup tool backed by OpenWeatherMap."""

from __future__ import annotations

from typing import Literal

import httpx
from pydantic import BaseModel, ConfigDict, ValidationError

from chatdispatch.errors import ExternalServiceError, describe_validation_error
from chatdispatch.kernel.tool import ToolDefinition, ToolOutcome, ToolParameter
from chatdispatch.runtime.tools import RegisteredTool

from .http import DEFAULT_TIMEOUT, JsonService

OPEN_WEATHER_URL = "https://api.openweathermap.org/data/2.5/weather"

Unit = Literal["metric", "imperial"]

DEFINITION = ToolDefinition(
    name="getWeather",
    description="Get the weather of a city",
    parameters={
        "city": ToolParameter(
            name="city",
            type="string",
            description="The name of the city to get the weather for",
            required=True,
        ),
        "unit": ToolParameter(
            name="unit",
            type="string",
            description="The unit of the temperature",
            required=False,
            enum=("metric", "imperial"),
        ),
    },
)


class WeatherArgs(BaseModel):
    model_config = ConfigDict(extra="forbid")

    city: str
    unit: Unit = "metric"


class WeatherReport(BaseModel):
    city: str
    description: str
    temperature: float
    humidity_pct: float
    wind_speed: float
    unit: Unit = "metric"


class WeatherClient(JsonService):
    service_name = "Weather"

    def __init__(
        self,
        api_key: str,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        client: httpx.AsyncClient | None = None,
    ):
        super().__init__(timeout=timeout, client=client)
        self._api_key = api_key

    async def get_weather(self, city: str, unit: Unit = "metric") -> WeatherReport:
        data = await self.get_json(
            OPEN_WEATHER_URL,
            params={"q": city, "appid": self._api_key, "units": unit},
            not_found=f"No weather data for city {city}",
        )
        try:
            return WeatherReport(
                city=data["name"],
                description=data["weather"][0]["description"],
                temperature=data["main"]["temp"],
                humidity_pct=data["main"]["humidity"],
                wind_speed=data["wind"]["speed"],
                unit=unit,
            )
        except (KeyError, IndexError, TypeError) as exc:
            raise ExternalServiceError(f"Unexpected weather response: missing {exc}") from exc
        except ValidationError as exc:
            raise ExternalServiceError(
                f"Unexpected weather response: {describe_validation_error(exc)}"
            ) from exc


def summarize(args: WeatherArgs, outcome: ToolOutcome) -> str:
    report: WeatherReport = outcome.payload
    degrees, speed = ("°C", "m/s") if report.unit == "metric" else ("°F", "mph")
    return (
        f"The weather in {report.city} is {report.description}, "
        f"with a temperature of {report.temperature:g}{degrees}, "
        f"a humidity of {report.humidity_pct:g}% "
        f"and a wind speed of {report.wind_speed:g}{speed}"
    )


def make_tool(client: WeatherClient) -> RegisteredTool:
    async def handler(args: WeatherArgs) -> ToolOutcome:
        return ToolOutcome.success(await client.get_weather(args.city, args.unit))

    return RegisteredTool(
        definition=DEFINITION,
        arguments=WeatherArgs,
        handler=handler,
        summarize=summarize,
    )
