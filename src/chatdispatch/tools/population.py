"""Population lookup tool backed by the RapidAPI place population finder."""

from __future__ import annotations

from urllib.parse import quote

import httpx
from pydantic import BaseModel, ConfigDict, ValidationError

from chatdispatch.errors import DataNotFoundError, ExternalServiceError, describe_validation_error
from chatdispatch.kernel.tool import ToolDefinition, ToolOutcome, ToolParameter
from chatdispatch.runtime.tools import RegisteredTool

from .http import DEFAULT_TIMEOUT, JsonService

POPULATION_HOST = "place-population-finder-api.p.rapidapi.com"

DEFINITION = ToolDefinition(
    name="getPopulation",
    description="Get the population of a city",
    parameters={
        "city": ToolParameter(
            name="city",
            type="string",
            description="The name of the city to get the population for",
            required=True,
        ),
    },
)


class PopulationArgs(BaseModel):
    model_config = ConfigDict(extra="forbid")

    city: str


class PopulationReport(BaseModel):
    city: str
    population: int


class PopulationClient(JsonService):
    service_name = "Population"

    def __init__(
        self,
        api_key: str,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        client: httpx.AsyncClient | None = None,
    ):
        super().__init__(timeout=timeout, client=client)
        self._api_key = api_key

    async def get_population(self, city: str) -> PopulationReport:
        not_found = f"No population data for city {city}"
        data = await self.get_json(
            f"https://{POPULATION_HOST}/{quote(city)}",
            headers={"x-rapidapi-key": self._api_key, "x-rapidapi-host": POPULATION_HOST},
            not_found=not_found,
        )
        if not isinstance(data, dict) or data.get("population") is None:
            raise DataNotFoundError(not_found)
        try:
            return PopulationReport(city=data.get("city") or city, population=data["population"])
        except ValidationError as exc:
            raise ExternalServiceError(
                f"Unexpected population response: {describe_validation_error(exc)}"
            ) from exc


def summarize(args: PopulationArgs, outcome: ToolOutcome) -> str:
    report: PopulationReport = outcome.payload
    return f"The population of {report.city} is {report.population}, only this data"


def make_tool(client: PopulationClient) -> RegisteredTool:
    async def handler(args: PopulationArgs) -> ToolOutcome:
        return ToolOutcome.success(await client.get_population(args.city))

    return RegisteredTool(
        definition=DEFINITION,
        arguments=PopulationArgs,
        handler=handler,
        summarize=summarize,
    )
