"""Flask front-end exposing one prompt endpoint per tool catalog."""

from __future__ import annotations

import logging
from collections.abc import Mapping

from flask import Flask, jsonify, request
from pydantic import BaseModel, Field, ValidationError

from chatdispatch.agents.dispatch import DispatchAgent, DispatchConfig
from chatdispatch.config import Settings
from chatdispatch.errors import describe_validation_error
from chatdispatch.providers.litellm import LiteLLMChatModel
from chatdispatch.tools import CATALOGS

logger = logging.getLogger(__name__)


class PromptRequest(BaseModel):
    prompt: str = Field(min_length=10, max_length=512)


def build_agents(settings: Settings) -> dict[str, DispatchAgent]:
    """One DispatchAgent per catalog, sharing the completion transport."""
    model = LiteLLMChatModel(settings.model, api_key=settings.openai_api_key)
    config = DispatchConfig(system_prompt=settings.system_prompt)
    return {
        name: DispatchAgent(model, factory(settings), config=config, trace=False)
        for name, factory in CATALOGS.items()
    }


def create_app(
    settings: Settings | None = None,
    agents: Mapping[str, DispatchAgent] | None = None,
) -> Flask:
    """Application factory.

    Routes ``POST /<catalog>/prompt`` for every catalog in ``agents``.
    """
    app = Flask(__name__)
    if agents is None:
        agents = build_agents(settings or Settings())

    @app.post("/<catalog>/prompt")
    async def prompt(catalog: str):
        agent = agents.get(catalog)
        if agent is None:
            return jsonify(ok=False, error=f"Unknown catalog: {catalog}"), 404
        try:
            body = PromptRequest.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            return jsonify(ok=False, error=f"Validation error: {describe_validation_error(exc)}"), 400

        result = await agent.run(body.prompt)
        return jsonify(result.to_dict())

    return app
