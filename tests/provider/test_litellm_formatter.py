import asyncio
from types import SimpleNamespace

import pytest

from chatdispatch.errors import TransportError
from chatdispatch.kernel import Message, ToolDefinition, ToolParameter
from chatdispatch.providers.litellm import LiteLLMChatModel, LiteLLMFormatter
from chatdispatch.providers.litellm import model as model_module


def _response(content=None, tool_calls=None):
    message = SimpleNamespace(content=content, tool_calls=tool_calls)
    return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def _tool_call(name, arguments, id="call_1"):
    return SimpleNamespace(id=id, function=SimpleNamespace(name=name, arguments=arguments))


SEARCH = ToolDefinition(
    name="searchProduct",
    description="Search for a product",
    parameters={
        "search": ToolParameter(
            name="search", type="string", description="Search for products by name", required=True
        )
    },
)


class TestLiteLLMFormatter:
    """Test LiteLLM formatter functionality."""

    def test_format_seed_messages(self):
        msgs = [
            Message(role="system", content="You are a helpful assistant."),
            Message(role="user", content="Hello!"),
        ]
        result = asyncio.run(LiteLLMFormatter().format(msgs))
        assert result == [
            {"role": "system", "content": "You are a helpful assistant."},
            {"role": "user", "content": "Hello!"},
        ]

    def test_format_tool_message_as_function(self):
        msgs = [Message(role="tool", name="searchProduct", content="Product: Blue Shirt")]
        result = asyncio.run(LiteLLMFormatter().format(msgs))
        assert result == [{"role": "function", "name": "searchProduct", "content": "Product: Blue Shirt"}]

    def test_format_rejects_non_messages(self):
        with pytest.raises(TypeError):
            asyncio.run(LiteLLMFormatter().format([{"role": "user"}]))

    def test_format_tools(self):
        assert LiteLLMFormatter().format_tools([SEARCH]) == [
            {
                "type": "function",
                "function": {
                    "name": "searchProduct",
                    "description": "Search for a product",
                    "parameters": {
                        "type": "object",
                        "properties": {
                            "search": {"type": "string", "description": "Search for products by name"}
                        },
                        "required": ["search"],
                    },
                },
            }
        ]

    def test_parse_direct_answer(self):
        result = LiteLLMFormatter().parse(_response(content="Hi!"))
        assert result.content == "Hi!"
        assert result.tool_calls == []

    def test_parse_tool_calls_keeps_order(self):
        response = _response(
            tool_calls=[
                _tool_call("searchProduct", '{"search": "shirt"}', id="a"),
                _tool_call("convertCurrencies", None, id="b"),
            ]
        )
        result = LiteLLMFormatter().parse(response)
        assert [c.name for c in result.tool_calls] == ["searchProduct", "convertCurrencies"]
        assert result.tool_calls[0].raw_arguments == '{"search": "shirt"}'
        assert result.tool_calls[1].raw_arguments == "{}"
        assert result.tool_calls[1].id == "b"

    def test_parse_without_choices(self):
        with pytest.raises(TransportError):
            LiteLLMFormatter().parse(SimpleNamespace(choices=[]))


class TestLiteLLMChatModel:
    def test_complete_chat_sends_tools(self, monkeypatch):
        captured = {}

        async def fake_acompletion(**kwargs):
            captured.update(kwargs)
            return _response(tool_calls=[_tool_call("searchProduct", '{"search": "shirt"}')])

        monkeypatch.setattr(model_module.litellm, "acompletion", fake_acompletion)
        chat = LiteLLMChatModel("openai/gpt-4o-mini", api_key="sk-test")
        result = asyncio.run(chat.complete_chat([Message(role="user", content="shirts?")], [SEARCH]))

        assert captured["model"] == "openai/gpt-4o-mini"
        assert captured["api_key"] == "sk-test"
        assert captured["tools"][0]["function"]["name"] == "searchProduct"
        assert captured["messages"] == [{"role": "user", "content": "shirts?"}]
        assert result.tool_calls[0].name == "searchProduct"

    def test_complete_chat_without_tools(self, monkeypatch):
        captured = {}

        async def fake_acompletion(**kwargs):
            captured.update(kwargs)
            return _response(content="done")

        monkeypatch.setattr(model_module.litellm, "acompletion", fake_acompletion)
        result = asyncio.run(
            LiteLLMChatModel("openai/gpt-4o-mini").complete_chat([Message(role="user", content="x")])
        )

        assert "tools" not in captured
        assert "api_key" not in captured
        assert result.content == "done"

    def test_complete_chat_wraps_failures(self, monkeypatch):
        async def failing_acompletion(**kwargs):
            raise ConnectionError("network down")

        monkeypatch.setattr(model_module.litellm, "acompletion", failing_acompletion)
        with pytest.raises(TransportError, match="network down"):
            asyncio.run(
                LiteLLMChatModel("openai/gpt-4o-mini").complete_chat([Message(role="user", content="x")])
            )
