import asyncio

from fakes import FakeChatModel, RecordingTool, answer, call, make_registry, requests

from chatdispatch.agents import DispatchAgent, DispatchConfig
from chatdispatch.errors import DataNotFoundError, ExternalServiceError, TransportError


def run(agent: DispatchAgent, prompt: str = "What is the weather in Lima?"):
    return asyncio.run(agent.run(prompt))


def test_direct_answer_is_returned_verbatim() -> None:
    weather = RecordingTool("getWeather")
    model = FakeChatModel([answer("  Hello there!\n")])
    agent = DispatchAgent(model, make_registry(weather))

    result = run(agent)

    assert result.ok
    assert result.response == "  Hello there!\n"
    assert weather.calls == []
    assert len(model.calls) == 1


def test_first_round_carries_seed_and_full_catalog() -> None:
    model = FakeChatModel([answer("hi")])
    agent = DispatchAgent(
        model,
        make_registry(RecordingTool("getWeather"), RecordingTool("getPopulation")),
        config=DispatchConfig(system_prompt="Be brief."),
    )

    run(agent, "Tell me something nice")

    messages, tools = model.calls[0]
    assert [(m.role, m.content) for m in messages] == [
        ("system", "Be brief."),
        ("user", "Tell me something nice"),
    ]
    assert [t.name for t in tools] == ["getWeather", "getPopulation"]


def test_tool_call_runs_handler_once_and_folds_result() -> None:
    weather = RecordingTool("getWeather", payload="sunny")
    model = FakeChatModel([requests(call("getWeather", {"city": "Lima"})), answer("It is sunny.")])
    agent = DispatchAgent(model, make_registry(weather))

    result = run(agent)

    assert result.to_dict() == {"ok": True, "response": "It is sunny."}
    assert len(weather.calls) == 1
    assert weather.calls[0].city == "Lima"
    assert weather.calls[0].limit == 1

    first_messages, _ = model.calls[0]
    followup_messages, followup_tools = model.calls[1]
    assert followup_tools is None
    assert followup_messages[:2] == first_messages
    assert len(followup_messages) == 3
    note = followup_messages[2]
    assert note.role == "tool"
    assert note.name == "getWeather"
    assert note.content == "getWeather for Lima: sunny"


def test_only_first_tool_call_is_dispatched() -> None:
    weather = RecordingTool("getWeather")
    population = RecordingTool("getPopulation")
    model = FakeChatModel(
        [
            requests(
                call("getPopulation", {"city": "Quito"}, id="a"),
                call("getWeather", {"city": "Quito"}, id="b"),
                call("getPopulation", {"city": "Cusco"}, id="c"),
            ),
            answer("done"),
        ]
    )
    agent = DispatchAgent(model, make_registry(weather, population))

    result = run(agent)

    assert result.ok
    assert [args.city for args in population.calls] == ["Quito"]
    assert weather.calls == []
    tool_messages = [m for m in model.calls[1][0] if m.role == "tool"]
    assert len(tool_messages) == 1


def test_followup_tool_requests_are_ignored() -> None:
    weather = RecordingTool("getWeather")
    followup = requests(call("getWeather", {"city": "Lima"}))
    followup.content = "Final words"
    model = FakeChatModel([requests(call("getWeather", {"city": "Lima"})), followup])
    agent = DispatchAgent(model, make_registry(weather))

    result = run(agent)

    assert result.response == "Final words"
    assert len(weather.calls) == 1
    assert len(model.calls) == 2


def test_failed_tool_still_gets_followup_round() -> None:
    weather = RecordingTool("getWeather", error=ExternalServiceError("Error fetching weather data"))
    model = FakeChatModel([requests(call("getWeather", {"city": "Lima"})), answer("Sorry!")])
    agent = DispatchAgent(model, make_registry(weather))

    result = run(agent)

    assert result.to_dict() == {"ok": True, "response": "Sorry!"}
    note = model.calls[1][0][-1]
    assert note.role == "tool"
    assert "Error fetching weather data" in note.content
    assert "Apologize" in note.content


def test_data_not_found_is_reported_to_model() -> None:
    population = RecordingTool("getPopulation", error=DataNotFoundError("No population data for city Atlantis"))
    model = FakeChatModel([requests(call("getPopulation", {"city": "Atlantis"})), answer("Unknown city.")])
    agent = DispatchAgent(model, make_registry(population))

    result = run(agent)

    assert result.ok
    assert "Atlantis" in model.calls[1][0][-1].content


def test_transport_error_in_first_round_fails_without_tools() -> None:
    weather = RecordingTool("getWeather")
    model = FakeChatModel([TransportError("Error in chat completion API: boom")])
    agent = DispatchAgent(model, make_registry(weather))

    result = run(agent)

    assert not result.ok
    assert result.error == "Error in chat completion API: boom"
    assert result.to_dict() == {"ok": False, "error": "Error in chat completion API: boom"}
    assert weather.calls == []


def test_transport_error_in_followup_round_fails() -> None:
    weather = RecordingTool("getWeather")
    model = FakeChatModel([requests(call("getWeather", {"city": "Lima"})), TransportError("timeout")])
    agent = DispatchAgent(model, make_registry(weather))

    result = run(agent)

    assert not result.ok
    assert result.error == "timeout"
    assert len(weather.calls) == 1


def test_malformed_arguments_abort() -> None:
    weather = RecordingTool("getWeather")
    model = FakeChatModel([requests(call("getWeather", '{"city": ')), answer("never")])
    agent = DispatchAgent(model, make_registry(weather))

    result = run(agent)

    assert not result.ok
    assert "Malformed arguments for tool getWeather" in result.error
    assert weather.calls == []
    assert len(model.calls) == 1


def test_missing_required_argument_aborts() -> None:
    weather = RecordingTool("getWeather")
    model = FakeChatModel([requests(call("getWeather", {"limit": 2})), answer("never")])
    agent = DispatchAgent(model, make_registry(weather))

    result = run(agent)

    assert not result.ok
    assert result.error == "Missing required arguments for tool getWeather: city"
    assert weather.calls == []


def test_unknown_tool_aborts() -> None:
    weather = RecordingTool("getWeather")
    model = FakeChatModel([requests(call("launchRocket", {"city": "Lima"})), answer("never")])
    agent = DispatchAgent(model, make_registry(weather))

    result = run(agent)

    assert not result.ok
    assert result.error == "Unknown tool requested: launchRocket"
    assert weather.calls == []
    assert len(model.calls) == 1


def test_unexpected_exception_is_contained() -> None:
    model = FakeChatModel([RuntimeError("kaput")])
    agent = DispatchAgent(model, make_registry())

    result = run(agent)

    assert not result.ok
    assert result.error == "Unexpected error: kaput"


def test_trace_records_rounds_and_tool_call() -> None:
    weather = RecordingTool("getWeather")
    model = FakeChatModel([requests(call("getWeather", {"city": "Lima"})), answer("ok")])
    agent = DispatchAgent(model, make_registry(weather))

    result = run(agent)

    assert result.trace is not None
    rounds = [ev.info["round"] for ev in result.trace.find_all("completion")]
    assert rounds == [1, 2]
    (tool_call,) = result.trace.find_all("tool_call")
    assert tool_call.info["name"] == "getWeather"
    (tool_result,) = result.trace.find_all("tool_result")
    assert tool_result.info["ok"] is True


def test_trace_disabled() -> None:
    agent = DispatchAgent(FakeChatModel([answer("ok")]), make_registry(), trace=False)
    assert run(agent).trace is None


def test_empty_direct_answer_becomes_empty_string() -> None:
    agent = DispatchAgent(FakeChatModel([answer(None)]), make_registry())
    result = run(agent)
    assert result.ok
    assert result.response == ""


def test_concurrent_requests_keep_separate_conversations() -> None:
    async def scenario():
        agent_a = DispatchAgent(
            FakeChatModel([requests(call("getWeather", {"city": "Lima"})), answer("A")]),
            make_registry(RecordingTool("getWeather")),
        )
        agent_b = DispatchAgent(FakeChatModel([answer("B")]), make_registry(RecordingTool("getWeather")))
        return await asyncio.gather(agent_a.run("first prompt"), agent_b.run("second prompt"))

    first, second = asyncio.run(scenario())
    assert first.response == "A"
    assert second.response == "B"
