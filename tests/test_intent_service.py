import asyncio

import pytest

from app.core.errors import LLMError, StructuredOutputError
from app.core.models import ActionType, AgentAction
from app.services.intent_service import ACTION_SCHEMA, classify_intent, parse_action
from tests.conftest import FakeLLM

DEFAULT = AgentAction(type=ActionType.ANSWER, reasoning="Defaulting to basic answer.")


@pytest.mark.asyncio
async def test_conforming_payload_is_used():
    llm = FakeLLM(action={"type": "REPORT", "reasoning": "User asked for a deep dive."})
    action = await classify_intent("Give me a deep dive on costs", llm)
    assert action == AgentAction(type=ActionType.REPORT, reasoning="User asked for a deep dive.")


@pytest.mark.asyncio
async def test_request_carries_query_instruction_and_schema():
    llm = FakeLLM()
    await classify_intent("Summarize the budget briefly", llm)
    call = llm.structured_calls[0]
    assert 'User Query: "Summarize the budget briefly"' in call["prompt"]
    assert "SUMMARIZE" in call["prompt"] and "deep dive" in call["prompt"]
    assert call["schema"] is ACTION_SCHEMA
    assert ACTION_SCHEMA["required"] == ["type", "reasoning"]
    assert ACTION_SCHEMA["properties"]["type"]["enum"] == ["ANSWER", "SUMMARIZE", "CATEGORIZE", "REPORT"]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "llm",
    [
        FakeLLM(action_error=LLMError("timeout")),
        FakeLLM(action_error=StructuredOutputError("not json")),
        FakeLLM(action_error=RuntimeError("boom")),
        FakeLLM(action={"type": "DANCE", "reasoning": "?"}),
        FakeLLM(action={"type": "ANSWER"}),
        FakeLLM(action={"reasoning": "no type"}),
        FakeLLM(action={"type": "ANSWER", "reasoning": 42}),
        FakeLLM(action={"type": "ANSWER", "reasoning": "ok", "extra": 1}),
        FakeLLM(action=["ANSWER"]),
    ],
)
async def test_failures_fall_back_to_default_answer(llm):
    assert await classify_intent("anything", llm) == DEFAULT


@pytest.mark.asyncio
async def test_cancellation_is_not_swallowed():
    llm = FakeLLM(action_error=asyncio.CancelledError())
    with pytest.raises(asyncio.CancelledError):
        await classify_intent("anything", llm)


def test_parse_action_rejects_non_objects():
    with pytest.raises(StructuredOutputError):
        parse_action("ANSWER")


def test_parse_action_accepts_every_mode():
    for mode in ActionType:
        assert parse_action({"type": mode.value, "reasoning": "r"}).type is mode
