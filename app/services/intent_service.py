"""Decide which response mode a query calls for.

The decision itself is delegated to the LLM through a schema-constrained call.
Whatever goes wrong there, the pipeline still gets an action: a failed
classification degrades to a plain ANSWER and is never shown to the user.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from app.adapters.llm.base import LLM
from app.core.errors import StructuredOutputError
from app.core.models import ActionType, AgentAction

logger = logging.getLogger(__name__)

DEFAULT_REASONING = "Defaulting to basic answer."

INTENT_INSTRUCTION = """Analyze the user's intent and decide which action to take:
- ANSWER: For simple questions or facts.
- SUMMARIZE: If the user explicitly asks for a summary or to "explain briefly".
- CATEGORIZE: If the user asks to "group", "theme", or "categorize" findings.
- REPORT: If the user asks for a "detailed analysis", "research report", or "deep dive".
"""

ACTION_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "type": {
            "type": "string",
            "enum": [a.value for a in ActionType],
        },
        "reasoning": {
            "type": "string",
            "description": "A short explanation of why this action was chosen.",
        },
    },
    "required": ["type", "reasoning"],
    "additionalProperties": False,
}


def default_action() -> AgentAction:
    return AgentAction(type=ActionType.ANSWER, reasoning=DEFAULT_REASONING)


def build_intent_prompt(query: str) -> str:
    return f'{INTENT_INSTRUCTION}\nUser Query: "{query}"'


def parse_action(payload: Any) -> AgentAction:
    """Validate a classifier payload against ACTION_SCHEMA."""
    if not isinstance(payload, dict):
        raise StructuredOutputError("classification payload is not an object")
    extra = set(payload) - set(ACTION_SCHEMA["properties"])
    if extra:
        raise StructuredOutputError(f"unexpected fields in classification: {sorted(extra)}")
    if not isinstance(payload.get("reasoning"), str):
        raise StructuredOutputError("classification reasoning must be a string")
    try:
        return AgentAction(type=payload.get("type"), reasoning=payload["reasoning"])
    except ValidationError as e:
        raise StructuredOutputError(f"invalid classification: {e.errors()[0]['msg']}") from e


async def classify_intent(query: str, llm: LLM) -> AgentAction:
    try:
        payload = await llm.generate_structured(build_intent_prompt(query), ACTION_SCHEMA, name="agent_action")
        action = parse_action(payload)
    except Exception as e:
        # CancelledError is a BaseException and passes through untouched.
        logger.warning("Intent classification failed, using default action: %s", e)
        return default_action()
    logger.debug("Intent %s: %s", action.type.value, action.reasoning)
    return action
