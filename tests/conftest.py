import pytest

from app.adapters.llm.base import LLM
from app.core.errors import LLMError
from app.services.store_service import KnowledgeStore


class FakeLLM(LLM):
    """Scripted LLM: returns (or raises) whatever the test configured."""

    name = "fake"

    def __init__(self, action=None, answer="Generated answer.", action_error=None, answer_error=None):
        self.action = action if action is not None else {"type": "ANSWER", "reasoning": "Simple question."}
        self.answer = answer
        self.action_error = action_error
        self.answer_error = answer_error
        self.structured_calls = []
        self.generate_calls = []

    async def generate_structured(self, prompt, schema, name, temperature=None):
        self.structured_calls.append({"prompt": prompt, "schema": schema, "name": name})
        if self.action_error:
            raise self.action_error
        return self.action

    async def generate(self, system, prompt, temperature=None):
        self.generate_calls.append({"system": system, "prompt": prompt, "temperature": temperature})
        if self.answer_error:
            raise self.answer_error
        return self.answer


@pytest.fixture
def fake_llm():
    return FakeLLM()


@pytest.fixture
def failing_llm():
    return FakeLLM(
        action_error=LLMError("connection refused", provider="fake"),
        answer_error=LLMError("connection refused", provider="fake"),
    )


@pytest.fixture
def store():
    return KnowledgeStore()
