from abc import ABC, abstractmethod
from typing import Any

# Returned by generate() when the provider answers without any text.
EMPTY_RESPONSE_FALLBACK = "I'm sorry, I couldn't process that request."


class LLM(ABC):
    """Generation backend. Every failure surfaces as app.core.errors.LLMError."""

    name: str = "llm"

    @abstractmethod
    async def generate(self, system: str, prompt: str, temperature: float | None = None) -> str:
        ...

    @abstractmethod
    async def generate_structured(
        self,
        prompt: str,
        schema: dict[str, Any],
        name: str,
        temperature: float | None = None,
    ) -> dict[str, Any]:
        """Return a JSON object constrained to `schema`."""
        ...
