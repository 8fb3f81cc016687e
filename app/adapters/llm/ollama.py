import json
from typing import Any

import httpx

from app.core.config import settings
from app.core.errors import LLMError, StructuredOutputError
from app.adapters.llm.base import LLM, EMPTY_RESPONSE_FALLBACK

class OllamaLLM(LLM):
    name = "ollama"

    def __init__(self, base_url: str | None = None, model: str | None = None, timeout: float | None = None):
        self.base_url = (base_url or settings.OLLAMA_BASE_URL).rstrip("/")
        self.model = model or settings.OLLAMA_MODEL
        self.timeout = timeout or settings.LLM_TIMEOUT

    async def _post(self, payload: dict[str, Any]) -> dict[str, Any]:
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                r = await client.post(f"{self.base_url}/api/generate", json=payload)
                r.raise_for_status()
                return r.json()
        except httpx.HTTPError as e:
            raise LLMError(f"Ollama request failed: {e}", provider=self.name) from e
        except ValueError as e:
            raise LLMError(f"Ollama returned invalid JSON: {e}", provider=self.name) from e

    def _options(self, temperature: float) -> dict[str, Any]:
        return {
            "num_predict": settings.OLLAMA_NUM_PREDICT,
            "temperature": temperature,
            "top_p": settings.OLLAMA_TOP_P,
        }

    async def generate(self, system: str, prompt: str, temperature: float | None = None) -> str:
        temperature = settings.GENERATION_TEMPERATURE if temperature is None else temperature
        data = await self._post({
            "model": self.model,
            "system": system,
            "prompt": prompt,
            "stream": False,
            "keep_alive": settings.OLLAMA_KEEP_ALIVE,
            "options": self._options(temperature),
        })
        return data.get("response") or EMPTY_RESPONSE_FALLBACK

    async def generate_structured(self, prompt, schema, name, temperature=None):
        temperature = settings.CLASSIFY_TEMPERATURE if temperature is None else temperature
        data = await self._post({
            "model": self.model,
            "prompt": prompt,
            "stream": False,
            # Ollama accepts a JSON schema here and constrains decoding to it.
            "format": schema,
            "keep_alive": settings.OLLAMA_KEEP_ALIVE,
            "options": self._options(temperature),
        })
        raw = data.get("response") or ""
        try:
            obj = json.loads(raw)
        except json.JSONDecodeError as e:
            raise StructuredOutputError(f"Ollama {name} output is not JSON", provider=self.name) from e
        if not isinstance(obj, dict):
            raise StructuredOutputError(f"Ollama {name} output is not an object", provider=self.name)
        return obj
