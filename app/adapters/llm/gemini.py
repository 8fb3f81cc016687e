import json

import httpx

from app.core.config import settings
from app.core.errors import LLMError, StructuredOutputError
from app.adapters.llm.base import LLM, EMPTY_RESPONSE_FALLBACK


class GeminiLLM(LLM):
    name = "gemini"

    def __init__(self, api_key: str | None = None, model: str | None = None, timeout: float | None = None):
        self.api_key = api_key or settings.GEMINI_API_KEY
        self.model = model or settings.GEMINI_MODEL
        self.timeout = timeout or settings.LLM_TIMEOUT
        self._genai_client = None

    def _client(self):
        # One client per adapter; google-genai takes the timeout in milliseconds.
        if self._genai_client is None:
            from google import genai
            from google.genai import types
            self._genai_client = genai.Client(
                api_key=self.api_key,
                http_options=types.HttpOptions(timeout=int(self.timeout * 1000)),
            )
        return self._genai_client

    async def _generate(self, contents: str, config) -> str | None:
        from google.genai import errors
        try:
            response = await self._client().aio.models.generate_content(
                model=self.model,
                contents=contents,
                config=config,
            )
        except errors.APIError as e:
            raise LLMError(f"Gemini request failed: {e}", provider=self.name) from e
        except (httpx.HTTPError, OSError, ValueError) as e:
            # network errors, timeouts and client-side validation
            raise LLMError(f"Gemini request failed: {e}", provider=self.name) from e
        return response.text

    async def generate(self, system: str, prompt: str, temperature: float | None = None) -> str:
        from google.genai import types

        temperature = settings.GENERATION_TEMPERATURE if temperature is None else temperature
        text = await self._generate(
            prompt,
            types.GenerateContentConfig(system_instruction=system, temperature=temperature),
        )
        return text or EMPTY_RESPONSE_FALLBACK

    async def generate_structured(self, prompt, schema, name, temperature=None):
        from google.genai import types

        temperature = settings.CLASSIFY_TEMPERATURE if temperature is None else temperature
        text = await self._generate(
            prompt,
            types.GenerateContentConfig(
                temperature=temperature,
                response_mime_type="application/json",
                response_json_schema=schema,
            ),
        )
        try:
            obj = json.loads(text or "")
        except json.JSONDecodeError as e:
            raise StructuredOutputError(f"Gemini {name} output is not JSON", provider=self.name) from e
        if not isinstance(obj, dict):
            raise StructuredOutputError(f"Gemini {name} output is not an object", provider=self.name)
        return obj
