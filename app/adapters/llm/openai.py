import json

from app.core.config import settings
from app.core.errors import LLMError, StructuredOutputError
from app.adapters.llm.base import LLM, EMPTY_RESPONSE_FALLBACK

class OpenAILLM(LLM):
    name = "openai"

    def __init__(self, api_key: str | None = None, model: str | None = None):
        self.api_key = api_key or settings.OPENAI_API_KEY
        self.model = model or settings.OPENAI_MODEL
        self._openai_client = None

    def _client(self):
        if self._openai_client is None:
            from openai import AsyncOpenAI
            self._openai_client = AsyncOpenAI(api_key=self.api_key, timeout=settings.LLM_TIMEOUT)
        return self._openai_client

    async def _complete(self, messages: list[dict], temperature: float, **kwargs) -> str | None:
        import openai
        try:
            resp = await self._client().chat.completions.create(
                model=self.model,
                messages=messages,
                temperature=temperature,
                **kwargs,
            )
            return resp.choices[0].message.content
        except openai.OpenAIError as e:
            raise LLMError(f"OpenAI request failed: {e}", provider=self.name) from e
        except (IndexError, AttributeError) as e:
            raise LLMError("OpenAI returned no choices", provider=self.name) from e

    async def generate(self, system: str, prompt: str, temperature: float | None = None) -> str:
        temperature = settings.GENERATION_TEMPERATURE if temperature is None else temperature
        content = await self._complete(
            [
                {"role": "system", "content": system},
                {"role": "user", "content": prompt},
            ],
            temperature,
        )
        return content or EMPTY_RESPONSE_FALLBACK

    async def generate_structured(self, prompt, schema, name, temperature=None):
        temperature = settings.CLASSIFY_TEMPERATURE if temperature is None else temperature
        content = await self._complete(
            [{"role": "user", "content": prompt}],
            temperature,
            response_format={
                "type": "json_schema",
                "json_schema": {"name": name, "schema": schema, "strict": True},
            },
        )
        try:
            obj = json.loads(content or "")
        except json.JSONDecodeError as e:
            raise StructuredOutputError(f"OpenAI {name} output is not JSON", provider=self.name) from e
        if not isinstance(obj, dict):
            raise StructuredOutputError(f"OpenAI {name} output is not an object", provider=self.name)
        return obj
