from app.core.config import settings
from app.adapters.llm.base import LLM
from app.adapters.llm.gemini import GeminiLLM
from app.adapters.llm.ollama import OllamaLLM
from app.adapters.llm.openai import OpenAILLM

def get_llm() -> LLM:
    provider = (settings.LLM_PROVIDER or "gemini").lower()
    if provider == "openai":
        return OpenAILLM()
    if provider == "ollama":
        return OllamaLLM()
    return GeminiLLM()
