from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    APP_NAME: str = "Research Assistant"
    ENV: str = "local"

    # llm
    # Providers:
    # - gemini: google-genai client (default)
    # - openai: OpenAI chat completions
    # - ollama: local Ollama /api/generate over httpx
    LLM_PROVIDER: str = "gemini"  # gemini|openai|ollama
    GEMINI_API_KEY: str | None = None
    GEMINI_MODEL: str = "gemini-3-flash-preview"
    OPENAI_API_KEY: str | None = None
    OPENAI_MODEL: str = "gpt-4o-mini"
    OLLAMA_BASE_URL: str = "http://localhost:11434"
    OLLAMA_MODEL: str = "llama3.1"
    OLLAMA_NUM_PREDICT: int = 1024
    OLLAMA_TOP_P: float = 0.9
    OLLAMA_KEEP_ALIVE: str = "30m"
    LLM_TIMEOUT: float = 120.0

    GENERATION_TEMPERATURE: float = 0.7
    CLASSIFY_TEMPERATURE: float = 0.0

    # retrieval knobs
    TOPK_RETRIEVE: int = 3
    MIN_TOKEN_LEN: int = 3

    # ingestion
    MAX_UPLOAD_BYTES: int = 10 * 1024 * 1024

    # CORS (for browser-based UIs)
    # Comma-separated list of allowed origins.
    CORS_ORIGINS: str = "http://localhost:3000,http://127.0.0.1:3000,http://localhost:5173,http://127.0.0.1:5173"

    class Config:
        env_file = ".env"
        extra = "ignore"

settings = Settings()
