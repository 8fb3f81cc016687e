"""
Error taxonomy and the global FastAPI exception handler.

- DocumentValidationError / QueryValidationError: rejected input, nothing is recorded.
- LLMError: anything that went wrong talking to the generation backend.
  The intent classifier downgrades it to a default action, the orchestrator
  turns it into a visible assistant error turn.
"""

from __future__ import annotations

import logging
from typing import Any, Dict

from fastapi import Request
from fastapi.responses import JSONResponse

logger = logging.getLogger("app.errors")


class RAGError(Exception):
    """Base class for errors raised by the pipeline."""


class DocumentValidationError(RAGError, ValueError):
    pass


class QueryValidationError(RAGError, ValueError):
    pass


class LLMError(RAGError):
    """Transport, auth, timeout or malformed response from the LLM provider."""

    def __init__(self, message: str, *, provider: str | None = None):
        super().__init__(message)
        self.provider = provider


class StructuredOutputError(LLMError):
    """The provider answered, but not with a payload matching the requested schema."""


async def unhandled_exception_handler(
    request: Request,
    exc: Exception,
) -> JSONResponse:
    """
    Catch-all handler for uncaught exceptions.

    Logs the full traceback and returns a minimal 500 payload with no
    internal details.
    """
    logger.exception(
        "Unhandled exception during request: %s %s",
        request.method,
        request.url.path,
        exc_info=exc,
    )

    payload: Dict[str, Any] = {
        "error": "internal_server_error",
        "detail": "Internal server error",
    }

    return JSONResponse(
        status_code=500,
        content=payload,
    )
