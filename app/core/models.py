import time
import uuid
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


def _now_ms() -> int:
    return int(time.time() * 1000)


class Chunk(BaseModel):
    """A paragraph-level passage. `doc_id` is a lookup key, never an owner."""
    model_config = ConfigDict(frozen=True)

    chunk_id: str
    doc_id: str
    text: str


class ScoredChunk(BaseModel):
    # Scores live on the retrieval result, not on the stored Chunk.
    model_config = ConfigDict(frozen=True)

    chunk: Chunk
    score: int

    @property
    def chunk_id(self) -> str:
        return self.chunk.chunk_id

    @property
    def doc_id(self) -> str:
        return self.chunk.doc_id

    @property
    def text(self) -> str:
        return self.chunk.text


class Document(BaseModel):
    doc_id: str
    title: str
    content: str
    chunks: list[Chunk] = Field(default_factory=list)
    created_at: int = Field(default_factory=_now_ms)


class ActionType(str, Enum):
    ANSWER = "ANSWER"
    SUMMARIZE = "SUMMARIZE"
    CATEGORIZE = "CATEGORIZE"
    REPORT = "REPORT"


class AgentAction(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: ActionType
    reasoning: str
    # Free-form, passed through untouched.
    parameters: dict[str, Any] | None = None


class ChatMessage(BaseModel):
    model_config = ConfigDict(frozen=True)

    message_id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    role: Literal["user", "assistant"]
    content: str
    action: AgentAction | None = None
    sources: list[ScoredChunk] | None = None
    timestamp: int = Field(default_factory=_now_ms)


class QueryResult(BaseModel):
    user_message: ChatMessage
    assistant_message: ChatMessage
    action: AgentAction
    sources: list[ScoredChunk] = Field(default_factory=list)
    # doc_id -> title at retrieval time
    source_titles: dict[str, str] = Field(default_factory=dict)
