"""Ingestion and query pipelines.

Query path, strictly sequential: classify intent -> keyword retrieval ->
build context/prompt -> generate. The two LLM calls are the only awaits.
"""

from __future__ import annotations

import asyncio
import logging

from app.adapters.llm.base import LLM
from app.core.config import settings
from app.core.errors import QueryValidationError
from app.core.models import AgentAction, ChatMessage, Document, QueryResult, ScoredChunk
from app.services.chunk_service import chunk_document, validate_document_input
from app.services.citation_service import build_context
from app.services.intent_service import classify_intent
from app.services.rag_service import build_prompt, build_system_prompt
from app.services.retrieve_service import retrieve
from app.services.store_service import KnowledgeStore

logger = logging.getLogger(__name__)

GENERATION_ERROR_MESSAGE = "Error: Failed to process your request. Check your API key and connection."


def ingest_document(title: str, content: str, store: KnowledgeStore) -> Document:
    # Validation happens before chunking so a rejected document leaves no trace.
    validate_document_input(title, content)
    doc = chunk_document(title.strip(), content)
    return store.add_document(doc)


def delete_document(doc_id: str, store: KnowledgeStore) -> bool:
    return store.remove_document(doc_id)


async def run_query(
    query: str,
    store: KnowledgeStore,
    llm: LLM,
    top_k: int | None = None,
) -> tuple[ChatMessage, AgentAction, list[ScoredChunk], dict[str, str]]:
    """Return the assistant turn, the action and ranked chunks behind it, and their
    document titles as seen by the retrieval snapshot."""
    # 1) agentic decision layer
    action = await classify_intent(query, llm)

    # 2) retrieval against one consistent snapshot
    chunks, titles = store.snapshot()
    sources = retrieve(query, chunks, top_k)
    source_titles = {s.doc_id: titles[s.doc_id] for s in sources}

    # 3) context + request
    context = build_context(sources, source_titles.get)
    system = build_system_prompt(action)
    prompt = build_prompt(query, action, context)

    # 4) generation; failures become a visible error turn, no retries
    try:
        answer = await llm.generate(system, prompt, temperature=settings.GENERATION_TEMPERATURE)
    except Exception:
        logger.exception("Generation failed for %s query", action.type.value)
        return ChatMessage(role="assistant", content=GENERATION_ERROR_MESSAGE), action, sources, source_titles

    message = ChatMessage(role="assistant", content=answer, action=action, sources=sources)
    return message, action, sources, source_titles


async def answer_query(query: str, store: KnowledgeStore, llm: LLM, top_k: int | None = None) -> ChatMessage:
    message, _, _, _ = await run_query(query, store, llm, top_k)
    return message


class ResearchSession:
    """Stateful shell around the pipeline: knowledge store, LLM and transcript.

    The transcript is append-only. A query's user and assistant turns are
    appended together once the pipeline finishes, so a cancelled query leaves
    no trace.
    """

    def __init__(self, llm: LLM, store: KnowledgeStore | None = None, top_k: int | None = None):
        self.llm = llm
        self.store = store or KnowledgeStore()
        self.top_k = top_k
        self._messages: list[ChatMessage] = []
        self._query_lock = asyncio.Lock()
        self.last_action: AgentAction | None = None
        self.last_retrieval: list[ScoredChunk] = []

    def add_document(self, title: str, content: str) -> Document:
        return ingest_document(title, content, self.store)

    def remove_document(self, doc_id: str) -> bool:
        return delete_document(doc_id, self.store)

    def transcript(self) -> list[ChatMessage]:
        return list(self._messages)

    async def submit_query(self, query: str) -> QueryResult:
        if not (query or "").strip():
            raise QueryValidationError("question is required")

        async with self._query_lock:
            user_message = ChatMessage(role="user", content=query)
            assistant_message, action, sources, source_titles = await run_query(query, self.store, self.llm, self.top_k)

            self._messages.extend([user_message, assistant_message])
            self.last_action = action
            self.last_retrieval = sources

        return QueryResult(
            user_message=user_message,
            assistant_message=assistant_message,
            action=action,
            sources=sources,
            source_titles=source_titles,
        )


_session: ResearchSession | None = None


def get_session() -> ResearchSession:
    global _session
    if _session is None:
        from app.services.llm_factory import get_llm
        from app.services.store_service import get_store
        _session = ResearchSession(get_llm(), get_store())
    return _session
