from __future__ import annotations

from typing import Callable

from app.core.models import ScoredChunk

NO_CONTEXT = "No documents found in knowledge base."

TitleLookup = Callable[[str], "str | None"]


def build_context(chunks: list[ScoredChunk], title_for: TitleLookup) -> str:
    if not chunks:
        return NO_CONTEXT
    return "\n\n".join(f"[From {title_for(c.doc_id)}]: {c.text}" for c in chunks)


def format_citations(chunks: list[ScoredChunk], title_for: TitleLookup) -> list[dict]:
    """Return UI-friendly citation payloads, in ranked order."""
    return [
        {
            "ref": i,
            "chunk_id": c.chunk_id,
            "doc_id": c.doc_id,
            "title": title_for(c.doc_id),
            "score": c.score,
            "snippet": c.text[:150],
        }
        for i, c in enumerate(chunks, 1)
    ]
