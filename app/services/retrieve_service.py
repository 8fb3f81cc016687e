"""Lexical keyword retrieval.

Each distinct query token (lowercased, split on non-word runs, shorter tokens
dropped) adds 1 to a chunk's score when it appears anywhere in the chunk text.
No term-frequency weighting, no length normalization: a plain overlap count.
"""

import logging
import re

from app.core.config import settings
from app.core.models import Chunk, ScoredChunk

logger = logging.getLogger(__name__)

# ASCII word classes: "zürich" splits into "z" and "rich".
NON_WORD_RE = re.compile(r"\W+", re.ASCII)


def tokenize_query(query: str, min_len: int | None = None) -> list[str]:
    min_len = settings.MIN_TOKEN_LEN if min_len is None else min_len
    tokens = [t for t in NON_WORD_RE.split((query or "").lower()) if len(t) >= min_len]
    return list(dict.fromkeys(tokens))


def score_chunk(tokens: list[str], text: str) -> int:
    lowered = text.lower()
    return sum(1 for t in tokens if t in lowered)


def retrieve(query: str, chunks: list[Chunk], top_k: int | None = None) -> list[ScoredChunk]:
    top_k = settings.TOPK_RETRIEVE if top_k is None else top_k
    tokens = tokenize_query(query)
    if not tokens or top_k <= 0:
        return []

    scored = [ScoredChunk(chunk=c, score=score_chunk(tokens, c.text)) for c in chunks]
    # sorted() is stable: equal scores keep index order.
    ranked = sorted((s for s in scored if s.score > 0), key=lambda s: s.score, reverse=True)
    logger.debug("Retrieval: %d tokens, %d/%d chunks matched", len(tokens), len(ranked), len(chunks))
    return ranked[:top_k]


def keyword_search(query: str, store, top_k: int | None = None) -> list[ScoredChunk]:
    """Retrieve against a consistent snapshot of a KnowledgeStore."""
    return retrieve(query, store.list_chunks(), top_k)
