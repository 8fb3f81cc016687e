import logging
import threading

from app.adapters.index.chunk_index import ChunkIndex
from app.core.models import Document, Chunk

logger = logging.getLogger(__name__)


class KnowledgeStore:
    """In-memory document collection kept in lockstep with its ChunkIndex.

    Documents and index share one lock, so a retrieval snapshot never sees a
    document without its chunks (or the reverse).
    """

    def __init__(self, index: ChunkIndex | None = None):
        self._lock = threading.RLock()
        self._docs: dict[str, Document] = {}
        self.index = index or ChunkIndex()

    def add_document(self, doc: Document) -> Document:
        with self._lock:
            if doc.doc_id in self._docs:
                raise ValueError(f"document {doc.doc_id} already added")
            self.index.add(doc)
            self._docs[doc.doc_id] = doc
        logger.info("Indexed document %s (%r) with %d chunks", doc.doc_id, doc.title, len(doc.chunks))
        return doc

    def remove_document(self, doc_id: str) -> bool:
        with self._lock:
            doc = self._docs.pop(doc_id, None)
            removed = self.index.remove(doc_id)
        if doc is None:
            return False
        logger.info("Removed document %s and %d chunks", doc_id, removed)
        return True

    def get_document(self, doc_id: str) -> Document | None:
        with self._lock:
            return self._docs.get(doc_id)

    def list_documents(self) -> list[Document]:
        with self._lock:
            return list(self._docs.values())

    def list_chunks(self) -> list[Chunk]:
        with self._lock:
            return self.index.all()

    def snapshot(self) -> tuple[list[Chunk], dict[str, str]]:
        """Chunks plus a doc_id -> title map, taken under one lock."""
        with self._lock:
            return self.index.all(), {d.doc_id: d.title for d in self._docs.values()}

    def get_chunk(self, chunk_id: str) -> Chunk | None:
        for c in self.list_chunks():
            if c.chunk_id == chunk_id:
                return c
        return None

    def chunk_count(self) -> int:
        return len(self.index)

    def __len__(self) -> int:
        with self._lock:
            return len(self._docs)


_store: KnowledgeStore | None = None


def get_store() -> KnowledgeStore:
    global _store
    if _store is None:
        _store = KnowledgeStore()
    return _store
