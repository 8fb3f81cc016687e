import threading

from app.core.models import Chunk, Document


class ChunkIndex:
    """Flat searchable collection of every chunk of the currently held documents.

    Chunks are grouped per document so a document's chunks go in and come out
    together. Insertion order is kept; ranking is the retriever's job.
    """

    def __init__(self):
        self._lock = threading.RLock()
        self._by_doc: dict[str, list[Chunk]] = {}

    def add(self, doc: Document) -> None:
        # Re-adding an id replaces its chunks instead of duplicating them.
        chunks = [c for c in doc.chunks if c.doc_id == doc.doc_id]
        if len(chunks) != len(doc.chunks):
            raise ValueError(f"document {doc.doc_id} holds chunks owned by another document")
        with self._lock:
            self._by_doc.pop(doc.doc_id, None)
            self._by_doc[doc.doc_id] = chunks

    def remove(self, doc_id: str) -> int:
        with self._lock:
            return len(self._by_doc.pop(doc_id, None) or [])

    def all(self) -> list[Chunk]:
        with self._lock:
            return [c for chunks in self._by_doc.values() for c in chunks]

    def __len__(self) -> int:
        with self._lock:
            return sum(len(chunks) for chunks in self._by_doc.values())
