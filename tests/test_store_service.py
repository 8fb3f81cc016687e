import random

import pytest

from app.adapters.index.chunk_index import ChunkIndex
from app.core.models import Chunk, Document
from app.services.chunk_service import chunk_document
from app.services.store_service import KnowledgeStore


def _union(store: KnowledgeStore) -> list[Chunk]:
    return [c for d in store.list_documents() for c in d.chunks]


def test_index_add_and_all():
    index = ChunkIndex()
    doc = chunk_document("A", "one\n\ntwo")
    index.add(doc)
    assert index.all() == doc.chunks
    assert len(index) == 2


def test_index_add_same_document_twice_does_not_duplicate():
    index = ChunkIndex()
    doc = chunk_document("A", "one\n\ntwo")
    index.add(doc)
    index.add(doc)
    assert len(index.all()) == 2


def test_index_remove_unknown_id_is_noop():
    index = ChunkIndex()
    index.add(chunk_document("A", "one"))
    assert index.remove("missing") == 0
    assert len(index) == 1


def test_index_rejects_foreign_chunks():
    index = ChunkIndex()
    doc = Document(doc_id="d1", title="A", content="x", chunks=[Chunk(chunk_id="d2-chunk-0", doc_id="d2", text="x")])
    with pytest.raises(ValueError):
        index.add(doc)
    assert index.all() == []


def test_store_rejects_duplicate_document_id(store):
    doc = store.add_document(chunk_document("A", "one"))
    with pytest.raises(ValueError):
        store.add_document(doc)
    assert store.chunk_count() == 1


def test_deleting_a_document_cascades_to_its_chunks(store):
    first = store.add_document(chunk_document("First", "alpha\n\nbeta"))
    second = store.add_document(chunk_document("Second", "gamma"))

    assert store.remove_document(first.doc_id) is True
    assert store.list_chunks() == second.chunks
    assert store.get_document(first.doc_id) is None
    assert store.remove_document(first.doc_id) is False


def test_index_matches_documents_for_random_add_remove_sequences(store):
    rng = random.Random(7)
    held: list[str] = []
    for step in range(300):
        if held and rng.random() < 0.4:
            doc_id = held.pop(rng.randrange(len(held)))
            store.remove_document(doc_id)
        else:
            paragraphs = "\n\n".join(f"p{step}-{i}" for i in range(rng.randrange(0, 4)))
            held.append(store.add_document(chunk_document(f"doc {step}", paragraphs)).doc_id)

        chunks = store.list_chunks()
        assert sorted(c.chunk_id for c in chunks) == sorted(c.chunk_id for c in _union(store))
        assert len({c.chunk_id for c in chunks}) == len(chunks)
        assert {c.doc_id for c in chunks} <= set(held)


def test_snapshot_titles_cover_every_chunk(store):
    store.add_document(chunk_document("Budget", "Revenue grew.\n\nCosts fell."))
    chunks, titles = store.snapshot()
    assert all(titles[c.doc_id] == "Budget" for c in chunks)


def test_get_chunk(store):
    doc = store.add_document(chunk_document("A", "one\n\ntwo"))
    assert store.get_chunk(doc.chunks[1].chunk_id).text == "two"
    assert store.get_chunk("nope") is None
