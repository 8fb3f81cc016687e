import pytest

from app.core.errors import DocumentValidationError
from app.services.chunk_service import chunk_document, split_paragraphs, validate_document_input


def test_paragraphs_become_chunks():
    doc = chunk_document("T", "a\n\nb\n\nc")
    assert [c.text for c in doc.chunks] == ["a", "b", "c"]


def test_single_paragraph_is_one_chunk():
    doc = chunk_document("T", "single paragraph")
    assert len(doc.chunks) == 1
    assert doc.chunks[0].text == "single paragraph"


def test_blank_content_yields_no_chunks():
    doc = chunk_document("T", "   ")
    assert doc.chunks == []
    assert doc.content == "   "


def test_empty_content_is_still_a_document():
    doc = chunk_document("T", "")
    assert doc.chunks == []
    assert doc.doc_id


def test_single_newlines_do_not_split():
    doc = chunk_document("T", "line one\nline two")
    assert len(doc.chunks) == 1
    assert doc.chunks[0].text == "line one\nline two"


def test_texts_are_trimmed_and_empty_pieces_dropped():
    doc = chunk_document("T", "\n\n  first  \n\n\n\n   \n\n\tsecond\t\n\n")
    assert [c.text for c in doc.chunks] == ["first", "second"]


def test_chunk_ids_follow_document_id_and_position():
    doc = chunk_document("T", "a\n\n\n\nb")
    assert [c.chunk_id for c in doc.chunks] == [f"{doc.doc_id}-chunk-0", f"{doc.doc_id}-chunk-1"]
    assert all(c.doc_id == doc.doc_id for c in doc.chunks)


def test_document_ids_are_unique():
    ids = {chunk_document("T", "x").doc_id for _ in range(200)}
    assert len(ids) == 200


def test_split_paragraphs_keeps_order():
    assert split_paragraphs("z\n\ny\n\nx") == ["z", "y", "x"]


@pytest.mark.parametrize("title,content", [("", "body"), ("   ", "body"), ("Title", ""), ("Title", "  \n\n ")])
def test_validation_rejects_blank_input(title, content):
    with pytest.raises(DocumentValidationError):
        validate_document_input(title, content)


def test_validation_accepts_real_input():
    validate_document_input("Title", "body")
