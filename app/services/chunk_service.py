import re, uuid
from app.core.errors import DocumentValidationError
from app.core.models import Document, Chunk

# paragraph break: two or more consecutive newlines
PARAGRAPH_BREAK_RE = re.compile(r"\n\n+")


def new_doc_id() -> str:
    return uuid.uuid4().hex


def validate_document_input(title: str | None, content: str | None) -> None:
    if not (title or "").strip():
        raise DocumentValidationError("title is required")
    if not (content or "").strip():
        raise DocumentValidationError("content is required")


def split_paragraphs(text: str) -> list[str]:
    """Return trimmed, non-empty paragraphs in original order."""
    return [p.strip() for p in PARAGRAPH_BREAK_RE.split(text or "") if p.strip()]


def chunk_document(title: str, content: str) -> Document:
    doc_id = new_doc_id()
    chunks = [
        Chunk(chunk_id=f"{doc_id}-chunk-{i}", doc_id=doc_id, text=text)
        for i, text in enumerate(split_paragraphs(content))
    ]
    return Document(doc_id=doc_id, title=title, content=content, chunks=chunks)
