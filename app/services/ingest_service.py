"""Turn uploaded files into (title, text) pairs for the ingestion pipeline."""

import io
from pathlib import Path

from app.core.errors import DocumentValidationError

TEXT_EXTS = (".txt", ".md")
SUPPORTED_EXTS = TEXT_EXTS + (".pdf", ".docx")


def read_text_bytes(data: bytes) -> str:
    return data.decode("utf-8", errors="ignore").replace("\r\n", "\n")


def read_docx_bytes(data: bytes) -> str:
    from docx import Document as Docx

    d = Docx(io.BytesIO(data))
    # one paragraph per block so the chunker sees the structure
    return "\n\n".join(para.text for para in d.paragraphs if para.text.strip())


def read_pdf_bytes(data: bytes) -> str:
    from pypdf import PdfReader

    reader = PdfReader(io.BytesIO(data))
    parts = []
    for page in reader.pages:
        t = page.extract_text() or ""
        if t.strip():
            parts.append(t)
    return "\n\n".join(parts)


def extract_upload(filename: str, data: bytes) -> tuple[str, str]:
    """Return (title, text). The title is the file name without its extension."""
    p = Path(filename or "upload")
    ext = p.suffix.lower() or ".txt"
    if ext not in SUPPORTED_EXTS:
        raise DocumentValidationError(f"unsupported file type: {ext}")
    try:
        if ext == ".pdf":
            text = read_pdf_bytes(data)
        elif ext == ".docx":
            text = read_docx_bytes(data)
        else:
            text = read_text_bytes(data)
    except DocumentValidationError:
        raise
    except Exception as e:
        raise DocumentValidationError(f"could not read {p.name}: {e}") from e
    return p.stem or p.name, text
