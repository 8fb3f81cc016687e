from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from app.api.dependencies import get_session
from app.core.errors import DocumentValidationError
from app.core.models import Document
from app.services.pipeline_service import ResearchSession

router = APIRouter(prefix="/documents", tags=["documents"])


class AddDocumentRequest(BaseModel):
    title: str
    content: str


def document_payload(doc: Document, *, include_content: bool = True) -> dict:
    payload = doc.model_dump()
    # Provide an `id` field for frontend convenience.
    payload["id"] = doc.doc_id
    payload["chunk_count"] = len(doc.chunks)
    if not include_content:
        # content can be large; listings don't need it.
        payload.pop("content", None)
        payload.pop("chunks", None)
    return payload


@router.post("", status_code=201)
async def add_doc(req: AddDocumentRequest, session: ResearchSession = Depends(get_session)):
    try:
        doc = session.add_document(req.title, req.content)
    except DocumentValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return document_payload(doc)


@router.get("")
async def list_docs(session: ResearchSession = Depends(get_session)):
    return [document_payload(d, include_content=False) for d in session.store.list_documents()]


@router.get("/chunk/{chunk_id}")
async def get_chunk_api(chunk_id: str, session: ResearchSession = Depends(get_session)):
    c = session.store.get_chunk(chunk_id)
    if not c:
        raise HTTPException(status_code=404, detail="Chunk not found")
    return c.model_dump()


@router.get("/{doc_id}")
async def get_doc(doc_id: str, session: ResearchSession = Depends(get_session)):
    doc = session.store.get_document(doc_id)
    if not doc:
        raise HTTPException(status_code=404, detail="Document not found")
    return document_payload(doc)


@router.delete("/{doc_id}")
async def delete_doc(doc_id: str, session: ResearchSession = Depends(get_session)):
    # Deleting an unknown id is not an error.
    deleted = session.remove_document(doc_id)
    return {"ok": True, "doc_id": doc_id, "deleted": deleted}
