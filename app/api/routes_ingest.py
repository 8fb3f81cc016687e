from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile

from app.api.dependencies import get_session
from app.api.routes_documents import document_payload
from app.core.config import settings
from app.core.errors import DocumentValidationError
from app.services.ingest_service import extract_upload
from app.services.pipeline_service import ResearchSession

router = APIRouter(prefix="/ingest", tags=["ingest"])


@router.post("/upload", status_code=201)
async def ingest_upload(
    file: UploadFile = File(...),
    title: str | None = Form(None),
    session: ResearchSession = Depends(get_session),
):
    data = await file.read()
    if len(data) > settings.MAX_UPLOAD_BYTES:
        raise HTTPException(status_code=413, detail="file too large")

    try:
        default_title, text = extract_upload(file.filename or "upload", data)
        doc = session.add_document((title or "").strip() or default_title, text)
    except DocumentValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return document_payload(doc)
