from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from app.api.dependencies import get_session
from app.core.errors import QueryValidationError
from app.services.citation_service import format_citations
from app.services.pipeline_service import ResearchSession

router = APIRouter(prefix="/chat", tags=["chat"])

class ChatRequest(BaseModel):
    question: str

@router.post("")
async def chat(req: ChatRequest, session: ResearchSession = Depends(get_session)):
    try:
        result = await session.submit_query(req.question)
    except QueryValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))

    payload = result.model_dump(mode="json")
    payload["answer"] = result.assistant_message.content
    payload["citations"] = format_citations(result.sources, result.source_titles.get)
    return payload


@router.get("/history")
async def history(session: ResearchSession = Depends(get_session)):
    return [m.model_dump(mode="json") for m in session.transcript()]
