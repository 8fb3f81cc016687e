from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from app.api.dependencies import get_session
from app.services.citation_service import format_citations
from app.services.pipeline_service import ResearchSession
from app.services.retrieve_service import retrieve

router = APIRouter(prefix="/search", tags=["search"])

class SearchRequest(BaseModel):
    query: str
    top_k: int | None = Field(default=None, ge=0)

@router.post("")
async def search(req: SearchRequest, session: ResearchSession = Depends(get_session)):
    chunks, titles = session.store.snapshot()
    hits = retrieve(req.query, chunks, req.top_k)
    return {"results": format_citations(hits, titles.get)}
