from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.core.config import settings
from app.core.errors import unhandled_exception_handler
from app.core.logging import setup_logging
from app.api.dependencies import get_session
from app.api.routes_chat import router as chat_router
from app.api.routes_documents import router as docs_router
from app.api.routes_ingest import router as ingest_router
from app.api.routes_search import router as search_router
from app.services.pipeline_service import ResearchSession

def create_app():
    setup_logging()

    app = FastAPI(title=settings.APP_NAME)

    # Allow browser-based UIs to call the API from localhost
    origins = [o.strip() for o in (settings.CORS_ORIGINS or "").split(",") if o.strip()]
    if origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    app.add_exception_handler(Exception, unhandled_exception_handler)

    app.include_router(ingest_router)
    app.include_router(search_router)
    app.include_router(chat_router)
    app.include_router(docs_router)

    @app.get("/health")
    async def health(session: ResearchSession = Depends(get_session)):
        return {
            "ok": True,
            "app": settings.APP_NAME,
            "env": settings.ENV,
            "llm_provider": settings.LLM_PROVIDER,
            "documents": len(session.store),
            "chunks": session.store.chunk_count(),
        }

    return app

app = create_app()
