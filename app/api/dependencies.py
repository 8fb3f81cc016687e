from app.services.pipeline_service import ResearchSession, get_session as _get_session


def get_session() -> ResearchSession:
    return _get_session()
