from datetime import date

from fastapi import APIRouter, Depends, Query

from app.api.deps import get_session_source
from app.core.config import get_settings
from app.schemas.schedule import ScheduledSession
from app.services.session_source import SqlSessionSource

router = APIRouter()

settings = get_settings()


@router.get("/", response_model=list[ScheduledSession])
def list_sessions(
    start_date: date | None = None,
    end_date: date | None = None,
    class_id: str | None = None,
    teacher_id: str | None = None,
    limit: int = Query(default=settings.session_list_default_limit, ge=1, le=settings.session_list_max_limit),
    offset: int = Query(default=0, ge=0),
    source: SqlSessionSource = Depends(get_session_source),
) -> list[ScheduledSession]:
    return source.list_sessions(
        start_date=start_date,
        end_date=end_date,
        class_id=class_id,
        teacher_id=teacher_id,
        limit=limit,
        offset=offset,
    )


@router.get("/{session_id}", response_model=ScheduledSession)
def get_session(
    session_id: str,
    source: SqlSessionSource = Depends(get_session_source),
) -> ScheduledSession:
    return source.get_session(session_id)
