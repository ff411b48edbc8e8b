from datetime import date

from fastapi import APIRouter, Depends, Query

from app.api.deps import get_session_source
from app.core.config import get_settings
from app.schemas.schedule import DayLayoutOut, DayLayoutRequest, ScheduleLayoutRequest, ScheduleOut
from app.services.overlap_layout import layout
from app.services.schedule_service import build_schedule, load_schedule
from app.services.session_source import SqlSessionSource

router = APIRouter()

settings = get_settings()


@router.get("/", response_model=ScheduleOut)
def get_schedule(
    reference_date: date | None = Query(default=None, alias="date"),
    view: str | None = None,
    class_id: str | None = None,
    teacher_id: str | None = None,
    source: SqlSessionSource = Depends(get_session_source),
) -> ScheduleOut:
    return load_schedule(
        source,
        reference_date or date.today(),
        view or settings.default_view_mode,
        class_id=class_id,
        teacher_id=teacher_id,
    )


@router.post("/layout", response_model=ScheduleOut)
def layout_schedule(payload: ScheduleLayoutRequest) -> ScheduleOut:
    return build_schedule(payload.sessions, payload.date or date.today(), payload.view)


@router.post("/day-layout", response_model=DayLayoutOut)
def layout_day(payload: DayLayoutRequest) -> DayLayoutOut:
    return DayLayoutOut(layout=layout(payload.sessions))
