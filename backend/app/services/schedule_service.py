from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Iterable, List

from app.schemas.schedule import DaySchedule, ScheduledSession, ScheduleOut, ViewMode
from app.services.date_range import coerce_view_mode, format_range_label, resolve, shift_reference_date
from app.services.day_grouper import group_by_day_and_time, sessions_for_date
from app.services.overlap_layout import layout
from app.services.session_source import SessionSource

logger = logging.getLogger(__name__)


def build_day(sessions: Iterable[ScheduledSession], target: date) -> DaySchedule:
    day_sessions = sessions_for_date(sessions, target)
    return DaySchedule(
        date=target,
        day_name=target.strftime("%A"),
        time_slots=group_by_day_and_time(day_sessions, target),
        layout=layout(day_sessions),
    )


def build_schedule(
    sessions: Iterable[ScheduledSession],
    reference_date: date | datetime,
    mode: ViewMode | str,
) -> ScheduleOut:
    """Lay out a session set on the day or week grid around ``reference_date``."""
    view = coerce_view_mode(mode)
    anchor = reference_date.date() if isinstance(reference_date, datetime) else reference_date
    date_range = resolve(anchor, view)

    session_list: List[ScheduledSession] = list(sessions)
    grid_dates = set(date_range.grid_dates)
    outside = [session.id for session in session_list if session.date not in grid_dates]
    if outside:
        logger.debug(
            "Dropping %d session(s) outside %s..%s: %s",
            len(outside),
            date_range.start_date,
            date_range.end_date,
            ", ".join(outside),
        )

    days = [build_day(session_list, target) for target in date_range.grid_dates]
    return ScheduleOut(
        view=view,
        reference_date=anchor,
        start_date=date_range.start_date,
        end_date=date_range.end_date,
        grid_dates=date_range.grid_dates,
        range_label=format_range_label(date_range, view),
        previous_date=shift_reference_date(anchor, view, "prev"),
        next_date=shift_reference_date(anchor, view, "next"),
        total_sessions=sum(len(day.layout) for day in days),
        days=days,
    )


def load_schedule(
    source: SessionSource,
    reference_date: date | datetime,
    mode: ViewMode | str,
    *,
    class_id: str | None = None,
    teacher_id: str | None = None,
) -> ScheduleOut:
    date_range = resolve(reference_date, mode)
    sessions = source.fetch(
        date_range.start_date,
        date_range.end_date,
        class_id=class_id,
        teacher_id=teacher_id,
    )
    return build_schedule(sessions, reference_date, mode)
