from __future__ import annotations

import logging
from datetime import date
from typing import List, Protocol

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core.exceptions import InvalidDateRangeError, ResourceNotFoundError
from app.models.teaching_session import TeachingSession
from app.schemas.schedule import ScheduledSession

logger = logging.getLogger(__name__)


class SessionSource(Protocol):
    def fetch(
        self,
        start_date: date,
        end_date: date,
        *,
        class_id: str | None = None,
        teacher_id: str | None = None,
    ) -> List[ScheduledSession]:
        ...


def to_scheduled_session(row: TeachingSession) -> ScheduledSession:
    return ScheduledSession(
        id=row.id,
        date=row.session_date,
        start_time=row.start_time,
        end_time=row.end_time,
        teacher_id=row.teacher_id,
        assistant_id=row.teaching_assistant_id,
        subject_type=row.subject_type,
        class_id=row.class_id,
        lesson_id=row.lesson_id,
        location_id=row.location_id,
        data=row.data or {},
    )


class SqlSessionSource:
    def __init__(self, db: Session):
        self.db = db

    def fetch(
        self,
        start_date: date,
        end_date: date,
        *,
        class_id: str | None = None,
        teacher_id: str | None = None,
    ) -> List[ScheduledSession]:
        return self.list_sessions(
            start_date=start_date,
            end_date=end_date,
            class_id=class_id,
            teacher_id=teacher_id,
        )

    def list_sessions(
        self,
        *,
        start_date: date | None = None,
        end_date: date | None = None,
        class_id: str | None = None,
        teacher_id: str | None = None,
        limit: int | None = None,
        offset: int = 0,
    ) -> List[ScheduledSession]:
        """Sessions ordered by start time.

        With a full date window every session in it is returned and paging is
        ignored, since the schedule grid needs the whole window.
        """
        query = select(TeachingSession).order_by(TeachingSession.start_time, TeachingSession.id)

        windowed = start_date is not None and end_date is not None
        if windowed:
            if start_date > end_date:
                raise InvalidDateRangeError(start_date, end_date)
            query = query.where(
                TeachingSession.session_date >= start_date,
                TeachingSession.session_date <= end_date,
            )
        elif start_date is not None:
            query = query.where(TeachingSession.session_date >= start_date)
        elif end_date is not None:
            query = query.where(TeachingSession.session_date <= end_date)

        if class_id:
            query = query.where(TeachingSession.class_id == class_id)
        if teacher_id:
            query = query.where(TeachingSession.teacher_id == teacher_id)

        if not windowed:
            if offset:
                query = query.offset(offset)
            if limit:
                query = query.limit(limit)

        rows = self.db.execute(query).scalars().all()
        logger.debug(
            "Fetched %d session(s) for window %s..%s class=%s teacher=%s",
            len(rows),
            start_date,
            end_date,
            class_id,
            teacher_id,
        )
        return [to_scheduled_session(row) for row in rows]

    def get_session(self, session_id: str) -> ScheduledSession:
        row = self.db.get(TeachingSession, session_id)
        if row is None:
            raise ResourceNotFoundError("Session", session_id)
        return to_scheduled_session(row)
