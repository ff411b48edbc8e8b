from collections import defaultdict
from datetime import date
from typing import Dict, Iterable, List

from app.schemas.schedule import ScheduledSession, TimeSlot


def sessions_for_date(sessions: Iterable[ScheduledSession], target: date) -> List[ScheduledSession]:
    return [session for session in sessions if session.date == target]


def start_key(session: ScheduledSession) -> str | None:
    if session.start_time is None:
        return None
    return session.start_time.strftime("%H:%M")


def group_by_day_and_time(sessions: Iterable[ScheduledSession], target: date) -> List[TimeSlot]:
    """Build the ordered time-slot rows of one grid date.

    Sessions are keyed by start time of day at minute resolution. Rows come
    out sorted by that key; sessions inside a row keep input order. Sessions
    without a start time share a final row keyed ``None``.
    """
    rows: Dict[str | None, List[ScheduledSession]] = defaultdict(list)
    for session in sessions_for_date(sessions, target):
        rows[start_key(session)].append(session)

    # Zero-padded HH:MM sorts correctly as text.
    keys = sorted(key for key in rows if key is not None)
    if None in rows:
        keys.append(None)
    return [TimeSlot(date=target, start_time=key, sessions=rows[key]) for key in keys]
