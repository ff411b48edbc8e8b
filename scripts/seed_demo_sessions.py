"""Seed a demo week of teaching sessions, including overlapping ones.

Run:
  PYTHONPATH=backend python scripts/seed_demo_sessions.py [YYYY-MM-DD]
"""

from __future__ import annotations

import sys
from datetime import date, datetime, time, timedelta

from sqlalchemy import func, select

from app.db.bootstrap import ensure_runtime_schema_compatibility
from app.db.session import SessionLocal
from app.models.teaching_session import TeachingSession
from app.services.date_range import resolve

DEMO_CLASS_ID = "demo-class-a1"

# (weekday offset, start, end, subject, teacher, assistant)
DEMO_BLOCKS = [
    (0, time(9, 0), time(10, 0), "TSI", "t-anna", None),
    (0, time(9, 30), time(10, 30), "REP", "t-binh", "ta-chi"),
    (0, time(10, 15), time(11, 0), "TSI", "t-cuong", None),
    (1, time(14, 0), time(15, 30), "REP", "t-anna", None),
    (1, time(15, 30), time(17, 0), "TSI", "t-binh", None),
    (3, time(18, 0), time(19, 30), "TSI", "t-anna", "ta-chi"),
    (3, time(18, 0), time(19, 0), "REP", "t-cuong", None),
    (3, time(18, 45), time(20, 0), "GEN", "t-binh", None),
    (5, time(8, 0), time(9, 30), "GEN", "t-cuong", None),
]


def upsert_demo_sessions(session, reference_date: date) -> int:
    week = resolve(reference_date, "week")
    created = 0
    for index, (offset, start, end, subject, teacher, assistant) in enumerate(DEMO_BLOCKS):
        session_date = week.start_date + timedelta(days=offset)
        session_id = f"demo-{session_date.isoformat()}-{index}"
        row = session.get(TeachingSession, session_id)
        if row is None:
            row = TeachingSession(id=session_id)
            session.add(row)
            created += 1
        row.lesson_id = index + 1
        row.class_id = DEMO_CLASS_ID
        row.subject_type = subject
        row.teacher_id = teacher
        row.teaching_assistant_id = assistant
        row.session_date = session_date
        row.start_time = datetime.combine(session_date, start)
        row.end_time = datetime.combine(session_date, end)
        row.data = {"subject_name": subject, "program_type": "GrapeSEED" if subject != "GEN" else "Standard"}
    return created


def main() -> None:
    reference_date = date.fromisoformat(sys.argv[1]) if len(sys.argv) > 1 else date.today()
    ensure_runtime_schema_compatibility()
    with SessionLocal() as session:
        created = upsert_demo_sessions(session, reference_date)
        session.commit()
        total = session.execute(select(func.count(TeachingSession.id))).scalar_one()

    print("Demo sessions seeded successfully.")
    print(f"New sessions: {created}")
    print(f"Total sessions: {total}")


if __name__ == "__main__":
    main()
