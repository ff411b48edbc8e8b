import uuid
from datetime import date, datetime

from sqlalchemy import Date, DateTime, Integer, JSON, String
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from app.db.base import Base


class TeachingSession(Base):
    __tablename__ = "teaching_sessions"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    lesson_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    class_id: Mapped[str | None] = mapped_column(String(36), index=True, nullable=True)
    subject_type: Mapped[str] = mapped_column(String(50), nullable=False)
    teacher_id: Mapped[str] = mapped_column(String(36), index=True, nullable=False)
    teaching_assistant_id: Mapped[str | None] = mapped_column(String(36), nullable=True)
    location_id: Mapped[str | None] = mapped_column(String(36), nullable=True)
    session_date: Mapped[date] = mapped_column("date", Date, index=True, nullable=False)
    start_time: Mapped[datetime] = mapped_column(DateTime(timezone=False), nullable=False)
    end_time: Mapped[datetime] = mapped_column(DateTime(timezone=False), nullable=False)
    data: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), onupdate=func.now())
