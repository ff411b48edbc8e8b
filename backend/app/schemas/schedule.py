import datetime as dt
from enum import Enum
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator


class ViewMode(str, Enum):
    day = "day"
    week = "week"


def parse_wall_clock(value: Any) -> dt.datetime | None:
    """Coerce a timestamp to a naive wall-clock datetime.

    Missing or unparseable values come back as ``None`` instead of failing
    validation, so the layout engine can isolate the session.
    """
    if value is None:
        return None
    if isinstance(value, dt.datetime):
        return value.replace(tzinfo=None)
    if isinstance(value, str):
        stripped = value.strip()
        if not stripped:
            return None
        if stripped.endswith("Z"):
            stripped = stripped[:-1] + "+00:00"
        try:
            return dt.datetime.fromisoformat(stripped).replace(tzinfo=None)
        except ValueError:
            return None
    return None


def parse_calendar_date(value: Any) -> dt.date | None:
    if value is None:
        return None
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value
    if isinstance(value, str):
        try:
            return dt.date.fromisoformat(value.strip()[:10])
        except ValueError:
            return None
    return None


class ScheduledSession(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(min_length=1)
    date: dt.date | None = None
    start_time: dt.datetime | None = None
    end_time: dt.datetime | None = None
    teacher_id: str | None = None
    assistant_id: str | None = Field(
        default=None,
        validation_alias=AliasChoices("assistant_id", "teaching_assistant_id"),
    )
    subject_type: str | None = None
    class_id: str | None = None
    lesson_id: int | None = None
    location_id: str | None = None
    data: dict[str, Any] = Field(default_factory=dict)

    @field_validator("start_time", "end_time", mode="before")
    @classmethod
    def coerce_timestamp(cls, value: Any) -> dt.datetime | None:
        return parse_wall_clock(value)

    @field_validator("date", mode="before")
    @classmethod
    def coerce_date(cls, value: Any) -> dt.date | None:
        return parse_calendar_date(value)

    @field_validator("data", mode="before")
    @classmethod
    def default_data(cls, value: Any) -> dict:
        return value if isinstance(value, dict) else {}

    @model_validator(mode="after")
    def derive_date(self) -> "ScheduledSession":
        if self.date is None and self.start_time is not None:
            self.date = self.start_time.date()
        return self

    @property
    def has_valid_interval(self) -> bool:
        return self.start_time is not None and self.end_time is not None and self.end_time > self.start_time


class DateRange(BaseModel):
    start_date: dt.date
    end_date: dt.date
    grid_dates: list[dt.date]


class TimeSlot(BaseModel):
    date: dt.date
    start_time: str | None  # HH:MM, None for sessions without a start time
    sessions: list[ScheduledSession]


class LayoutSlot(BaseModel):
    session_id: str
    cluster_index: int | None = None
    column_index: int = 0
    column_count: int = 1
    width_fraction: float = 1.0
    left_offset_fraction: float = 0.0
    invalid: bool = False


class DaySchedule(BaseModel):
    date: dt.date
    day_name: str
    time_slots: list[TimeSlot]
    layout: dict[str, LayoutSlot]


class ScheduleOut(BaseModel):
    view: ViewMode
    reference_date: dt.date
    start_date: dt.date
    end_date: dt.date
    grid_dates: list[dt.date]
    range_label: str
    previous_date: dt.date
    next_date: dt.date
    total_sessions: int
    days: list[DaySchedule]


class ScheduleLayoutRequest(BaseModel):
    date: dt.date | None = None
    view: ViewMode = ViewMode.week
    sessions: list[ScheduledSession] = Field(default_factory=list, max_length=5000)


class DayLayoutRequest(BaseModel):
    sessions: list[ScheduledSession] = Field(default_factory=list, max_length=2000)


class DayLayoutOut(BaseModel):
    layout: dict[str, LayoutSlot]
