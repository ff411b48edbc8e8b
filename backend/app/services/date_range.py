from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Literal

from app.core.exceptions import InvalidViewModeError
from app.schemas.schedule import DateRange, ViewMode

DAYS_IN_WEEK = 7


def coerce_view_mode(mode: ViewMode | str) -> ViewMode:
    if isinstance(mode, ViewMode):
        return mode
    try:
        return ViewMode(str(mode).strip().lower())
    except ValueError as exc:
        raise InvalidViewModeError(mode) from exc


def _as_date(value: date | datetime) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def week_start(reference_date: date) -> date:
    # weekday() is 0 for Monday, so Sunday rolls back six days.
    return reference_date - timedelta(days=reference_date.weekday())


def resolve(reference_date: date | datetime, mode: ViewMode | str) -> DateRange:
    """Resolve the inclusive grid window for a reference date and view mode.

    Day mode is the reference date alone. Week mode is the Monday..Sunday
    week containing the reference date.
    """
    view = coerce_view_mode(mode)
    anchor = _as_date(reference_date)

    if view is ViewMode.day:
        return DateRange(start_date=anchor, end_date=anchor, grid_dates=[anchor])

    monday = week_start(anchor)
    grid_dates = [monday + timedelta(days=offset) for offset in range(DAYS_IN_WEEK)]
    return DateRange(start_date=grid_dates[0], end_date=grid_dates[-1], grid_dates=grid_dates)


def shift_reference_date(
    reference_date: date | datetime,
    mode: ViewMode | str,
    direction: Literal["prev", "next"],
) -> date:
    view = coerce_view_mode(mode)
    step = 1 if view is ViewMode.day else DAYS_IN_WEEK
    if direction == "prev":
        step = -step
    elif direction != "next":
        raise ValueError(f"Unknown navigation direction '{direction}'")
    return _as_date(reference_date) + timedelta(days=step)


def format_range_label(date_range: DateRange, mode: ViewMode | str) -> str:
    view = coerce_view_mode(mode)
    start, end = date_range.start_date, date_range.end_date
    if view is ViewMode.day:
        return f"{start:%A}, {start:%b} {start.day}, {start.year}"
    return f"{start:%b} {start.day} - {end:%b} {end.day}, {end.year}"
