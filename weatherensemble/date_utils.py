"""Date arithmetic for current-week and next-week forecasts."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta

_WEEKDAY_NAMES = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)


@dataclass(frozen=True)
class ForecastPeriod:
    """Either the current week, or one weekday of next week (0=Mon .. 6=Sun)."""

    base_day: int | None = None

    @classmethod
    def current_week(cls) -> "ForecastPeriod":
        return cls()

    @classmethod
    def next_week(cls, base_day: int) -> "ForecastPeriod":
        return cls(base_day=base_day)

    @property
    def is_next_week(self) -> bool:
        return self.base_day is not None


def _format(day: date) -> str:
    return day.strftime("%Y-%m-%d")


def _today(today: date | None) -> date:
    return today if today is not None else date.today()


def _offset_to_weekday(base_day: int, today: date) -> int:
    current = today.weekday()
    if base_day >= current:
        return base_day - current
    return 7 - (current - base_day)


def _check_day(base_day: int) -> None:
    if not 0 <= base_day <= 6:
        raise ValueError("Invalid day number")


def get_forecast_dates(period: ForecastPeriod, today: date | None = None) -> list[str]:
    """Dates covered by a forecast period."""
    if period.is_next_week:
        return get_next_week_date(period.base_day, today)
    return get_current_week_dates(today)


def get_current_week_dates(today: date | None = None) -> list[str]:
    """Seven dates from today to six days ahead."""
    start = _today(today)
    return [_format(start + timedelta(days=i)) for i in range(7)]


def get_next_week_date(base_day: int, today: date | None = None) -> list[str]:
    """The given weekday of next week, as a one-element list."""
    if not 0 <= base_day <= 6:
        raise ValueError(f"Invalid day: {base_day}. Must be 0-6 (Mon-Sun)")
    start = _today(today)
    offset = _offset_to_weekday(base_day, start) + 7
    return [_format(start + timedelta(days=offset))]


def get_weekday_name(day_number: int) -> str:
    """English weekday name for 0=Monday .. 6=Sunday."""
    if not 0 <= day_number <= 6:
        raise ValueError(f"Invalid day number: {day_number}")
    return _WEEKDAY_NAMES[day_number]


def get_day_of_week_from_date(date_str: str) -> int:
    """Weekday number (0=Monday) of a YYYY-MM-DD date."""
    try:
        return date.fromisoformat(date_str).weekday()
    except ValueError as exc:
        raise ValueError(f"Failed to parse date: {exc}") from None


def is_today_weekday(base_day: int, today: date | None = None) -> bool:
    """Whether today falls on the given weekday."""
    _check_day(base_day)
    return _today(today).weekday() == base_day


def days_to_weekday(base_day: int, today: date | None = None) -> int:
    """Days from today to the next occurrence of the weekday (0 if today)."""
    _check_day(base_day)
    return _offset_to_weekday(base_day, _today(today))


def get_dates_between(start_date: str, end_date: str) -> list[str]:
    """All dates from start to end inclusive; empty if end is before start."""
    try:
        start = date.fromisoformat(start_date)
    except ValueError as exc:
        raise ValueError(f"Failed to parse start date: {exc}") from None
    try:
        end = date.fromisoformat(end_date)
    except ValueError as exc:
        raise ValueError(f"Failed to parse end date: {exc}") from None
    return [_format(start + timedelta(days=i)) for i in range((end - start).days + 1)]