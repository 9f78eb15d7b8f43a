"""Recurring task occurrence rules.

Every function here is pure: the reference date is always passed in by the
caller, which should read "today" once per query and thread the same value
through every call made while building a view.

Task records may be entities, ORM rows or raw documents (mappings, either
snake_case or camelCase keys). Date fields may arrive as ``date``,
``datetime``, ISO strings, POSIX timestamps or document-store timestamp
objects; anything that cannot be read as a calendar day makes the task
absent from the calculation instead of raising.
"""
from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from datetime import date, datetime, timedelta
from typing import Any

from .enums import RECURRING_FREQUENCIES, TaskFrequency

logger = logging.getLogger(__name__)

MONDAY = 0
SUNDAY = 6

_CAMEL_ALIASES = {
    "start_date": "startDate",
    "due_date": "dueDate",
    "end_date": "endDate",
    "scheduled_time": "scheduledTime",
}


def _field(task: Any, name: str) -> Any:
    if isinstance(task, Mapping):
        value = task.get(name)
        if value is None and name in _CAMEL_ALIASES:
            value = task.get(_CAMEL_ALIASES[name])
        return value
    return getattr(task, name, None)


def _is_absent(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def normalize_date(value: Any) -> date | None:
    """Reduce any supported date representation to a local calendar day.

    Returns ``None`` when the value is missing or cannot be interpreted.
    """
    if _is_absent(value):
        return None
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone()
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value).date()
        except (OverflowError, OSError, ValueError):
            return None
    if isinstance(value, str):
        text = value.strip()
        try:
            return date.fromisoformat(text)
        except ValueError:
            pass
        try:
            return normalize_date(datetime.fromisoformat(text))
        except ValueError:
            return None

    converter = getattr(value, "to_datetime", None) or getattr(value, "ToDatetime", None)
    if callable(converter):
        try:
            converted = converter()
        except Exception:  # noqa: BLE001
            logger.debug("Could not convert %r to a datetime", value, exc_info=True)
            return None
        if isinstance(converted, date):
            return normalize_date(converted)
    return None


def is_due(task: Any, on: Any) -> bool:
    """Tell whether ``task`` has an occurrence on the calendar day ``on``."""
    check_date = normalize_date(on)
    if check_date is None:
        return False

    frequency = _field(task, "frequency")
    if not isinstance(frequency, str):
        return False

    if frequency == TaskFrequency.ONE_TIME:
        raw_anchor = _field(task, "start_date")
        if _is_absent(raw_anchor):
            raw_anchor = _field(task, "due_date")
        if _is_absent(raw_anchor):
            # no anchor at all: shown every day until completed
            return True
        anchor = normalize_date(raw_anchor)
        return anchor is not None and anchor == check_date

    if frequency not in RECURRING_FREQUENCIES:
        return False

    start_date = normalize_date(_field(task, "start_date"))
    if start_date is None or check_date < start_date:
        return False

    raw_end = _field(task, "end_date")
    if not _is_absent(raw_end):
        end_date = normalize_date(raw_end)
        if end_date is None or check_date > end_date:
            return False

    if frequency == TaskFrequency.DAILY:
        return True
    if frequency == TaskFrequency.WEEKLY:
        return (
            check_date.weekday() == start_date.weekday()
            and (check_date - start_date).days % 7 == 0
        )

    # monthly: a day-of-month missing from a shorter month is skipped, not clamped
    months = (check_date.year - start_date.year) * 12 + (check_date.month - start_date.month)
    return check_date.day == start_date.day and months >= 0


def iter_days(start: date, end: date) -> Iterator[date]:
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def occurrences_in_range(task: Any, start: Any, end: Any) -> set[date]:
    range_start = normalize_date(start)
    range_end = normalize_date(end)
    if range_start is None or range_end is None:
        return set()
    return {day for day in iter_days(range_start, range_end) if is_due(task, day)}


def _sort_key(task: Any) -> tuple[int, str]:
    scheduled = _field(task, "scheduled_time")
    if isinstance(scheduled, str) and scheduled.strip():
        return (0, scheduled.strip())
    return (1, _field(task, "title") or "")


def sort_by_occurrence(tasks: Iterable[Any], on: Any = None) -> list[Any]:
    """Order a day's tasks: timed tasks by ``HH:mm`` first, the rest by title.

    Only orders; every task passed in is returned. ``on`` names the day being
    displayed and does not filter; ``tasks_for_date`` does.
    """
    return sorted(tasks, key=_sort_key)


def tasks_for_date(tasks: Iterable[Any], on: Any) -> list[Any]:
    return sort_by_occurrence([task for task in tasks if is_due(task, on)], on)


def week_range(reference: date, week_starts_on: int = MONDAY) -> tuple[date, date]:
    offset = (reference.weekday() - week_starts_on) % 7
    start = reference - timedelta(days=offset)
    return start, start + timedelta(days=6)


def month_bounds(reference: date) -> tuple[date, date]:
    first = reference.replace(day=1)
    if first.month == 12:
        next_first = first.replace(year=first.year + 1, month=1)
    else:
        next_first = first.replace(month=first.month + 1)
    return first, next_first - timedelta(days=1)


def month_grid(reference: date, week_starts_on: int = MONDAY) -> list[date]:
    """All days shown in a month calendar, padded to whole weeks."""
    first, last = month_bounds(reference)
    grid_start, _ = week_range(first, week_starts_on)
    _, grid_end = week_range(last, week_starts_on)
    return list(iter_days(grid_start, grid_end))


def bucket_by_day(tasks: Iterable[Any], start: date, end: date) -> dict[date, list[Any]]:
    """Map every day in ``[start, end]`` to its ordered task list.

    Days with no task keep an empty list so each calendar cell is present.
    """
    task_list = list(tasks)
    return {day: tasks_for_date(task_list, day) for day in iter_days(start, end)}
