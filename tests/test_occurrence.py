from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta

import pytest

from homehub.domain.occurrence import (
    SUNDAY,
    bucket_by_day,
    is_due,
    month_grid,
    normalize_date,
    occurrences_in_range,
    sort_by_occurrence,
    tasks_for_date,
    week_range,
)


@dataclass(frozen=True)
class Task:
    frequency: str
    title: str = "Task"
    start_date: object = None
    due_date: object = None
    end_date: object = None
    scheduled_time: str | None = None


def test_weekly_task_with_end_date() -> None:
    task = Task("weekly", start_date=date(2025, 1, 6), end_date=date(2025, 1, 27))

    for day in (date(2025, 1, 6), date(2025, 1, 13), date(2025, 1, 20), date(2025, 1, 27)):
        assert is_due(task, day)

    assert not is_due(task, date(2025, 1, 3))
    assert not is_due(task, date(2025, 2, 3))
    assert not is_due(task, date(2025, 1, 7))


def test_weekly_matches_only_multiples_of_seven_days() -> None:
    start = date(2025, 1, 6)
    task = Task("weekly", start_date=start)

    for offset in range(-14, 120):
        day = start + timedelta(days=offset)
        expected = day >= start and day.weekday() == start.weekday() and (day - start).days % 7 == 0
        assert is_due(task, day) is expected


def test_daily_task_starts_on_start_date() -> None:
    start = date(2025, 3, 1)
    task = Task("daily", start_date=start)

    assert not is_due(task, start - timedelta(days=1))
    for offset in range(0, 60):
        assert is_due(task, start + timedelta(days=offset))


@pytest.mark.parametrize(
    "frequency, end",
    [
        ("daily", date(2025, 6, 15)),
        ("weekly", date(2025, 6, 12)),
        ("monthly", date(2025, 6, 15)),
    ],
)
def test_end_date_bounds_every_recurring_frequency(frequency: str, end: date) -> None:
    task = Task(frequency, start_date=date(2025, 5, 15), end_date=end)

    assert is_due(task, end)
    for offset in range(1, 40):
        assert not is_due(task, end + timedelta(days=offset))


def test_monthly_skips_missing_day_of_month() -> None:
    task = Task("monthly", start_date=date(2025, 1, 31))

    assert not is_due(task, date(2025, 2, 28))
    assert is_due(task, date(2025, 3, 31))
    assert not is_due(task, date(2025, 4, 30))
    assert is_due(task, date(2026, 1, 31))
    assert not is_due(task, date(2024, 12, 31))


def test_one_time_task_due_only_on_anchor() -> None:
    task = Task("one-time", start_date=date(2025, 3, 10))

    assert is_due(task, date(2025, 3, 10))
    assert not is_due(task, date(2025, 3, 11))
    assert occurrences_in_range(task, date(2025, 3, 1), date(2025, 3, 31)) == {date(2025, 3, 10)}


def test_one_time_task_falls_back_to_due_date() -> None:
    task = Task("one-time", due_date=datetime(2025, 3, 12, 18, 30))

    assert is_due(task, date(2025, 3, 12))
    assert not is_due(task, date(2025, 3, 10))


def test_one_time_task_without_dates_is_always_due() -> None:
    task = Task("one-time")

    assert is_due(task, date(2025, 1, 1))
    assert is_due(task, date(2030, 12, 25))
    days = occurrences_in_range(task, date(2025, 1, 1), date(2025, 1, 7))
    assert len(days) == 7


def test_recurring_task_without_start_date_is_never_due() -> None:
    task = Task("daily", due_date=date(2025, 1, 1))

    assert not is_due(task, date(2025, 1, 1))
    assert occurrences_in_range(task, date(2025, 1, 1), date(2025, 1, 31)) == set()


def test_weekly_range_starting_on_anchor_has_single_occurrence() -> None:
    start = date(2025, 1, 8)
    task = Task("weekly", start_date=start)

    assert occurrences_in_range(task, start, start + timedelta(days=6)) == {start}


@pytest.mark.parametrize(
    "task",
    [
        Task("daily", start_date="not-a-date"),
        Task("weekly", start_date=date(2025, 1, 6), end_date="soon"),
        Task("one-time", start_date="31/02/2025"),
        Task("fortnightly", start_date=date(2025, 1, 6)),
        Task("daily", start_date=object()),
    ],
)
def test_malformed_records_are_not_due(task: Task) -> None:
    assert not is_due(task, date(2025, 1, 13))
    assert occurrences_in_range(task, date(2025, 1, 1), date(2025, 1, 31)) == set()


def test_invalid_reference_dates_degrade_to_empty() -> None:
    task = Task("daily", start_date=date(2025, 1, 1))

    assert not is_due(task, "yesterday")
    assert occurrences_in_range(task, None, date(2025, 1, 5)) == set()
    assert occurrences_in_range(task, date(2025, 1, 5), date(2025, 1, 1)) == set()


def test_raw_documents_with_camel_case_keys() -> None:
    document = {
        "frequency": "weekly",
        "startDate": "2025-01-06T09:15:00",
        "endDate": "2025-01-20",
    }

    assert is_due(document, "2025-01-13")
    assert not is_due(document, "2025-01-27")


def test_normalize_date_supports_store_timestamps() -> None:
    class StoreTimestamp:
        def to_datetime(self) -> datetime:
            return datetime(2025, 4, 2, 23, 59)

    class BrokenTimestamp:
        def to_datetime(self) -> datetime:
            raise RuntimeError("corrupt")

    assert normalize_date(StoreTimestamp()) == date(2025, 4, 2)
    assert normalize_date(BrokenTimestamp()) is None
    assert normalize_date(datetime(2025, 4, 2, 8, 0)) == date(2025, 4, 2)
    assert normalize_date(datetime(2025, 4, 2, 12, 0).timestamp()) == date(2025, 4, 2)
    assert normalize_date("") is None
    assert normalize_date(True) is None


def test_is_due_is_repeatable() -> None:
    task = Task("monthly", start_date=date(2025, 1, 15))
    day = date(2025, 7, 15)

    assert is_due(task, day) == is_due(task, day) is True


def test_sort_puts_timed_tasks_first() -> None:
    tasks = [
        Task("daily", title="Vacuum", start_date=date(2025, 1, 1)),
        Task("daily", title="Dishes", start_date=date(2025, 1, 1), scheduled_time="20:00"),
        Task("daily", title="Bed", start_date=date(2025, 1, 1), scheduled_time="07:30"),
        Task("daily", title="Dust", start_date=date(2025, 1, 1)),
    ]

    ordered = sort_by_occurrence(tasks)

    assert [task.title for task in ordered] == ["Bed", "Dishes", "Dust", "Vacuum"]


def test_sort_with_date_returns_every_task() -> None:
    tasks = [
        Task("weekly", title="Fridge", start_date=date(2025, 1, 6)),
        Task("daily", title="Dishes", start_date=date(2025, 1, 1), scheduled_time="20:00"),
    ]

    ordered = sort_by_occurrence(tasks, date(2025, 1, 14))

    assert len(ordered) == len(tasks)
    assert [t.title for t in ordered] == ["Dishes", "Fridge"]


def test_tasks_for_date_keeps_only_that_days_tasks() -> None:
    tasks = [
        Task("weekly", title="Fridge", start_date=date(2025, 1, 6)),
        Task("daily", title="Dishes", start_date=date(2025, 1, 1), scheduled_time="20:00"),
        Task("one-time", title="Plumber", due_date=date(2025, 1, 9)),
    ]

    assert [t.title for t in tasks_for_date(tasks, date(2025, 1, 13))] == ["Dishes", "Fridge"]
    assert [t.title for t in tasks_for_date(tasks, date(2025, 1, 9))] == ["Dishes", "Plumber"]
    assert [t.title for t in tasks_for_date(tasks, date(2025, 1, 14))] == ["Dishes"]


def test_week_range_respects_first_weekday() -> None:
    wednesday = date(2025, 1, 8)

    assert week_range(wednesday) == (date(2025, 1, 6), date(2025, 1, 12))
    assert week_range(wednesday, SUNDAY) == (date(2025, 1, 5), date(2025, 1, 11))


def test_month_grid_includes_adjacent_month_days() -> None:
    grid = month_grid(date(2025, 2, 14))

    assert grid[0] == date(2025, 1, 27)
    assert grid[-1] == date(2025, 3, 2)
    assert len(grid) == 35
    assert len(grid) % 7 == 0


def test_bucket_by_day_keeps_empty_days() -> None:
    task = Task("weekly", title="Towels", start_date=date(2025, 1, 6))

    buckets = bucket_by_day([task], date(2025, 1, 27), date(2025, 2, 2))

    assert list(buckets) == [date(2025, 1, 27) + timedelta(days=i) for i in range(7)]
    assert buckets[date(2025, 1, 27)] == [task]
    assert all(buckets[day] == [] for day in buckets if day != date(2025, 1, 27))
