from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime

import pytest

from homehub.domain.entities import InventoryItemEntity, TaskEntity
from homehub.domain.enums import InventoryCategory, InventoryStatus, Room, TaskFrequency
from homehub.domain.errors import NotFoundError, ValidationError
from homehub.domain.filters import TaskFilters
from homehub.services.task_service import TaskService


class FakeRepo:
    def __init__(self) -> None:
        self.tasks: list[TaskEntity] = []
        self._id = 1

    def list_tasks(self, filters: TaskFilters) -> list[TaskEntity]:
        return [
            t for t in self.tasks
            if t.household_id == filters.household_id
            and (filters.completed is None or t.completed == filters.completed)
        ]

    def get_task(self, task_id: int) -> TaskEntity | None:
        return next((t for t in self.tasks if t.id == task_id), None)

    def create_task(self, data: dict) -> TaskEntity:
        task = TaskEntity(
            id=self._id,
            household_id=data["household_id"],
            title=data.get("title", ""),
            room=Room(data.get("room", "other")),
            frequency=TaskFrequency(data.get("frequency", "one-time")),
            estimated_minutes=data.get("estimated_minutes", 0),
            created_at=data.get("created_at", datetime.utcnow()),
            created_by=data.get("created_by", ""),
            required_products=tuple(data.get("required_products", ())),
            due_date=data.get("due_date"),
            start_date=data.get("start_date"),
            end_date=data.get("end_date"),
            scheduled_time=data.get("scheduled_time"),
        )
        self.tasks.append(task)
        self._id += 1
        return task

    def update_task(self, task_id: int, data: dict) -> TaskEntity | None:
        task = self.get_task(task_id)
        if not task:
            return None
        updated = replace(task, **data)
        self.tasks = [updated if t.id == task_id else t for t in self.tasks]
        return updated

    def delete_task(self, task_id: int) -> None:
        self.tasks = [t for t in self.tasks if t.id != task_id]


class FakeInventory:
    def __init__(self, items: list[InventoryItemEntity]) -> None:
        self.items = {item.id: item for item in items}
        self.fail_on: set[int] = set()

    def get_item(self, item_id: int) -> InventoryItemEntity | None:
        if item_id in self.fail_on:
            raise RuntimeError("store unavailable")
        return self.items.get(item_id)

    def update_item(self, item_id: int, data: dict) -> InventoryItemEntity | None:
        self.items[item_id] = replace(self.items[item_id], **data)
        return self.items[item_id]


def _item(item_id: int, quantity: int | None) -> InventoryItemEntity:
    now = datetime(2025, 1, 1)
    return InventoryItemEntity(
        id=item_id,
        household_id=1,
        name=f"Item {item_id}",
        category=InventoryCategory.CLEANING,
        status=InventoryStatus.OK,
        created_at=now,
        updated_at=now,
        created_by="u1",
        quantity=quantity,
    )


def test_today_lists_due_tasks_in_display_order() -> None:
    repo = FakeRepo()
    service = TaskService(repo)
    service.create_task("u1", {"household_id": 1, "title": "Vacuum", "frequency": "weekly",
                               "start_date": date(2025, 1, 6)})
    service.create_task("u1", {"household_id": 1, "title": "Dishes", "frequency": "daily",
                               "start_date": date(2025, 1, 1), "scheduled_time": "21:00"})
    service.create_task("u1", {"household_id": 1, "title": "Call plumber"})
    service.create_task("u1", {"household_id": 1, "title": "Oven", "frequency": "monthly",
                               "start_date": date(2025, 1, 20)})
    service.create_task("u2", {"household_id": 2, "title": "Other home", "frequency": "daily",
                               "start_date": date(2025, 1, 1)})

    today = service.list_today(1, today=date(2025, 1, 13))

    assert [t.title for t in today] == ["Dishes", "Call plumber", "Vacuum"]


def test_completed_tasks_leave_today_list() -> None:
    repo = FakeRepo()
    service = TaskService(repo)
    task = service.create_task("u1", {"household_id": 1, "title": "Bins"})

    service.complete_task(task.id, "u2", now=datetime(2025, 1, 13, 8))
    assert service.list_today(1, today=date(2025, 1, 13)) == []

    restored = service.uncomplete_task(task.id)
    assert restored is not None
    assert restored.completed is False
    assert restored.completed_by is None
    assert [t.id for t in service.list_today(1, today=date(2025, 1, 13))] == [task.id]


def test_complete_task_consumes_required_products() -> None:
    repo = FakeRepo()
    inventory = FakeInventory([_item(10, 3), _item(11, 0), _item(12, 5)])
    inventory.fail_on.add(11)
    service = TaskService(repo, inventory)
    task = service.create_task("u1", {
        "household_id": 1,
        "title": "Mop floors",
        "required_products": [10, 11, 12, 99],
    })
    now = datetime(2025, 2, 1, 10)

    done = service.complete_task(task.id, "u1", now=now)

    assert done is not None
    assert done.completed_by == "u1"
    assert done.completed_at == now
    assert inventory.items[10].quantity == 2
    assert inventory.items[10].last_used == now
    assert inventory.items[11].quantity == 0
    assert inventory.items[12].quantity == 4


def test_complete_missing_task_returns_none() -> None:
    assert TaskService(FakeRepo()).complete_task(42, "u1") is None


def test_week_view_buckets_every_day() -> None:
    repo = FakeRepo()
    service = TaskService(repo)
    service.create_task("u1", {"household_id": 1, "title": "Sheets", "frequency": "weekly",
                               "start_date": "2025-01-08"})

    week = service.list_week(1, today=date(2025, 1, 16), week_starts_on=0)

    assert list(week) == [date(2025, 1, d) for d in range(13, 20)]
    assert [t.title for t in week[date(2025, 1, 15)]] == ["Sheets"]
    assert sum(len(tasks) for tasks in week.values()) == 1


def test_month_calendar_can_hide_completed() -> None:
    repo = FakeRepo()
    service = TaskService(repo)
    kept = service.create_task("u1", {"household_id": 1, "title": "Windows", "frequency": "monthly",
                                      "start_date": date(2025, 1, 31)})
    done = service.create_task("u1", {"household_id": 1, "title": "Boiler check",
                                      "due_date": date(2025, 3, 3)})
    service.complete_task(done.id, "u1")

    full = service.calendar_month(1, reference=date(2025, 3, 10), week_starts_on=0)
    open_only = service.calendar_month(1, reference=date(2025, 3, 10), include_completed=False,
                                       week_starts_on=0)

    assert min(full) == date(2025, 2, 24)
    assert max(full) == date(2025, 4, 6)
    assert [t.id for t in full[date(2025, 3, 31)]] == [kept.id]
    assert [t.id for t in full[date(2025, 3, 3)]] == [done.id]
    assert open_only[date(2025, 3, 3)] == []


@pytest.mark.parametrize(
    "data",
    [
        {"household_id": 1, "title": "  "},
        {"household_id": 1, "title": "Dust", "frequency": "hourly"},
        {"household_id": 1, "title": "Dust", "room": "garage"},
        {"household_id": 1, "title": "Dust", "scheduled_time": "7:5"},
        {"household_id": 1, "title": "Dust", "start_date": "someday"},
        {"title": "Dust"},
    ],
)
def test_create_task_rejects_invalid_input(data: dict) -> None:
    with pytest.raises(ValidationError):
        TaskService(FakeRepo()).create_task("u1", data)


def test_create_from_room_template() -> None:
    repo = FakeRepo()
    service = TaskService(repo)

    task = service.create_from_template("u1", 1, "kitchen", 2, start_date=date(2025, 5, 1))

    assert task.title == "Clean the fridge"
    assert task.frequency == TaskFrequency.WEEKLY
    assert task.room == Room.KITCHEN
    assert task.estimated_minutes == 20
    assert task.start_date == date(2025, 5, 1)
    assert set(service.room_templates()) == set(Room)

    with pytest.raises(NotFoundError):
        service.create_from_template("u1", 1, "kitchen", 50)
    with pytest.raises(ValidationError):
        service.room_templates("attic")
