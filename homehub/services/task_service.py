from __future__ import annotations

import logging
import re
from datetime import date, datetime

from homehub.config import SETTINGS
from homehub.domain import occurrence
from homehub.domain.entities import TaskEntity
from homehub.domain.enums import Room, TaskFrequency
from homehub.domain.errors import NotFoundError, ValidationError
from homehub.domain.filters import TaskFilters
from homehub.domain.templates import ROOM_TEMPLATES, TaskTemplate
from homehub.infra.inventory_repository import InventoryRepository
from homehub.infra.repository import TaskRepository

logger = logging.getLogger(__name__)

_TIME_RE = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")
_DATE_FIELDS = ("due_date", "start_date", "end_date")


class TaskService:
    def __init__(self, repo: TaskRepository, inventory_repo: InventoryRepository | None = None) -> None:
        self._repo = repo
        self._inventory_repo = inventory_repo

    def list_tasks(self, filters: TaskFilters) -> list[TaskEntity]:
        return self._repo.list_tasks(filters)

    def get_task(self, task_id: int) -> TaskEntity | None:
        return self._repo.get_task(task_id)

    def create_task(self, user_id: str, data: dict) -> TaskEntity:
        normalized = self._normalize_data(data)
        if not (normalized.get("title") or "").strip():
            raise ValidationError("Task title is required")
        if "household_id" not in normalized:
            raise ValidationError("Task must belong to a household")
        normalized["title"] = normalized["title"].strip()
        normalized.setdefault("room", Room.OTHER.value)
        normalized.setdefault("frequency", TaskFrequency.ONE_TIME.value)
        normalized.setdefault("estimated_minutes", 0)
        normalized["created_by"] = user_id
        normalized["created_at"] = datetime.utcnow()
        normalized["completed"] = False
        task = self._repo.create_task(normalized)
        logger.info("Task %s created in household %s", task.id, task.household_id)
        return task

    def update_task(self, task_id: int, data: dict) -> TaskEntity | None:
        return self._repo.update_task(task_id, self._normalize_data(data, drop_none=False))

    def delete_task(self, task_id: int) -> None:
        self._repo.delete_task(task_id)

    def complete_task(self, task_id: int, user_id: str, now: datetime | None = None) -> TaskEntity | None:
        now = now or datetime.utcnow()
        task = self._repo.update_task(task_id, {
            "completed": True,
            "completed_by": user_id,
            "completed_at": now,
        })
        if not task:
            return None
        self._consume_products(task, now)
        return task

    def uncomplete_task(self, task_id: int) -> TaskEntity | None:
        return self._repo.update_task(task_id, {
            "completed": False,
            "completed_by": None,
            "completed_at": None,
        })

    def list_today(self, household_id: int, today: date | None = None) -> list[TaskEntity]:
        today = today or date.today()
        tasks = self._repo.list_tasks(TaskFilters(household_id=household_id, completed=False))
        return occurrence.tasks_for_date(tasks, today)

    def list_week(
        self,
        household_id: int,
        today: date | None = None,
        week_starts_on: int | None = None,
    ) -> dict[date, list[TaskEntity]]:
        today = today or date.today()
        if week_starts_on is None:
            week_starts_on = SETTINGS.week_starts_on
        start, end = occurrence.week_range(today, week_starts_on)
        tasks = self._repo.list_tasks(TaskFilters(household_id=household_id, completed=False))
        return occurrence.bucket_by_day(tasks, start, end)

    def calendar_month(
        self,
        household_id: int,
        reference: date | None = None,
        include_completed: bool = True,
        week_starts_on: int | None = None,
    ) -> dict[date, list[TaskEntity]]:
        reference = reference or date.today()
        if week_starts_on is None:
            week_starts_on = SETTINGS.week_starts_on
        grid = occurrence.month_grid(reference, week_starts_on)
        filters = TaskFilters(
            household_id=household_id,
            completed=None if include_completed else False,
        )
        tasks = self._repo.list_tasks(filters)
        return occurrence.bucket_by_day(tasks, grid[0], grid[-1])

    @staticmethod
    def room_templates(room: str | None = None) -> dict[Room, tuple[TaskTemplate, ...]]:
        if room is None:
            return dict(ROOM_TEMPLATES)
        try:
            key = Room(room)
        except ValueError as exc:
            raise ValidationError(f"Unknown room {room!r}") from exc
        return {key: ROOM_TEMPLATES[key]}

    def create_from_template(
        self,
        user_id: str,
        household_id: int,
        room: str,
        index: int,
        start_date: date | None = None,
    ) -> TaskEntity:
        templates = self.room_templates(room)
        key, entries = next(iter(templates.items()))
        if not 0 <= index < len(entries):
            raise NotFoundError("template", f"{key.value}[{index}]")
        template = entries[index]
        return self.create_task(user_id, {
            "household_id": household_id,
            "title": template.title,
            "room": key,
            "frequency": template.frequency,
            "estimated_minutes": template.estimated_minutes,
            "start_date": start_date or date.today(),
        })

    def _normalize_data(self, data: dict, drop_none: bool = True) -> dict:
        normalized = {
            key: value for key, value in data.items() if value is not None or not drop_none
        }
        for key in ("room", "frequency"):
            if normalized.get(key) is not None:
                normalized[key] = self._enum_value(key, normalized[key])
        for key in _DATE_FIELDS:
            if normalized.get(key) is not None:
                parsed = occurrence.normalize_date(normalized[key])
                if parsed is None:
                    raise ValidationError(f"Invalid {key}: {normalized[key]!r}")
                normalized[key] = parsed
        scheduled = normalized.get("scheduled_time")
        if scheduled is not None and not _TIME_RE.match(str(scheduled)):
            raise ValidationError(f"scheduled_time must be HH:mm, got {scheduled!r}")
        if normalized.get("required_products") is not None:
            normalized["required_products"] = tuple(normalized["required_products"])
        return normalized

    @staticmethod
    def _enum_value(key: str, value) -> str:
        enum_type = Room if key == "room" else TaskFrequency
        try:
            return enum_type(value).value
        except ValueError as exc:
            raise ValidationError(f"Invalid {key}: {value!r}") from exc

    def _consume_products(self, task: TaskEntity, now: datetime) -> None:
        if not task.required_products or self._inventory_repo is None:
            return
        for product_id in task.required_products:
            try:
                item = self._inventory_repo.get_item(product_id)
                if item is None or not item.quantity or item.quantity <= 0:
                    continue
                self._inventory_repo.update_item(product_id, {
                    "quantity": item.quantity - 1,
                    "last_used": now,
                })
            except Exception:  # noqa: BLE001
                logger.exception("Error consuming product %s for task %s", product_id, task.id)
