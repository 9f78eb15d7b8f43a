from __future__ import annotations

from typing import Optional

from sqlalchemy import select

from homehub.domain.entities import TaskEntity
from homehub.domain.enums import Room, TaskFrequency
from homehub.domain.filters import TaskFilters

from .db import SessionLocal
from .models import TaskModel


def _to_entity(model: TaskModel) -> TaskEntity:
    return TaskEntity(
        id=model.id,
        household_id=model.household_id,
        title=model.title,
        description=model.description,
        room=Room(model.room),
        frequency=TaskFrequency(model.frequency),
        estimated_minutes=model.estimated_minutes,
        assigned_to=model.assigned_to,
        required_products=tuple(model.required_products or ()),
        completed=bool(model.completed),
        completed_by=model.completed_by,
        completed_at=model.completed_at,
        due_date=model.due_date,
        start_date=model.start_date,
        end_date=model.end_date,
        scheduled_time=model.scheduled_time,
        created_at=model.created_at,
        created_by=model.created_by,
    )


def _apply_filters(stmt, filters: TaskFilters) -> object:
    stmt = stmt.where(TaskModel.household_id == filters.household_id)
    if filters.completed is not None:
        stmt = stmt.where(TaskModel.completed == filters.completed)
    if filters.room:
        stmt = stmt.where(TaskModel.room == filters.room)
    if filters.frequency:
        stmt = stmt.where(TaskModel.frequency == filters.frequency)
    if filters.assigned_to:
        stmt = stmt.where(TaskModel.assigned_to == filters.assigned_to)
    return stmt


def _prepare(data: dict) -> dict:
    prepared = dict(data)
    if "required_products" in prepared:
        prepared["required_products"] = list(prepared["required_products"] or ())
    return prepared


class TaskRepository:
    def __init__(self, session_factory=SessionLocal) -> None:
        self._session_factory = session_factory

    def list_tasks(self, filters: TaskFilters) -> list[TaskEntity]:
        with self._session_factory() as session:
            stmt = select(TaskModel)
            stmt = _apply_filters(stmt, filters)
            stmt = stmt.order_by(
                TaskModel.due_date.is_(None),
                TaskModel.due_date.asc(),
                TaskModel.created_at.asc(),
                TaskModel.id.asc(),
            )
            return [_to_entity(task) for task in session.scalars(stmt)]

    def get_task(self, task_id: int) -> Optional[TaskEntity]:
        with self._session_factory() as session:
            task = session.get(TaskModel, task_id)
            return _to_entity(task) if task else None

    def create_task(self, data: dict) -> TaskEntity:
        with self._session_factory() as session:
            task = TaskModel(**_prepare(data))
            session.add(task)
            session.commit()
            session.refresh(task)
            return _to_entity(task)

    def update_task(self, task_id: int, data: dict) -> Optional[TaskEntity]:
        with self._session_factory() as session:
            task = session.get(TaskModel, task_id)
            if not task:
                return None
            for key, value in _prepare(data).items():
                setattr(task, key, value)
            session.commit()
            session.refresh(task)
            return _to_entity(task)

    def delete_task(self, task_id: int) -> None:
        with self._session_factory() as session:
            task = session.get(TaskModel, task_id)
            if not task:
                return
            session.delete(task)
            session.commit()
