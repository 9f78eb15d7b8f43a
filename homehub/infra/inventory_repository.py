from __future__ import annotations

from typing import Optional

from sqlalchemy import select

from homehub.domain.entities import InventoryItemEntity
from homehub.domain.enums import InventoryCategory, InventoryStatus
from homehub.domain.filters import InventoryFilters

from .db import SessionLocal
from .models import InventoryItemModel


def _to_entity(model: InventoryItemModel) -> InventoryItemEntity:
    return InventoryItemEntity(
        id=model.id,
        household_id=model.household_id,
        name=model.name,
        category=InventoryCategory(model.category),
        status=InventoryStatus(model.status or InventoryStatus.OK.value),
        quantity=model.quantity,
        unit=model.unit,
        min_quantity=model.min_quantity,
        last_purchased=model.last_purchased,
        last_used=model.last_used,
        linked_to_tasks=tuple(model.linked_to_tasks or ()),
        notes=model.notes,
        created_at=model.created_at,
        updated_at=model.updated_at,
        created_by=model.created_by,
    )


def _prepare(data: dict) -> dict:
    prepared = dict(data)
    if "linked_to_tasks" in prepared:
        prepared["linked_to_tasks"] = list(prepared["linked_to_tasks"] or ())
    return prepared


class InventoryRepository:
    def __init__(self, session_factory=SessionLocal) -> None:
        self._session_factory = session_factory

    def list_items(self, filters: InventoryFilters) -> list[InventoryItemEntity]:
        with self._session_factory() as session:
            stmt = select(InventoryItemModel).where(
                InventoryItemModel.household_id == filters.household_id
            )
            if filters.status:
                stmt = stmt.where(InventoryItemModel.status == filters.status)
            if filters.category:
                stmt = stmt.where(InventoryItemModel.category == filters.category)
            stmt = stmt.order_by(InventoryItemModel.name.asc())
            return [_to_entity(item) for item in session.scalars(stmt)]

    def get_item(self, item_id: int) -> Optional[InventoryItemEntity]:
        with self._session_factory() as session:
            item = session.get(InventoryItemModel, item_id)
            return _to_entity(item) if item else None

    def create_item(self, data: dict) -> InventoryItemEntity:
        with self._session_factory() as session:
            item = InventoryItemModel(**_prepare(data))
            session.add(item)
            session.commit()
            session.refresh(item)
            return _to_entity(item)

    def update_item(self, item_id: int, data: dict) -> Optional[InventoryItemEntity]:
        with self._session_factory() as session:
            item = session.get(InventoryItemModel, item_id)
            if not item:
                return None
            for key, value in _prepare(data).items():
                setattr(item, key, value)
            session.commit()
            session.refresh(item)
            return _to_entity(item)

    def delete_item(self, item_id: int) -> None:
        with self._session_factory() as session:
            item = session.get(InventoryItemModel, item_id)
            if not item:
                return
            session.delete(item)
            session.commit()
