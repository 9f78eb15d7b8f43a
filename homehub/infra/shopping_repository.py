from __future__ import annotations

from typing import Optional

from sqlalchemy import delete, select

from homehub.domain.entities import ShoppingItemEntity, ShoppingListEntity

from .db import SessionLocal
from .models import ShoppingItemModel, ShoppingListModel, utcnow


def _to_item(model: ShoppingItemModel) -> ShoppingItemEntity:
    return ShoppingItemEntity(
        id=model.id,
        name=model.name,
        quantity=model.quantity,
        added_by=model.added_by,
        added_at=model.added_at,
        checked=bool(model.checked),
        checked_by=model.checked_by,
        checked_at=model.checked_at,
    )


def _to_list(model: ShoppingListModel) -> ShoppingListEntity:
    return ShoppingListEntity(
        id=model.id,
        household_id=model.household_id,
        items=tuple(_to_item(item) for item in model.items),
        created_at=model.created_at,
        updated_at=model.updated_at,
    )


class ShoppingListRepository:
    def __init__(self, session_factory=SessionLocal) -> None:
        self._session_factory = session_factory

    def get_or_create_list(self, household_id: int) -> ShoppingListEntity:
        with self._session_factory() as session:
            stmt = select(ShoppingListModel).where(ShoppingListModel.household_id == household_id)
            shopping_list = session.scalars(stmt).first()
            if shopping_list is None:
                shopping_list = ShoppingListModel(household_id=household_id)
                session.add(shopping_list)
                session.commit()
                session.refresh(shopping_list)
            return _to_list(shopping_list)

    def add_item(self, list_id: int, data: dict) -> ShoppingItemEntity:
        with self._session_factory() as session:
            item = ShoppingItemModel(list_id=list_id, **data)
            session.add(item)
            self._touch(session, list_id)
            session.commit()
            session.refresh(item)
            return _to_item(item)

    def update_item(self, list_id: int, item_id: int, data: dict) -> Optional[ShoppingItemEntity]:
        with self._session_factory() as session:
            item = session.get(ShoppingItemModel, item_id)
            if not item or item.list_id != list_id:
                return None
            for key, value in data.items():
                setattr(item, key, value)
            self._touch(session, list_id)
            session.commit()
            session.refresh(item)
            return _to_item(item)

    def remove_item(self, list_id: int, item_id: int) -> None:
        with self._session_factory() as session:
            session.execute(
                delete(ShoppingItemModel).where(
                    ShoppingItemModel.id == item_id,
                    ShoppingItemModel.list_id == list_id,
                )
            )
            self._touch(session, list_id)
            session.commit()

    def clear_checked(self, list_id: int) -> int:
        with self._session_factory() as session:
            result = session.execute(
                delete(ShoppingItemModel).where(
                    ShoppingItemModel.list_id == list_id,
                    ShoppingItemModel.checked.is_(True),
                )
            )
            self._touch(session, list_id)
            session.commit()
            return result.rowcount or 0

    @staticmethod
    def _touch(session, list_id: int) -> None:
        shopping_list = session.get(ShoppingListModel, list_id)
        if shopping_list is not None:
            shopping_list.updated_at = utcnow()
