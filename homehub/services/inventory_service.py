from __future__ import annotations

import logging
from datetime import datetime

from homehub.domain.entities import InventoryItemEntity, ShoppingItemEntity
from homehub.domain.enums import InventoryCategory, InventoryStatus
from homehub.domain.errors import NotFoundError, ValidationError
from homehub.domain.filters import InventoryFilters
from homehub.infra.inventory_repository import InventoryRepository

from .shopping_service import ShoppingService

logger = logging.getLogger(__name__)

CRITICAL_ITEMS: tuple[dict, ...] = (
    {"name": "Pasta", "category": InventoryCategory.GROCERIES, "min_quantity": 2, "unit": "pcs"},
    {"name": "Olive oil", "category": InventoryCategory.GROCERIES, "min_quantity": 1, "unit": "bottle"},
    {"name": "Salt", "category": InventoryCategory.GROCERIES, "min_quantity": 1, "unit": "pcs"},
    {"name": "Toilet paper", "category": InventoryCategory.PERSONAL, "min_quantity": 4, "unit": "rolls"},
    {"name": "Laundry detergent", "category": InventoryCategory.CLEANING, "min_quantity": 1, "unit": "bottle"},
    {"name": "Dish soap", "category": InventoryCategory.CLEANING, "min_quantity": 1, "unit": "bottle"},
    {"name": "Soap", "category": InventoryCategory.PERSONAL, "min_quantity": 2, "unit": "pcs"},
    {"name": "Trash bags", "category": InventoryCategory.CLEANING, "min_quantity": 5, "unit": "pcs"},
)


def stock_status(quantity: int | None, min_quantity: int | None) -> InventoryStatus:
    if not quantity:
        return InventoryStatus.OUT
    if quantity <= (min_quantity or 0):
        return InventoryStatus.LOW
    return InventoryStatus.OK


class InventoryService:
    def __init__(self, repo: InventoryRepository, shopping: ShoppingService | None = None) -> None:
        self._repo = repo
        self._shopping = shopping

    def create_item(self, user_id: str, data: dict) -> InventoryItemEntity:
        normalized = dict(data)
        if not (normalized.get("name") or "").strip():
            raise ValidationError("Inventory item name is required")
        try:
            normalized["category"] = InventoryCategory(normalized.get("category")).value
            normalized["status"] = InventoryStatus(normalized.get("status") or InventoryStatus.OK).value
        except ValueError as exc:
            raise ValidationError(str(exc)) from exc
        normalized["name"] = normalized["name"].strip()
        normalized["created_by"] = user_id
        return self._repo.create_item(normalized)

    def seed_critical_items(self, user_id: str, household_id: int) -> list[InventoryItemEntity]:
        existing = {
            item.name.casefold()
            for item in self._repo.list_items(InventoryFilters(household_id=household_id))
        }
        created = []
        for template in CRITICAL_ITEMS:
            if template["name"].casefold() in existing:
                continue
            created.append(self.create_item(user_id, {**template, "household_id": household_id}))
        return created

    def list_items(self, filters: InventoryFilters) -> list[InventoryItemEntity]:
        return self._repo.list_items(filters)

    def low_stock(self, household_id: int) -> list[InventoryItemEntity]:
        items = self._repo.list_items(InventoryFilters(household_id=household_id))
        return [item for item in items if item.status in (InventoryStatus.LOW, InventoryStatus.OUT)]

    def update_item(self, item_id: int, data: dict) -> InventoryItemEntity | None:
        return self._repo.update_item(item_id, data)

    def refresh_status(self, item_id: int, quantity: int | None = None) -> InventoryItemEntity | None:
        item = self._repo.get_item(item_id)
        if item is None:
            return None
        current = quantity if quantity is not None else item.quantity
        status = stock_status(current, item.min_quantity)
        if status != item.status:
            logger.info("Inventory item %s is now %s", item_id, status.value)
        return self._repo.update_item(item_id, {"status": status.value, "quantity": current})

    def mark_purchased(self, item_id: int, quantity: int, now: datetime | None = None) -> InventoryItemEntity | None:
        item = self._repo.get_item(item_id)
        if item is None:
            return None
        total = (item.quantity or 0) + quantity
        self._repo.update_item(item_id, {"last_purchased": now or datetime.utcnow()})
        return self.refresh_status(item_id, total)

    def delete_item(self, item_id: int) -> None:
        self._repo.delete_item(item_id)

    def add_to_shopping_list(self, item_id: int, user_id: str) -> ShoppingItemEntity:
        if self._shopping is None:
            raise ValidationError("Shopping list is not available")
        item = self._repo.get_item(item_id)
        if item is None:
            raise NotFoundError("inventory item", item_id)
        return self._shopping.add_item(item.household_id, item.name, user_id)
