from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import Any

from homehub.domain.enums import SearchResultType
from homehub.domain.filters import ExpenseFilters, InventoryFilters, TaskFilters

from .expense_service import ExpenseService
from .inventory_service import InventoryService
from .plant_service import PlantService
from .shopping_service import ShoppingService
from .task_service import TaskService
from .vendor_service import VendorService

logger = logging.getLogger(__name__)

EXPENSE_SEARCH_LIMIT = 100


@dataclass(frozen=True)
class SearchResult:
    type: SearchResultType
    id: int | None
    title: str
    description: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict, compare=False)


def _matches(term: str, *values: object) -> bool:
    return any(term in str(value).lower() for value in values if value is not None)


class SearchService:
    def __init__(
        self,
        expenses: ExpenseService,
        tasks: TaskService,
        inventory: InventoryService,
        plants: PlantService,
        vendors: VendorService,
        shopping: ShoppingService,
    ) -> None:
        self._sources: tuple[tuple[str, Callable[[int, str], Iterable[SearchResult]]], ...] = (
            ("expenses", lambda hid, term: self._search_expenses(expenses, hid, term)),
            ("tasks", lambda hid, term: self._search_tasks(tasks, hid, term)),
            ("inventory", lambda hid, term: self._search_inventory(inventory, hid, term)),
            ("plants", lambda hid, term: self._search_plants(plants, hid, term)),
            ("vendors", lambda hid, term: self._search_vendors(vendors, hid, term)),
            ("shopping", lambda hid, term: self._search_shopping(shopping, hid, term)),
        )

    def search_all(self, household_id: int, query: str) -> list[SearchResult]:
        term = (query or "").strip().lower()
        if not term:
            return []

        results: list[SearchResult] = []
        for name, source in self._sources:
            try:
                results.extend(source(household_id, term))
            except Exception:  # noqa: BLE001
                logger.exception("Search in %s failed for household %s", name, household_id)

        results.sort(key=lambda result: (result.title.lower() != term, result.title.lower()))
        return results

    @staticmethod
    def _search_expenses(service: ExpenseService, household_id: int, term: str):
        filters = ExpenseFilters(household_id=household_id, limit=EXPENSE_SEARCH_LIMIT)
        for expense in service.list_expenses(filters):
            if _matches(term, expense.description, expense.category, expense.amount):
                yield SearchResult(
                    type=SearchResultType.EXPENSE,
                    id=expense.id,
                    title=expense.description,
                    description=f"{expense.amount:.2f} {expense.currency} - {expense.category}",
                    metadata={"expense": expense},
                )

    @staticmethod
    def _search_tasks(service: TaskService, household_id: int, term: str):
        for task in service.list_tasks(TaskFilters(household_id=household_id)):
            if _matches(term, task.title, task.description, task.room):
                yield SearchResult(
                    type=SearchResultType.TASK,
                    id=task.id,
                    title=task.title,
                    description=task.description or f"{task.room} - {task.frequency}",
                    metadata={"task": task},
                )

    @staticmethod
    def _search_inventory(service: InventoryService, household_id: int, term: str):
        for item in service.list_items(InventoryFilters(household_id=household_id)):
            if _matches(term, item.name, item.category, item.status):
                yield SearchResult(
                    type=SearchResultType.INVENTORY,
                    id=item.id,
                    title=item.name,
                    description=f"{item.category} - {item.status}",
                    metadata={"item": item},
                )

    @staticmethod
    def _search_plants(service: PlantService, household_id: int, term: str):
        for plant in service.list_plants(household_id):
            if _matches(term, plant.name, plant.location):
                yield SearchResult(
                    type=SearchResultType.PLANT,
                    id=plant.id,
                    title=plant.name,
                    description=plant.location,
                    metadata={"plant": plant},
                )

    @staticmethod
    def _search_vendors(service: VendorService, household_id: int, term: str):
        for vendor in service.list_vendors(household_id):
            if _matches(term, vendor.name, vendor.type):
                yield SearchResult(
                    type=SearchResultType.VENDOR,
                    id=vendor.id,
                    title=vendor.name,
                    description=str(vendor.type),
                    metadata={"vendor": vendor},
                )

    @staticmethod
    def _search_shopping(service: ShoppingService, household_id: int, term: str):
        for item in service.get_list(household_id).items:
            if _matches(term, item.name):
                yield SearchResult(
                    type=SearchResultType.SHOPPING,
                    id=item.id,
                    title=item.name,
                    description="Bought" if item.checked else "To buy",
                    metadata={"item": item},
                )
