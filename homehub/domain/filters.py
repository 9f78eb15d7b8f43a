from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class TaskFilters:
    household_id: int
    completed: bool | None = None
    room: str | None = None
    frequency: str | None = None
    assigned_to: str | None = None


@dataclass(frozen=True)
class ExpenseFilters:
    household_id: int
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    category: str | None = None
    limit: int | None = None


@dataclass(frozen=True)
class InventoryFilters:
    household_id: int
    status: str | None = None
    category: str | None = None
