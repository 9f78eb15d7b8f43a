from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from .enums import (
    ExpenseCategory,
    InventoryCategory,
    InventoryStatus,
    RecurringExpenseFrequency,
    Room,
    TaskFrequency,
    VendorType,
)


@dataclass(frozen=True)
class HouseholdEntity:
    id: int | None
    name: str
    members: tuple[str, ...]
    created_at: datetime
    currency: str = "EUR"
    timezone: str = "Europe/Rome"
    invite_code: str | None = None
    invite_expires_at: Optional[datetime] = None


@dataclass(frozen=True)
class TaskEntity:
    id: int | None
    household_id: int
    title: str
    room: Room
    frequency: TaskFrequency
    estimated_minutes: int
    created_at: datetime
    created_by: str
    description: str | None = None
    assigned_to: str | None = None
    required_products: tuple[int, ...] = ()
    completed: bool = False
    completed_by: str | None = None
    completed_at: Optional[datetime] = None
    due_date: Optional[date] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    scheduled_time: str | None = None


@dataclass(frozen=True)
class ExpenseEntity:
    id: int | None
    household_id: int
    amount: Decimal
    currency: str
    category: ExpenseCategory
    paid_by: str
    split_between: dict[str, Decimal]
    description: str
    date: date
    created_at: datetime
    created_by: str
    reconciled: bool = False
    receipt_url: str | None = None


@dataclass(frozen=True)
class RecurringExpenseEntity:
    id: int | None
    household_id: int
    title: str
    amount: Decimal
    category: ExpenseCategory
    frequency: RecurringExpenseFrequency
    next_due_date: date
    auto_create: bool
    created_at: datetime
    created_by: str
    day_of_month: int | None = None
    day_of_week: int | None = None
    month: int | None = None
    last_paid_date: Optional[date] = None
    paid_by: str | None = None


@dataclass(frozen=True)
class InventoryItemEntity:
    id: int | None
    household_id: int
    name: str
    category: InventoryCategory
    status: InventoryStatus
    created_at: datetime
    updated_at: datetime
    created_by: str
    quantity: int | None = None
    unit: str | None = None
    min_quantity: int | None = None
    last_purchased: Optional[datetime] = None
    last_used: Optional[datetime] = None
    linked_to_tasks: tuple[int, ...] = ()
    notes: str | None = None


@dataclass(frozen=True)
class ShoppingItemEntity:
    id: int | None
    name: str
    added_by: str
    added_at: datetime
    checked: bool = False
    quantity: int | None = None
    checked_by: str | None = None
    checked_at: Optional[datetime] = None


@dataclass(frozen=True)
class ShoppingListEntity:
    id: int | None
    household_id: int
    items: tuple[ShoppingItemEntity, ...]
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class PlantEntity:
    id: int | None
    household_id: int
    name: str
    location: str
    watering_frequency: int
    created_at: datetime
    updated_at: datetime
    created_by: str
    last_watered: Optional[datetime] = None
    next_watering: Optional[datetime] = None
    light_notes: str | None = None
    fertilizer_notes: str | None = None
    notes: str | None = None


@dataclass(frozen=True)
class ContactInfo:
    phone: str | None = None
    email: str | None = None
    website: str | None = None
    address: str | None = None


@dataclass(frozen=True)
class Contract:
    start_date: date
    end_date: Optional[date] = None
    monthly_cost: Decimal | None = None
    notes: str | None = None


@dataclass(frozen=True)
class MaintenanceItem:
    type: str
    frequency: int
    last_service: Optional[date] = None
    next_service: Optional[date] = None
    notes: str | None = None


@dataclass(frozen=True)
class VendorEntity:
    id: int | None
    household_id: int
    name: str
    type: VendorType
    created_at: datetime
    updated_at: datetime
    created_by: str
    contact_info: ContactInfo = field(default_factory=ContactInfo)
    contracts: tuple[Contract, ...] = ()
    maintenance_schedule: tuple[MaintenanceItem, ...] = ()
    notes: str | None = None
