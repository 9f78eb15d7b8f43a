from __future__ import annotations

from enum import StrEnum


class TaskFrequency(StrEnum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    ONE_TIME = "one-time"


RECURRING_FREQUENCIES = frozenset({
    TaskFrequency.DAILY,
    TaskFrequency.WEEKLY,
    TaskFrequency.MONTHLY,
})


class Room(StrEnum):
    KITCHEN = "kitchen"
    BATHROOM = "bathroom"
    BEDROOM = "bedroom"
    LIVING = "living"
    OTHER = "other"


class ExpenseCategory(StrEnum):
    GROCERIES = "groceries"
    BILLS = "bills"
    TRANSPORT = "transport"
    HOME = "home"
    EXTRA = "extra"


class RecurringExpenseFrequency(StrEnum):
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"


class InventoryCategory(StrEnum):
    GROCERIES = "groceries"
    CLEANING = "cleaning"
    PERSONAL = "personal"
    OTHER = "other"


class InventoryStatus(StrEnum):
    OK = "ok"
    LOW = "low"
    OUT = "out"


class VendorType(StrEnum):
    UTILITY = "utility"
    MAINTENANCE = "maintenance"
    SERVICE = "service"
    OTHER = "other"


class SearchResultType(StrEnum):
    EXPENSE = "expense"
    TASK = "task"
    INVENTORY = "inventory"
    PLANT = "plant"
    VENDOR = "vendor"
    SHOPPING = "shopping"
