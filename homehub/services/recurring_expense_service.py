from __future__ import annotations

import logging
from calendar import monthrange
from datetime import date, datetime, timedelta

from homehub.domain import ledger
from homehub.domain.entities import RecurringExpenseEntity
from homehub.domain.enums import ExpenseCategory, RecurringExpenseFrequency
from homehub.domain.errors import ValidationError
from homehub.infra.expense_repository import RecurringExpenseRepository
from homehub.infra.household_repository import HouseholdRepository

from .expense_service import ExpenseService

logger = logging.getLogger(__name__)


class RecurringExpenseService:
    def __init__(
        self,
        repo: RecurringExpenseRepository,
        expense_service: ExpenseService,
        household_repo: HouseholdRepository,
    ) -> None:
        self._repo = repo
        self._expense_service = expense_service
        self._household_repo = household_repo

    def create(self, user_id: str, data: dict) -> RecurringExpenseEntity:
        normalized = dict(data)
        if not (normalized.get("title") or "").strip():
            raise ValidationError("Recurring expense title is required")
        try:
            normalized["frequency"] = RecurringExpenseFrequency(normalized.get("frequency")).value
            normalized["category"] = ExpenseCategory(normalized.get("category")).value
        except ValueError as exc:
            raise ValidationError(str(exc)) from exc
        if normalized.get("next_due_date") is None:
            raise ValidationError("next_due_date is required")
        normalized["amount"] = ledger.to_amount(normalized["amount"])
        normalized.setdefault("auto_create", False)
        normalized["created_by"] = user_id
        normalized["created_at"] = datetime.utcnow()
        return self._repo.create_recurring(normalized)

    def list_recurring(self, household_id: int) -> list[RecurringExpenseEntity]:
        return self._repo.list_recurring(household_id)

    def upcoming(
        self,
        household_id: int,
        days_ahead: int = 30,
        today: date | None = None,
    ) -> list[RecurringExpenseEntity]:
        today = today or date.today()
        horizon = today + timedelta(days=days_ahead)
        return [
            expense
            for expense in self._repo.list_recurring(household_id)
            if today <= expense.next_due_date <= horizon
        ]

    def update(self, expense_id: int, data: dict) -> RecurringExpenseEntity | None:
        return self._repo.update_recurring(expense_id, data)

    def delete(self, expense_id: int) -> None:
        self._repo.delete_recurring(expense_id)

    def mark_paid(
        self,
        expense_id: int,
        user_id: str,
        today: date | None = None,
    ) -> RecurringExpenseEntity | None:
        expense = self._repo.get_recurring(expense_id)
        if expense is None:
            return None
        today = today or date.today()
        next_due = next_due_date(expense.next_due_date, expense.frequency)

        if expense.auto_create:
            household = self._household_repo.get_household(expense.household_id)
            if household is None:
                logger.warning(
                    "Household %s missing, expense not created for recurring %s",
                    expense.household_id,
                    expense_id,
                )
            else:
                self._expense_service.create_expense(user_id, {
                    "household_id": expense.household_id,
                    "amount": expense.amount,
                    "category": expense.category,
                    "paid_by": expense.paid_by or user_id,
                    "split_between": ledger.split_equally(expense.amount, household.members),
                    "description": expense.title,
                    "date": today,
                })

        return self._repo.update_recurring(expense_id, {
            "last_paid_date": today,
            "next_due_date": next_due,
        })


def next_due_date(current: date, frequency: str) -> date:
    if frequency == RecurringExpenseFrequency.WEEKLY:
        return current + timedelta(days=7)
    if frequency == RecurringExpenseFrequency.YEARLY:
        return _add_months(current, 12)
    return _add_months(current, 1)


def _add_months(base: date, months: int) -> date:
    year = base.year + (base.month - 1 + months) // 12
    month = (base.month - 1 + months) % 12 + 1
    day = min(base.day, monthrange(year, month)[1])
    return date(year, month, day)
