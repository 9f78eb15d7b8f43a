from __future__ import annotations

import logging
from datetime import date, datetime
from decimal import Decimal, InvalidOperation

from homehub.config import SETTINGS
from homehub.domain import ledger
from homehub.domain.entities import ExpenseEntity
from homehub.domain.enums import ExpenseCategory
from homehub.domain.errors import ValidationError
from homehub.domain.filters import ExpenseFilters
from homehub.domain.occurrence import month_bounds, normalize_date, week_range
from homehub.infra.cache import TTLCache, expenses_cache_key, shared_cache
from homehub.infra.expense_repository import ExpenseRepository
from homehub.infra.household_repository import HouseholdRepository

logger = logging.getLogger(__name__)


class ExpenseService:
    def __init__(
        self,
        repo: ExpenseRepository,
        household_repo: HouseholdRepository | None = None,
        cache: TTLCache | None = None,
    ) -> None:
        self._repo = repo
        self._household_repo = household_repo
        self._cache = shared_cache if cache is None else cache

    def create_expense(self, user_id: str, data: dict) -> ExpenseEntity:
        normalized = dict(data)
        household_id = normalized.get("household_id")
        if household_id is None:
            raise ValidationError("Expense must belong to a household")
        normalized["amount"] = self._parse_amount(normalized.get("amount"))
        normalized["category"] = self._parse_category(normalized.get("category"))
        normalized.setdefault("paid_by", user_id)
        normalized.setdefault("description", "")
        normalized["date"] = self._parse_date(normalized.get("date", date.today()))

        if not normalized.get("split_between"):
            normalized["split_between"] = ledger.split_equally(
                normalized["amount"], self._members(household_id)
            )

        normalized["currency"] = normalized.get("currency") or SETTINGS.currency
        normalized["created_by"] = user_id
        normalized["created_at"] = datetime.utcnow()
        normalized["reconciled"] = False

        expense = self._repo.create_expense(normalized)
        self._invalidate(household_id)
        logger.info("Expense %s recorded for household %s", expense.id, household_id)
        return expense

    def list_expenses(self, filters: ExpenseFilters) -> list[ExpenseEntity]:
        key = expenses_cache_key(
            filters.household_id,
            start_date=filters.start_date,
            end_date=filters.end_date,
            category=filters.category,
            limit=filters.limit,
        )
        cached = self._cache.get(key)
        if cached is not None:
            return list(cached)
        expenses = self._repo.list_expenses(filters)
        self._cache.set(key, tuple(expenses))
        return expenses

    def week_expenses(self, household_id: int, today: date | None = None) -> list[ExpenseEntity]:
        today = today or date.today()
        start, _ = week_range(today, SETTINGS.week_starts_on)
        return self.list_expenses(
            ExpenseFilters(household_id=household_id, start_date=start, end_date=today)
        )

    def month_expenses(self, household_id: int, today: date | None = None) -> list[ExpenseEntity]:
        today = today or date.today()
        start, _ = month_bounds(today)
        return self.list_expenses(
            ExpenseFilters(household_id=household_id, start_date=start, end_date=today)
        )

    def month_summary(self, household_id: int, today: date | None = None) -> dict:
        today = today or date.today()
        month = self.month_expenses(household_id, today)
        everything = self.list_expenses(ExpenseFilters(household_id=household_id))
        return {
            "total": ledger.total(month),
            "categories": ledger.category_breakdown(month),
            "balances": ledger.user_balances(everything),
        }

    def delete_expense(self, expense_id: int, household_id: int) -> None:
        self._repo.delete_expense(expense_id)
        self._invalidate(household_id)

    def _members(self, household_id: int) -> list[str]:
        if self._household_repo is None:
            raise ValidationError("split_between is required when household members are unknown")
        household = self._household_repo.get_household(household_id)
        if household is None or not household.members:
            raise ValidationError(f"Household {household_id} has no members to split with")
        return list(household.members)

    def _invalidate(self, household_id: int) -> None:
        self._cache.invalidate_pattern(rf"^expenses-{household_id}(-|$)")

    @staticmethod
    def _parse_amount(value) -> Decimal:
        try:
            amount = ledger.to_amount(value)
        except (InvalidOperation, TypeError, ValueError) as exc:
            raise ValidationError(f"Invalid amount: {value!r}") from exc
        if amount <= 0:
            raise ValidationError("Amount must be positive")
        return amount

    @staticmethod
    def _parse_date(value) -> date:
        parsed = normalize_date(value)
        if parsed is None:
            raise ValidationError(f"Invalid expense date: {value!r}")
        return parsed

    @staticmethod
    def _parse_category(value) -> str:
        try:
            return ExpenseCategory(value).value
        except ValueError as exc:
            raise ValidationError(f"Invalid category: {value!r}") from exc
