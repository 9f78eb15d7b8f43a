"""Achievement badges unlocked by household activity."""
from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date, timedelta

from homehub.domain.filters import ExpenseFilters, TaskFilters
from homehub.infra.badge_repository import BadgeStatusRepository
from homehub.infra.repository import TaskRepository

from .expense_service import ExpenseService
from .shopping_service import ShoppingService

logger = logging.getLogger(__name__)

STREAK_DAYS = 3
STREAK_LOOKBACK_DAYS = 30


@dataclass(frozen=True)
class Badge:
    id: str
    name: str
    description: str
    emoji: str


BADGES: tuple[Badge, ...] = (
    Badge("first-expense", "First Expense", "You recorded your first expense", "\U0001F4B8"),
    Badge("shopping-hero", "Shopping Hero", "You completed the shopping list", "\U0001F4AA"),
    Badge("expense-tracker", "Expense Tracker", "10 expenses recorded", "\U0001F4CA"),
    Badge("house-harmony", "House Harmony", "3 consecutive days of activity", "\U0001F338"),
)


def has_streak(days: set[date], length: int) -> bool:
    for day in days:
        if all(day + timedelta(days=offset) in days for offset in range(1, length)):
            return True
    return False


class BadgeService:
    def __init__(
        self,
        status_repo: BadgeStatusRepository,
        expenses: ExpenseService,
        shopping: ShoppingService,
        task_repo: TaskRepository,
    ) -> None:
        self._status_repo = status_repo
        self._expenses = expenses
        self._shopping = shopping
        self._task_repo = task_repo
        self._conditions: dict[str, Callable[[int, date], bool]] = {
            "first-expense": lambda household_id, today: len(
                self._expenses.week_expenses(household_id, today)
            ) >= 1,
            "expense-tracker": lambda household_id, today: len(
                self._expenses.week_expenses(household_id, today)
            ) >= 10,
            "shopping-hero": self._shopping_done,
            "house-harmony": self._activity_streak,
        }

    def evaluate(self, household_id: int, today: date | None = None) -> list[Badge]:
        today = today or date.today()
        return [badge for badge in BADGES if self._is_unlocked(badge, household_id, today)]

    def new_badges(self, household_id: int, user_id: str, today: date | None = None) -> list[Badge]:
        """Unlocked badges the user has not been shown yet; marks them as shown."""
        shown = self._status_repo.shown_badges(user_id)
        fresh = [badge for badge in self.evaluate(household_id, today) if badge.id not in shown]
        for badge in fresh:
            self._status_repo.mark_shown(user_id, badge.id)
            logger.info("Badge %s unlocked for %s", badge.id, user_id)
        return fresh

    def _is_unlocked(self, badge: Badge, household_id: int, today: date) -> bool:
        try:
            return bool(self._conditions[badge.id](household_id, today))
        except Exception:  # noqa: BLE001
            logger.exception("Badge condition %s failed", badge.id)
            return False

    def _shopping_done(self, household_id: int, today: date) -> bool:
        items = self._shopping.get_list(household_id).items
        return bool(items) and all(item.checked for item in items)

    def _activity_streak(self, household_id: int, today: date) -> bool:
        since = today - timedelta(days=STREAK_LOOKBACK_DAYS)
        expenses = self._expenses.list_expenses(
            ExpenseFilters(household_id=household_id, start_date=since, end_date=today)
        )
        days = {expense.date for expense in expenses}
        for task in self._task_repo.list_tasks(TaskFilters(household_id=household_id, completed=True)):
            if task.completed_at is not None and since <= task.completed_at.date() <= today:
                days.add(task.completed_at.date())
        return has_streak(days, STREAK_DAYS)
