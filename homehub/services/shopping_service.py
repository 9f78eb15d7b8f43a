from __future__ import annotations

from collections import Counter
from datetime import datetime

from homehub.domain.entities import ShoppingItemEntity, ShoppingListEntity
from homehub.domain.enums import ExpenseCategory
from homehub.domain.errors import NotFoundError, ValidationError
from homehub.domain.filters import ExpenseFilters
from homehub.infra.expense_repository import ExpenseRepository
from homehub.infra.shopping_repository import ShoppingListRepository

GROCERY_KEYWORDS = (
    "milk", "bread", "pasta", "rice", "cheese", "eggs", "butter",
    "tomatoes", "onions", "garlic", "potatoes", "chicken", "beef",
    "fish", "salmon", "yogurt", "cereal", "coffee", "tea", "sugar",
    "salt", "pepper", "oil", "vinegar", "flour", "bananas", "apples",
    "oranges", "lettuce", "carrots", "cucumber", "peppers", "mushrooms",
)
MAX_SUGGESTIONS = 20
MAX_FREQUENT = 10


class ShoppingService:
    def __init__(self, repo: ShoppingListRepository, expense_repo: ExpenseRepository | None = None) -> None:
        self._repo = repo
        self._expense_repo = expense_repo

    def get_list(self, household_id: int) -> ShoppingListEntity:
        return self._repo.get_or_create_list(household_id)

    def add_item(
        self,
        household_id: int,
        name: str,
        user_id: str,
        quantity: int | None = None,
        now: datetime | None = None,
    ) -> ShoppingItemEntity:
        name = (name or "").strip()
        if not name:
            raise ValidationError("Shopping item name is required")
        shopping_list = self._repo.get_or_create_list(household_id)
        return self._repo.add_item(shopping_list.id, {
            "name": name,
            "quantity": quantity,
            "added_by": user_id,
            "added_at": now or datetime.utcnow(),
            "checked": False,
        })

    def toggle_item(
        self,
        household_id: int,
        item_id: int,
        user_id: str,
        now: datetime | None = None,
    ) -> ShoppingItemEntity:
        shopping_list = self._repo.get_or_create_list(household_id)
        item = next((i for i in shopping_list.items if i.id == item_id), None)
        if item is None:
            raise NotFoundError("shopping item", item_id)
        checked = not item.checked
        updated = self._repo.update_item(shopping_list.id, item_id, {
            "checked": checked,
            "checked_by": user_id if checked else None,
            "checked_at": (now or datetime.utcnow()) if checked else None,
        })
        if updated is None:
            raise NotFoundError("shopping item", item_id)
        return updated

    def remove_item(self, household_id: int, item_id: int) -> None:
        shopping_list = self._repo.get_or_create_list(household_id)
        self._repo.remove_item(shopping_list.id, item_id)

    def clear_checked(self, household_id: int) -> int:
        shopping_list = self._repo.get_or_create_list(household_id)
        return self._repo.clear_checked(shopping_list.id)

    def purchase_suggestions(self, household_id: int, limit: int = 50) -> list[str]:
        """Item names mined from recent grocery expense descriptions."""
        unique = dict.fromkeys(self._mentions(household_id, limit))
        return list(unique)[:MAX_SUGGESTIONS]

    def frequent_items(self, household_id: int) -> list[tuple[str, int]]:
        return Counter(self._mentions(household_id, 100)).most_common(MAX_FREQUENT)

    def _mentions(self, household_id: int, limit: int) -> list[str]:
        if self._expense_repo is None:
            return []
        expenses = self._expense_repo.list_expenses(ExpenseFilters(
            household_id=household_id,
            category=ExpenseCategory.GROCERIES.value,
            limit=limit,
        ))
        mentions = []
        for expense in expenses:
            description = (expense.description or "").lower().strip()
            found = {keyword.capitalize() for keyword in GROCERY_KEYWORDS if keyword in description}
            # short descriptions are usually a single item
            if description and len(description) < 30 and len(description.split()) <= 3:
                found.add(description[0].upper() + description[1:])
            mentions.extend(sorted(found))
        return mentions
