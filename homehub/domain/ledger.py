"""Arithmetic over expense records: equal splits, totals and balances."""
from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from decimal import ROUND_DOWN, Decimal

from .entities import ExpenseEntity

CENT = Decimal("0.01")


@dataclass(frozen=True)
class CategoryShare:
    category: str
    amount: Decimal
    percentage: float


def to_amount(value: Decimal | int | float | str) -> Decimal:
    return Decimal(str(value)).quantize(CENT)


def split_equally(amount: Decimal | int | float | str, member_ids: Sequence[str]) -> dict[str, Decimal]:
    if not member_ids:
        return {}
    total_amount = to_amount(amount)
    share = (total_amount / len(member_ids)).quantize(CENT, rounding=ROUND_DOWN)
    remainder = int((total_amount - share * len(member_ids)) / CENT)
    split: dict[str, Decimal] = {}
    for index, user_id in enumerate(member_ids):
        split[user_id] = share + (CENT if index < remainder else Decimal("0"))
    return split


def total(expenses: Iterable[ExpenseEntity]) -> Decimal:
    return sum((expense.amount for expense in expenses), Decimal("0"))


def by_category(expenses: Iterable[ExpenseEntity]) -> dict[str, Decimal]:
    totals: dict[str, Decimal] = {}
    for expense in expenses:
        key = str(expense.category)
        totals[key] = totals.get(key, Decimal("0")) + expense.amount
    return totals


def category_breakdown(expenses: Iterable[ExpenseEntity]) -> list[CategoryShare]:
    totals = by_category(expenses)
    grand_total = sum(totals.values(), Decimal("0"))
    shares = [
        CategoryShare(
            category=category,
            amount=amount,
            percentage=float(amount / grand_total * 100) if grand_total > 0 else 0.0,
        )
        for category, amount in totals.items()
    ]
    shares.sort(key=lambda share: share.amount, reverse=True)
    return shares


def user_balances(expenses: Iterable[ExpenseEntity]) -> dict[str, Decimal]:
    """Positive balance: the user is owed money. Negative: the user owes."""
    balances: dict[str, Decimal] = {}
    for expense in expenses:
        balances[expense.paid_by] = balances.get(expense.paid_by, Decimal("0")) + expense.amount
        for user_id, owed in expense.split_between.items():
            balances[user_id] = balances.get(user_id, Decimal("0")) - owed
    return balances
