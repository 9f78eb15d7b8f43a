from __future__ import annotations

from decimal import Decimal
from typing import Optional

from sqlalchemy import select

from homehub.domain.entities import ExpenseEntity, RecurringExpenseEntity
from homehub.domain.enums import ExpenseCategory, RecurringExpenseFrequency
from homehub.domain.filters import ExpenseFilters

from .db import SessionLocal
from .models import ExpenseModel, RecurringExpenseModel


def _to_expense(model: ExpenseModel) -> ExpenseEntity:
    return ExpenseEntity(
        id=model.id,
        household_id=model.household_id,
        amount=Decimal(str(model.amount)),
        currency=model.currency,
        category=ExpenseCategory(model.category),
        paid_by=model.paid_by,
        split_between={
            user_id: Decimal(str(amount)) for user_id, amount in (model.split_between or {}).items()
        },
        description=model.description,
        receipt_url=model.receipt_url,
        date=model.date,
        reconciled=bool(model.reconciled),
        created_at=model.created_at,
        created_by=model.created_by,
    )


def _to_recurring(model: RecurringExpenseModel) -> RecurringExpenseEntity:
    return RecurringExpenseEntity(
        id=model.id,
        household_id=model.household_id,
        title=model.title,
        amount=Decimal(str(model.amount)),
        category=ExpenseCategory(model.category),
        frequency=RecurringExpenseFrequency(model.frequency),
        day_of_month=model.day_of_month,
        day_of_week=model.day_of_week,
        month=model.month,
        next_due_date=model.next_due_date,
        last_paid_date=model.last_paid_date,
        paid_by=model.paid_by,
        auto_create=bool(model.auto_create),
        created_at=model.created_at,
        created_by=model.created_by,
    )


class ExpenseRepository:
    def __init__(self, session_factory=SessionLocal) -> None:
        self._session_factory = session_factory

    def list_expenses(self, filters: ExpenseFilters) -> list[ExpenseEntity]:
        with self._session_factory() as session:
            stmt = select(ExpenseModel).where(ExpenseModel.household_id == filters.household_id)
            if filters.start_date:
                stmt = stmt.where(ExpenseModel.date >= filters.start_date)
            if filters.end_date:
                stmt = stmt.where(ExpenseModel.date <= filters.end_date)
            if filters.category:
                stmt = stmt.where(ExpenseModel.category == filters.category)
            stmt = stmt.order_by(ExpenseModel.date.desc(), ExpenseModel.id.desc())
            if filters.limit:
                stmt = stmt.limit(filters.limit)
            return [_to_expense(expense) for expense in session.scalars(stmt)]

    def create_expense(self, data: dict) -> ExpenseEntity:
        prepared = dict(data)
        prepared["split_between"] = {
            user_id: str(amount) for user_id, amount in prepared.get("split_between", {}).items()
        }
        with self._session_factory() as session:
            expense = ExpenseModel(**prepared)
            session.add(expense)
            session.commit()
            session.refresh(expense)
            return _to_expense(expense)

    def delete_expense(self, expense_id: int) -> None:
        with self._session_factory() as session:
            expense = session.get(ExpenseModel, expense_id)
            if not expense:
                return
            session.delete(expense)
            session.commit()


class RecurringExpenseRepository:
    def __init__(self, session_factory=SessionLocal) -> None:
        self._session_factory = session_factory

    def list_recurring(self, household_id: int) -> list[RecurringExpenseEntity]:
        with self._session_factory() as session:
            stmt = (
                select(RecurringExpenseModel)
                .where(RecurringExpenseModel.household_id == household_id)
                .order_by(RecurringExpenseModel.next_due_date.asc())
            )
            return [_to_recurring(expense) for expense in session.scalars(stmt)]

    def get_recurring(self, expense_id: int) -> Optional[RecurringExpenseEntity]:
        with self._session_factory() as session:
            expense = session.get(RecurringExpenseModel, expense_id)
            return _to_recurring(expense) if expense else None

    def create_recurring(self, data: dict) -> RecurringExpenseEntity:
        with self._session_factory() as session:
            expense = RecurringExpenseModel(**data)
            session.add(expense)
            session.commit()
            session.refresh(expense)
            return _to_recurring(expense)

    def update_recurring(self, expense_id: int, data: dict) -> Optional[RecurringExpenseEntity]:
        with self._session_factory() as session:
            expense = session.get(RecurringExpenseModel, expense_id)
            if not expense:
                return None
            for key, value in data.items():
                setattr(expense, key, value)
            session.commit()
            session.refresh(expense)
            return _to_recurring(expense)

    def delete_recurring(self, expense_id: int) -> None:
        with self._session_factory() as session:
            expense = session.get(RecurringExpenseModel, expense_id)
            if not expense:
                return
            session.delete(expense)
            session.commit()
