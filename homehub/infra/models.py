from __future__ import annotations

from datetime import datetime

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from .db import Base


def utcnow() -> datetime:
    return datetime.utcnow()


class HouseholdModel(Base):
    __tablename__ = "households"

    id = Column(Integer, primary_key=True)
    name = Column(String(200), nullable=False)
    currency = Column(String(3), nullable=False, default="EUR")
    timezone = Column(String(64), nullable=False, default="Europe/Rome")
    invite_code = Column(String(32), nullable=True, unique=True)
    invite_expires_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)

    members = relationship(
        "HouseholdMemberModel",
        cascade="all, delete-orphan",
        order_by="HouseholdMemberModel.id",
        lazy="selectin",
    )


class HouseholdMemberModel(Base):
    __tablename__ = "household_members"
    __table_args__ = (UniqueConstraint("household_id", "user_id"),)

    id = Column(Integer, primary_key=True)
    household_id = Column(
        Integer, ForeignKey("households.id", ondelete="CASCADE"), nullable=False, index=True
    )
    user_id = Column(String(128), nullable=False, index=True)
    joined_at = Column(DateTime, nullable=False, default=utcnow)


class TaskModel(Base):
    __tablename__ = "tasks"

    id = Column(Integer, primary_key=True)
    household_id = Column(Integer, nullable=False, index=True)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    room = Column(String(20), nullable=False, default="other")
    frequency = Column(String(20), nullable=False, default="one-time")
    estimated_minutes = Column(Integer, nullable=False, default=0)
    assigned_to = Column(String(128), nullable=True)
    required_products = Column(JSON, nullable=False, default=list)
    completed = Column(Boolean, nullable=False, default=False, index=True)
    completed_by = Column(String(128), nullable=True)
    completed_at = Column(DateTime, nullable=True)
    due_date = Column(Date, nullable=True)
    start_date = Column(Date, nullable=True)
    end_date = Column(Date, nullable=True)
    scheduled_time = Column(String(5), nullable=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    created_by = Column(String(128), nullable=False)


class ExpenseModel(Base):
    __tablename__ = "expenses"

    id = Column(Integer, primary_key=True)
    household_id = Column(Integer, nullable=False, index=True)
    amount = Column(Numeric(12, 2), nullable=False)
    currency = Column(String(3), nullable=False, default="EUR")
    category = Column(String(20), nullable=False, index=True)
    paid_by = Column(String(128), nullable=False)
    # {user_id: "12.34"}; amounts kept as strings so JSON round-trips stay exact
    split_between = Column(JSON, nullable=False, default=dict)
    description = Column(Text, nullable=False, default="")
    receipt_url = Column(Text, nullable=True)
    date = Column(Date, nullable=False, index=True)
    reconciled = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    created_by = Column(String(128), nullable=False)


class RecurringExpenseModel(Base):
    __tablename__ = "recurring_expenses"

    id = Column(Integer, primary_key=True)
    household_id = Column(Integer, nullable=False, index=True)
    title = Column(String(200), nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    category = Column(String(20), nullable=False)
    frequency = Column(String(20), nullable=False)
    day_of_month = Column(Integer, nullable=True)
    day_of_week = Column(Integer, nullable=True)
    month = Column(Integer, nullable=True)
    next_due_date = Column(Date, nullable=False)
    last_paid_date = Column(Date, nullable=True)
    paid_by = Column(String(128), nullable=True)
    auto_create = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    created_by = Column(String(128), nullable=False)


class InventoryItemModel(Base):
    __tablename__ = "inventory_items"

    id = Column(Integer, primary_key=True)
    household_id = Column(Integer, nullable=False, index=True)
    name = Column(String(200), nullable=False)
    category = Column(String(20), nullable=False)
    status = Column(String(10), nullable=False, default="ok", index=True)
    quantity = Column(Integer, nullable=True)
    unit = Column(String(32), nullable=True)
    min_quantity = Column(Integer, nullable=True)
    last_purchased = Column(DateTime, nullable=True)
    last_used = Column(DateTime, nullable=True)
    linked_to_tasks = Column(JSON, nullable=False, default=list)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)
    created_by = Column(String(128), nullable=False)


class ShoppingListModel(Base):
    __tablename__ = "shopping_lists"

    id = Column(Integer, primary_key=True)
    household_id = Column(Integer, nullable=False, unique=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    items = relationship(
        "ShoppingItemModel",
        cascade="all, delete-orphan",
        order_by="ShoppingItemModel.id",
        lazy="selectin",
    )


class ShoppingItemModel(Base):
    __tablename__ = "shopping_items"

    id = Column(Integer, primary_key=True)
    list_id = Column(
        Integer, ForeignKey("shopping_lists.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name = Column(String(200), nullable=False)
    quantity = Column(Integer, nullable=True)
    added_by = Column(String(128), nullable=False)
    added_at = Column(DateTime, nullable=False, default=utcnow)
    checked = Column(Boolean, nullable=False, default=False)
    checked_by = Column(String(128), nullable=True)
    checked_at = Column(DateTime, nullable=True)


class PlantModel(Base):
    __tablename__ = "plants"

    id = Column(Integer, primary_key=True)
    household_id = Column(Integer, nullable=False, index=True)
    name = Column(String(200), nullable=False)
    location = Column(String(200), nullable=False, default="")
    watering_frequency = Column(Integer, nullable=False)
    last_watered = Column(DateTime, nullable=True)
    next_watering = Column(DateTime, nullable=True)
    light_notes = Column(Text, nullable=True)
    fertilizer_notes = Column(Text, nullable=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)
    created_by = Column(String(128), nullable=False)


class VendorModel(Base):
    __tablename__ = "vendors"

    id = Column(Integer, primary_key=True)
    household_id = Column(Integer, nullable=False, index=True)
    name = Column(String(200), nullable=False)
    type = Column(String(20), nullable=False, default="other")
    phone = Column(String(64), nullable=True)
    email = Column(String(200), nullable=True)
    website = Column(String(200), nullable=True)
    address = Column(Text, nullable=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)
    created_by = Column(String(128), nullable=False)

    contracts = relationship(
        "VendorContractModel",
        cascade="all, delete-orphan",
        order_by="VendorContractModel.id",
        lazy="selectin",
    )
    maintenance = relationship(
        "MaintenanceItemModel",
        cascade="all, delete-orphan",
        order_by="MaintenanceItemModel.id",
        lazy="selectin",
    )


class VendorContractModel(Base):
    __tablename__ = "vendor_contracts"

    id = Column(Integer, primary_key=True)
    vendor_id = Column(Integer, ForeignKey("vendors.id", ondelete="CASCADE"), nullable=False, index=True)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=True)
    monthly_cost = Column(Numeric(12, 2), nullable=True)
    notes = Column(Text, nullable=True)


class MaintenanceItemModel(Base):
    __tablename__ = "maintenance_items"

    id = Column(Integer, primary_key=True)
    vendor_id = Column(Integer, ForeignKey("vendors.id", ondelete="CASCADE"), nullable=False, index=True)
    type = Column(String(200), nullable=False)
    frequency = Column(Integer, nullable=False)
    last_service = Column(Date, nullable=True)
    next_service = Column(Date, nullable=True)
    notes = Column(Text, nullable=True)


class BadgeStatusModel(Base):
    __tablename__ = "badge_status"
    __table_args__ = (UniqueConstraint("user_id", "badge_id"),)

    id = Column(Integer, primary_key=True)
    user_id = Column(String(128), nullable=False, index=True)
    badge_id = Column(String(64), nullable=False)
    shown_at = Column(DateTime, nullable=False, default=utcnow)
