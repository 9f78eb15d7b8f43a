from __future__ import annotations

from decimal import Decimal
from typing import Optional

from sqlalchemy import select

from homehub.domain.entities import ContactInfo, Contract, MaintenanceItem, VendorEntity
from homehub.domain.enums import VendorType

from .db import SessionLocal
from .models import MaintenanceItemModel, VendorContractModel, VendorModel


def _to_entity(model: VendorModel) -> VendorEntity:
    return VendorEntity(
        id=model.id,
        household_id=model.household_id,
        name=model.name,
        type=VendorType(model.type),
        contact_info=ContactInfo(
            phone=model.phone,
            email=model.email,
            website=model.website,
            address=model.address,
        ),
        contracts=tuple(
            Contract(
                start_date=contract.start_date,
                end_date=contract.end_date,
                monthly_cost=(
                    Decimal(str(contract.monthly_cost)) if contract.monthly_cost is not None else None
                ),
                notes=contract.notes,
            )
            for contract in model.contracts
        ),
        maintenance_schedule=tuple(
            MaintenanceItem(
                type=item.type,
                frequency=item.frequency,
                last_service=item.last_service,
                next_service=item.next_service,
                notes=item.notes,
            )
            for item in model.maintenance
        ),
        notes=model.notes,
        created_at=model.created_at,
        updated_at=model.updated_at,
        created_by=model.created_by,
    )


def _apply(model: VendorModel, data: dict) -> None:
    values = dict(data)
    contact = values.pop("contact_info", None)
    contracts = values.pop("contracts", None)
    schedule = values.pop("maintenance_schedule", None)

    for key, value in values.items():
        setattr(model, key, value)
    if contact is not None:
        model.phone = contact.phone
        model.email = contact.email
        model.website = contact.website
        model.address = contact.address
    if contracts is not None:
        model.contracts = [
            VendorContractModel(
                start_date=contract.start_date,
                end_date=contract.end_date,
                monthly_cost=contract.monthly_cost,
                notes=contract.notes,
            )
            for contract in contracts
        ]
    if schedule is not None:
        model.maintenance = [
            MaintenanceItemModel(
                type=item.type,
                frequency=item.frequency,
                last_service=item.last_service,
                next_service=item.next_service,
                notes=item.notes,
            )
            for item in schedule
        ]


class VendorRepository:
    def __init__(self, session_factory=SessionLocal) -> None:
        self._session_factory = session_factory

    def list_vendors(self, household_id: int) -> list[VendorEntity]:
        with self._session_factory() as session:
            stmt = (
                select(VendorModel)
                .where(VendorModel.household_id == household_id)
                .order_by(VendorModel.name.asc())
            )
            return [_to_entity(vendor) for vendor in session.scalars(stmt)]

    def get_vendor(self, vendor_id: int) -> Optional[VendorEntity]:
        with self._session_factory() as session:
            vendor = session.get(VendorModel, vendor_id)
            return _to_entity(vendor) if vendor else None

    def create_vendor(self, data: dict) -> VendorEntity:
        with self._session_factory() as session:
            vendor = VendorModel()
            _apply(vendor, data)
            session.add(vendor)
            session.commit()
            session.refresh(vendor)
            return _to_entity(vendor)

    def update_vendor(self, vendor_id: int, data: dict) -> Optional[VendorEntity]:
        with self._session_factory() as session:
            vendor = session.get(VendorModel, vendor_id)
            if not vendor:
                return None
            _apply(vendor, data)
            session.commit()
            session.refresh(vendor)
            return _to_entity(vendor)

    def delete_vendor(self, vendor_id: int) -> None:
        with self._session_factory() as session:
            vendor = session.get(VendorModel, vendor_id)
            if not vendor:
                return
            session.delete(vendor)
            session.commit()
