from __future__ import annotations

from dataclasses import replace
from datetime import date, timedelta

from homehub.domain.entities import MaintenanceItem, VendorEntity
from homehub.domain.enums import VendorType
from homehub.domain.errors import NotFoundError, ValidationError
from homehub.infra.vendor_repository import VendorRepository


class VendorService:
    def __init__(self, repo: VendorRepository) -> None:
        self._repo = repo

    def create_vendor(self, user_id: str, data: dict) -> VendorEntity:
        normalized = dict(data)
        if not (normalized.get("name") or "").strip():
            raise ValidationError("Vendor name is required")
        try:
            normalized["type"] = VendorType(normalized.get("type") or VendorType.OTHER).value
        except ValueError as exc:
            raise ValidationError(str(exc)) from exc
        normalized["created_by"] = user_id
        return self._repo.create_vendor(normalized)

    def list_vendors(self, household_id: int) -> list[VendorEntity]:
        return self._repo.list_vendors(household_id)

    def update_vendor(self, vendor_id: int, data: dict) -> VendorEntity | None:
        return self._repo.update_vendor(vendor_id, data)

    def delete_vendor(self, vendor_id: int) -> None:
        self._repo.delete_vendor(vendor_id)

    def upcoming_maintenance(
        self,
        household_id: int,
        days_ahead: int = 30,
        today: date | None = None,
    ) -> list[tuple[VendorEntity, MaintenanceItem]]:
        today = today or date.today()
        horizon = today + timedelta(days=days_ahead)
        upcoming = [
            (vendor, item)
            for vendor in self._repo.list_vendors(household_id)
            for item in vendor.maintenance_schedule
            if item.next_service is not None and today <= item.next_service <= horizon
        ]
        upcoming.sort(key=lambda pair: pair[1].next_service)
        return upcoming

    def mark_maintenance_done(
        self,
        vendor_id: int,
        maintenance_type: str,
        today: date | None = None,
    ) -> VendorEntity:
        vendor = self._repo.get_vendor(vendor_id)
        if vendor is None:
            raise NotFoundError("vendor", vendor_id)
        if not any(item.type == maintenance_type for item in vendor.maintenance_schedule):
            raise NotFoundError("maintenance", maintenance_type)
        today = today or date.today()
        schedule = [
            replace(item, last_service=today, next_service=today + timedelta(days=item.frequency))
            if item.type == maintenance_type
            else item
            for item in vendor.maintenance_schedule
        ]
        updated = self._repo.update_vendor(vendor_id, {"maintenance_schedule": schedule})
        if updated is None:
            raise NotFoundError("vendor", vendor_id)
        return updated
