from __future__ import annotations

from datetime import datetime, timedelta

from homehub.domain.entities import PlantEntity
from homehub.domain.errors import ValidationError
from homehub.infra.plant_repository import PlantRepository


class PlantService:
    def __init__(self, repo: PlantRepository) -> None:
        self._repo = repo

    def create_plant(self, user_id: str, data: dict, now: datetime | None = None) -> PlantEntity:
        normalized = dict(data)
        if not (normalized.get("name") or "").strip():
            raise ValidationError("Plant name is required")
        frequency = int(normalized.get("watering_frequency") or 0)
        if frequency <= 0:
            raise ValidationError("watering_frequency must be a positive number of days")
        now = now or datetime.utcnow()
        normalized["watering_frequency"] = frequency
        normalized["next_watering"] = now + timedelta(days=frequency)
        normalized["created_by"] = user_id
        return self._repo.create_plant(normalized)

    def list_plants(self, household_id: int) -> list[PlantEntity]:
        return self._repo.list_plants(household_id)

    def needing_water(self, household_id: int, now: datetime | None = None) -> list[PlantEntity]:
        now = now or datetime.utcnow()
        return [
            plant
            for plant in self._repo.list_plants(household_id)
            if plant.next_watering is not None and plant.next_watering <= now
        ]

    def water(self, plant_id: int, now: datetime | None = None) -> PlantEntity | None:
        plant = self._repo.get_plant(plant_id)
        if plant is None:
            return None
        now = now or datetime.utcnow()
        return self._repo.update_plant(plant_id, {
            "last_watered": now,
            "next_watering": now + timedelta(days=plant.watering_frequency),
        })

    def update_plant(self, plant_id: int, data: dict) -> PlantEntity | None:
        return self._repo.update_plant(plant_id, data)

    def delete_plant(self, plant_id: int) -> None:
        self._repo.delete_plant(plant_id)
