from __future__ import annotations

from typing import Optional

from sqlalchemy import select

from homehub.domain.entities import PlantEntity

from .db import SessionLocal
from .models import PlantModel


def _to_entity(model: PlantModel) -> PlantEntity:
    return PlantEntity(
        id=model.id,
        household_id=model.household_id,
        name=model.name,
        location=model.location,
        watering_frequency=model.watering_frequency,
        last_watered=model.last_watered,
        next_watering=model.next_watering,
        light_notes=model.light_notes,
        fertilizer_notes=model.fertilizer_notes,
        notes=model.notes,
        created_at=model.created_at,
        updated_at=model.updated_at,
        created_by=model.created_by,
    )


class PlantRepository:
    def __init__(self, session_factory=SessionLocal) -> None:
        self._session_factory = session_factory

    def list_plants(self, household_id: int) -> list[PlantEntity]:
        with self._session_factory() as session:
            stmt = (
                select(PlantModel)
                .where(PlantModel.household_id == household_id)
                .order_by(PlantModel.name.asc())
            )
            return [_to_entity(plant) for plant in session.scalars(stmt)]

    def get_plant(self, plant_id: int) -> Optional[PlantEntity]:
        with self._session_factory() as session:
            plant = session.get(PlantModel, plant_id)
            return _to_entity(plant) if plant else None

    def create_plant(self, data: dict) -> PlantEntity:
        with self._session_factory() as session:
            plant = PlantModel(**data)
            session.add(plant)
            session.commit()
            session.refresh(plant)
            return _to_entity(plant)

    def update_plant(self, plant_id: int, data: dict) -> Optional[PlantEntity]:
        with self._session_factory() as session:
            plant = session.get(PlantModel, plant_id)
            if not plant:
                return None
            for key, value in data.items():
                setattr(plant, key, value)
            session.commit()
            session.refresh(plant)
            return _to_entity(plant)

    def delete_plant(self, plant_id: int) -> None:
        with self._session_factory() as session:
            plant = session.get(PlantModel, plant_id)
            if not plant:
                return
            session.delete(plant)
            session.commit()
