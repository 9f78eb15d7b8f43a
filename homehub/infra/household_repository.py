from __future__ import annotations

from typing import Optional

from sqlalchemy import select

from homehub.domain.entities import HouseholdEntity

from .db import SessionLocal
from .models import HouseholdMemberModel, HouseholdModel


def _to_entity(model: HouseholdModel) -> HouseholdEntity:
    return HouseholdEntity(
        id=model.id,
        name=model.name,
        members=tuple(member.user_id for member in model.members),
        currency=model.currency,
        timezone=model.timezone,
        invite_code=model.invite_code,
        invite_expires_at=model.invite_expires_at,
        created_at=model.created_at,
    )


class HouseholdRepository:
    def __init__(self, session_factory=SessionLocal) -> None:
        self._session_factory = session_factory

    def create_household(self, data: dict, members: list[str]) -> HouseholdEntity:
        with self._session_factory() as session:
            household = HouseholdModel(**data)
            household.members = [HouseholdMemberModel(user_id=user_id) for user_id in members]
            session.add(household)
            session.commit()
            session.refresh(household)
            return _to_entity(household)

    def get_household(self, household_id: int) -> Optional[HouseholdEntity]:
        with self._session_factory() as session:
            household = session.get(HouseholdModel, household_id)
            return _to_entity(household) if household else None

    def find_by_member(self, user_id: str) -> Optional[HouseholdEntity]:
        with self._session_factory() as session:
            stmt = (
                select(HouseholdModel)
                .join(HouseholdMemberModel)
                .where(HouseholdMemberModel.user_id == user_id)
                .order_by(HouseholdModel.id.asc())
                .limit(1)
            )
            household = session.scalars(stmt).first()
            return _to_entity(household) if household else None

    def find_by_invite_code(self, invite_code: str) -> Optional[HouseholdEntity]:
        with self._session_factory() as session:
            stmt = select(HouseholdModel).where(HouseholdModel.invite_code == invite_code)
            household = session.scalars(stmt).first()
            return _to_entity(household) if household else None

    def add_member(self, household_id: int, user_id: str) -> Optional[HouseholdEntity]:
        with self._session_factory() as session:
            household = session.get(HouseholdModel, household_id)
            if not household:
                return None
            if user_id not in {member.user_id for member in household.members}:
                household.members.append(HouseholdMemberModel(user_id=user_id))
                session.commit()
                session.refresh(household)
            return _to_entity(household)
