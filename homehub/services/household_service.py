from __future__ import annotations

import logging
import secrets
from datetime import datetime, timedelta

from homehub.config import SETTINGS
from homehub.domain.entities import HouseholdEntity
from homehub.domain.errors import HouseholdError, NotFoundError, ValidationError
from homehub.infra.household_repository import HouseholdRepository

logger = logging.getLogger(__name__)

INVITE_TTL = timedelta(days=7)


class HouseholdService:
    def __init__(self, repo: HouseholdRepository) -> None:
        self._repo = repo

    def create_household(
        self,
        user_id: str,
        name: str,
        timezone: str = "Europe/Rome",
        now: datetime | None = None,
    ) -> HouseholdEntity:
        name = (name or "").strip()
        if not name:
            raise ValidationError("Household name is required")
        now = now or datetime.utcnow()
        household = self._repo.create_household(
            {
                "name": name,
                "currency": SETTINGS.currency,
                "timezone": timezone,
                "invite_code": secrets.token_hex(4).upper(),
                "invite_expires_at": now + INVITE_TTL,
                "created_at": now,
            },
            members=[user_id],
        )
        logger.info("Household %s created by %s", household.id, user_id)
        return household

    def get_household(self, household_id: int) -> HouseholdEntity:
        household = self._repo.get_household(household_id)
        if household is None:
            raise NotFoundError("household", household_id)
        return household

    def for_user(self, user_id: str) -> HouseholdEntity | None:
        return self._repo.find_by_member(user_id)

    def add_member(self, household_id: int, user_id: str) -> HouseholdEntity:
        household = self._repo.add_member(household_id, user_id)
        if household is None:
            raise NotFoundError("household", household_id)
        return household

    def join_by_invite_code(
        self,
        user_id: str,
        invite_code: str,
        now: datetime | None = None,
    ) -> HouseholdEntity:
        code = (invite_code or "").strip().upper()
        household = self._repo.find_by_invite_code(code) if code else None
        if household is None:
            raise HouseholdError("Invalid invite code")
        now = now or datetime.utcnow()
        if household.invite_expires_at is not None and household.invite_expires_at < now:
            raise HouseholdError("Invite code has expired")
        return self.add_member(household.id, user_id)
