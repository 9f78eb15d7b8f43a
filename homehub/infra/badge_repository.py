from __future__ import annotations

from sqlalchemy import select

from .db import SessionLocal
from .models import BadgeStatusModel


class BadgeStatusRepository:
    def __init__(self, session_factory=SessionLocal) -> None:
        self._session_factory = session_factory

    def shown_badges(self, user_id: str) -> set[str]:
        with self._session_factory() as session:
            stmt = select(BadgeStatusModel.badge_id).where(BadgeStatusModel.user_id == user_id)
            return set(session.scalars(stmt))

    def mark_shown(self, user_id: str, badge_id: str) -> None:
        with self._session_factory() as session:
            exists = session.scalar(
                select(BadgeStatusModel.id).where(
                    BadgeStatusModel.user_id == user_id,
                    BadgeStatusModel.badge_id == badge_id,
                )
            )
            if exists:
                return
            session.add(BadgeStatusModel(user_id=user_id, badge_id=badge_id))
            session.commit()
