"""Persistence layer for user data."""

from __future__ import annotations

from sqlalchemy.orm import Session

from campus_api.domain.entities import User
from campus_api.infrastructure.models import UserModel


class UserRepository:
    """Look up users for request authentication."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, user_id: int) -> User | None:
        model = self.session.get(UserModel, user_id)
        return self._to_entity(model) if model else None

    @staticmethod
    def _to_entity(model: UserModel) -> User:
        return User(
            id=model.id,
            first_name=model.first_name,
            last_name=model.last_name,
            email=model.email,
            role=model.role,
            is_active=model.is_active,
            created_at=model.created_at,
        )


__all__ = ["UserRepository"]
