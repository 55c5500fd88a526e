"""Persistence helpers for notification entities."""

from __future__ import annotations

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from campus_api.domain.entities import Notification
from campus_api.domain.exceptions import StoreError
from campus_api.infrastructure.models import NotificationModel, UserModel
from campus_api.utils import ensure_app_timezone, now_in_app_naive_datetime


class NotificationRepository:
    """Provide create, list and read-state operations for notifications.

    Every mutation is scoped by the recipient id, so callers acting for
    different recipients never contend on the same rows.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    def create(self, notification: Notification) -> Notification:
        """Persist ``notification`` as unread and return the stored entity."""

        model = NotificationModel(
            sender_id=notification.sender_id,
            user_id=notification.recipient_id,
            type=notification.type,
            title=notification.title,
            message=notification.message,
            payload=notification.payload,
            is_read=False,
            read_at=None,
            created_at=now_in_app_naive_datetime(),
        )
        try:
            self.session.add(model)
            self.session.flush()
            # Built before commit: once the row is committed nothing may fail.
            stored = self._to_entity(model)
            self.session.commit()
        except SQLAlchemyError as exc:
            self.session.rollback()
            msg = f"Could not store notification for recipient {notification.recipient_id}"
            raise StoreError(msg) from exc
        return stored

    def list_for_recipient(
        self,
        recipient_id: int,
        *,
        limit: int = 20,
        offset: int = 0,
    ) -> list[Notification]:
        """Return the recipient's notifications, newest first.

        ``id`` breaks ties between rows created at the same instant so pages
        stay stable while new notifications are being inserted.
        """

        query = (
            self.session.query(
                NotificationModel, UserModel.first_name, UserModel.last_name
            )
            .outerjoin(UserModel, NotificationModel.sender_id == UserModel.id)
            .filter(NotificationModel.user_id == recipient_id)
            .order_by(NotificationModel.created_at.desc(), NotificationModel.id.desc())
            .offset(offset)
            .limit(limit)
        )
        try:
            rows = query.all()
        except SQLAlchemyError as exc:
            raise StoreError(f"Could not list notifications for user {recipient_id}") from exc
        return [
            self._to_entity(model, sender_name=_display_name(first_name, last_name))
            for model, first_name, last_name in rows
        ]

    def mark_as_read(self, notification_id: int, *, recipient_id: int) -> bool:
        """Flip one unread notification owned by ``recipient_id`` to read.

        The ownership and unread checks are part of the same ``UPDATE``; the
        result is ``True`` only when this call transitioned the row.
        """

        try:
            updated = (
                self.session.query(NotificationModel)
                .filter(
                    NotificationModel.id == notification_id,
                    NotificationModel.user_id == recipient_id,
                    NotificationModel.is_read.is_(False),
                )
                .update(
                    {
                        NotificationModel.is_read: True,
                        NotificationModel.read_at: now_in_app_naive_datetime(),
                    },
                    synchronize_session=False,
                )
            )
            self.session.commit()
        except SQLAlchemyError as exc:
            self.session.rollback()
            raise StoreError(f"Could not mark notification {notification_id} as read") from exc
        return updated > 0

    def mark_all_as_read(self, recipient_id: int) -> int:
        """Mark every unread notification of ``recipient_id`` and return the count."""

        try:
            updated = (
                self.session.query(NotificationModel)
                .filter(
                    NotificationModel.user_id == recipient_id,
                    NotificationModel.is_read.is_(False),
                )
                .update(
                    {
                        NotificationModel.is_read: True,
                        NotificationModel.read_at: now_in_app_naive_datetime(),
                    },
                    synchronize_session=False,
                )
            )
            self.session.commit()
        except SQLAlchemyError as exc:
            self.session.rollback()
            raise StoreError(f"Could not mark notifications of user {recipient_id} as read") from exc
        return updated

    @staticmethod
    def _to_entity(
        model: NotificationModel, *, sender_name: str | None = None
    ) -> Notification:
        return Notification(
            id=model.id,
            sender_id=model.sender_id,
            recipient_id=model.user_id,
            type=model.type,
            title=model.title,
            message=model.message,
            payload=model.payload,
            read=bool(model.is_read),
            created_at=ensure_app_timezone(model.created_at),
            read_at=ensure_app_timezone(model.read_at),
            sender_name=sender_name,
        )


def _display_name(first_name: str | None, last_name: str | None) -> str | None:
    parts = [part for part in (first_name, last_name) if part]
    if not parts:
        return None
    return " ".join(parts)


__all__ = ["NotificationRepository"]
