"""Use cases for reading notifications and tracking their read state."""

from __future__ import annotations

from sqlalchemy.orm import Session

from campus_api.config import get_settings
from campus_api.domain.entities import Notification
from campus_api.infrastructure.repositories import NotificationRepository


def list_notifications(
    session: Session,
    recipient_id: int,
    *,
    limit: int | None = None,
    offset: int = 0,
) -> list[Notification]:
    """Return a page of the recipient's notifications, newest first.

    ``limit`` defaults to ``NOTIFICATION_PAGE_SIZE`` and is clamped to
    ``NOTIFICATION_MAX_PAGE_SIZE``; a negative ``offset`` is treated as zero.
    """

    settings = get_settings()
    page_size = settings.notification_page_size if limit is None else limit
    page_size = max(1, min(page_size, settings.notification_max_page_size))
    return NotificationRepository(session).list_for_recipient(
        recipient_id, limit=page_size, offset=max(0, offset)
    )


def mark_notification_read(
    session: Session, notification_id: int, recipient_id: int
) -> bool:
    """Mark one notification as read on behalf of its recipient.

    ``False`` covers "not found", "owned by someone else" and "already read".
    """

    return NotificationRepository(session).mark_as_read(
        notification_id, recipient_id=recipient_id
    )


def mark_all_notifications_read(session: Session, recipient_id: int) -> int:
    """Mark every unread notification of the recipient and return how many changed."""

    return NotificationRepository(session).mark_all_as_read(recipient_id)


__all__ = [
    "list_notifications",
    "mark_all_notifications_read",
    "mark_notification_read",
]
