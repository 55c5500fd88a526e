"""Domain entities representing user notifications and dispatch results."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass
class Notification:
    """Information message delivered to a single recipient.

    Content fields are fixed once the notification is stored; only ``read``
    (and ``read_at``) change afterwards. ``sender_name`` is filled in when the
    notification is listed for its recipient.
    """

    id: int | None
    sender_id: int | None
    recipient_id: int
    type: str
    title: str
    message: str
    payload: Any = None
    read: bool = False
    created_at: datetime | None = None
    read_at: datetime | None = None
    sender_name: str | None = None


@dataclass(frozen=True)
class NotificationContent:
    """Caller supplied content shared by every notification of a dispatch."""

    type: str
    title: str
    message: str
    payload: Any = None


@dataclass(frozen=True)
class DispatchResult:
    """Summary returned after a successful fan-out.

    ``notification_ids`` and ``recipient_ids`` are index-aligned.
    """

    recipient_count: int
    notification_ids: list[int] = field(default_factory=list)
    recipient_ids: list[int] = field(default_factory=list)


__all__ = ["DispatchResult", "Notification", "NotificationContent"]
