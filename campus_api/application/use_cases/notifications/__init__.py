"""Use cases for targeting, sending and reading notifications."""

from .audience import AudienceResolver, DirectoryProvider, resolve_audience
from .dispatch import dispatch_notification, validate_content
from .read_state import (
    list_notifications,
    mark_all_notifications_read,
    mark_notification_read,
)

__all__ = [
    "AudienceResolver",
    "DirectoryProvider",
    "resolve_audience",
    "dispatch_notification",
    "validate_content",
    "list_notifications",
    "mark_all_notifications_read",
    "mark_notification_read",
]
