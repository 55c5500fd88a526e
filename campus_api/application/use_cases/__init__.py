"""Aggregate application use cases."""

from .notifications import (
    dispatch_notification,
    list_notifications,
    mark_all_notifications_read,
    mark_notification_read,
)

__all__ = [
    "dispatch_notification",
    "list_notifications",
    "mark_all_notifications_read",
    "mark_notification_read",
]
