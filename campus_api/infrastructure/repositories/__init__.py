"""Repository implementations for infrastructure layer."""

from .directory_repository import DirectoryRepository
from .notification_repository import NotificationRepository
from .user_repository import UserRepository

__all__ = [
    "DirectoryRepository",
    "NotificationRepository",
    "UserRepository",
]
