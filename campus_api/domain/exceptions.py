"""Errors raised by the notification subsystem."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover - typing only
    from .entities import AudienceSpec


class NotificationError(RuntimeError):
    """Base class for notification dispatch and storage failures."""


class ContentValidationError(NotificationError, ValueError):
    """Notification content is missing or malformed.

    Raised before the audience is resolved, so nothing has been written.
    """


class NoRecipientsError(NotificationError):
    """The audience resolved to an empty set of recipients."""

    def __init__(self, audience: "AudienceSpec", message: str | None = None) -> None:
        self.audience = audience
        super().__init__(message or "No recipients found for the requested audience")


class DirectoryError(NotificationError):
    """The directory could not answer a membership query.

    Resolution has no side effects, so the whole dispatch can be retried.
    """


class StoreError(NotificationError):
    """A notification could not be written or updated in the store."""


class PartialDispatchError(NotificationError):
    """Some per-recipient creates failed after the audience was resolved.

    ``succeeded`` maps recipient ids to the notification ids that were created
    and are kept; ``failed`` maps recipient ids to the error that prevented
    their notification from being stored.
    """

    def __init__(
        self,
        *,
        succeeded: Mapping[int, int],
        failed: Mapping[int, StoreError],
    ) -> None:
        self.succeeded = dict(succeeded)
        self.failed = dict(failed)
        super().__init__(
            f"Notification dispatch partially failed: {len(self.succeeded)} created, "
            f"{len(self.failed)} failed"
        )

    @property
    def notification_ids(self) -> list[int]:
        return [self.succeeded[recipient_id] for recipient_id in sorted(self.succeeded)]

    @property
    def failed_recipient_ids(self) -> list[int]:
        return sorted(self.failed)


__all__ = [
    "ContentValidationError",
    "DirectoryError",
    "NoRecipientsError",
    "NotificationError",
    "PartialDispatchError",
    "StoreError",
]
