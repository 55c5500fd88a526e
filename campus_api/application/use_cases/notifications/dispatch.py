"""Send one notification to every member of an audience."""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Iterable
from dataclasses import replace

import anyio
from sqlalchemy.orm import Session

from campus_api.config import get_settings
from campus_api.domain.entities import (
    AudienceSpec,
    DispatchResult,
    Notification,
    NotificationContent,
    describe_audience,
)
from campus_api.domain.exceptions import (
    ContentValidationError,
    NoRecipientsError,
    PartialDispatchError,
    StoreError,
)
from campus_api.infrastructure.repositories import DirectoryRepository, NotificationRepository

from .audience import AudienceResolver, DirectoryProvider

logger = logging.getLogger(__name__)

MAX_TYPE_LENGTH = 50
MAX_TITLE_LENGTH = 200


def validate_content(content: NotificationContent) -> NotificationContent:
    """Return ``content`` normalized, or raise :class:`ContentValidationError`."""

    kind = content.type.strip() if isinstance(content.type, str) else ""
    title = content.title.strip() if isinstance(content.title, str) else ""
    message = content.message if isinstance(content.message, str) else ""

    if not kind:
        raise ContentValidationError("Notification type is required")
    if len(kind) > MAX_TYPE_LENGTH:
        raise ContentValidationError(
            f"Notification type cannot exceed {MAX_TYPE_LENGTH} characters"
        )
    if not title:
        raise ContentValidationError("Notification title is required")
    if len(title) > MAX_TITLE_LENGTH:
        raise ContentValidationError(
            f"Notification title cannot exceed {MAX_TITLE_LENGTH} characters"
        )
    if not message.strip():
        raise ContentValidationError("Notification message is required")

    if content.payload is not None:
        try:
            json.dumps(content.payload)
        except (TypeError, ValueError) as exc:
            raise ContentValidationError("Notification payload must be JSON serializable") from exc

    return NotificationContent(type=kind, title=title, message=message, payload=content.payload)


async def dispatch_notification(
    session_factory: Callable[[], Session],
    *,
    sender_id: int | None,
    audience: AudienceSpec,
    content: NotificationContent,
    concurrency: int | None = None,
    directory_factory: Callable[[Session], DirectoryProvider] = DirectoryRepository,
) -> DispatchResult:
    """Resolve ``audience`` and create one notification per recipient.

    Creates run on a worker pool of ``concurrency`` workers (the
    ``NOTIFICATION_DISPATCH_CONCURRENCY`` setting by default), each with its
    own session. Every create is independent: when some of them fail the
    others are kept and :class:`PartialDispatchError` reports both sides so the
    caller can retry only the failed recipients.
    """

    content = validate_content(content)
    pool_size = concurrency if concurrency is not None else get_settings().notification_dispatch_concurrency
    if pool_size < 1:
        raise ValueError("Dispatch concurrency must be a positive integer")

    recipients = await anyio.to_thread.run_sync(
        _resolve_recipients, session_factory, directory_factory, audience
    )
    label = describe_audience(audience)
    if not recipients:
        logger.warning("Notification '%s' has no recipients for %s", content.type, label)
        raise NoRecipientsError(audience, f"No recipients found for {label}")

    template = Notification(
        id=None,
        sender_id=sender_id,
        recipient_id=0,
        type=content.type,
        title=content.title,
        message=content.message,
        payload=content.payload,
    )
    succeeded, failed = await _fan_out(
        session_factory, template, sorted(recipients), pool_size=pool_size
    )

    if failed:
        for recipient_id, error in failed.items():
            logger.warning(
                "Notification '%s' could not be stored for user %s: %s",
                content.type,
                recipient_id,
                error,
            )
        raise PartialDispatchError(succeeded=succeeded, failed=failed)

    recipient_ids = sorted(succeeded)
    logger.info(
        "Notification '%s' from sender %s sent to %d recipients (%s)",
        content.type,
        sender_id,
        len(recipient_ids),
        label,
    )
    return DispatchResult(
        recipient_count=len(recipient_ids),
        notification_ids=[succeeded[recipient_id] for recipient_id in recipient_ids],
        recipient_ids=recipient_ids,
    )


def _resolve_recipients(
    session_factory: Callable[[], Session],
    directory_factory: Callable[[Session], DirectoryProvider],
    audience: AudienceSpec,
) -> set[int]:
    session = session_factory()
    try:
        return AudienceResolver(directory_factory(session)).resolve(audience)
    finally:
        session.close()


async def _fan_out(
    session_factory: Callable[[], Session],
    template: Notification,
    recipients: Iterable[int],
    *,
    pool_size: int,
) -> tuple[dict[int, int], dict[int, StoreError]]:
    pending = list(recipients)
    succeeded: dict[int, int] = {}
    failed: dict[int, StoreError] = {}
    limiter = anyio.CapacityLimiter(pool_size)

    send_stream, receive_stream = anyio.create_memory_object_stream(
        max_buffer_size=len(pending)
    )
    for recipient_id in pending:
        send_stream.send_nowait(recipient_id)
    send_stream.close()

    async def worker() -> None:
        async for recipient_id in receive_stream:
            try:
                created = await anyio.to_thread.run_sync(
                    _create_notification,
                    session_factory,
                    template,
                    recipient_id,
                    limiter=limiter,
                )
            except StoreError as exc:
                failed[recipient_id] = exc
            else:
                succeeded[recipient_id] = created.id

    async with receive_stream:
        async with anyio.create_task_group() as task_group:
            for _ in range(min(pool_size, len(pending))):
                task_group.start_soon(worker)

    return succeeded, failed


def _create_notification(
    session_factory: Callable[[], Session],
    template: Notification,
    recipient_id: int,
) -> Notification:
    session = session_factory()
    try:
        return NotificationRepository(session).create(
            replace(template, recipient_id=recipient_id)
        )
    finally:
        session.close()


__all__ = ["dispatch_notification", "validate_content"]
