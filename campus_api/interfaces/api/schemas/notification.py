"""Pydantic models describing notification payloads."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from campus_api.domain.entities import NotificationContent

UserRoleLiteral = Literal["admin", "hod", "teacher", "student", "finance"]


class NotificationRead(BaseModel):
    """Representation of a notification delivered to its recipient."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    sender_id: int | None = None
    sender_name: str | None = None
    recipient_id: int
    type: str
    title: str
    message: str
    payload: Any = None
    read: bool
    created_at: datetime
    read_at: datetime | None = None


class NotificationSendBase(BaseModel):
    """Content shared by every send request."""

    model_config = ConfigDict(extra="forbid")

    type: str = Field(..., min_length=1, max_length=50, description="Tipo de notificación")
    title: str = Field(..., min_length=1, max_length=200)
    message: str = Field(..., min_length=1)
    payload: Any = Field(default=None, description="Datos adicionales devueltos sin cambios")

    def to_content(self) -> NotificationContent:
        return NotificationContent(
            type=self.type, title=self.title, message=self.message, payload=self.payload
        )


class SendToUserRequest(NotificationSendBase):
    user_id: int = Field(..., ge=1)


class SendToDepartmentRequest(NotificationSendBase):
    department_id: int = Field(..., ge=1)
    role: UserRoleLiteral | None = None


class SendToDepartmentTeachersRequest(NotificationSendBase):
    department_id: int = Field(..., ge=1)


class SendToCourseRequest(NotificationSendBase):
    course_id: int = Field(..., ge=1)


class SendToClassRequest(NotificationSendBase):
    class_id: int = Field(..., ge=1)


class NotificationDispatchResponse(BaseModel):
    """Summary returned after a notification was sent."""

    message: str
    recipient_count: int
    notification_ids: list[int]


class NotificationMarkReadResponse(BaseModel):
    message: str


class NotificationMarkAllReadResponse(BaseModel):
    message: str
    count: int


__all__ = [
    "NotificationDispatchResponse",
    "NotificationMarkAllReadResponse",
    "NotificationMarkReadResponse",
    "NotificationRead",
    "NotificationSendBase",
    "SendToClassRequest",
    "SendToCourseRequest",
    "SendToDepartmentRequest",
    "SendToDepartmentTeachersRequest",
    "SendToUserRequest",
]
