from .notification import (
    NotificationDispatchResponse,
    NotificationMarkAllReadResponse,
    NotificationMarkReadResponse,
    NotificationRead,
    NotificationSendBase,
    SendToClassRequest,
    SendToCourseRequest,
    SendToDepartmentRequest,
    SendToDepartmentTeachersRequest,
    SendToUserRequest,
)

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
