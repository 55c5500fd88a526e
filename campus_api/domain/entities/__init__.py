"""Domain entities exposed by the application."""

from .audience import (
    AllTeachersAudience,
    AllUsersExceptAudience,
    AudienceSpec,
    ClassRosterAudience,
    CourseRosterAudience,
    DepartmentAudience,
    SingleUserAudience,
    TeacherRosterAudience,
    describe_audience,
)
from .notification import DispatchResult, Notification, NotificationContent
from .user import (
    ROLE_ADMIN,
    ROLE_FINANCE,
    ROLE_HOD,
    ROLE_STUDENT,
    ROLE_TEACHER,
    USER_ROLES,
    User,
    UserSummary,
)

__all__ = [
    "AllTeachersAudience",
    "AllUsersExceptAudience",
    "AudienceSpec",
    "ClassRosterAudience",
    "CourseRosterAudience",
    "DepartmentAudience",
    "SingleUserAudience",
    "TeacherRosterAudience",
    "describe_audience",
    "DispatchResult",
    "Notification",
    "NotificationContent",
    "ROLE_ADMIN",
    "ROLE_FINANCE",
    "ROLE_HOD",
    "ROLE_STUDENT",
    "ROLE_TEACHER",
    "USER_ROLES",
    "User",
    "UserSummary",
]
