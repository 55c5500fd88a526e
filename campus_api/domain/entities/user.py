"""Domain entities describing users and directory lookups."""

from dataclasses import dataclass
from datetime import datetime

ROLE_ADMIN = "admin"
ROLE_HOD = "hod"
ROLE_TEACHER = "teacher"
ROLE_STUDENT = "student"
ROLE_FINANCE = "finance"

USER_ROLES = (ROLE_ADMIN, ROLE_HOD, ROLE_TEACHER, ROLE_STUDENT, ROLE_FINANCE)


@dataclass
class User:
    """Core attributes describing an application user."""

    id: int | None
    first_name: str
    last_name: str
    email: str
    role: str
    is_active: bool = True
    created_at: datetime | None = None


@dataclass(frozen=True)
class UserSummary:
    """Directory record returned by membership queries.

    Only ``id`` is used to address notifications; the remaining fields are
    carried for callers that want to display the audience.
    """

    id: int
    name: str | None = None
    email: str | None = None


__all__ = [
    "ROLE_ADMIN",
    "ROLE_FINANCE",
    "ROLE_HOD",
    "ROLE_STUDENT",
    "ROLE_TEACHER",
    "USER_ROLES",
    "User",
    "UserSummary",
]
