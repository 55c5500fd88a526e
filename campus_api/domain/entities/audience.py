"""Audience specifications describing who should receive a notification.

Each variant is a small immutable value. An audience is resolved into concrete
user identities at dispatch time and is never persisted.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class SingleUserAudience:
    """A single, explicitly addressed user."""

    user_id: int


@dataclass(frozen=True)
class DepartmentAudience:
    """Members of a department, optionally restricted to one role."""

    department_id: int
    role: str | None = None


@dataclass(frozen=True)
class CourseRosterAudience:
    """Students actively enrolled in a course."""

    course_id: int


@dataclass(frozen=True)
class ClassRosterAudience:
    """Students listed in a class's stored membership list."""

    class_id: int


@dataclass(frozen=True)
class TeacherRosterAudience:
    """Every student enrolled in a section scheduled for the teacher."""

    teacher_id: int


@dataclass(frozen=True)
class AllUsersExceptAudience:
    """Every active user other than ``excluded_user_id``."""

    excluded_user_id: int


@dataclass(frozen=True)
class AllTeachersAudience:
    """Every active user holding the teacher role."""


AudienceSpec = Union[
    SingleUserAudience,
    DepartmentAudience,
    CourseRosterAudience,
    ClassRosterAudience,
    TeacherRosterAudience,
    AllUsersExceptAudience,
    AllTeachersAudience,
]


def describe_audience(audience: AudienceSpec) -> str:
    """Return a short human readable label used in logs and error messages."""

    if isinstance(audience, SingleUserAudience):
        return f"user {audience.user_id}"
    if isinstance(audience, DepartmentAudience):
        if audience.role:
            return f"{audience.role} users of department {audience.department_id}"
        return f"department {audience.department_id}"
    if isinstance(audience, CourseRosterAudience):
        return f"course {audience.course_id}"
    if isinstance(audience, ClassRosterAudience):
        return f"class {audience.class_id}"
    if isinstance(audience, TeacherRosterAudience):
        return f"students of teacher {audience.teacher_id}"
    if isinstance(audience, AllUsersExceptAudience):
        return f"all users except {audience.excluded_user_id}"
    if isinstance(audience, AllTeachersAudience):
        return "all teachers"
    return type(audience).__name__


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
]
