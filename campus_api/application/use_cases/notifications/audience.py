"""Resolve audience specifications into concrete recipient identities."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from typing import Protocol

from campus_api.domain.entities import (
    AllTeachersAudience,
    AllUsersExceptAudience,
    AudienceSpec,
    ClassRosterAudience,
    CourseRosterAudience,
    DepartmentAudience,
    SingleUserAudience,
    TeacherRosterAudience,
    UserSummary,
)


class DirectoryProvider(Protocol):
    """Read-only membership queries the resolver depends on."""

    def get_users_in_department(
        self, department_id: int, role: str | None = None
    ) -> Sequence[UserSummary]: ...

    def get_enrolled_students(self, course_id: int) -> Sequence[UserSummary]: ...

    def get_class_roster_members(self, class_id: int) -> Sequence[UserSummary]: ...

    def get_students_taught_by(self, teacher_id: int) -> Sequence[UserSummary]: ...

    def get_all_users_except(self, user_id: int) -> Sequence[UserSummary]: ...

    def get_all_teachers(self) -> Sequence[UserSummary]: ...


class AudienceResolver:
    """Map each :data:`AudienceSpec` variant to a set of user ids.

    Resolution has no side effects. Provider failures propagate as
    :class:`~campus_api.domain.exceptions.DirectoryError`; an empty set is a
    regular result. Every variant goes through the same de-duplication, even
    the ones whose queries cannot currently produce duplicates.
    """

    def __init__(self, directory: DirectoryProvider) -> None:
        self._directory = directory
        self._handlers: dict[type, Callable[..., Iterable[UserSummary]]] = {
            SingleUserAudience: self._single_user,
            DepartmentAudience: self._department,
            CourseRosterAudience: self._course_roster,
            ClassRosterAudience: self._class_roster,
            TeacherRosterAudience: self._teacher_roster,
            AllUsersExceptAudience: self._all_users_except,
            AllTeachersAudience: self._all_teachers,
        }

    def resolve(self, audience: AudienceSpec) -> set[int]:
        handler = self._handlers.get(type(audience))
        if handler is None:
            msg = f"Unsupported audience specification: {type(audience).__name__}"
            raise TypeError(msg)
        return {member.id for member in handler(audience) if member.id is not None}

    @staticmethod
    def _single_user(audience: SingleUserAudience) -> Iterable[UserSummary]:
        # Existence is enforced by the store's foreign key, not here.
        return [UserSummary(id=audience.user_id)]

    def _department(self, audience: DepartmentAudience) -> Iterable[UserSummary]:
        return self._directory.get_users_in_department(
            audience.department_id, audience.role
        )

    def _course_roster(self, audience: CourseRosterAudience) -> Iterable[UserSummary]:
        return self._directory.get_enrolled_students(audience.course_id)

    def _class_roster(self, audience: ClassRosterAudience) -> Iterable[UserSummary]:
        return self._directory.get_class_roster_members(audience.class_id)

    def _teacher_roster(self, audience: TeacherRosterAudience) -> Iterable[UserSummary]:
        # A student attending several sections of the same teacher shows up once per section.
        return self._directory.get_students_taught_by(audience.teacher_id)

    def _all_users_except(self, audience: AllUsersExceptAudience) -> Iterable[UserSummary]:
        members = self._directory.get_all_users_except(audience.excluded_user_id)
        return [member for member in members if member.id != audience.excluded_user_id]

    def _all_teachers(self, _audience: AllTeachersAudience) -> Iterable[UserSummary]:
        return self._directory.get_all_teachers()


def resolve_audience(directory: DirectoryProvider, audience: AudienceSpec) -> set[int]:
    """Shortcut for ``AudienceResolver(directory).resolve(audience)``."""

    return AudienceResolver(directory).resolve(audience)


__all__ = ["AudienceResolver", "DirectoryProvider", "resolve_audience"]
