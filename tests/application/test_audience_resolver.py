"""Unit tests for audience resolution against an in-memory directory."""

from __future__ import annotations

import pytest

from campus_api.application.use_cases.notifications import AudienceResolver
from campus_api.domain.entities import (
    AllTeachersAudience,
    AllUsersExceptAudience,
    ClassRosterAudience,
    CourseRosterAudience,
    DepartmentAudience,
    SingleUserAudience,
    TeacherRosterAudience,
    UserSummary,
)
from campus_api.domain.exceptions import DirectoryError


class FakeDirectory:
    """Directory double that records every query it receives."""

    def __init__(self, **results) -> None:
        self.results = results
        self.calls: list[tuple] = []

    def _answer(self, name, *args):
        self.calls.append((name, *args))
        value = self.results.get(name, [])
        if isinstance(value, Exception):
            raise value
        return [UserSummary(id=user_id) for user_id in value]

    def get_users_in_department(self, department_id, role=None):
        return self._answer("department", department_id, role)

    def get_enrolled_students(self, course_id):
        return self._answer("course", course_id)

    def get_class_roster_members(self, class_id):
        return self._answer("class", class_id)

    def get_students_taught_by(self, teacher_id):
        return self._answer("teacher", teacher_id)

    def get_all_users_except(self, user_id):
        return self._answer("all_except", user_id)

    def get_all_teachers(self):
        return self._answer("all_teachers")


def test_single_user_does_not_query_the_directory():
    directory = FakeDirectory()

    assert AudienceResolver(directory).resolve(SingleUserAudience(user_id=42)) == {42}
    assert directory.calls == []


def test_department_passes_role_and_removes_duplicates():
    directory = FakeDirectory(department=[1, 2, 2, 3, 1])

    recipients = AudienceResolver(directory).resolve(
        DepartmentAudience(department_id=7, role="teacher")
    )

    assert recipients == {1, 2, 3}
    assert directory.calls == [("department", 7, "teacher")]


def test_teacher_roster_counts_shared_students_once():
    # Student 11 attends two sections of the same teacher.
    directory = FakeDirectory(teacher=[10, 11, 11, 12, 11])

    recipients = AudienceResolver(directory).resolve(TeacherRosterAudience(teacher_id=3))

    assert recipients == {10, 11, 12}


@pytest.mark.parametrize(
    ("audience", "query"),
    [
        (CourseRosterAudience(course_id=5), ("course", 5)),
        (ClassRosterAudience(class_id=9), ("class", 9)),
        (AllTeachersAudience(), ("all_teachers",)),
    ],
)
def test_each_variant_issues_one_directory_query(audience, query):
    directory = FakeDirectory(course=[1, 2], **{"class": [3]}, all_teachers=[4, 4])

    AudienceResolver(directory).resolve(audience)

    assert directory.calls == [query]


def test_all_users_except_never_includes_the_excluded_user():
    directory = FakeDirectory(all_except=[1, 2, 3])

    recipients = AudienceResolver(directory).resolve(
        AllUsersExceptAudience(excluded_user_id=2)
    )

    assert recipients == {1, 3}


def test_empty_membership_is_not_an_error():
    directory = FakeDirectory(course=[])

    assert AudienceResolver(directory).resolve(CourseRosterAudience(course_id=1)) == set()


def test_directory_failures_propagate():
    directory = FakeDirectory(course=DirectoryError("directory offline"))

    with pytest.raises(DirectoryError):
        AudienceResolver(directory).resolve(CourseRosterAudience(course_id=1))


def test_unknown_audience_type_is_rejected():
    with pytest.raises(TypeError):
        AudienceResolver(FakeDirectory()).resolve(object())
