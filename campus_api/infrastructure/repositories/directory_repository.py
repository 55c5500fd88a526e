"""Read-only membership queries backing notification audiences."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from sqlalchemy import or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Query, Session

from campus_api.domain.entities import ROLE_TEACHER, UserSummary
from campus_api.domain.exceptions import DirectoryError
from campus_api.infrastructure.models import (
    ENROLLMENT_STATUS_ACTIVE,
    CourseEnrollmentModel,
    SchoolClassModel,
    StudentModel,
    TeacherModel,
    TimetableSlotModel,
    UserModel,
)


class DirectoryRepository:
    """Answer "who belongs to X" questions from the institutional tables.

    Results may contain the same user more than once when a join produces
    several matching rows; callers are expected to de-duplicate.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    def get_users_in_department(
        self, department_id: int, role: str | None = None
    ) -> Sequence[UserSummary]:
        query = (
            self._summary_query()
            .outerjoin(StudentModel, StudentModel.user_id == UserModel.id)
            .outerjoin(TeacherModel, TeacherModel.user_id == UserModel.id)
            .filter(
                or_(
                    StudentModel.department_id == department_id,
                    TeacherModel.department_id == department_id,
                )
            )
        )
        if role:
            query = query.filter(UserModel.role == role)
        return self._fetch(query, f"department {department_id}")

    def get_enrolled_students(self, course_id: int) -> Sequence[UserSummary]:
        query = (
            self._summary_query()
            .join(StudentModel, StudentModel.user_id == UserModel.id)
            .join(CourseEnrollmentModel, CourseEnrollmentModel.student_id == StudentModel.id)
            .filter(CourseEnrollmentModel.course_id == course_id)
            .filter(CourseEnrollmentModel.status == ENROLLMENT_STATUS_ACTIVE)
        )
        return self._fetch(query, f"course {course_id}")

    def get_class_roster_members(self, class_id: int) -> Sequence[UserSummary]:
        try:
            roster = (
                self.session.query(SchoolClassModel.students)
                .filter(SchoolClassModel.id == class_id)
                .scalar()
            )
        except SQLAlchemyError as exc:
            raise DirectoryError(f"Could not load the roster of class {class_id}") from exc

        student_ids = _normalize_ids(roster or [])
        if not student_ids:
            return []

        query = (
            self._summary_query()
            .join(StudentModel, StudentModel.user_id == UserModel.id)
            .filter(StudentModel.id.in_(student_ids))
        )
        return self._fetch(query, f"class {class_id}")

    def get_students_taught_by(self, teacher_id: int) -> Sequence[UserSummary]:
        # One row per (section, enrolled student) pair.
        query = (
            self._summary_query()
            .join(StudentModel, StudentModel.user_id == UserModel.id)
            .join(CourseEnrollmentModel, CourseEnrollmentModel.student_id == StudentModel.id)
            .join(
                TimetableSlotModel,
                TimetableSlotModel.course_id == CourseEnrollmentModel.course_id,
            )
            .filter(TimetableSlotModel.teacher_id == teacher_id)
            .filter(CourseEnrollmentModel.status == ENROLLMENT_STATUS_ACTIVE)
        )
        return self._fetch(query, f"students of teacher {teacher_id}")

    def get_all_users_except(self, user_id: int) -> Sequence[UserSummary]:
        query = (
            self._summary_query()
            .filter(UserModel.id != user_id)
            .filter(UserModel.is_active.is_(True))
        )
        return self._fetch(query, f"all users except {user_id}")

    def get_all_teachers(self) -> Sequence[UserSummary]:
        query = (
            self._summary_query()
            .filter(UserModel.role == ROLE_TEACHER)
            .filter(UserModel.is_active.is_(True))
        )
        return self._fetch(query, "all teachers")

    def get_teacher_id_for_user(self, user_id: int) -> int | None:
        """Return the teacher record id attached to ``user_id``, if any."""

        try:
            return (
                self.session.query(TeacherModel.id)
                .filter(TeacherModel.user_id == user_id)
                .scalar()
            )
        except SQLAlchemyError as exc:
            raise DirectoryError(f"Could not look up the teacher record of user {user_id}") from exc

    def _summary_query(self) -> Query:
        return self.session.query(
            UserModel.id, UserModel.first_name, UserModel.last_name, UserModel.email
        )

    @staticmethod
    def _fetch(query: Query, description: str) -> list[UserSummary]:
        try:
            rows = query.all()
        except SQLAlchemyError as exc:
            raise DirectoryError(f"Directory lookup failed for {description}") from exc
        return [
            UserSummary(
                id=user_id,
                name=" ".join(part for part in (first_name, last_name) if part) or None,
                email=email,
            )
            for user_id, first_name, last_name, email in rows
        ]


def _normalize_ids(values: Iterable[object]) -> list[int]:
    """Keep the stored roster entries that are integer student ids.

    Entries are matched as stored; strings, floats and booleans never
    stand in for an id.
    """

    return [
        value
        for value in values
        if isinstance(value, int) and not isinstance(value, bool)
    ]


__all__ = ["DirectoryRepository"]
