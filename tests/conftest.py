"""Shared fixtures backed by a file based SQLite database."""

from __future__ import annotations

import os
import sys
import tempfile
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

TEST_DB_PATH = Path(tempfile.mkdtemp(prefix="campus-api-tests-")) / "test.db"
os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB_PATH}"
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ["NOTIFICATION_DISPATCH_CONCURRENCY"] = "4"

from campus_api.domain.entities import ROLE_STUDENT, ROLE_TEACHER  # noqa: E402
from campus_api.infrastructure import database  # noqa: E402
from campus_api.infrastructure.models import (  # noqa: E402
    ENROLLMENT_STATUS_ACTIVE,
    CourseEnrollmentModel,
    CourseModel,
    DepartmentModel,
    SchoolClassModel,
    StudentModel,
    TeacherModel,
    TimetableSlotModel,
    UserModel,
)


class DirectoryBuilder:
    """Small helper to seed users, memberships, courses and schedules."""

    def __init__(self, session) -> None:
        self.session = session
        self._sequence = 0

    def _save(self, model):
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return model

    def user(self, role: str, *, first_name: str | None = None, last_name: str = "Tester",
             is_active: bool = True) -> UserModel:
        self._sequence += 1
        return self._save(
            UserModel(
                first_name=first_name or f"{role.title()}{self._sequence}",
                last_name=last_name,
                email=f"{role}{self._sequence}@campus.test",
                role=role,
                is_active=is_active,
            )
        )

    def department(self, department_id: int | None = None, name: str = "Science") -> DepartmentModel:
        return self._save(DepartmentModel(id=department_id, name=name))

    def student(self, department: DepartmentModel | None = None, **user_kwargs) -> StudentModel:
        user = self.user(ROLE_STUDENT, **user_kwargs)
        return self._save(
            StudentModel(user_id=user.id, department_id=department.id if department else None)
        )

    def teacher(self, department: DepartmentModel | None = None, **user_kwargs) -> TeacherModel:
        user = self.user(ROLE_TEACHER, **user_kwargs)
        return self._save(
            TeacherModel(user_id=user.id, department_id=department.id if department else None)
        )

    def course(self, code: str, department: DepartmentModel | None = None) -> CourseModel:
        return self._save(
            CourseModel(code=code, name=f"Course {code}", department_id=department.id if department else None)
        )

    def enroll(self, student: StudentModel, course: CourseModel,
               status: str = ENROLLMENT_STATUS_ACTIVE) -> CourseEnrollmentModel:
        return self._save(
            CourseEnrollmentModel(student_id=student.id, course_id=course.id, status=status)
        )

    def school_class(self, students: list, name: str = "Class A") -> SchoolClassModel:
        return self._save(SchoolClassModel(name=name, students=students))

    def schedule(self, course: CourseModel, teacher: TeacherModel, day: str = "monday") -> TimetableSlotModel:
        return self._save(
            TimetableSlotModel(course_id=course.id, teacher_id=teacher.id, day=day)
        )


@pytest.fixture(autouse=True)
def clean_database():
    """Recreate every table before each test."""

    database.Base.metadata.drop_all(bind=database.engine)
    database.Base.metadata.create_all(bind=database.engine)
    yield
    database.engine.dispose()


@pytest.fixture()
def session_factory():
    return database.SessionLocal


@pytest.fixture()
def db_session(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def directory(db_session) -> DirectoryBuilder:
    return DirectoryBuilder(db_session)
