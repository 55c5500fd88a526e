"""SQLAlchemy models for courses and their enrollments."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, UniqueConstraint, func

from campus_api.infrastructure.database import Base

ENROLLMENT_STATUS_ACTIVE = "active"
ENROLLMENT_STATUS_DROPPED = "dropped"


class CourseModel(Base):
    """Database representation of a course."""

    __tablename__ = "course"

    id = Column(Integer, primary_key=True, index=True)
    code = Column(String(20), nullable=False, unique=True)
    name = Column(String(120), nullable=False)
    department_id = Column(Integer, ForeignKey("department.id"), nullable=True, index=True)


class CourseEnrollmentModel(Base):
    """Enrollment of a student in a course."""

    __tablename__ = "course_enrollment"
    __table_args__ = (UniqueConstraint("student_id", "course_id"),)

    id = Column(Integer, primary_key=True, index=True)
    student_id = Column(Integer, ForeignKey("student.id"), nullable=False, index=True)
    course_id = Column(Integer, ForeignKey("course.id"), nullable=False, index=True)
    status = Column(String(20), nullable=False, default=ENROLLMENT_STATUS_ACTIVE)
    enrolled_at = Column(DateTime, nullable=False, server_default=func.now())


__all__ = [
    "CourseEnrollmentModel",
    "CourseModel",
    "ENROLLMENT_STATUS_ACTIVE",
    "ENROLLMENT_STATUS_DROPPED",
]
