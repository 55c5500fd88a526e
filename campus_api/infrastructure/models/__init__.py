"""ORM models used by the application infrastructure."""

from .course import (
    ENROLLMENT_STATUS_ACTIVE,
    ENROLLMENT_STATUS_DROPPED,
    CourseEnrollmentModel,
    CourseModel,
)
from .department import DepartmentModel
from .membership import StudentModel, TeacherModel
from .notification import NotificationModel
from .school_class import SchoolClassModel
from .timetable import TimetableSlotModel
from .user import UserModel

__all__ = [
    "ENROLLMENT_STATUS_ACTIVE",
    "ENROLLMENT_STATUS_DROPPED",
    "CourseEnrollmentModel",
    "CourseModel",
    "DepartmentModel",
    "NotificationModel",
    "SchoolClassModel",
    "StudentModel",
    "TeacherModel",
    "TimetableSlotModel",
    "UserModel",
]
