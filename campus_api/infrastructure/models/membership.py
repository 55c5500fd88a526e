"""SQLAlchemy models linking users to their department as students or teachers."""

from sqlalchemy import Column, ForeignKey, Integer
from sqlalchemy.orm import relationship

from campus_api.infrastructure.database import Base


class StudentModel(Base):
    """Student record attached to a user account."""

    __tablename__ = "student"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("user.id"), nullable=False, unique=True, index=True)
    department_id = Column(Integer, ForeignKey("department.id"), nullable=True, index=True)

    user = relationship("UserModel", lazy="joined")


class TeacherModel(Base):
    """Teacher record attached to a user account."""

    __tablename__ = "teacher"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("user.id"), nullable=False, unique=True, index=True)
    department_id = Column(Integer, ForeignKey("department.id"), nullable=True, index=True)

    user = relationship("UserModel", lazy="joined")


__all__ = ["StudentModel", "TeacherModel"]
