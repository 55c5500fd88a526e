"""SQLAlchemy model for classes (cohorts) and their stored rosters."""

from sqlalchemy import JSON, Boolean, Column, ForeignKey, Integer, String

from campus_api.infrastructure.database import Base


class SchoolClassModel(Base):
    """A class whose membership is kept as a list of student ids."""

    __tablename__ = "school_class"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(120), nullable=False)
    academic_year = Column(String(9), nullable=True)
    department_id = Column(Integer, ForeignKey("department.id"), nullable=True, index=True)
    # Student record ids; not a foreign key, may reference removed students.
    students = Column(JSON, nullable=False, default=list)
    is_active = Column(Boolean, nullable=False, default=True)


__all__ = ["SchoolClassModel"]
