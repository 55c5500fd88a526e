"""SQLAlchemy model for academic departments."""

from sqlalchemy import Column, Integer, String

from campus_api.infrastructure.database import Base


class DepartmentModel(Base):
    """Database representation of a department."""

    __tablename__ = "department"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(120), nullable=False)
    code = Column(String(20), nullable=True, unique=True)


__all__ = ["DepartmentModel"]
