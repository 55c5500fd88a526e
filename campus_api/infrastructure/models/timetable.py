"""SQLAlchemy model for scheduled course sections."""

from sqlalchemy import Column, ForeignKey, Integer, String, Time

from campus_api.infrastructure.database import Base


class TimetableSlotModel(Base):
    """A course section taught by a teacher at a given time."""

    __tablename__ = "timetable"

    id = Column(Integer, primary_key=True, index=True)
    course_id = Column(Integer, ForeignKey("course.id"), nullable=False, index=True)
    teacher_id = Column(Integer, ForeignKey("teacher.id"), nullable=False, index=True)
    day = Column(String(10), nullable=False)
    start_time = Column(Time, nullable=True)
    end_time = Column(Time, nullable=True)
    room = Column(String(30), nullable=True)
    semester = Column(String(20), nullable=True)


__all__ = ["TimetableSlotModel"]
