"""Scheduled classes. Model named SchoolClass to avoid Python 'class' keyword."""

from sqlalchemy import CheckConstraint, Column, ForeignKey, Integer, String, Time

from app.db.session import Base


class SchoolClass(Base):
    """A subject taught by one teacher in a given semester. Students join via ClassEnrollment."""

    __tablename__ = "classes"
    __table_args__ = (
        CheckConstraint("capacity > 0", name="ck_class_capacity_positive"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    description = Column(String(500), nullable=True)
    room_number = Column(String(50), nullable=True)
    capacity = Column(Integer, nullable=False)
    start_time = Column(Time, nullable=True)
    end_time = Column(Time, nullable=True)
    days_of_week = Column(String(100), nullable=True)  # e.g. "Monday,Wednesday,Friday"
    semester = Column(String(20), nullable=True)
    academic_year = Column(String(20), nullable=True)
    subject_id = Column(Integer, ForeignKey("subjects.id"), nullable=False, index=True)
    teacher_id = Column(Integer, ForeignKey("teachers.id"), nullable=False, index=True)
