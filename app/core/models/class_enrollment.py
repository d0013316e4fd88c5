"""Student-class enrollment link. Owned by the class side; one row per (class, student)."""

from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, ForeignKey, Integer

from app.db.session import Base


class ClassEnrollment(Base):
    __tablename__ = "class_enrollments"

    class_id = Column(Integer, ForeignKey("classes.id", ondelete="CASCADE"), primary_key=True)
    student_id = Column(Integer, ForeignKey("students.id"), primary_key=True, index=True)
    enrolled_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), nullable=False)
