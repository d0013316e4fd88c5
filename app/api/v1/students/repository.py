"""Persistence helpers for students."""

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.models import ClassEnrollment, Student


class StudentRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(self, student_id: int) -> Optional[Student]:
        return await self.db.get(Student, student_id)

    async def get_by_email(self, email: str) -> Optional[Student]:
        result = await self.db.execute(select(Student).where(Student.email == email.lower()))
        return result.scalar_one_or_none()

    async def exists_by_email(self, email: str, exclude_id: Optional[int] = None) -> bool:
        stmt = select(Student.id).where(Student.email == email.lower())
        if exclude_id is not None:
            stmt = stmt.where(Student.id != exclude_id)
        result = await self.db.execute(stmt.limit(1))
        return result.scalar_one_or_none() is not None

    async def list_all(self) -> List[Student]:
        result = await self.db.execute(select(Student).order_by(Student.id))
        return list(result.scalars().all())

    async def list_by_grade_level(self, grade_level: int) -> List[Student]:
        result = await self.db.execute(
            select(Student).where(Student.grade_level == grade_level).order_by(Student.id)
        )
        return list(result.scalars().all())

    async def list_with_gpa_above(self, gpa: float) -> List[Student]:
        """Strictly greater than ``gpa``; students without a GPA are excluded."""
        result = await self.db.execute(
            select(Student).where(Student.gpa > gpa).order_by(Student.gpa.desc(), Student.id)
        )
        return list(result.scalars().all())

    async def is_enrolled_anywhere(self, student_id: int) -> bool:
        result = await self.db.execute(
            select(ClassEnrollment.class_id).where(ClassEnrollment.student_id == student_id).limit(1)
        )
        return result.scalar_one_or_none() is not None
