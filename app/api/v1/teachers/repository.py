"""Persistence helpers for teachers."""

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.models import SchoolClass, Teacher


class TeacherRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(self, teacher_id: int) -> Optional[Teacher]:
        return await self.db.get(Teacher, teacher_id)

    async def get_by_email(self, email: str) -> Optional[Teacher]:
        result = await self.db.execute(select(Teacher).where(Teacher.email == email.lower()))
        return result.scalar_one_or_none()

    async def exists_by_email(self, email: str, exclude_id: Optional[int] = None) -> bool:
        stmt = select(Teacher.id).where(Teacher.email == email.lower())
        if exclude_id is not None:
            stmt = stmt.where(Teacher.id != exclude_id)
        result = await self.db.execute(stmt.limit(1))
        return result.scalar_one_or_none() is not None

    async def list_all(self) -> List[Teacher]:
        result = await self.db.execute(select(Teacher).order_by(Teacher.id))
        return list(result.scalars().all())

    async def is_assigned_to_class(self, teacher_id: int) -> bool:
        result = await self.db.execute(
            select(SchoolClass.id).where(SchoolClass.teacher_id == teacher_id).limit(1)
        )
        return result.scalar_one_or_none() is not None
