"""Persistence helpers for subjects."""

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.models import SchoolClass, Subject


class SubjectRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(self, subject_id: int) -> Optional[Subject]:
        return await self.db.get(Subject, subject_id)

    async def get_by_name(self, name: str) -> Optional[Subject]:
        result = await self.db.execute(select(Subject).where(Subject.name == name))
        return result.scalar_one_or_none()

    async def exists_by_name(self, name: str, exclude_id: Optional[int] = None) -> bool:
        stmt = select(Subject.id).where(Subject.name == name)
        if exclude_id is not None:
            stmt = stmt.where(Subject.id != exclude_id)
        result = await self.db.execute(stmt.limit(1))
        return result.scalar_one_or_none() is not None

    async def list_all(self) -> List[Subject]:
        result = await self.db.execute(select(Subject).order_by(Subject.id))
        return list(result.scalars().all())

    async def is_used_by_class(self, subject_id: int) -> bool:
        result = await self.db.execute(
            select(SchoolClass.id).where(SchoolClass.subject_id == subject_id).limit(1)
        )
        return result.scalar_one_or_none() is not None
