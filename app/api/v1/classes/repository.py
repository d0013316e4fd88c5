"""Persistence helpers for classes and the enrollment join table."""

from typing import Dict, Iterable, List, Optional

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.models import ClassEnrollment, SchoolClass, Student


def _enrolled_count_subquery():
    return (
        select(func.count(ClassEnrollment.student_id))
        .where(ClassEnrollment.class_id == SchoolClass.id)
        .correlate(SchoolClass)
        .scalar_subquery()
    )


class ClassRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(self, class_id: int) -> Optional[SchoolClass]:
        return await self.db.get(SchoolClass, class_id)

    async def get_for_update(self, class_id: int) -> Optional[SchoolClass]:
        """Load the class with a row lock held until the transaction ends (no-op on SQLite)."""
        result = await self.db.execute(
            select(SchoolClass)
            .where(SchoolClass.id == class_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def _list(self, stmt) -> List[SchoolClass]:
        result = await self.db.execute(stmt.order_by(SchoolClass.id))
        return list(result.scalars().all())

    async def list_all(self) -> List[SchoolClass]:
        return await self._list(select(SchoolClass))

    async def list_by_subject(self, subject_id: int) -> List[SchoolClass]:
        return await self._list(select(SchoolClass).where(SchoolClass.subject_id == subject_id))

    async def list_by_teacher(self, teacher_id: int) -> List[SchoolClass]:
        return await self._list(select(SchoolClass).where(SchoolClass.teacher_id == teacher_id))

    async def list_by_student(self, student_id: int) -> List[SchoolClass]:
        return await self._list(
            select(SchoolClass)
            .join(ClassEnrollment, ClassEnrollment.class_id == SchoolClass.id)
            .where(ClassEnrollment.student_id == student_id)
        )

    async def list_by_semester_and_year(self, semester: str, academic_year: str) -> List[SchoolClass]:
        return await self._list(
            select(SchoolClass).where(
                SchoolClass.semester == semester,
                SchoolClass.academic_year == academic_year,
            )
        )

    async def list_available(self) -> List[SchoolClass]:
        return await self._list(select(SchoolClass).where(SchoolClass.capacity > _enrolled_count_subquery()))

    async def count_enrolled(self, class_id: int) -> int:
        result = await self.db.execute(
            select(func.count(ClassEnrollment.student_id)).where(ClassEnrollment.class_id == class_id)
        )
        return result.scalar_one()

    async def enrolled_counts(self, class_ids: Iterable[int]) -> Dict[int, int]:
        ids = list(class_ids)
        if not ids:
            return {}
        result = await self.db.execute(
            select(ClassEnrollment.class_id, func.count(ClassEnrollment.student_id))
            .where(ClassEnrollment.class_id.in_(ids))
            .group_by(ClassEnrollment.class_id)
        )
        counts = {class_id: cnt for class_id, cnt in result.all()}
        return {class_id: counts.get(class_id, 0) for class_id in ids}

    async def is_enrolled(self, class_id: int, student_id: int) -> bool:
        result = await self.db.execute(
            select(ClassEnrollment.class_id).where(
                ClassEnrollment.class_id == class_id,
                ClassEnrollment.student_id == student_id,
            )
        )
        return result.scalar_one_or_none() is not None

    async def list_enrolled_students(self, class_id: int) -> List[Student]:
        result = await self.db.execute(
            select(Student)
            .join(ClassEnrollment, ClassEnrollment.student_id == Student.id)
            .where(ClassEnrollment.class_id == class_id)
            .order_by(Student.last_name, Student.first_name, Student.id)
        )
        return list(result.scalars().all())

    def add_enrollment(self, class_id: int, student_id: int) -> ClassEnrollment:
        link = ClassEnrollment(class_id=class_id, student_id=student_id)
        self.db.add(link)
        return link

    async def remove_enrollment(self, class_id: int, student_id: int) -> None:
        await self.db.execute(
            delete(ClassEnrollment).where(
                ClassEnrollment.class_id == class_id,
                ClassEnrollment.student_id == student_id,
            )
        )

    async def clear_enrollments(self, class_id: int) -> None:
        await self.db.execute(delete(ClassEnrollment).where(ClassEnrollment.class_id == class_id))
