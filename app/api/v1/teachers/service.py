import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import DuplicateKeyError, IntegrityViolationError, NotFoundError
from app.core.models import Teacher

from .repository import TeacherRepository
from .schemas import TeacherCreate, TeacherResponse, TeacherUpdate

logger = logging.getLogger(__name__)


def _to_response(t: Teacher) -> TeacherResponse:
    return TeacherResponse(
        id=t.id,
        first_name=t.first_name,
        last_name=t.last_name,
        email=t.email,
        phone=t.phone,
        date_of_birth=t.date_of_birth,
        hire_date=t.hire_date,
        specialization=t.specialization,
        salary=t.salary,
    )


def _apply(obj: Teacher, payload: TeacherCreate) -> None:
    obj.first_name = payload.first_name
    obj.last_name = payload.last_name
    obj.email = str(payload.email).lower()
    obj.phone = payload.phone
    obj.date_of_birth = payload.date_of_birth
    obj.hire_date = payload.hire_date
    obj.specialization = payload.specialization
    obj.salary = payload.salary


async def list_teachers(db: AsyncSession) -> List[TeacherResponse]:
    rows = await TeacherRepository(db).list_all()
    return [_to_response(t) for t in rows]


async def get_teacher(db: AsyncSession, teacher_id: int) -> Optional[TeacherResponse]:
    obj = await TeacherRepository(db).get(teacher_id)
    return _to_response(obj) if obj else None


async def get_teacher_by_email(db: AsyncSession, email: str) -> Optional[TeacherResponse]:
    obj = await TeacherRepository(db).get_by_email(email.strip())
    return _to_response(obj) if obj else None


async def create_teacher(db: AsyncSession, payload: TeacherCreate) -> TeacherResponse:
    email = str(payload.email).lower()
    if await TeacherRepository(db).exists_by_email(email):
        logger.warning("Rejected duplicate teacher email %r", email)
        raise DuplicateKeyError(f"Teacher with email '{email}' already exists")
    obj = Teacher()
    _apply(obj, payload)
    db.add(obj)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise DuplicateKeyError(f"Teacher with email '{email}' already exists")
    await db.refresh(obj)
    logger.info("Created teacher id=%s", obj.id)
    return _to_response(obj)


async def update_teacher(db: AsyncSession, teacher_id: int, payload: TeacherUpdate) -> TeacherResponse:
    repo = TeacherRepository(db)
    obj = await repo.get(teacher_id)
    if not obj:
        raise NotFoundError(f"Teacher not found with id: {teacher_id}")
    email = str(payload.email).lower()
    if await repo.exists_by_email(email, exclude_id=teacher_id):
        raise DuplicateKeyError(f"Teacher with email '{email}' already exists")
    _apply(obj, payload)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise DuplicateKeyError(f"Teacher with email '{email}' already exists")
    await db.refresh(obj)
    logger.info("Updated teacher id=%s", obj.id)
    return _to_response(obj)


async def delete_teacher(db: AsyncSession, teacher_id: int) -> None:
    repo = TeacherRepository(db)
    obj = await repo.get(teacher_id)
    if not obj:
        raise NotFoundError(f"Teacher not found with id: {teacher_id}")
    if await repo.is_assigned_to_class(teacher_id):
        logger.warning("Refused to delete teacher id=%s: assigned to classes", teacher_id)
        raise IntegrityViolationError("Cannot delete teacher that is assigned to classes")
    await db.delete(obj)
    await db.commit()
    logger.info("Deleted teacher id=%s", teacher_id)
