import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import DuplicateKeyError, IntegrityViolationError, NotFoundError
from app.core.models import Subject

from .repository import SubjectRepository
from .schemas import SubjectCreate, SubjectResponse, SubjectUpdate

logger = logging.getLogger(__name__)


def _to_response(s: Subject) -> SubjectResponse:
    return SubjectResponse(
        id=s.id,
        name=s.name,
        description=s.description,
        credits=s.credits,
    )


def _duplicate_message(name: str) -> str:
    return f"Subject with name '{name}' already exists"


async def list_subjects(db: AsyncSession) -> List[SubjectResponse]:
    rows = await SubjectRepository(db).list_all()
    return [_to_response(s) for s in rows]


async def get_subject(db: AsyncSession, subject_id: int) -> Optional[SubjectResponse]:
    obj = await SubjectRepository(db).get(subject_id)
    return _to_response(obj) if obj else None


async def get_subject_by_name(db: AsyncSession, name: str) -> Optional[SubjectResponse]:
    obj = await SubjectRepository(db).get_by_name(name.strip())
    return _to_response(obj) if obj else None


async def create_subject(db: AsyncSession, payload: SubjectCreate) -> SubjectResponse:
    repo = SubjectRepository(db)
    name = payload.name
    if await repo.exists_by_name(name):
        logger.warning("Rejected duplicate subject name %r", name)
        raise DuplicateKeyError(_duplicate_message(name))
    obj = Subject(name=name, description=payload.description, credits=payload.credits)
    db.add(obj)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise DuplicateKeyError(_duplicate_message(name))
    await db.refresh(obj)
    logger.info("Created subject id=%s name=%r", obj.id, obj.name)
    return _to_response(obj)


async def update_subject(db: AsyncSession, subject_id: int, payload: SubjectUpdate) -> SubjectResponse:
    repo = SubjectRepository(db)
    obj = await repo.get(subject_id)
    if not obj:
        raise NotFoundError(f"Subject not found with id: {subject_id}")
    name = payload.name
    if await repo.exists_by_name(name, exclude_id=subject_id):
        raise DuplicateKeyError(_duplicate_message(name))
    obj.name = name
    obj.description = payload.description
    obj.credits = payload.credits
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise DuplicateKeyError(_duplicate_message(name))
    await db.refresh(obj)
    logger.info("Updated subject id=%s", obj.id)
    return _to_response(obj)


async def delete_subject(db: AsyncSession, subject_id: int) -> None:
    repo = SubjectRepository(db)
    obj = await repo.get(subject_id)
    if not obj:
        raise NotFoundError(f"Subject not found with id: {subject_id}")
    if await repo.is_used_by_class(subject_id):
        logger.warning("Refused to delete subject id=%s: used by classes", subject_id)
        raise IntegrityViolationError("Cannot delete subject that is used in classes")
    await db.delete(obj)
    await db.commit()
    logger.info("Deleted subject id=%s", subject_id)
