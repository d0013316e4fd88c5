import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import DuplicateKeyError, IntegrityViolationError, NotFoundError
from app.core.models import Student

from .repository import StudentRepository
from .schemas import StudentCreate, StudentResponse, StudentUpdate

logger = logging.getLogger(__name__)


def _to_response(s: Student) -> StudentResponse:
    return StudentResponse(
        id=s.id,
        first_name=s.first_name,
        last_name=s.last_name,
        email=s.email,
        phone=s.phone,
        date_of_birth=s.date_of_birth,
        enrollment_date=s.enrollment_date,
        address=s.address,
        grade_level=s.grade_level,
        gpa=s.gpa,
    )


def _apply(obj: Student, payload: StudentCreate) -> None:
    obj.first_name = payload.first_name
    obj.last_name = payload.last_name
    obj.email = str(payload.email).lower()
    obj.phone = payload.phone
    obj.date_of_birth = payload.date_of_birth
    obj.enrollment_date = payload.enrollment_date
    obj.address = payload.address
    obj.grade_level = payload.grade_level
    obj.gpa = payload.gpa


async def list_students(db: AsyncSession) -> List[StudentResponse]:
    rows = await StudentRepository(db).list_all()
    return [_to_response(s) for s in rows]


async def get_student(db: AsyncSession, student_id: int) -> Optional[StudentResponse]:
    obj = await StudentRepository(db).get(student_id)
    return _to_response(obj) if obj else None


async def get_student_by_email(db: AsyncSession, email: str) -> Optional[StudentResponse]:
    obj = await StudentRepository(db).get_by_email(email.strip())
    return _to_response(obj) if obj else None


async def list_students_by_grade_level(db: AsyncSession, grade_level: int) -> List[StudentResponse]:
    rows = await StudentRepository(db).list_by_grade_level(grade_level)
    return [_to_response(s) for s in rows]


async def list_students_with_gpa_above(db: AsyncSession, gpa: float) -> List[StudentResponse]:
    rows = await StudentRepository(db).list_with_gpa_above(gpa)
    return [_to_response(s) for s in rows]


async def create_student(db: AsyncSession, payload: StudentCreate) -> StudentResponse:
    email = str(payload.email).lower()
    if await StudentRepository(db).exists_by_email(email):
        logger.warning("Rejected duplicate student email %r", email)
        raise DuplicateKeyError(f"Student with email '{email}' already exists")
    obj = Student()
    _apply(obj, payload)
    db.add(obj)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise DuplicateKeyError(f"Student with email '{email}' already exists")
    await db.refresh(obj)
    logger.info("Created student id=%s", obj.id)
    return _to_response(obj)


async def update_student(db: AsyncSession, student_id: int, payload: StudentUpdate) -> StudentResponse:
    repo = StudentRepository(db)
    obj = await repo.get(student_id)
    if not obj:
        raise NotFoundError(f"Student not found with id: {student_id}")
    email = str(payload.email).lower()
    if await repo.exists_by_email(email, exclude_id=student_id):
        raise DuplicateKeyError(f"Student with email '{email}' already exists")
    _apply(obj, payload)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise DuplicateKeyError(f"Student with email '{email}' already exists")
    await db.refresh(obj)
    logger.info("Updated student id=%s", obj.id)
    return _to_response(obj)


async def delete_student(db: AsyncSession, student_id: int) -> None:
    repo = StudentRepository(db)
    obj = await repo.get(student_id)
    if not obj:
        raise NotFoundError(f"Student not found with id: {student_id}")
    if await repo.is_enrolled_anywhere(student_id):
        logger.warning("Refused to delete student id=%s: still enrolled", student_id)
        raise IntegrityViolationError("Cannot delete student that is enrolled in classes")
    await db.delete(obj)
    await db.commit()
    logger.info("Deleted student id=%s", student_id)
