"""Class management and student enrollment.

Enrollment changes are read-modify-write on one class: the class row is locked,
the current count compared against capacity, and the link written, all inside
the request's transaction. The (class_id, student_id) primary key on
class_enrollments rejects a second link for the same pair.
"""

import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.enums import EnrollmentStatus
from app.core.exceptions import (
    AlreadyEnrolledError,
    ClassFullError,
    NotEnrolledError,
    NotFoundError,
    ValidationError,
)
from app.core.models import SchoolClass, Student, Subject, Teacher
from app.api.v1.students.repository import StudentRepository
from app.api.v1.students.schemas import StudentResponse
from app.api.v1.subjects.repository import SubjectRepository
from app.api.v1.teachers.repository import TeacherRepository

from .repository import ClassRepository
from .schemas import ClassCreate, ClassFields, ClassResponse, ClassUpdate

logger = logging.getLogger(__name__)


def _class_to_response(c: SchoolClass, enrolled_count: int) -> ClassResponse:
    return ClassResponse(
        id=c.id,
        name=c.name,
        description=c.description,
        room_number=c.room_number,
        capacity=c.capacity,
        start_time=c.start_time,
        end_time=c.end_time,
        days_of_week=c.days_of_week,
        semester=c.semester,
        academic_year=c.academic_year,
        subject_id=c.subject_id,
        teacher_id=c.teacher_id,
        enrolled_count=enrolled_count,
        enrollment_status=EnrollmentStatus.for_counts(enrolled_count, c.capacity),
    )


async def _to_responses(repo: ClassRepository, rows: List[SchoolClass]) -> List[ClassResponse]:
    counts = await repo.enrolled_counts(c.id for c in rows)
    return [_class_to_response(c, counts[c.id]) for c in rows]


def _apply_fields(obj: SchoolClass, payload: ClassFields) -> None:
    obj.name = payload.name
    obj.description = payload.description
    obj.room_number = payload.room_number
    obj.capacity = payload.capacity
    obj.start_time = payload.start_time
    obj.end_time = payload.end_time
    obj.days_of_week = payload.days_of_week
    obj.semester = payload.semester
    obj.academic_year = payload.academic_year


async def _require_class(repo: ClassRepository, class_id: int, for_update: bool = False) -> SchoolClass:
    obj = await (repo.get_for_update(class_id) if for_update else repo.get(class_id))
    if not obj:
        raise NotFoundError(f"Class not found with id: {class_id}")
    return obj


async def _require_subject(db: AsyncSession, subject_id: int) -> Subject:
    subject = await SubjectRepository(db).get(subject_id)
    if not subject:
        raise NotFoundError(f"Subject not found with id: {subject_id}")
    return subject


async def _require_teacher(db: AsyncSession, teacher_id: int) -> Teacher:
    teacher = await TeacherRepository(db).get(teacher_id)
    if not teacher:
        raise NotFoundError(f"Teacher not found with id: {teacher_id}")
    return teacher


async def _require_student(db: AsyncSession, student_id: int) -> Student:
    student = await StudentRepository(db).get(student_id)
    if not student:
        raise NotFoundError(f"Student not found with id: {student_id}")
    return student


async def list_classes(db: AsyncSession) -> List[ClassResponse]:
    repo = ClassRepository(db)
    return await _to_responses(repo, await repo.list_all())


async def get_class(db: AsyncSession, class_id: int) -> Optional[ClassResponse]:
    repo = ClassRepository(db)
    obj = await repo.get(class_id)
    if not obj:
        return None
    return _class_to_response(obj, await repo.count_enrolled(class_id))


async def list_classes_by_subject(db: AsyncSession, subject_id: int) -> List[ClassResponse]:
    await _require_subject(db, subject_id)
    repo = ClassRepository(db)
    return await _to_responses(repo, await repo.list_by_subject(subject_id))


async def list_classes_by_teacher(db: AsyncSession, teacher_id: int) -> List[ClassResponse]:
    await _require_teacher(db, teacher_id)
    repo = ClassRepository(db)
    return await _to_responses(repo, await repo.list_by_teacher(teacher_id))


async def list_classes_by_student(db: AsyncSession, student_id: int) -> List[ClassResponse]:
    """Classes the student is enrolled in; empty for unknown students."""
    repo = ClassRepository(db)
    return await _to_responses(repo, await repo.list_by_student(student_id))


async def list_classes_by_semester_and_year(
    db: AsyncSession,
    semester: str,
    academic_year: str,
) -> List[ClassResponse]:
    repo = ClassRepository(db)
    return await _to_responses(repo, await repo.list_by_semester_and_year(semester, academic_year))


async def list_available_classes(db: AsyncSession) -> List[ClassResponse]:
    repo = ClassRepository(db)
    return await _to_responses(repo, await repo.list_available())


async def list_class_students(db: AsyncSession, class_id: int) -> List[StudentResponse]:
    repo = ClassRepository(db)
    await _require_class(repo, class_id)
    return [StudentResponse.model_validate(s) for s in await repo.list_enrolled_students(class_id)]


async def create_class(db: AsyncSession, payload: ClassCreate) -> ClassResponse:
    await _require_subject(db, payload.subject_id)
    await _require_teacher(db, payload.teacher_id)
    obj = SchoolClass(subject_id=payload.subject_id, teacher_id=payload.teacher_id)
    _apply_fields(obj, payload)
    db.add(obj)
    await db.commit()
    await db.refresh(obj)
    logger.info(
        "Created class id=%s name=%r subject_id=%s teacher_id=%s",
        obj.id, obj.name, obj.subject_id, obj.teacher_id,
    )
    return _class_to_response(obj, 0)


async def update_class(db: AsyncSession, class_id: int, payload: ClassUpdate) -> ClassResponse:
    repo = ClassRepository(db)
    obj = await _require_class(repo, class_id, for_update=True)
    if payload.subject_id is not None:
        await _require_subject(db, payload.subject_id)
    if payload.teacher_id is not None:
        await _require_teacher(db, payload.teacher_id)
    enrolled = await repo.count_enrolled(class_id)
    if payload.capacity < enrolled:
        raise ValidationError(
            f"Capacity {payload.capacity} is below the {enrolled} students already enrolled"
        )
    _apply_fields(obj, payload)
    if payload.subject_id is not None:
        obj.subject_id = payload.subject_id
    if payload.teacher_id is not None:
        obj.teacher_id = payload.teacher_id
    await db.commit()
    await db.refresh(obj)
    logger.info("Updated class id=%s", obj.id)
    return _class_to_response(obj, enrolled)


async def delete_class(db: AsyncSession, class_id: int) -> None:
    """Delete the class; its students are unenrolled rather than blocking the delete."""
    repo = ClassRepository(db)
    obj = await _require_class(repo, class_id)
    await repo.clear_enrollments(class_id)
    await db.delete(obj)
    await db.commit()
    logger.info("Deleted class id=%s", class_id)


async def enroll_student(db: AsyncSession, class_id: int, student_id: int) -> ClassResponse:
    repo = ClassRepository(db)
    obj = await _require_class(repo, class_id, for_update=True)
    await _require_student(db, student_id)
    enrolled = await repo.count_enrolled(class_id)
    if enrolled >= obj.capacity:
        logger.warning(
            "Class id=%s is full (%s/%s), student id=%s rejected",
            class_id, enrolled, obj.capacity, student_id,
        )
        await db.rollback()
        raise ClassFullError()
    if await repo.is_enrolled(class_id, student_id):
        await db.rollback()
        raise AlreadyEnrolledError()
    repo.add_enrollment(class_id, student_id)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise AlreadyEnrolledError()
    logger.info(
        "Enrolled student id=%s in class id=%s (%s/%s)",
        student_id, class_id, enrolled + 1, obj.capacity,
    )
    return _class_to_response(obj, enrolled + 1)


async def remove_student(db: AsyncSession, class_id: int, student_id: int) -> ClassResponse:
    repo = ClassRepository(db)
    obj = await _require_class(repo, class_id, for_update=True)
    await _require_student(db, student_id)
    if not await repo.is_enrolled(class_id, student_id):
        await db.rollback()
        raise NotEnrolledError()
    await repo.remove_enrollment(class_id, student_id)
    enrolled = await repo.count_enrolled(class_id)
    await db.commit()
    logger.info("Removed student id=%s from class id=%s", student_id, class_id)
    return _class_to_response(obj, enrolled)
