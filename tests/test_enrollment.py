import asyncio
from datetime import datetime

import pytest
from httpx import AsyncClient
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from app.api.v1.classes import service
from app.api.v1.classes.schemas import ClassCreate
from app.api.v1.students import service as student_service
from app.api.v1.students.schemas import StudentCreate
from app.api.v1.subjects import service as subject_service
from app.api.v1.subjects.schemas import SubjectCreate
from app.api.v1.teachers import service as teacher_service
from app.api.v1.teachers.schemas import TeacherCreate
from app.core.enums import EnrollmentStatus
from app.core.exceptions import (
    AlreadyEnrolledError,
    ClassFullError,
    NotEnrolledError,
    NotFoundError,
)
from app.core.models import ClassEnrollment
from app.db.session import Base, use_immediate_transactions


@pytest.mark.asyncio
async def test_capacity_two_walkthrough(db_session: AsyncSession, make_class, make_student) -> None:
    school_class = await make_class(capacity=2)
    a, b, c = [await make_student() for _ in range(3)]

    state = await service.enroll_student(db_session, school_class.id, a.id)
    assert (state.enrolled_count, state.enrollment_status) == (1, EnrollmentStatus.OPEN)

    state = await service.enroll_student(db_session, school_class.id, b.id)
    assert (state.enrolled_count, state.enrollment_status) == (2, EnrollmentStatus.FULL)

    with pytest.raises(ClassFullError):
        await service.enroll_student(db_session, school_class.id, c.id)

    state = await service.remove_student(db_session, school_class.id, a.id)
    assert (state.enrolled_count, state.enrollment_status) == (1, EnrollmentStatus.OPEN)

    state = await service.enroll_student(db_session, school_class.id, c.id)
    assert state.enrollment_status == EnrollmentStatus.FULL

    enrolled = await service.list_class_students(db_session, school_class.id)
    assert {s.id for s in enrolled} == {b.id, c.id}


@pytest.mark.asyncio
async def test_enrolled_count_never_exceeds_capacity(db_session: AsyncSession, make_class, make_student) -> None:
    school_class = await make_class(capacity=3)
    rejected = 0
    for _ in range(6):
        student = await make_student()
        try:
            await service.enroll_student(db_session, school_class.id, student.id)
        except ClassFullError:
            rejected += 1

    current = await service.get_class(db_session, school_class.id)
    assert current.enrolled_count == 3
    assert rejected == 3


@pytest.mark.asyncio
async def test_enrolling_twice_fails(db_session: AsyncSession, make_class, make_student) -> None:
    school_class = await make_class(capacity=5)
    student = await make_student()

    await service.enroll_student(db_session, school_class.id, student.id)
    with pytest.raises(AlreadyEnrolledError):
        await service.enroll_student(db_session, school_class.id, student.id)

    assert (await service.get_class(db_session, school_class.id)).enrolled_count == 1


@pytest.mark.asyncio
async def test_full_class_reports_full_before_duplicate(db_session: AsyncSession, make_class, make_student) -> None:
    school_class = await make_class(capacity=1)
    student = await make_student()
    await service.enroll_student(db_session, school_class.id, student.id)

    with pytest.raises(ClassFullError):
        await service.enroll_student(db_session, school_class.id, student.id)


@pytest.mark.asyncio
async def test_removing_unenrolled_student_fails(db_session: AsyncSession, make_class, make_student) -> None:
    school_class = await make_class()
    enrolled = await make_student()
    outsider = await make_student()
    await service.enroll_student(db_session, school_class.id, enrolled.id)

    with pytest.raises(NotEnrolledError):
        await service.remove_student(db_session, school_class.id, outsider.id)

    assert (await service.get_class(db_session, school_class.id)).enrolled_count == 1

    await service.remove_student(db_session, school_class.id, enrolled.id)
    with pytest.raises(NotEnrolledError):
        await service.remove_student(db_session, school_class.id, enrolled.id)


@pytest.mark.asyncio
async def test_unknown_class_or_student(db_session: AsyncSession, make_class, make_student) -> None:
    school_class = await make_class()
    student = await make_student()

    with pytest.raises(NotFoundError, match="Class not found"):
        await service.enroll_student(db_session, 999, student.id)
    with pytest.raises(NotFoundError, match="Student not found"):
        await service.enroll_student(db_session, school_class.id, 999)
    with pytest.raises(NotFoundError, match="Student not found"):
        await service.remove_student(db_session, school_class.id, 999)
    with pytest.raises(NotFoundError):
        await service.list_class_students(db_session, 999)


@pytest.mark.asyncio
async def test_enrollment_endpoints(client: AsyncClient, make_class, make_student) -> None:
    school_class = await make_class(capacity=1)
    first = await make_student()
    second = await make_student()
    url = f"/api/v1/classes/{school_class.id}/enroll"

    resp = await client.post(f"{url}/{first.id}")
    assert resp.status_code == 200
    assert resp.json()["enrollment_status"] == "FULL"

    resp = await client.post(f"{url}/{second.id}")
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Class is full"

    resp = await client.get(f"/api/v1/classes/student/{first.id}")
    assert [c["id"] for c in resp.json()] == [school_class.id]
    resp = await client.get(f"/api/v1/classes/{school_class.id}/students")
    assert [s["id"] for s in resp.json()] == [first.id]

    resp = await client.delete(f"/api/v1/students/{first.id}")
    assert resp.status_code == 400

    resp = await client.delete(f"{url}/{second.id}")
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Student is not enrolled in this class"

    resp = await client.delete(f"{url}/{first.id}")
    assert resp.status_code == 200
    assert resp.json()["enrolled_count"] == 0

    resp = await client.post(f"/api/v1/classes/999/enroll/{first.id}")
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_enrollment_records_timestamp(db_session: AsyncSession, make_class, make_student) -> None:
    school_class = await make_class(capacity=1)
    student = await make_student()
    await service.enroll_student(db_session, school_class.id, student.id)

    row = (await db_session.execute(select(ClassEnrollment))).scalar_one()
    assert (row.class_id, row.student_id) == (school_class.id, student.id)
    assert isinstance(row.enrolled_at, datetime)


@pytest.fixture()
async def file_sessions(tmp_path):
    """Session factory over a file-backed database so each session gets its own connection."""
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'school.db'}",
        connect_args={"check_same_thread": False, "timeout": 30},
    )
    use_immediate_transactions(engine)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)
    await engine.dispose()


@pytest.mark.asyncio
@pytest.mark.parametrize("capacity", [1, 3])
async def test_concurrent_enrollments_respect_capacity(file_sessions, capacity: int) -> None:
    async with file_sessions() as db:
        subject = await subject_service.create_subject(db, SubjectCreate(name="Physics"))
        teacher = await teacher_service.create_teacher(
            db, TeacherCreate(first_name="Marie", last_name="Curie", email="curie@school.com")
        )
        school_class = await service.create_class(
            db,
            ClassCreate(name="Mechanics", capacity=capacity, subject_id=subject.id, teacher_id=teacher.id),
        )
        students = [
            await student_service.create_student(
                db, StudentCreate(first_name="Student", last_name=f"Number{n}", email=f"s{n}@student.com")
            )
            for n in range(6)
        ]

    async def attempt(student_id: int) -> str:
        # One session per request, as the API dependency hands out.
        async with file_sessions() as db:
            try:
                await service.enroll_student(db, school_class.id, student_id)
            except ClassFullError:
                return "full"
            return "ok"

    results = await asyncio.gather(*(attempt(s.id) for s in students))

    assert results.count("ok") == capacity
    assert results.count("full") == len(students) - capacity
    async with file_sessions() as db:
        current = await service.get_class(db, school_class.id)
    assert current.enrolled_count == capacity
    assert current.enrollment_status == EnrollmentStatus.FULL
