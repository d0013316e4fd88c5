import itertools
from typing import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.api.v1.classes import service as class_service
from app.api.v1.classes.schemas import ClassCreate
from app.api.v1.students import service as student_service
from app.api.v1.students.schemas import StudentCreate
from app.api.v1.subjects import service as subject_service
from app.api.v1.subjects.schemas import SubjectCreate
from app.api.v1.teachers import service as teacher_service
from app.api.v1.teachers.schemas import TeacherCreate
from app.db.session import Base, get_db, use_immediate_transactions
from app.main import app


TEST_DATABASE_URL = "sqlite+aiosqlite://"


@pytest.fixture()
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Fresh in-memory database per test; overrides the FastAPI dependency."""
    # StaticPool keeps the single in-memory connection alive across sessions.
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    use_immediate_transactions(engine)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async_session = async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session() as session:

        async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
            yield session

        app.dependency_overrides[get_db] = override_get_db
        yield session

    app.dependency_overrides.clear()
    await engine.dispose()


@pytest.fixture()
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client bound to the FastAPI app."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest.fixture()
def make_subject(db_session: AsyncSession):
    seq = itertools.count(1)

    async def _make(**overrides):
        data = {"name": f"Subject {next(seq)}", "description": "Test subject", "credits": 3}
        data.update(overrides)
        return await subject_service.create_subject(db_session, SubjectCreate(**data))

    return _make


@pytest.fixture()
def make_teacher(db_session: AsyncSession):
    seq = itertools.count(1)

    async def _make(**overrides):
        n = next(seq)
        data = {
            "first_name": "Grace",
            "last_name": f"Hopper{n}",
            "email": f"teacher{n}@school.com",
            "phone": "+1234567890",
            "specialization": "Mathematics",
            "salary": 60000.0,
        }
        data.update(overrides)
        return await teacher_service.create_teacher(db_session, TeacherCreate(**data))

    return _make


@pytest.fixture()
def make_student(db_session: AsyncSession):
    seq = itertools.count(1)

    async def _make(**overrides):
        n = next(seq)
        data = {
            "first_name": "Alan",
            "last_name": f"Turing{n}",
            "email": f"student{n}@student.com",
            "grade_level": 10,
            "gpa": 3.5,
        }
        data.update(overrides)
        return await student_service.create_student(db_session, StudentCreate(**data))

    return _make


@pytest.fixture()
def make_class(db_session: AsyncSession, make_subject, make_teacher):
    seq = itertools.count(1)

    async def _make(**overrides):
        data = {
            "name": f"Class {next(seq)}",
            "room_number": "Room 101",
            "capacity": 25,
            "start_time": "08:00",
            "end_time": "09:30",
            "days_of_week": "Monday,Wednesday,Friday",
            "semester": "Fall",
            "academic_year": "2024-2025",
        }
        data.update(overrides)
        if "subject_id" not in data:
            data["subject_id"] = (await make_subject()).id
        if "teacher_id" not in data:
            data["teacher_id"] = (await make_teacher()).id
        return await class_service.create_class(db_session, ClassCreate(**data))

    return _make
