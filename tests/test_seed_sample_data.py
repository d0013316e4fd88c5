import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.v1.classes import service as class_service
from app.api.v1.students import service as student_service
from app.db.seed_sample_data import CLASSES, ENROLLMENTS, STUDENTS, seed_sample_data


@pytest.mark.asyncio
async def test_seed_loads_demo_school(db_session: AsyncSession) -> None:
    assert await seed_sample_data(db_session) is True

    classes = await class_service.list_classes(db_session)
    assert len(classes) == len(CLASSES)
    assert sum(c.enrolled_count for c in classes) == len(ENROLLMENTS)
    assert classes[0].name == "Advanced Algebra"
    assert classes[0].enrolled_count == 3

    alice = await student_service.get_student_by_email(db_session, "alice.johnson@student.com")
    alice_classes = await class_service.list_classes_by_student(db_session, alice.id)
    assert [c.name for c in alice_classes] == ["Advanced Algebra", "Physics Fundamentals", "Shakespeare Studies"]
    assert len(await student_service.list_students(db_session)) == len(STUDENTS)


@pytest.mark.asyncio
async def test_seed_is_skipped_when_data_exists(db_session: AsyncSession) -> None:
    await seed_sample_data(db_session)
    assert await seed_sample_data(db_session) is False
    assert len(await class_service.list_classes(db_session)) == len(CLASSES)


@pytest.mark.asyncio
async def test_home_page_links_collections(client: AsyncClient) -> None:
    resp = await client.get("/")
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/html")
    for path in ("/docs", "/api/v1/subjects", "/api/v1/teachers", "/api/v1/students", "/api/v1/classes"):
        assert f'href="{path}"' in resp.text
