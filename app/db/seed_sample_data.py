"""
Seed a demo school: five subjects, five teachers, five students, five Fall
2024-2025 classes and fourteen enrollments.

Goes through the services so every rule (unique keys, capacity, ...) applies.
Skipped when the subjects table already has rows.

Run with: python -m app.db.seed_sample_data
"""
import asyncio
import logging
from datetime import date
from typing import Dict, List, Tuple

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.v1.classes import service as class_service
from app.api.v1.classes.schemas import ClassCreate
from app.api.v1.students import service as student_service
from app.api.v1.students.schemas import StudentCreate
from app.api.v1.subjects import service as subject_service
from app.api.v1.subjects.schemas import SubjectCreate
from app.api.v1.teachers import service as teacher_service
from app.api.v1.teachers.schemas import TeacherCreate
from app.core.config import settings
from app.core.logging_config import configure_logging
from app.core.models import Subject
from app.db.session import AsyncSessionLocal, create_all_tables

logger = logging.getLogger(__name__)

# (name, description, credits)
SUBJECTS: List[Tuple[str, str, int]] = [
    ("Mathematics", "Advanced mathematics including algebra, calculus, and geometry", 4),
    ("Physics", "Fundamental principles of physics and mechanics", 3),
    ("Chemistry", "Study of matter, its properties, and reactions", 3),
    ("English Literature", "Study of classic and contemporary literature", 3),
    ("World History", "Comprehensive study of world history", 3),
]

TEACHERS: List[Dict] = [
    dict(first_name="John", last_name="Smith", email="john.smith@school.com", phone="+1234567890",
         date_of_birth=date(1980, 5, 15), hire_date=date(2010, 9, 1), specialization="Mathematics", salary=65000.0),
    dict(first_name="Sarah", last_name="Johnson", email="sarah.johnson@school.com", phone="+1234567891",
         date_of_birth=date(1985, 8, 22), hire_date=date(2012, 9, 1), specialization="Physics", salary=62000.0),
    dict(first_name="Michael", last_name="Brown", email="michael.brown@school.com", phone="+1234567892",
         date_of_birth=date(1978, 3, 10), hire_date=date(2008, 9, 1), specialization="Chemistry", salary=68000.0),
    dict(first_name="Emily", last_name="Davis", email="emily.davis@school.com", phone="+1234567893",
         date_of_birth=date(1982, 12, 5), hire_date=date(2015, 9, 1), specialization="English Literature",
         salary=60000.0),
    dict(first_name="David", last_name="Wilson", email="david.wilson@school.com", phone="+1234567894",
         date_of_birth=date(1975, 7, 18), hire_date=date(2005, 9, 1), specialization="History", salary=63000.0),
]

STUDENTS: List[Dict] = [
    dict(first_name="Alice", last_name="Johnson", email="alice.johnson@student.com", phone="+1987654321",
         date_of_birth=date(2005, 4, 12), enrollment_date=date(2020, 9, 1), address="123 Main St, City",
         grade_level=10, gpa=3.8),
    dict(first_name="Bob", last_name="Williams", email="bob.williams@student.com", phone="+1987654322",
         date_of_birth=date(2004, 11, 8), enrollment_date=date(2019, 9, 1), address="456 Oak Ave, City",
         grade_level=11, gpa=3.5),
    dict(first_name="Carol", last_name="Miller", email="carol.miller@student.com", phone="+1987654323",
         date_of_birth=date(2006, 2, 25), enrollment_date=date(2021, 9, 1), address="789 Pine St, City",
         grade_level=9, gpa=3.9),
    dict(first_name="David", last_name="Garcia", email="david.garcia@student.com", phone="+1987654324",
         date_of_birth=date(2003, 9, 3), enrollment_date=date(2018, 9, 1), address="321 Elm St, City",
         grade_level=12, gpa=3.7),
    dict(first_name="Eva", last_name="Martinez", email="eva.martinez@student.com", phone="+1987654325",
         date_of_birth=date(2005, 7, 19), enrollment_date=date(2020, 9, 1), address="654 Maple Dr, City",
         grade_level=10, gpa=3.6),
]

# (name, description, room, capacity, start, end, days); class i uses subject i and teacher i
CLASSES: List[Tuple[str, str, str, int, str, str, str]] = [
    ("Advanced Algebra", "Advanced algebra concepts and problem solving", "Room 101", 25,
     "08:00", "09:30", "Monday,Wednesday,Friday"),
    ("Physics Fundamentals", "Introduction to physics principles", "Room 202", 20,
     "10:00", "11:30", "Tuesday,Thursday"),
    ("General Chemistry", "Basic chemistry concepts and laboratory work", "Room 203", 18,
     "13:00", "14:30", "Monday,Wednesday"),
    ("Shakespeare Studies", "In-depth study of Shakespeare's works", "Room 104", 22,
     "09:00", "10:30", "Tuesday,Thursday"),
    ("Modern World History", "Study of world history from 1500 to present", "Room 105", 24,
     "14:00", "15:30", "Monday,Wednesday,Friday"),
]

SEMESTER = "Fall"
ACADEMIC_YEAR = "2024-2025"

# (class index, student index)
ENROLLMENTS: List[Tuple[int, int]] = [
    (0, 0), (0, 1), (0, 2),
    (1, 0), (1, 3), (1, 4),
    (2, 1), (2, 2), (2, 3),
    (3, 0), (3, 4),
    (4, 1), (4, 3), (4, 4),
]


async def seed_sample_data(db: AsyncSession) -> bool:
    """Load the demo data. Returns False when the database already has subjects."""
    existing = await db.execute(select(Subject.id).limit(1))
    if existing.scalar_one_or_none() is not None:
        logger.info("Sample data skipped: subjects already present")
        return False

    subjects = [
        await subject_service.create_subject(db, SubjectCreate(name=n, description=d, credits=c))
        for n, d, c in SUBJECTS
    ]
    teachers = [await teacher_service.create_teacher(db, TeacherCreate(**t)) for t in TEACHERS]
    students = [await student_service.create_student(db, StudentCreate(**s)) for s in STUDENTS]

    classes = []
    for i, (name, description, room, capacity, start, end, days) in enumerate(CLASSES):
        payload = ClassCreate(
            name=name,
            description=description,
            room_number=room,
            capacity=capacity,
            start_time=start,
            end_time=end,
            days_of_week=days,
            semester=SEMESTER,
            academic_year=ACADEMIC_YEAR,
            subject_id=subjects[i].id,
            teacher_id=teachers[i].id,
        )
        classes.append(await class_service.create_class(db, payload))

    for class_idx, student_idx in ENROLLMENTS:
        await class_service.enroll_student(db, classes[class_idx].id, students[student_idx].id)

    logger.info(
        "Sample data loaded: %d subjects, %d teachers, %d students, %d classes, %d enrollments",
        len(subjects), len(teachers), len(students), len(classes), len(ENROLLMENTS),
    )
    return True


async def main() -> None:
    """Main entry point for the seed script."""
    configure_logging(settings.log_level)
    await create_all_tables()
    async with AsyncSessionLocal() as db:
        try:
            await seed_sample_data(db)
        except Exception:
            logger.exception("Error seeding sample data")
            await db.rollback()
            raise


if __name__ == "__main__":
    asyncio.run(main())
