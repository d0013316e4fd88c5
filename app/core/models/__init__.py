from app.core.models.subject import Subject
from app.core.models.teacher import Teacher
from app.core.models.student import Student
from app.core.models.class_model import SchoolClass
from app.core.models.class_enrollment import ClassEnrollment

__all__ = [
    "ClassEnrollment",
    "SchoolClass",
    "Student",
    "Subject",
    "Teacher",
]
