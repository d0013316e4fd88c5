from datetime import date
from typing import Optional

from pydantic import BaseModel, Field

from app.core.schemas import PersonBase


class StudentCreate(PersonBase):
    enrollment_date: Optional[date] = None
    address: Optional[str] = Field(None, max_length=200)
    grade_level: Optional[int] = Field(None, ge=0, le=12)
    gpa: Optional[float] = Field(None, ge=0.0, le=4.0)


class StudentUpdate(StudentCreate):
    """Full-record update: every mutable field is overwritten."""


class StudentResponse(BaseModel):
    id: int
    first_name: str
    last_name: str
    email: str
    phone: Optional[str] = None
    date_of_birth: Optional[date] = None
    enrollment_date: Optional[date] = None
    address: Optional[str] = None
    grade_level: Optional[int] = None
    gpa: Optional[float] = None

    class Config:
        from_attributes = True
