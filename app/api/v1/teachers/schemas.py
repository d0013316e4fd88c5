from datetime import date
from typing import Optional

from pydantic import BaseModel, Field

from app.core.schemas import PersonBase


class TeacherCreate(PersonBase):
    hire_date: Optional[date] = None
    specialization: Optional[str] = Field(None, max_length=100)
    salary: Optional[float] = Field(None, ge=0)


class TeacherUpdate(TeacherCreate):
    """Full-record update: every mutable field is overwritten."""


class TeacherResponse(BaseModel):
    id: int
    first_name: str
    last_name: str
    email: str
    phone: Optional[str] = None
    date_of_birth: Optional[date] = None
    hire_date: Optional[date] = None
    specialization: Optional[str] = None
    salary: Optional[float] = None

    class Config:
        from_attributes = True
