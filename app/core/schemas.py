"""Schema pieces shared by the teacher and student APIs."""

from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field

PHONE_PATTERN = r"^\+?[1-9]\d{1,14}$"


class PersonBase(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    first_name: str = Field(..., min_length=2, max_length=50)
    last_name: str = Field(..., min_length=2, max_length=50)
    email: EmailStr
    phone: Optional[str] = Field(None, pattern=PHONE_PATTERN, description="E.164-like, e.g. +1234567890")
    date_of_birth: Optional[date] = None
