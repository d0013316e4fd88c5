from datetime import datetime, time
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator, model_validator

from app.core.enums import EnrollmentStatus, Weekday

_WEEKDAYS = {d.value.lower(): d.value for d in Weekday}


def _parse_time_24(v: Union[str, time]) -> time:
    """Parse 24-hour time string (HH:MM or HH:MM:SS) to time."""
    if isinstance(v, time):
        return v
    if isinstance(v, str):
        v = v.strip()
        if len(v) == 5:  # HH:MM
            return datetime.strptime(v, "%H:%M").time()
        return datetime.strptime(v, "%H:%M:%S").time()
    raise ValueError("start_time/end_time must be 24-hour string (e.g. 09:00, 13:30) or time")


def _normalize_days(v: Optional[str]) -> Optional[str]:
    """'monday, Wednesday' -> 'Monday,Wednesday'. Unknown names are rejected, repeats dropped."""
    if v is None:
        return None
    days = []
    for part in v.split(","):
        part = part.strip()
        if not part:
            continue
        day = _WEEKDAYS.get(part.lower())
        if day is None:
            raise ValueError(f"Unknown day of week: {part!r}")
        if day not in days:
            days.append(day)
    return ",".join(days) or None


class ClassFields(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=2, max_length=100)
    description: Optional[str] = Field(None, max_length=500)
    room_number: Optional[str] = Field(None, max_length=50)
    capacity: int = Field(..., gt=0)
    start_time: Optional[Union[str, time]] = Field(None, description="24-hour format, e.g. 08:00")
    end_time: Optional[Union[str, time]] = Field(None, description="24-hour format, e.g. 09:30")
    days_of_week: Optional[str] = Field(None, max_length=100, description="Comma list, e.g. Monday,Wednesday,Friday")
    semester: Optional[str] = Field(None, max_length=20)
    academic_year: Optional[str] = Field(None, max_length=20, description="e.g. 2024-2025")

    @field_validator("start_time", "end_time", mode="before")
    @classmethod
    def parse_time(cls, v: Optional[Union[str, time]]) -> Optional[time]:
        if v is None:
            return None
        return _parse_time_24(v)

    @field_validator("days_of_week")
    @classmethod
    def normalize_days(cls, v: Optional[str]) -> Optional[str]:
        return _normalize_days(v)

    @model_validator(mode="after")
    def check_time_range(self) -> "ClassFields":
        if self.start_time is not None and self.end_time is not None and self.end_time <= self.start_time:
            raise ValueError("end_time must be after start_time")
        return self


class ClassCreate(ClassFields):
    subject_id: int
    teacher_id: int


class ClassUpdate(ClassFields):
    """Scalar fields are always overwritten; subject/teacher are rebound only when given."""

    subject_id: Optional[int] = None
    teacher_id: Optional[int] = None


class ClassResponse(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    room_number: Optional[str] = None
    capacity: int
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    days_of_week: Optional[str] = None
    semester: Optional[str] = None
    academic_year: Optional[str] = None
    subject_id: int
    teacher_id: int
    enrolled_count: int
    enrollment_status: EnrollmentStatus

    class Config:
        from_attributes = True

    @field_serializer("start_time", "end_time")
    def serialize_time_24(self, t: Optional[time]) -> Optional[str]:
        """Output as 24-hour string HH:MM (e.g. 08:00, 13:30)."""
        return t.strftime("%H:%M") if t is not None else None
