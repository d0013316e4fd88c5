from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class SubjectCreate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=2, max_length=100)
    description: Optional[str] = Field(None, max_length=500)
    credits: Optional[int] = Field(None, ge=0)


class SubjectUpdate(SubjectCreate):
    """Full-record update: every mutable field is overwritten."""


class SubjectResponse(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    credits: Optional[int] = None

    class Config:
        from_attributes = True
