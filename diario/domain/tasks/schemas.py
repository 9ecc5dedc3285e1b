"""Task domain schemas"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, field_validator


class TaskCreate(BaseModel):
    title: str
    patient_id: Optional[int] = None

    @field_validator("title")
    @classmethod
    def check_title(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("title is required")
        return v.strip()


class TaskUpdate(BaseModel):
    title: Optional[str] = None
    patient_id: Optional[int] = None
    completed: Optional[bool] = None

    @field_validator("title")
    @classmethod
    def check_title(cls, v):
        if v is not None and not v.strip():
            raise ValueError("title must not be empty")
        return v.strip() if v else v


class TaskResponse(BaseModel):
    id: int
    title: str
    completed: bool
    patient_id: Optional[int] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
