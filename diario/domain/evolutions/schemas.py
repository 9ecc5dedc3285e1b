"""Evolution domain schemas - Pydantic models for validation"""

import datetime as dt
from typing import Optional

from pydantic import BaseModel, field_validator

from ...models import ATTENDANCE_ABSENT, ATTENDANCE_PRESENT, ATTENDANCE_STATUSES
from ...shared.validators import validate_choice


class EvolutionCreate(BaseModel):
    """Schema for creating an evolution"""

    patient_id: int
    clinic_id: Optional[int] = None  # taken from the patient when omitted
    date: dt.date
    text: str = ""
    attendance_status: str = ATTENDANCE_PRESENT
    confirmed_attendance: Optional[bool] = None
    mood: Optional[str] = None
    signature: Optional[str] = None
    stamp_id: Optional[int] = None

    @field_validator("attendance_status")
    @classmethod
    def check_status(cls, v):
        return validate_choice(v, ATTENDANCE_STATUSES, "attendance_status")


class EvolutionUpdate(BaseModel):
    date: Optional[dt.date] = None
    text: Optional[str] = None
    attendance_status: Optional[str] = None
    confirmed_attendance: Optional[bool] = None
    mood: Optional[str] = None
    signature: Optional[str] = None
    stamp_id: Optional[int] = None

    @field_validator("attendance_status")
    @classmethod
    def check_status(cls, v):
        return validate_choice(v, ATTENDANCE_STATUSES, "attendance_status")


class QuickAttendanceRequest(BaseModel):
    """Presence/absence recorded from the clinic's daily list"""

    patient_id: int
    date: Optional[dt.date] = None
    attendance_status: str = ATTENDANCE_PRESENT
    confirmed_attendance: Optional[bool] = None

    @field_validator("attendance_status")
    @classmethod
    def check_status(cls, v):
        return validate_choice(v, (ATTENDANCE_PRESENT, ATTENDANCE_ABSENT), "attendance_status")


class EvolutionResponse(BaseModel):
    id: int
    patient_id: int
    clinic_id: int
    date: dt.date
    text: str
    attendance_status: str
    confirmed_attendance: Optional[bool] = None
    mood: Optional[str] = None
    signature: Optional[str] = None
    stamp_id: Optional[int] = None
    created_at: Optional[dt.datetime] = None

    class Config:
        from_attributes = True
