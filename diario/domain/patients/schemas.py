"""Patient domain schemas - Pydantic models for validation"""

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, field_validator

from ...models import PATIENT_PAYMENT_TYPES
from ...shared.validators import (
    validate_br_phone,
    validate_choice,
    validate_email,
    validate_schedule_by_day,
    validate_weekdays,
)


class PatientFields(BaseModel):
    phone: Optional[str] = None
    clinical_area: Optional[str] = None
    diagnosis: Optional[str] = None
    professionals: Optional[str] = None
    observations: Optional[str] = None
    responsible_name: Optional[str] = None
    responsible_email: Optional[str] = None
    payment_type: Optional[str] = None
    payment_value: Optional[float] = None
    package_id: Optional[int] = None
    contract_start_date: Optional[date] = None
    weekdays: Optional[list[str]] = None
    schedule_time: Optional[str] = None
    schedule_by_day: Optional[dict[str, dict[str, str]]] = None

    @field_validator("phone")
    @classmethod
    def validate_phone(cls, v):
        if v:
            return validate_br_phone(v)
        return v

    @field_validator("responsible_email")
    @classmethod
    def check_email(cls, v):
        return validate_email(v)

    @field_validator("payment_type")
    @classmethod
    def check_payment_type(cls, v):
        return validate_choice(v, PATIENT_PAYMENT_TYPES, "payment_type")

    @field_validator("payment_value")
    @classmethod
    def check_payment_value(cls, v):
        if v is not None and v < 0:
            raise ValueError("payment_value must not be negative")
        return v

    @field_validator("weekdays")
    @classmethod
    def check_weekdays(cls, v):
        return validate_weekdays(v)

    @field_validator("schedule_by_day")
    @classmethod
    def check_schedule(cls, v):
        return validate_schedule_by_day(v)


class PatientCreate(PatientFields):
    """Schema for creating a patient"""

    clinic_id: int
    name: str
    birthdate: date
    payment_type: Optional[str] = "sessao"

    @field_validator("name")
    @classmethod
    def check_name(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("name is required")
        return v.strip()


class PatientUpdate(PatientFields):
    """Schema for updating a patient"""

    clinic_id: Optional[int] = None
    name: Optional[str] = None
    birthdate: Optional[date] = None


class PatientResponse(BaseModel):
    id: int
    clinic_id: int
    name: str
    birthdate: date
    phone: Optional[str] = None
    clinical_area: Optional[str] = None
    diagnosis: Optional[str] = None
    professionals: Optional[str] = None
    observations: Optional[str] = None
    responsible_name: Optional[str] = None
    responsible_email: Optional[str] = None
    payment_type: Optional[str] = None
    payment_value: Optional[float] = None
    package_id: Optional[int] = None
    contract_start_date: Optional[date] = None
    weekdays: Optional[list[str]] = None
    schedule_time: Optional[str] = None
    schedule_by_day: Optional[dict] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
