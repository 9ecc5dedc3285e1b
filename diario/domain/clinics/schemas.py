"""Clinic domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, field_validator

from ...models import (
    ABSENCE_PAYMENT_TYPES,
    CLINIC_NOTE_CATEGORIES,
    CLINIC_PAYMENT_TYPES,
    CLINIC_TYPES,
)
from ...shared.validators import validate_choice, validate_schedule_by_day, validate_weekdays


class ClinicBase(BaseModel):
    address: Optional[str] = None
    notes: Optional[str] = None
    weekdays: Optional[list[str]] = None
    schedule_time: Optional[str] = None
    schedule_by_day: Optional[dict[str, dict[str, str]]] = None
    payment_type: Optional[str] = None
    payment_amount: Optional[float] = None
    absence_payment_type: Optional[str] = None
    letterhead: Optional[str] = None
    stamp: Optional[str] = None

    @field_validator("weekdays")
    @classmethod
    def check_weekdays(cls, v):
        return validate_weekdays(v)

    @field_validator("schedule_by_day")
    @classmethod
    def check_schedule(cls, v):
        return validate_schedule_by_day(v)

    @field_validator("payment_type")
    @classmethod
    def check_payment_type(cls, v):
        return validate_choice(v, CLINIC_PAYMENT_TYPES, "payment_type")

    @field_validator("absence_payment_type")
    @classmethod
    def check_absence_payment_type(cls, v):
        return validate_choice(v, ABSENCE_PAYMENT_TYPES, "absence_payment_type")

    @field_validator("payment_amount")
    @classmethod
    def check_payment_amount(cls, v):
        if v is not None and v < 0:
            raise ValueError("payment_amount must not be negative")
        return v


class ClinicCreate(ClinicBase):
    """Schema for creating a clinic"""

    name: str
    type: str = "propria"
    # Legacy flag; ignored when absence_payment_type is given
    pays_on_absence: bool = True

    @field_validator("name")
    @classmethod
    def check_name(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("name is required")
        return v.strip()

    @field_validator("type")
    @classmethod
    def check_type(cls, v):
        return validate_choice(v, CLINIC_TYPES, "type")


class ClinicUpdate(ClinicBase):
    """Schema for updating a clinic"""

    name: Optional[str] = None
    type: Optional[str] = None
    pays_on_absence: Optional[bool] = None

    @field_validator("name")
    @classmethod
    def check_name(cls, v):
        if v is not None and not v.strip():
            raise ValueError("name must not be empty")
        return v.strip() if v else v

    @field_validator("type")
    @classmethod
    def check_type(cls, v):
        return validate_choice(v, CLINIC_TYPES, "type")


class ClinicResponse(BaseModel):
    id: int
    name: str
    type: str
    address: Optional[str] = None
    notes: Optional[str] = None
    weekdays: Optional[list[str]] = None
    schedule_time: Optional[str] = None
    schedule_by_day: Optional[dict] = None
    payment_type: Optional[str] = None
    payment_amount: Optional[float] = None
    pays_on_absence: bool
    absence_payment_type: Optional[str] = None
    letterhead: Optional[str] = None
    stamp: Optional[str] = None
    is_archived: bool
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class PackageCreate(BaseModel):
    name: str
    description: Optional[str] = None
    price: float
    is_active: bool = True

    @field_validator("name")
    @classmethod
    def check_name(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("name is required")
        return v.strip()

    @field_validator("price")
    @classmethod
    def check_price(cls, v: float) -> float:
        if v < 0:
            raise ValueError("price must not be negative")
        return v


class PackageUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    price: Optional[float] = None
    is_active: Optional[bool] = None

    @field_validator("price")
    @classmethod
    def check_price(cls, v):
        if v is not None and v < 0:
            raise ValueError("price must not be negative")
        return v


class PackageResponse(BaseModel):
    id: int
    clinic_id: int
    name: str
    description: Optional[str] = None
    price: float
    is_active: bool
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ClinicNoteCreate(BaseModel):
    category: str = "general"
    text: str

    @field_validator("category")
    @classmethod
    def check_category(cls, v):
        return validate_choice(v, CLINIC_NOTE_CATEGORIES, "category")

    @field_validator("text")
    @classmethod
    def check_text(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("text is required")
        return v


class ClinicNoteResponse(BaseModel):
    id: int
    clinic_id: int
    category: str
    text: str
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
