"""Scheduling domain schemas - appointments, services, private appointments and events"""

import datetime as dt
from typing import Optional

from pydantic import BaseModel, field_validator

from ...models import PRIVATE_APPOINTMENT_STATUSES
from ...shared.validators import validate_choice, validate_email, validate_time


def _check_price(v):
    if v is not None and v < 0:
        raise ValueError("price must not be negative")
    return v


# ============================================
# Appointments
# ============================================


class AppointmentCreate(BaseModel):
    patient_id: int
    date: dt.date
    time: str
    notes: Optional[str] = None

    @field_validator("time")
    @classmethod
    def check_time(cls, v):
        return validate_time(v)


class AppointmentUpdate(BaseModel):
    date: Optional[dt.date] = None
    time: Optional[str] = None
    notes: Optional[str] = None

    @field_validator("time")
    @classmethod
    def check_time(cls, v):
        return validate_time(v)


class AppointmentResponse(BaseModel):
    id: int
    patient_id: int
    clinic_id: int
    date: dt.date
    time: str
    notes: Optional[str] = None
    created_at: Optional[dt.datetime] = None

    class Config:
        from_attributes = True


# ============================================
# Services
# ============================================


class ServiceCreate(BaseModel):
    name: str
    description: Optional[str] = None
    type: str = "individual"
    price: float = 0
    duration_minutes: Optional[int] = None
    is_active: bool = True

    @field_validator("name")
    @classmethod
    def check_name(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("name is required")
        return v.strip()

    @field_validator("price")
    @classmethod
    def check_price(cls, v):
        return _check_price(v)


class ServiceUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    type: Optional[str] = None
    price: Optional[float] = None
    duration_minutes: Optional[int] = None
    is_active: Optional[bool] = None

    @field_validator("price")
    @classmethod
    def check_price(cls, v):
        return _check_price(v)


class ServiceResponse(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    type: str
    price: float
    duration_minutes: Optional[int] = None
    is_active: bool

    class Config:
        from_attributes = True


# ============================================
# Private appointments
# ============================================


class PrivateAppointmentCreate(BaseModel):
    client_name: str
    client_email: Optional[str] = None
    client_phone: Optional[str] = None
    service_id: Optional[int] = None
    date: dt.date
    time: str
    price: Optional[float] = None  # defaults to the service price
    status: str = "agendado"
    notes: Optional[str] = None
    paid: bool = False

    @field_validator("client_name")
    @classmethod
    def check_client_name(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("client_name is required")
        return v.strip()

    @field_validator("client_email")
    @classmethod
    def check_email(cls, v):
        return validate_email(v)

    @field_validator("time")
    @classmethod
    def check_time(cls, v):
        return validate_time(v)

    @field_validator("status")
    @classmethod
    def check_status(cls, v):
        return validate_choice(v, PRIVATE_APPOINTMENT_STATUSES, "status")

    @field_validator("price")
    @classmethod
    def check_price(cls, v):
        return _check_price(v)


class PrivateAppointmentUpdate(BaseModel):
    client_name: Optional[str] = None
    client_email: Optional[str] = None
    client_phone: Optional[str] = None
    service_id: Optional[int] = None
    date: Optional[dt.date] = None
    time: Optional[str] = None
    price: Optional[float] = None
    status: Optional[str] = None
    notes: Optional[str] = None
    paid: Optional[bool] = None

    @field_validator("client_email")
    @classmethod
    def check_email(cls, v):
        return validate_email(v)

    @field_validator("time")
    @classmethod
    def check_time(cls, v):
        return validate_time(v)

    @field_validator("status")
    @classmethod
    def check_status(cls, v):
        return validate_choice(v, PRIVATE_APPOINTMENT_STATUSES, "status")

    @field_validator("price")
    @classmethod
    def check_price(cls, v):
        return _check_price(v)


class PrivateAppointmentResponse(BaseModel):
    id: int
    client_name: str
    client_email: Optional[str] = None
    client_phone: Optional[str] = None
    service_id: Optional[int] = None
    date: dt.date
    time: str
    price: float
    status: str
    notes: Optional[str] = None
    paid: Optional[bool] = None

    class Config:
        from_attributes = True


# ============================================
# Events
# ============================================


class EventCreate(BaseModel):
    title: str
    description: Optional[str] = None
    type: str = "event"
    date: dt.date
    time: Optional[str] = None
    end_time: Optional[str] = None
    all_day: bool = False
    color: Optional[str] = None
    reminder_minutes: Optional[int] = None

    @field_validator("title")
    @classmethod
    def check_title(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("title is required")
        return v.strip()

    @field_validator("time", "end_time")
    @classmethod
    def check_time(cls, v):
        return validate_time(v)


class EventUpdate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    type: Optional[str] = None
    date: Optional[dt.date] = None
    time: Optional[str] = None
    end_time: Optional[str] = None
    all_day: Optional[bool] = None
    color: Optional[str] = None
    completed: Optional[bool] = None
    reminder_minutes: Optional[int] = None

    @field_validator("time", "end_time")
    @classmethod
    def check_time(cls, v):
        return validate_time(v)


class EventResponse(BaseModel):
    id: int
    title: str
    description: Optional[str] = None
    type: str
    date: dt.date
    time: Optional[str] = None
    end_time: Optional[str] = None
    all_day: Optional[bool] = None
    color: Optional[str] = None
    completed: Optional[bool] = None
    reminder_minutes: Optional[int] = None

    class Config:
        from_attributes = True
