"""Scheduling routers - appointments, services, private appointments and events"""

import logging
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import get_current_user
from ...database import get_db
from ...models import User
from .schemas import (
    AppointmentCreate,
    AppointmentResponse,
    AppointmentUpdate,
    EventCreate,
    EventResponse,
    EventUpdate,
    PrivateAppointmentCreate,
    PrivateAppointmentResponse,
    PrivateAppointmentUpdate,
    ServiceCreate,
    ServiceResponse,
    ServiceUpdate,
)
from .service import SchedulingService

logger = logging.getLogger(__name__)

appointments_router = APIRouter(prefix="/appointments", tags=["Appointments"])
services_router = APIRouter(prefix="/services", tags=["Services"])
private_appointments_router = APIRouter(
    prefix="/private-appointments", tags=["Private Appointments"]
)
events_router = APIRouter(prefix="/events", tags=["Events"])


def get_scheduling_service(db: Session = Depends(get_db)) -> SchedulingService:
    """Dependency injection for SchedulingService"""
    return SchedulingService(db)


# ============================================
# Appointments
# ============================================


@appointments_router.get("", response_model=list[AppointmentResponse])
def get_appointments(
    on_date: Optional[date] = Query(None, alias="date"),
    patient_id: Optional[int] = Query(None),
    current_user: User = Depends(get_current_user),
    service: SchedulingService = Depends(get_scheduling_service),
):
    return service.get_appointments(current_user, on_date, patient_id)


@appointments_router.post("", response_model=AppointmentResponse, status_code=201)
def create_appointment(
    data: AppointmentCreate,
    current_user: User = Depends(get_current_user),
    service: SchedulingService = Depends(get_scheduling_service),
):
    return service.create_appointment(data, current_user)


@appointments_router.put("/{appointment_id}", response_model=AppointmentResponse)
def update_appointment(
    appointment_id: int,
    data: AppointmentUpdate,
    current_user: User = Depends(get_current_user),
    service: SchedulingService = Depends(get_scheduling_service),
):
    return service.update_appointment(appointment_id, data, current_user)


@appointments_router.delete("/{appointment_id}")
def delete_appointment(
    appointment_id: int,
    current_user: User = Depends(get_current_user),
    service: SchedulingService = Depends(get_scheduling_service),
):
    return service.delete_appointment(appointment_id, current_user)


# ============================================
# Services
# ============================================


@services_router.get("", response_model=list[ServiceResponse])
def get_services(
    active_only: bool = Query(False),
    current_user: User = Depends(get_current_user),
    service: SchedulingService = Depends(get_scheduling_service),
):
    return service.get_services(current_user, active_only)


@services_router.post("", response_model=ServiceResponse, status_code=201)
def create_service(
    data: ServiceCreate,
    current_user: User = Depends(get_current_user),
    service: SchedulingService = Depends(get_scheduling_service),
):
    return service.create_service(data, current_user)


@services_router.put("/{service_id}", response_model=ServiceResponse)
def update_service(
    service_id: int,
    data: ServiceUpdate,
    current_user: User = Depends(get_current_user),
    service: SchedulingService = Depends(get_scheduling_service),
):
    return service.update_service(service_id, data, current_user)


@services_router.delete("/{service_id}")
def delete_service(
    service_id: int,
    current_user: User = Depends(get_current_user),
    service: SchedulingService = Depends(get_scheduling_service),
):
    return service.delete_service(service_id, current_user)


# ============================================
# Private appointments
# ============================================


@private_appointments_router.get("", response_model=list[PrivateAppointmentResponse])
def get_private_appointments(
    month: Optional[int] = Query(None),
    year: Optional[int] = Query(None),
    current_user: User = Depends(get_current_user),
    service: SchedulingService = Depends(get_scheduling_service),
):
    """List private appointments, optionally limited to one month"""
    return service.get_private_appointments(current_user, month, year)


@private_appointments_router.post("", response_model=PrivateAppointmentResponse, status_code=201)
def create_private_appointment(
    data: PrivateAppointmentCreate,
    current_user: User = Depends(get_current_user),
    service: SchedulingService = Depends(get_scheduling_service),
):
    return service.create_private_appointment(data, current_user)


@private_appointments_router.put("/{appointment_id}", response_model=PrivateAppointmentResponse)
def update_private_appointment(
    appointment_id: int,
    data: PrivateAppointmentUpdate,
    current_user: User = Depends(get_current_user),
    service: SchedulingService = Depends(get_scheduling_service),
):
    return service.update_private_appointment(appointment_id, data, current_user)


@private_appointments_router.delete("/{appointment_id}")
def delete_private_appointment(
    appointment_id: int,
    current_user: User = Depends(get_current_user),
    service: SchedulingService = Depends(get_scheduling_service),
):
    return service.delete_private_appointment(appointment_id, current_user)


# ============================================
# Events
# ============================================


@events_router.get("", response_model=list[EventResponse])
def get_events(
    start: Optional[date] = Query(None),
    end: Optional[date] = Query(None),
    current_user: User = Depends(get_current_user),
    service: SchedulingService = Depends(get_scheduling_service),
):
    return service.get_events(current_user, start, end)


@events_router.post("", response_model=EventResponse, status_code=201)
def create_event(
    data: EventCreate,
    current_user: User = Depends(get_current_user),
    service: SchedulingService = Depends(get_scheduling_service),
):
    return service.create_event(data, current_user)


@events_router.put("/{event_id}", response_model=EventResponse)
def update_event(
    event_id: int,
    data: EventUpdate,
    current_user: User = Depends(get_current_user),
    service: SchedulingService = Depends(get_scheduling_service),
):
    return service.update_event(event_id, data, current_user)


@events_router.delete("/{event_id}")
def delete_event(
    event_id: int,
    current_user: User = Depends(get_current_user),
    service: SchedulingService = Depends(get_scheduling_service),
):
    return service.delete_event(event_id, current_user)
