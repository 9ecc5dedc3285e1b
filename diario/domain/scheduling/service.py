"""Scheduling service - Business logic for the professional's agenda"""

import logging
from datetime import date
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models import Appointment, Event, PrivateAppointment, Service, User
from ...shared.periods import month_range
from ..patients.repository import PatientRepository
from .repository import SchedulingRepository
from .schemas import (
    AppointmentCreate,
    AppointmentUpdate,
    EventCreate,
    EventUpdate,
    PrivateAppointmentCreate,
    PrivateAppointmentUpdate,
    ServiceCreate,
    ServiceUpdate,
)

logger = logging.getLogger(__name__)


def _drop_nulls(updates: dict, *fields: str) -> dict:
    """Remove explicit nulls for columns that cannot be cleared"""
    for field in fields:
        if field in updates and updates[field] is None:
            del updates[field]
    return updates


class SchedulingService:
    """Service layer for agenda business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = SchedulingRepository()
        self.patient_repo = PatientRepository()

    def _get_or_404(self, model, record_id: int, user: User, label: str):
        record = self.repo.get_owned(self.db, model, record_id, user.id)
        if not record:
            raise HTTPException(status_code=404, detail=f"{label} not found")
        return record

    # ============================================
    # Appointments
    # ============================================

    def get_appointments(
        self, user: User, on_date: Optional[date] = None, patient_id: Optional[int] = None
    ) -> list[Appointment]:
        return self.repo.get_appointments(self.db, user.id, on_date, patient_id)

    def create_appointment(self, data: AppointmentCreate, user: User) -> Appointment:
        patient = self.patient_repo.get_patient_by_id(self.db, data.patient_id, user.id)
        if not patient:
            raise HTTPException(status_code=404, detail="Patient not found")

        appointment = self.repo.create(
            self.db, Appointment, user.id, clinic_id=patient.clinic_id, **data.model_dump()
        )
        logger.info(f"📅 Appointment {appointment.id} scheduled for {appointment.date} {appointment.time}")
        return appointment

    def update_appointment(
        self, appointment_id: int, data: AppointmentUpdate, user: User
    ) -> Appointment:
        appointment = self._get_or_404(Appointment, appointment_id, user, "Appointment")
        updates = _drop_nulls(data.model_dump(exclude_unset=True), "date", "time")
        return self.repo.update(self.db, appointment, **updates)

    def delete_appointment(self, appointment_id: int, user: User) -> dict:
        appointment = self._get_or_404(Appointment, appointment_id, user, "Appointment")
        self.repo.delete(self.db, appointment)
        return {"message": "Appointment deleted"}

    # ============================================
    # Services
    # ============================================

    def get_services(self, user: User, active_only: bool = False) -> list[Service]:
        return self.repo.get_services(self.db, user.id, active_only)

    def create_service(self, data: ServiceCreate, user: User) -> Service:
        return self.repo.create(self.db, Service, user.id, **data.model_dump())

    def update_service(self, service_id: int, data: ServiceUpdate, user: User) -> Service:
        service = self._get_or_404(Service, service_id, user, "Service")
        updates = _drop_nulls(
            data.model_dump(exclude_unset=True), "name", "type", "price", "is_active"
        )
        return self.repo.update(self.db, service, **updates)

    def delete_service(self, service_id: int, user: User) -> dict:
        service = self._get_or_404(Service, service_id, user, "Service")
        # Keep the history of private appointments booked under this service
        self.db.query(PrivateAppointment).filter(
            PrivateAppointment.service_id == service.id
        ).update({PrivateAppointment.service_id: None}, synchronize_session=False)
        self.repo.delete(self.db, service)
        return {"message": "Service deleted"}

    # ============================================
    # Private appointments
    # ============================================

    def get_private_appointments(
        self, user: User, month: Optional[int] = None, year: Optional[int] = None
    ) -> list[PrivateAppointment]:
        if month is None and year is None:
            return self.repo.get_private_appointments(self.db, user.id)

        today = date.today()
        month = month or today.month
        year = year or today.year
        if not 1 <= month <= 12:
            raise HTTPException(status_code=400, detail="month must be between 1 and 12")

        start, end = month_range(date(year, month, 1))
        return self.repo.get_private_appointments(self.db, user.id, start, end)

    def create_private_appointment(
        self, data: PrivateAppointmentCreate, user: User
    ) -> PrivateAppointment:
        appointment_data = data.model_dump()

        if data.service_id is not None:
            service = self._get_or_404(Service, data.service_id, user, "Service")
            if appointment_data["price"] is None:
                appointment_data["price"] = service.price
        if appointment_data["price"] is None:
            appointment_data["price"] = 0

        appointment = self.repo.create(self.db, PrivateAppointment, user.id, **appointment_data)
        logger.info(f"📅 Private appointment {appointment.id} booked for {appointment.client_name}")
        return appointment

    def update_private_appointment(
        self, appointment_id: int, data: PrivateAppointmentUpdate, user: User
    ) -> PrivateAppointment:
        appointment = self._get_or_404(
            PrivateAppointment, appointment_id, user, "Private appointment"
        )
        updates = _drop_nulls(
            data.model_dump(exclude_unset=True), "client_name", "date", "time", "price", "status"
        )
        if updates.get("service_id") is not None:
            self._get_or_404(Service, updates["service_id"], user, "Service")
        return self.repo.update(self.db, appointment, **updates)

    def delete_private_appointment(self, appointment_id: int, user: User) -> dict:
        appointment = self._get_or_404(
            PrivateAppointment, appointment_id, user, "Private appointment"
        )
        self.repo.delete(self.db, appointment)
        return {"message": "Private appointment deleted"}

    # ============================================
    # Events
    # ============================================

    def get_events(
        self, user: User, start_date: Optional[date] = None, end_date: Optional[date] = None
    ) -> list[Event]:
        if start_date and end_date and end_date < start_date:
            raise HTTPException(status_code=400, detail="end must not be before start")
        return self.repo.get_events(self.db, user.id, start_date, end_date)

    def create_event(self, data: EventCreate, user: User) -> Event:
        return self.repo.create(self.db, Event, user.id, **data.model_dump())

    def update_event(self, event_id: int, data: EventUpdate, user: User) -> Event:
        event = self._get_or_404(Event, event_id, user, "Event")
        updates = _drop_nulls(data.model_dump(exclude_unset=True), "title", "type", "date")
        return self.repo.update(self.db, event, **updates)

    def delete_event(self, event_id: int, user: User) -> dict:
        event = self._get_or_404(Event, event_id, user, "Event")
        self.repo.delete(self.db, event)
        return {"message": "Event deleted"}
