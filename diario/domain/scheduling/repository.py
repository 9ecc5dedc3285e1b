"""Scheduling repository - Database operations for agenda records"""

from datetime import date
from typing import Optional

from sqlalchemy.orm import Session

from ...models import Appointment, Event, PrivateAppointment, Service


class SchedulingRepository:
    """Repository for appointments, services, private appointments and events"""

    # Generic helpers shared by the agenda entities

    @staticmethod
    def get_owned(db: Session, model, record_id: int, user_id: int):
        return db.query(model).filter(model.id == record_id, model.user_id == user_id).first()

    @staticmethod
    def create(db: Session, model, user_id: int, **data):
        record = model(user_id=user_id, **data)
        db.add(record)
        db.commit()
        db.refresh(record)
        return record

    @staticmethod
    def update(db: Session, record, **updates):
        for key, value in updates.items():
            if hasattr(record, key):
                setattr(record, key, value)
        db.commit()
        db.refresh(record)
        return record

    @staticmethod
    def delete(db: Session, record) -> None:
        db.delete(record)
        db.commit()

    # Listings

    @staticmethod
    def get_appointments(
        db: Session,
        user_id: int,
        on_date: Optional[date] = None,
        patient_id: Optional[int] = None,
    ) -> list[Appointment]:
        query = db.query(Appointment).filter(Appointment.user_id == user_id)
        if on_date:
            query = query.filter(Appointment.date == on_date)
        if patient_id is not None:
            query = query.filter(Appointment.patient_id == patient_id)
        return query.order_by(Appointment.date, Appointment.time).all()

    @staticmethod
    def get_services(db: Session, user_id: int, active_only: bool = False) -> list[Service]:
        query = db.query(Service).filter(Service.user_id == user_id)
        if active_only:
            query = query.filter(Service.is_active == True)  # noqa: E712
        return query.order_by(Service.name).all()

    @staticmethod
    def get_private_appointments(
        db: Session,
        user_id: int,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[PrivateAppointment]:
        query = db.query(PrivateAppointment).filter(PrivateAppointment.user_id == user_id)
        if start_date:
            query = query.filter(PrivateAppointment.date >= start_date)
        if end_date:
            query = query.filter(PrivateAppointment.date <= end_date)
        return query.order_by(PrivateAppointment.date, PrivateAppointment.time).all()

    @staticmethod
    def get_events(
        db: Session,
        user_id: int,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[Event]:
        query = db.query(Event).filter(Event.user_id == user_id)
        if start_date:
            query = query.filter(Event.date >= start_date)
        if end_date:
            query = query.filter(Event.date <= end_date)
        return query.order_by(Event.date, Event.time).all()
