"""Financial repository - loads the record snapshot the calculator works on"""

from collections import defaultdict
from datetime import date
from typing import Optional

from sqlalchemy.orm import Session, joinedload

from ...models import Clinic, Evolution, Patient, PrivateAppointment


class FinancialRepository:
    @staticmethod
    def get_clinics(
        db: Session, user_id: int, clinic_id: Optional[int] = None, include_archived: bool = False
    ) -> list[Clinic]:
        query = db.query(Clinic).filter(Clinic.user_id == user_id)
        if clinic_id is not None:
            query = query.filter(Clinic.id == clinic_id)
        if not include_archived:
            query = query.filter(Clinic.is_archived == False)  # noqa: E712
        return query.order_by(Clinic.name).all()

    @staticmethod
    def get_patients(db: Session, user_id: int, clinic_ids: list[int]) -> list[Patient]:
        if not clinic_ids:
            return []
        return (
            db.query(Patient)
            .options(joinedload(Patient.clinic))
            .filter(Patient.user_id == user_id, Patient.clinic_id.in_(clinic_ids))
            .order_by(Patient.name)
            .all()
        )

    @staticmethod
    def get_evolutions_by_patient(
        db: Session, user_id: int, patient_ids: list[int], start_date: date, end_date: date
    ) -> dict[int, list[Evolution]]:
        """Evolutions in ``[start_date, end_date]`` grouped by patient"""
        grouped = defaultdict(list)
        if not patient_ids:
            return grouped
        evolutions = (
            db.query(Evolution)
            .filter(
                Evolution.user_id == user_id,
                Evolution.patient_id.in_(patient_ids),
                Evolution.date >= start_date,
                Evolution.date <= end_date,
            )
            .all()
        )
        for evolution in evolutions:
            grouped[evolution.patient_id].append(evolution)
        return grouped

    @staticmethod
    def get_private_appointments(
        db: Session, user_id: int, start_date: date, end_date: date
    ) -> list[PrivateAppointment]:
        return (
            db.query(PrivateAppointment)
            .filter(
                PrivateAppointment.user_id == user_id,
                PrivateAppointment.date >= start_date,
                PrivateAppointment.date <= end_date,
            )
            .all()
        )
