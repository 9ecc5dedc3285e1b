"""Patient repository - Database operations for patients"""

from typing import Optional

from sqlalchemy import extract
from sqlalchemy.orm import Session

from ...models import Appointment, Evolution, Patient, Task


class PatientRepository:
    """Repository for patient database operations"""

    @staticmethod
    def get_patients(
        db: Session,
        user_id: int,
        clinic_id: Optional[int] = None,
        search: Optional[str] = None,
    ) -> list[Patient]:
        """Get patients for a user, optionally filtered by clinic and name"""
        query = db.query(Patient).filter(Patient.user_id == user_id)

        if clinic_id is not None:
            query = query.filter(Patient.clinic_id == clinic_id)

        if search:
            search_term = f"%{search.lower()}%"
            query = query.filter(
                (Patient.name.ilike(search_term))
                | (Patient.diagnosis.ilike(search_term))
                | (Patient.clinical_area.ilike(search_term))
            )

        return query.order_by(Patient.name).all()

    @staticmethod
    def get_patient_by_id(db: Session, patient_id: int, user_id: int) -> Optional[Patient]:
        return (
            db.query(Patient).filter(Patient.id == patient_id, Patient.user_id == user_id).first()
        )

    @staticmethod
    def get_birthdays(db: Session, user_id: int, month: int) -> list[Patient]:
        return (
            db.query(Patient)
            .filter(Patient.user_id == user_id, extract("month", Patient.birthdate) == month)
            .order_by(extract("day", Patient.birthdate), Patient.name)
            .all()
        )

    @staticmethod
    def create_patient(db: Session, user_id: int, **patient_data) -> Patient:
        patient = Patient(user_id=user_id, **patient_data)
        db.add(patient)
        db.commit()
        db.refresh(patient)
        return patient

    @staticmethod
    def update_patient(db: Session, patient: Patient, **updates) -> Patient:
        for key, value in updates.items():
            if hasattr(patient, key):
                setattr(patient, key, value)
        db.commit()
        db.refresh(patient)
        return patient

    @staticmethod
    def move_history(db: Session, patient_id: int, clinic_id: int) -> int:
        """Point a patient's evolutions and appointments at another clinic; caller commits"""
        moved = 0
        for model in (Evolution, Appointment):
            moved += (
                db.query(model)
                .filter(model.patient_id == patient_id)
                .update({model.clinic_id: clinic_id}, synchronize_session=False)
            )
        return moved

    @staticmethod
    def delete_patient(db: Session, patient: Patient) -> None:
        """Delete a patient; evolutions and appointments cascade, tasks are kept"""
        db.query(Task).filter(Task.patient_id == patient.id).update(
            {Task.patient_id: None}, synchronize_session=False
        )
        db.delete(patient)
        db.commit()
