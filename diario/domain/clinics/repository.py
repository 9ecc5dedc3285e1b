"""Clinic repository - Database operations for clinics, packages and notes"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import Clinic, ClinicNote, ClinicPackage, Patient, Task


class ClinicRepository:
    """Repository for clinic database operations"""

    @staticmethod
    def get_clinics(db: Session, user_id: int, include_archived: bool = False) -> list[Clinic]:
        """Get all clinics for a user"""
        query = db.query(Clinic).filter(Clinic.user_id == user_id)
        if not include_archived:
            query = query.filter(Clinic.is_archived.is_(False))
        return query.order_by(Clinic.name).all()

    @staticmethod
    def get_clinic_by_id(db: Session, clinic_id: int, user_id: int) -> Optional[Clinic]:
        return db.query(Clinic).filter(Clinic.id == clinic_id, Clinic.user_id == user_id).first()

    @staticmethod
    def create_clinic(db: Session, user_id: int, **clinic_data) -> Clinic:
        clinic = Clinic(user_id=user_id, **clinic_data)
        db.add(clinic)
        db.commit()
        db.refresh(clinic)
        return clinic

    @staticmethod
    def update_clinic(db: Session, clinic: Clinic, **updates) -> Clinic:
        for key, value in updates.items():
            if hasattr(clinic, key):
                setattr(clinic, key, value)
        db.commit()
        db.refresh(clinic)
        return clinic

    @staticmethod
    def delete_clinic(db: Session, clinic: Clinic) -> None:
        """Delete a clinic; patients, evolutions, appointments, packages and notes cascade"""
        patient_ids = [p.id for p in clinic.patients]
        if patient_ids:
            db.query(Task).filter(Task.patient_id.in_(patient_ids)).update(
                {Task.patient_id: None}, synchronize_session=False
            )
        db.delete(clinic)
        db.commit()

    # Package Methods
    @staticmethod
    def get_packages(db: Session, clinic_id: int, user_id: int) -> list[ClinicPackage]:
        return (
            db.query(ClinicPackage)
            .filter(ClinicPackage.clinic_id == clinic_id, ClinicPackage.user_id == user_id)
            .order_by(ClinicPackage.created_at, ClinicPackage.id)
            .all()
        )

    @staticmethod
    def get_package_by_id(db: Session, package_id: int, user_id: int) -> Optional[ClinicPackage]:
        return (
            db.query(ClinicPackage)
            .filter(ClinicPackage.id == package_id, ClinicPackage.user_id == user_id)
            .first()
        )

    @staticmethod
    def create_package(db: Session, user_id: int, clinic_id: int, **package_data) -> ClinicPackage:
        package = ClinicPackage(user_id=user_id, clinic_id=clinic_id, **package_data)
        db.add(package)
        db.commit()
        db.refresh(package)
        return package

    @staticmethod
    def update_package(db: Session, package: ClinicPackage, **updates) -> ClinicPackage:
        for key, value in updates.items():
            if value is not None and hasattr(package, key):
                setattr(package, key, value)
        db.commit()
        db.refresh(package)
        return package

    @staticmethod
    def delete_package(db: Session, package: ClinicPackage) -> int:
        """Delete a package and detach it from patients. Returns detached patient count"""
        detached = (
            db.query(Patient)
            .filter(Patient.package_id == package.id)
            .update({Patient.package_id: None}, synchronize_session=False)
        )
        db.delete(package)
        db.commit()
        return detached

    # Note Methods
    @staticmethod
    def get_notes(db: Session, clinic_id: int, user_id: int) -> list[ClinicNote]:
        return (
            db.query(ClinicNote)
            .filter(ClinicNote.clinic_id == clinic_id, ClinicNote.user_id == user_id)
            .order_by(ClinicNote.created_at.desc(), ClinicNote.id.desc())
            .all()
        )

    @staticmethod
    def get_note_by_id(db: Session, note_id: int, user_id: int) -> Optional[ClinicNote]:
        return (
            db.query(ClinicNote)
            .filter(ClinicNote.id == note_id, ClinicNote.user_id == user_id)
            .first()
        )

    @staticmethod
    def create_note(db: Session, user_id: int, clinic_id: int, **note_data) -> ClinicNote:
        note = ClinicNote(user_id=user_id, clinic_id=clinic_id, **note_data)
        db.add(note)
        db.commit()
        db.refresh(note)
        return note

    @staticmethod
    def delete_note(db: Session, note: ClinicNote) -> None:
        db.delete(note)
        db.commit()
