"""Clinic service - Business logic for clinics, packages and notes"""

import logging

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models import Clinic, ClinicNote, ClinicPackage, User
from .repository import ClinicRepository
from .schemas import ClinicCreate, ClinicNoteCreate, ClinicUpdate, PackageCreate, PackageUpdate

logger = logging.getLogger(__name__)


def sync_absence_fields(data: dict) -> dict:
    """Keep the legacy pays_on_absence flag consistent with an explicit policy"""
    policy = data.get("absence_payment_type")
    if policy is not None:
        data["pays_on_absence"] = policy != "never"
    elif "absence_payment_type" in data and data.get("pays_on_absence") is None:
        # Clearing the policy falls back to billing every absence
        data["pays_on_absence"] = True
    return data


class ClinicService:
    """Service layer for clinic business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = ClinicRepository()

    def get_clinics(self, user: User, include_archived: bool = False) -> list[Clinic]:
        return self.repo.get_clinics(self.db, user.id, include_archived)

    def get_clinic(self, clinic_id: int, user: User) -> Clinic:
        clinic = self.repo.get_clinic_by_id(self.db, clinic_id, user.id)
        if not clinic:
            raise HTTPException(status_code=404, detail="Clinic not found")
        return clinic

    def create_clinic(self, data: ClinicCreate, user: User) -> Clinic:
        logger.info(f"📥 Creating clinic for user_id: {user.id}")
        clinic_data = sync_absence_fields(data.model_dump())
        clinic = self.repo.create_clinic(self.db, user.id, **clinic_data)
        logger.info(f"✅ Clinic {clinic.id} created")
        return clinic

    def update_clinic(self, clinic_id: int, data: ClinicUpdate, user: User) -> Clinic:
        clinic = self.get_clinic(clinic_id, user)
        updates = sync_absence_fields(data.model_dump(exclude_unset=True))
        for required in ("name", "type", "pays_on_absence"):
            if required in updates and updates[required] is None:
                del updates[required]
        return self.repo.update_clinic(self.db, clinic, **updates)

    def set_archived(self, clinic_id: int, archived: bool, user: User) -> Clinic:
        clinic = self.get_clinic(clinic_id, user)
        logger.info(f"🗄️ Setting clinic {clinic_id} archived={archived}")
        return self.repo.update_clinic(self.db, clinic, is_archived=archived)

    def delete_clinic(self, clinic_id: int, user: User) -> dict:
        clinic = self.get_clinic(clinic_id, user)
        patient_count = len(clinic.patients)
        self.repo.delete_clinic(self.db, clinic)
        logger.info(f"🗑️ Deleted clinic {clinic_id} with {patient_count} patient(s)")
        return {"message": "Clinic deleted", "deletedPatients": patient_count}

    # Package Methods
    def get_packages(self, clinic_id: int, user: User) -> list[ClinicPackage]:
        self.get_clinic(clinic_id, user)
        return self.repo.get_packages(self.db, clinic_id, user.id)

    def get_package(self, package_id: int, user: User) -> ClinicPackage:
        package = self.repo.get_package_by_id(self.db, package_id, user.id)
        if not package:
            raise HTTPException(status_code=404, detail="Package not found")
        return package

    def create_package(self, clinic_id: int, data: PackageCreate, user: User) -> ClinicPackage:
        self.get_clinic(clinic_id, user)
        return self.repo.create_package(self.db, user.id, clinic_id, **data.model_dump())

    def update_package(self, package_id: int, data: PackageUpdate, user: User) -> ClinicPackage:
        """Update a package; patients keep the payment value they were assigned"""
        package = self.get_package(package_id, user)
        return self.repo.update_package(self.db, package, **data.model_dump(exclude_unset=True))

    def delete_package(self, package_id: int, user: User) -> dict:
        package = self.get_package(package_id, user)
        detached = self.repo.delete_package(self.db, package)
        return {"message": "Package deleted", "detachedPatients": detached}

    # Note Methods
    def get_notes(self, clinic_id: int, user: User) -> list[ClinicNote]:
        self.get_clinic(clinic_id, user)
        return self.repo.get_notes(self.db, clinic_id, user.id)

    def create_note(self, clinic_id: int, data: ClinicNoteCreate, user: User) -> ClinicNote:
        self.get_clinic(clinic_id, user)
        return self.repo.create_note(self.db, user.id, clinic_id, **data.model_dump())

    def delete_note(self, note_id: int, user: User) -> dict:
        note = self.repo.get_note_by_id(self.db, note_id, user.id)
        if not note:
            raise HTTPException(status_code=404, detail="Note not found")
        self.repo.delete_note(self.db, note)
        return {"message": "Note deleted"}
