"""Patient service - Business logic for patient operations"""

import logging
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models import ClinicPackage, Patient, User
from ..clinics.repository import ClinicRepository
from .repository import PatientRepository
from .schemas import PatientCreate, PatientUpdate

logger = logging.getLogger(__name__)


class PatientService:
    """Service layer for patient business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = PatientRepository()
        self.clinic_repo = ClinicRepository()

    def get_patients(
        self, user: User, clinic_id: Optional[int] = None, search: Optional[str] = None
    ) -> list[Patient]:
        return self.repo.get_patients(self.db, user.id, clinic_id, search)

    def get_patient(self, patient_id: int, user: User) -> Patient:
        patient = self.repo.get_patient_by_id(self.db, patient_id, user.id)
        if not patient:
            raise HTTPException(status_code=404, detail="Patient not found")
        return patient

    def get_birthdays(self, user: User, month: int) -> list[Patient]:
        if not 1 <= month <= 12:
            raise HTTPException(status_code=400, detail="month must be between 1 and 12")
        return self.repo.get_birthdays(self.db, user.id, month)

    def _get_clinic(self, clinic_id: int, user: User):
        clinic = self.clinic_repo.get_clinic_by_id(self.db, clinic_id, user.id)
        if not clinic:
            raise HTTPException(status_code=404, detail="Clinic not found")
        return clinic

    def _get_assignable_package(self, package_id: int, clinic_id: int, user: User) -> ClinicPackage:
        package = self.clinic_repo.get_package_by_id(self.db, package_id, user.id)
        if not package or package.clinic_id != clinic_id:
            raise HTTPException(status_code=400, detail="Package does not belong to this clinic")
        if not package.is_active:
            raise HTTPException(status_code=400, detail="Package is not active")
        return package

    def create_patient(self, data: PatientCreate, user: User) -> Patient:
        """
        Create a patient.

        The payment value is resolved once, here: an assigned package's price
        wins, then an explicit value, then the clinic's default amount.
        """
        logger.info(f"📥 Creating patient for user_id: {user.id}")
        clinic = self._get_clinic(data.clinic_id, user)

        patient_data = data.model_dump()
        if data.package_id is not None:
            package = self._get_assignable_package(data.package_id, clinic.id, user)
            patient_data["payment_value"] = package.price
            logger.info(f"📦 Patient assigned package {package.id} at {package.price}")
        elif data.payment_value is None:
            patient_data["payment_value"] = clinic.payment_amount

        return self.repo.create_patient(self.db, user.id, **patient_data)

    def update_patient(self, patient_id: int, data: PatientUpdate, user: User) -> Patient:
        patient = self.get_patient(patient_id, user)
        updates = data.model_dump(exclude_unset=True)

        for required in ("clinic_id", "name", "birthdate"):
            if required in updates and updates[required] is None:
                del updates[required]

        clinic_id = updates.get("clinic_id", patient.clinic_id)
        clinic_changed = clinic_id != patient.clinic_id
        if clinic_changed:
            self._get_clinic(clinic_id, user)
            if "package_id" not in updates and patient.package_id is not None:
                # Packages are clinic-specific
                updates["package_id"] = None

        new_package_id = updates.get("package_id")
        if new_package_id is not None and (clinic_changed or new_package_id != patient.package_id):
            package = self._get_assignable_package(new_package_id, clinic_id, user)
            # Applies to future computations only; stored evolutions are untouched
            updates["payment_value"] = package.price

        if clinic_changed:
            # Sessions and appointments follow the patient to the new clinic
            moved = self.repo.move_history(self.db, patient.id, clinic_id)
            logger.info(f"🔀 Patient {patient.id} moved to clinic {clinic_id} with {moved} record(s)")

        return self.repo.update_patient(self.db, patient, **updates)

    def delete_patient(self, patient_id: int, user: User) -> dict:
        patient = self.get_patient(patient_id, user)
        self.repo.delete_patient(self.db, patient)
        logger.info(f"🗑️ Deleted patient {patient_id}")
        return {"message": "Patient deleted"}
