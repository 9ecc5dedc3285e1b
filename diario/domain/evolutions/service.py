"""Evolution service - Business logic for session notes and attendance"""

import logging
from datetime import date
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models import ATTENDANCE_ABSENT, Evolution, Stamp, User
from ..patients.repository import PatientRepository
from .repository import EvolutionRepository
from .schemas import EvolutionCreate, EvolutionUpdate, QuickAttendanceRequest

logger = logging.getLogger(__name__)

ABSENCE_DEFAULT_TEXT = "Paciente faltou à sessão."


class EvolutionService:
    """Service layer for evolution business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = EvolutionRepository()
        self.patient_repo = PatientRepository()

    def get_evolutions(
        self,
        user: User,
        patient_id: Optional[int] = None,
        clinic_id: Optional[int] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[Evolution]:
        return self.repo.get_evolutions(
            self.db, user.id, patient_id, clinic_id, start_date, end_date
        )

    def get_evolution(self, evolution_id: int, user: User) -> Evolution:
        evolution = self.repo.get_evolution_by_id(self.db, evolution_id, user.id)
        if not evolution:
            raise HTTPException(status_code=404, detail="Evolution not found")
        return evolution

    def _check_stamp(self, stamp_id: Optional[int], user: User) -> None:
        if stamp_id is None:
            return
        stamp = self.db.query(Stamp).filter(Stamp.id == stamp_id, Stamp.user_id == user.id).first()
        if not stamp:
            raise HTTPException(status_code=400, detail="Stamp not found")

    def create_evolution(self, data: EvolutionCreate, user: User) -> Evolution:
        patient = self.patient_repo.get_patient_by_id(self.db, data.patient_id, user.id)
        if not patient:
            raise HTTPException(status_code=404, detail="Patient not found")

        if data.clinic_id is not None and data.clinic_id != patient.clinic_id:
            raise HTTPException(status_code=400, detail="Patient does not belong to this clinic")
        self._check_stamp(data.stamp_id, user)

        evolution_data = data.model_dump()
        evolution_data["clinic_id"] = patient.clinic_id

        evolution = self.repo.create_evolution(self.db, user.id, **evolution_data)
        logger.info(
            f"📝 Evolution {evolution.id} recorded for patient {patient.id} ({evolution.attendance_status})"
        )
        return evolution

    def record_attendance(self, data: QuickAttendanceRequest, user: User) -> Evolution:
        """Record a presence or absence with a default note"""
        text = ABSENCE_DEFAULT_TEXT if data.attendance_status == ATTENDANCE_ABSENT else ""
        return self.create_evolution(
            EvolutionCreate(
                patient_id=data.patient_id,
                date=data.date or date.today(),
                text=text,
                attendance_status=data.attendance_status,
                confirmed_attendance=data.confirmed_attendance,
            ),
            user,
        )

    def update_evolution(self, evolution_id: int, data: EvolutionUpdate, user: User) -> Evolution:
        evolution = self.get_evolution(evolution_id, user)
        updates = data.model_dump(exclude_unset=True)
        for required in ("date", "text", "attendance_status"):
            if required in updates and updates[required] is None:
                del updates[required]
        if "stamp_id" in updates:
            self._check_stamp(updates["stamp_id"], user)
        return self.repo.update_evolution(self.db, evolution, **updates)

    def delete_evolution(self, evolution_id: int, user: User) -> dict:
        evolution = self.get_evolution(evolution_id, user)
        self.repo.delete_evolution(self.db, evolution)
        return {"message": "Evolution deleted"}
