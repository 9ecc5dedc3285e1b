"""Patient router - FastAPI endpoints for patient operations"""

import logging
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import get_current_user
from ...database import get_db
from ...models import User
from .schemas import PatientCreate, PatientResponse, PatientUpdate
from .service import PatientService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/patients", tags=["Patients"])


def get_patient_service(db: Session = Depends(get_db)) -> PatientService:
    """Dependency injection for PatientService"""
    return PatientService(db)


@router.get("", response_model=list[PatientResponse])
def get_patients(
    clinic_id: Optional[int] = Query(None),
    search: Optional[str] = Query(None),
    current_user: User = Depends(get_current_user),
    service: PatientService = Depends(get_patient_service),
):
    return service.get_patients(current_user, clinic_id, search)


@router.get("/birthdays", response_model=list[PatientResponse])
def get_birthdays(
    month: Optional[int] = Query(None),
    current_user: User = Depends(get_current_user),
    service: PatientService = Depends(get_patient_service),
):
    """Patients born in the given month (defaults to the current month)"""
    return service.get_birthdays(current_user, month or date.today().month)


@router.post("", response_model=PatientResponse, status_code=201)
def create_patient(
    data: PatientCreate,
    current_user: User = Depends(get_current_user),
    service: PatientService = Depends(get_patient_service),
):
    return service.create_patient(data, current_user)


@router.get("/{patient_id}", response_model=PatientResponse)
def get_patient(
    patient_id: int,
    current_user: User = Depends(get_current_user),
    service: PatientService = Depends(get_patient_service),
):
    return service.get_patient(patient_id, current_user)


@router.put("/{patient_id}", response_model=PatientResponse)
def update_patient(
    patient_id: int,
    data: PatientUpdate,
    current_user: User = Depends(get_current_user),
    service: PatientService = Depends(get_patient_service),
):
    return service.update_patient(patient_id, data, current_user)


@router.delete("/{patient_id}")
def delete_patient(
    patient_id: int,
    current_user: User = Depends(get_current_user),
    service: PatientService = Depends(get_patient_service),
):
    return service.delete_patient(patient_id, current_user)
