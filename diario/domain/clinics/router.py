"""Clinic router - FastAPI endpoints for clinics, packages and notes"""

import logging

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import get_current_user
from ...database import get_db
from ...models import User
from .schemas import (
    ClinicCreate,
    ClinicNoteCreate,
    ClinicNoteResponse,
    ClinicResponse,
    ClinicUpdate,
    PackageCreate,
    PackageResponse,
    PackageUpdate,
)
from .service import ClinicService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/clinics", tags=["Clinics"])


def get_clinic_service(db: Session = Depends(get_db)) -> ClinicService:
    """Dependency injection for ClinicService"""
    return ClinicService(db)


# ============================================================================
# PACKAGES AND NOTES (by id)
# ============================================================================


@router.put("/packages/{package_id}", response_model=PackageResponse)
def update_package(
    package_id: int,
    data: PackageUpdate,
    current_user: User = Depends(get_current_user),
    service: ClinicService = Depends(get_clinic_service),
):
    return service.update_package(package_id, data, current_user)


@router.delete("/packages/{package_id}")
def delete_package(
    package_id: int,
    current_user: User = Depends(get_current_user),
    service: ClinicService = Depends(get_clinic_service),
):
    return service.delete_package(package_id, current_user)


@router.delete("/notes/{note_id}")
def delete_note(
    note_id: int,
    current_user: User = Depends(get_current_user),
    service: ClinicService = Depends(get_clinic_service),
):
    return service.delete_note(note_id, current_user)


# ============================================================================
# CORE CRUD OPERATIONS
# ============================================================================


@router.get("", response_model=list[ClinicResponse])
def get_clinics(
    include_archived: bool = Query(False),
    current_user: User = Depends(get_current_user),
    service: ClinicService = Depends(get_clinic_service),
):
    """Get the current user's clinics (archived clinics only on request)"""
    return service.get_clinics(current_user, include_archived)


@router.post("", response_model=ClinicResponse, status_code=201)
def create_clinic(
    data: ClinicCreate,
    current_user: User = Depends(get_current_user),
    service: ClinicService = Depends(get_clinic_service),
):
    return service.create_clinic(data, current_user)


@router.get("/{clinic_id}", response_model=ClinicResponse)
def get_clinic(
    clinic_id: int,
    current_user: User = Depends(get_current_user),
    service: ClinicService = Depends(get_clinic_service),
):
    return service.get_clinic(clinic_id, current_user)


@router.put("/{clinic_id}", response_model=ClinicResponse)
def update_clinic(
    clinic_id: int,
    data: ClinicUpdate,
    current_user: User = Depends(get_current_user),
    service: ClinicService = Depends(get_clinic_service),
):
    return service.update_clinic(clinic_id, data, current_user)


@router.delete("/{clinic_id}")
def delete_clinic(
    clinic_id: int,
    current_user: User = Depends(get_current_user),
    service: ClinicService = Depends(get_clinic_service),
):
    """Delete a clinic together with its patients and their records"""
    return service.delete_clinic(clinic_id, current_user)


@router.post("/{clinic_id}/archive", response_model=ClinicResponse)
def archive_clinic(
    clinic_id: int,
    current_user: User = Depends(get_current_user),
    service: ClinicService = Depends(get_clinic_service),
):
    return service.set_archived(clinic_id, True, current_user)


@router.post("/{clinic_id}/unarchive", response_model=ClinicResponse)
def unarchive_clinic(
    clinic_id: int,
    current_user: User = Depends(get_current_user),
    service: ClinicService = Depends(get_clinic_service),
):
    return service.set_archived(clinic_id, False, current_user)


@router.get("/{clinic_id}/packages", response_model=list[PackageResponse])
def get_packages(
    clinic_id: int,
    current_user: User = Depends(get_current_user),
    service: ClinicService = Depends(get_clinic_service),
):
    return service.get_packages(clinic_id, current_user)


@router.post("/{clinic_id}/packages", response_model=PackageResponse, status_code=201)
def create_package(
    clinic_id: int,
    data: PackageCreate,
    current_user: User = Depends(get_current_user),
    service: ClinicService = Depends(get_clinic_service),
):
    return service.create_package(clinic_id, data, current_user)


@router.get("/{clinic_id}/notes", response_model=list[ClinicNoteResponse])
def get_notes(
    clinic_id: int,
    current_user: User = Depends(get_current_user),
    service: ClinicService = Depends(get_clinic_service),
):
    return service.get_notes(clinic_id, current_user)


@router.post("/{clinic_id}/notes", response_model=ClinicNoteResponse, status_code=201)
def create_note(
    clinic_id: int,
    data: ClinicNoteCreate,
    current_user: User = Depends(get_current_user),
    service: ClinicService = Depends(get_clinic_service),
):
    return service.create_note(clinic_id, data, current_user)
