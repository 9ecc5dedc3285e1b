"""Evolution router - FastAPI endpoints for evolutions"""

import logging
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import get_current_user
from ...database import get_db
from ...models import User
from .schemas import EvolutionCreate, EvolutionResponse, EvolutionUpdate, QuickAttendanceRequest
from .service import EvolutionService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/evolutions", tags=["Evolutions"])


def get_evolution_service(db: Session = Depends(get_db)) -> EvolutionService:
    """Dependency injection for EvolutionService"""
    return EvolutionService(db)


@router.get("", response_model=list[EvolutionResponse])
def get_evolutions(
    patient_id: Optional[int] = Query(None),
    clinic_id: Optional[int] = Query(None),
    start: Optional[date] = Query(None),
    end: Optional[date] = Query(None),
    current_user: User = Depends(get_current_user),
    service: EvolutionService = Depends(get_evolution_service),
):
    """Get evolutions ordered by date, optionally filtered"""
    return service.get_evolutions(current_user, patient_id, clinic_id, start, end)


@router.post("", response_model=EvolutionResponse, status_code=201)
def create_evolution(
    data: EvolutionCreate,
    current_user: User = Depends(get_current_user),
    service: EvolutionService = Depends(get_evolution_service),
):
    return service.create_evolution(data, current_user)


@router.post("/attendance", response_model=EvolutionResponse, status_code=201)
def record_attendance(
    data: QuickAttendanceRequest,
    current_user: User = Depends(get_current_user),
    service: EvolutionService = Depends(get_evolution_service),
):
    """Quick presence/absence registration"""
    return service.record_attendance(data, current_user)


@router.get("/{evolution_id}", response_model=EvolutionResponse)
def get_evolution(
    evolution_id: int,
    current_user: User = Depends(get_current_user),
    service: EvolutionService = Depends(get_evolution_service),
):
    return service.get_evolution(evolution_id, current_user)


@router.put("/{evolution_id}", response_model=EvolutionResponse)
def update_evolution(
    evolution_id: int,
    data: EvolutionUpdate,
    current_user: User = Depends(get_current_user),
    service: EvolutionService = Depends(get_evolution_service),
):
    return service.update_evolution(evolution_id, data, current_user)


@router.delete("/{evolution_id}")
def delete_evolution(
    evolution_id: int,
    current_user: User = Depends(get_current_user),
    service: EvolutionService = Depends(get_evolution_service),
):
    return service.delete_evolution(evolution_id, current_user)
