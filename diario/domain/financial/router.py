"""Financial router - revenue summaries and export"""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import get_current_user
from ...database import get_db
from ...models import User
from .schemas import FinancialSummary, PatientFinancialSummary
from .service import FinancialService

router = APIRouter(prefix="/financial", tags=["Financial"])


def get_financial_service(db: Session = Depends(get_db)) -> FinancialService:
    """Dependency injection for FinancialService"""
    return FinancialService(db)


@router.get("/summary", response_model=FinancialSummary)
def get_summary(
    start: Optional[date] = Query(None),
    end: Optional[date] = Query(None),
    clinic_id: Optional[int] = Query(None),
    include_archived: bool = Query(False),
    current_user: User = Depends(get_current_user),
    service: FinancialService = Depends(get_financial_service),
):
    """Revenue, loss and net per patient and clinic, plus private revenue"""
    return service.get_summary(current_user, start, end, clinic_id, include_archived)


@router.get("/patients/{patient_id}", response_model=PatientFinancialSummary)
def get_patient_summary(
    patient_id: int,
    start: Optional[date] = Query(None),
    end: Optional[date] = Query(None),
    current_user: User = Depends(get_current_user),
    service: FinancialService = Depends(get_financial_service),
):
    return service.get_patient_summary(patient_id, current_user, start, end)


@router.get("/export")
def export_summary_csv(
    start: Optional[date] = Query(None),
    end: Optional[date] = Query(None),
    clinic_id: Optional[int] = Query(None),
    include_archived: bool = Query(False),
    current_user: User = Depends(get_current_user),
    service: FinancialService = Depends(get_financial_service),
):
    """Export the per-patient summary rows as CSV"""
    return service.export_summary_csv(current_user, start, end, clinic_id, include_archived)
