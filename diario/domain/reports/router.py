"""Report router - attendance statistics and dashboard"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import get_current_user
from ...database import get_db
from ...models import User
from .schemas import AttendanceReport, DashboardResponse
from .service import ReportService

router = APIRouter(prefix="/reports", tags=["Reports"])


def get_report_service(db: Session = Depends(get_db)) -> ReportService:
    """Dependency injection for ReportService"""
    return ReportService(db)


@router.get("/attendance", response_model=AttendanceReport)
def get_attendance_report(
    period: str = Query("week"),
    clinic_id: Optional[int] = Query(None),
    current_user: User = Depends(get_current_user),
    service: ReportService = Depends(get_report_service),
):
    """Presence/absence counts for the current week (Monday start) or month"""
    return service.get_attendance_report(current_user, period, clinic_id)


@router.get("/dashboard", response_model=DashboardResponse)
def get_dashboard(
    current_user: User = Depends(get_current_user),
    service: ReportService = Depends(get_report_service),
):
    return service.get_dashboard(current_user)
