"""Report service - attendance statistics and the dashboard overview"""

import logging
import math
from collections import defaultdict
from datetime import date
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models import Clinic, Patient, Task, User
from ...shared.periods import each_day, month_range, week_range
from ..evolutions.repository import EvolutionRepository
from ..financial.calculator import partition_attendance
from ..financial.service import FinancialService
from ..patients.repository import PatientRepository
from ..scheduling.repository import SchedulingRepository
from ..scheduling.schemas import AppointmentResponse
from .schemas import (
    AttendanceReport,
    AttendanceTotals,
    ClinicAttendance,
    DailyAttendance,
    DashboardResponse,
)

logger = logging.getLogger(__name__)

PERIODS = ("week", "month")


def presence_rate(present: int, total: int) -> int:
    """Percentage of present sessions, rounded half up; 0 when nothing was recorded"""
    if not total:
        return 0
    return math.floor(present / total * 100 + 0.5)


def attendance_totals(evolutions: list) -> dict:
    buckets = partition_attendance(evolutions)
    return {
        "present": buckets.present,
        "absent": buckets.absent,
        "paid_absent": buckets.paid_absent,
        "total": buckets.total,
        "presence_rate": presence_rate(buckets.present, buckets.total),
    }


class ReportService:
    def __init__(self, db: Session):
        self.db = db
        self.evolution_repo = EvolutionRepository()

    def get_attendance_report(
        self,
        user: User,
        period: str = "week",
        clinic_id: Optional[int] = None,
        today: Optional[date] = None,
    ) -> AttendanceReport:
        if period not in PERIODS:
            raise HTTPException(status_code=400, detail="period must be one of: week, month")

        today = today or date.today()
        start, end = week_range(today) if period == "week" else month_range(today)

        clinics_query = self.db.query(Clinic).filter(Clinic.user_id == user.id)
        if clinic_id is not None:
            clinics_query = clinics_query.filter(Clinic.id == clinic_id)
            if not clinics_query.first():
                raise HTTPException(status_code=404, detail="Clinic not found")
        else:
            clinics_query = clinics_query.filter(Clinic.is_archived == False)  # noqa: E712
        clinics = clinics_query.order_by(Clinic.name).all()
        clinic_ids = {c.id for c in clinics}

        evolutions = [
            e
            for e in self.evolution_repo.get_evolutions(
                self.db, user.id, clinic_id=clinic_id, start_date=start, end_date=end
            )
            if e.clinic_id in clinic_ids
        ]

        by_day = defaultdict(list)
        by_clinic = defaultdict(list)
        for evolution in evolutions:
            by_day[evolution.date].append(evolution)
            by_clinic[evolution.clinic_id].append(evolution)

        daily = [DailyAttendance(date=day, **attendance_totals(by_day[day])) for day in each_day(start, end)]
        clinic_rows = [
            ClinicAttendance(clinic_id=c.id, clinic_name=c.name, **attendance_totals(by_clinic[c.id]))
            for c in clinics
        ]

        return AttendanceReport(
            period=period,
            start=start,
            end=end,
            clinic_id=clinic_id,
            totals=AttendanceTotals(**attendance_totals(evolutions)),
            daily=daily,
            clinics=clinic_rows,
        )

    def get_dashboard(self, user: User, today: Optional[date] = None) -> DashboardResponse:
        today = today or date.today()

        active_clinic_ids = [
            c.id
            for c in self.db.query(Clinic.id).filter(
                Clinic.user_id == user.id, Clinic.is_archived == False  # noqa: E712
            )
        ]
        patient_count = 0
        if active_clinic_ids:
            patient_count = (
                self.db.query(Patient)
                .filter(Patient.user_id == user.id, Patient.clinic_id.in_(active_clinic_ids))
                .count()
            )
        pending_tasks = (
            self.db.query(Task)
            .filter(Task.user_id == user.id, Task.completed == False)  # noqa: E712
            .count()
        )
        birthdays = PatientRepository.get_birthdays(self.db, user.id, today.month)
        appointments = SchedulingRepository.get_appointments(self.db, user.id, on_date=today)

        start, end = month_range(today)
        summary = FinancialService(self.db).get_summary(user, start, end)

        return DashboardResponse(
            clinics=len(active_clinic_ids),
            patients=patient_count,
            pending_tasks=pending_tasks,
            birthdays_this_month=len(birthdays),
            today_appointments=[AppointmentResponse.model_validate(a) for a in appointments],
            month_revenue=summary.totals.net,
            month_private_revenue=summary.totals.private_revenue,
            month_total=summary.totals.grand_total,
        )
