"""Report schemas - attendance statistics and dashboard"""

import datetime as dt
from typing import Optional

from pydantic import BaseModel

from ..scheduling.schemas import AppointmentResponse


class AttendanceTotals(BaseModel):
    present: int = 0
    absent: int = 0
    paid_absent: int = 0
    total: int = 0
    presence_rate: int = 0


class DailyAttendance(AttendanceTotals):
    date: dt.date


class ClinicAttendance(AttendanceTotals):
    clinic_id: int
    clinic_name: str


class AttendanceReport(BaseModel):
    period: str
    start: dt.date
    end: dt.date
    clinic_id: Optional[int] = None
    totals: AttendanceTotals
    daily: list[DailyAttendance]
    clinics: list[ClinicAttendance]


class DashboardResponse(BaseModel):
    clinics: int
    patients: int
    pending_tasks: int
    birthdays_this_month: int
    today_appointments: list[AppointmentResponse]
    month_revenue: float
    month_private_revenue: float
    month_total: float
