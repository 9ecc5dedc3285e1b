"""Financial domain schemas - revenue summaries"""

from datetime import date
from typing import Optional

from pydantic import BaseModel


class AttendanceCounts(BaseModel):
    present: int = 0
    absent: int = 0
    paid_absent: int = 0
    confirmed_absent: int = 0
    billable_absences: int = 0
    lost_absences: int = 0
    total: int = 0


class PatientRevenue(BaseModel):
    patient_id: int
    patient_name: str
    clinic_id: int
    clinic_name: str
    payment_type: Optional[str] = None
    payment_value: float = 0
    absence_policy: str
    sessions: AttendanceCounts
    revenue: float = 0
    loss: float = 0
    net: float = 0


class ClinicRevenue(BaseModel):
    clinic_id: int
    clinic_name: str
    is_archived: bool = False
    absence_policy: str
    patient_count: int = 0
    revenue: float = 0
    loss: float = 0
    net: float = 0
    share_percent: float = 0


class FinancialTotals(BaseModel):
    revenue: float = 0
    loss: float = 0
    net: float = 0
    private_revenue: float = 0
    private_appointments: int = 0
    grand_total: float = 0


class FinancialSummary(BaseModel):
    start: date
    end: date
    patients: list[PatientRevenue]
    clinics: list[ClinicRevenue]
    totals: FinancialTotals


class PatientFinancialSummary(BaseModel):
    start: date
    end: date
    patient: PatientRevenue
