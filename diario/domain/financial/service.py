"""Financial service - revenue and loss per patient, clinic and period"""

import csv
import logging
from datetime import date, datetime
from io import StringIO
from typing import Optional

from fastapi import HTTPException
from fastapi.responses import StreamingResponse
from sqlalchemy.orm import Session

from ...models import Patient, User
from ...shared.periods import resolve_range
from ..patients.repository import PatientRepository
from .calculator import (
    calculate_patient_revenue,
    calculate_private_revenue,
    resolve_absence_policy,
)
from .repository import FinancialRepository
from .schemas import (
    AttendanceCounts,
    ClinicRevenue,
    FinancialSummary,
    FinancialTotals,
    PatientFinancialSummary,
    PatientRevenue,
)

logger = logging.getLogger(__name__)


def _money(value: float) -> float:
    return round(value or 0, 2)


def build_patient_revenue(patient: Patient, evolutions: list) -> PatientRevenue:
    """Run the calculator for one patient and shape the result row"""
    clinic = patient.clinic
    policy = resolve_absence_policy(clinic)
    result = calculate_patient_revenue(
        evolutions, patient.payment_type, patient.payment_value, policy
    )
    buckets = result.buckets
    return PatientRevenue(
        patient_id=patient.id,
        patient_name=patient.name,
        clinic_id=patient.clinic_id,
        clinic_name=clinic.name if clinic else "",
        payment_type=patient.payment_type,
        payment_value=patient.payment_value or 0,
        absence_policy=policy,
        sessions=AttendanceCounts(
            present=buckets.present,
            absent=buckets.absent,
            paid_absent=buckets.paid_absent,
            confirmed_absent=buckets.confirmed_absent,
            billable_absences=result.billable_absences,
            lost_absences=result.lost_absences,
            total=buckets.total,
        ),
        revenue=_money(result.revenue),
        loss=_money(result.loss),
        net=_money(result.net),
    )


class FinancialService:
    """Aggregates calculator results over the user's records"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = FinancialRepository()
        self.patient_repo = PatientRepository()

    def get_summary(
        self,
        user: User,
        start: Optional[date] = None,
        end: Optional[date] = None,
        clinic_id: Optional[int] = None,
        include_archived: bool = False,
    ) -> FinancialSummary:
        """
        Revenue summary for a period (defaults to the current month).

        An explicit ``clinic_id`` is honoured even when that clinic is
        archived; private-practice revenue only counts when no clinic filter
        is applied.
        """
        start, end = resolve_range(start, end)

        clinics = self.repo.get_clinics(
            self.db, user.id, clinic_id, include_archived or clinic_id is not None
        )
        if clinic_id is not None and not clinics:
            raise HTTPException(status_code=404, detail="Clinic not found")

        patients = self.repo.get_patients(self.db, user.id, [c.id for c in clinics])
        evolutions = self.repo.get_evolutions_by_patient(
            self.db, user.id, [p.id for p in patients], start, end
        )

        patient_rows = [build_patient_revenue(p, evolutions.get(p.id, [])) for p in patients]

        clinic_rows = []
        for clinic in clinics:
            rows = [r for r in patient_rows if r.clinic_id == clinic.id]
            revenue = sum(r.revenue for r in rows)
            loss = sum(r.loss for r in rows)
            clinic_rows.append(
                ClinicRevenue(
                    clinic_id=clinic.id,
                    clinic_name=clinic.name,
                    is_archived=bool(clinic.is_archived),
                    absence_policy=resolve_absence_policy(clinic),
                    patient_count=len(rows),
                    revenue=_money(revenue),
                    loss=_money(loss),
                    net=_money(sum(r.net for r in rows)),
                )
            )

        total_revenue = sum(c.revenue for c in clinic_rows)
        for row in clinic_rows:
            if total_revenue > 0:
                row.share_percent = round(row.revenue / total_revenue * 100, 1)

        private_revenue = 0.0
        private_count = 0
        if clinic_id is None:
            appointments = self.repo.get_private_appointments(self.db, user.id, start, end)
            private_revenue = calculate_private_revenue(appointments)
            private_count = len(appointments)

        net = sum(c.net for c in clinic_rows)
        totals = FinancialTotals(
            revenue=_money(total_revenue),
            loss=_money(sum(c.loss for c in clinic_rows)),
            net=_money(net),
            private_revenue=_money(private_revenue),
            private_appointments=private_count,
            grand_total=_money(net + private_revenue),
        )

        logger.info(
            f"💰 Financial summary for user {user.id} ({start} → {end}): "
            f"{len(patient_rows)} patients, grand total {totals.grand_total}"
        )
        return FinancialSummary(
            start=start, end=end, patients=patient_rows, clinics=clinic_rows, totals=totals
        )

    def get_patient_summary(
        self,
        patient_id: int,
        user: User,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> PatientFinancialSummary:
        start, end = resolve_range(start, end)
        patient = self.patient_repo.get_patient_by_id(self.db, patient_id, user.id)
        if not patient:
            raise HTTPException(status_code=404, detail="Patient not found")

        evolutions = self.repo.get_evolutions_by_patient(self.db, user.id, [patient.id], start, end)
        return PatientFinancialSummary(
            start=start, end=end, patient=build_patient_revenue(patient, evolutions[patient.id])
        )

    def export_summary_csv(
        self,
        user: User,
        start: Optional[date] = None,
        end: Optional[date] = None,
        clinic_id: Optional[int] = None,
        include_archived: bool = False,
    ) -> StreamingResponse:
        """Export the per-patient rows of the summary as CSV"""
        logger.info(f"📊 Financial CSV export requested by user {user.id}")
        summary = self.get_summary(user, start, end, clinic_id, include_archived)

        try:
            output = StringIO()
            writer = csv.writer(output)
            writer.writerow(
                [
                    "Paciente",
                    "Clínica",
                    "Tipo de pagamento",
                    "Valor",
                    "Presenças",
                    "Faltas",
                    "Faltas remuneradas",
                    "Faltas cobradas",
                    "Receita",
                    "Perda",
                    "Líquido",
                ]
            )
            for row in summary.patients:
                writer.writerow(
                    [
                        row.patient_name,
                        row.clinic_name,
                        row.payment_type or "",
                        f"{row.payment_value:.2f}",
                        row.sessions.present,
                        row.sessions.absent,
                        row.sessions.paid_absent,
                        row.sessions.billable_absences,
                        f"{row.revenue:.2f}",
                        f"{row.loss:.2f}",
                        f"{row.net:.2f}",
                    ]
                )
            writer.writerow([])
            writer.writerow(["Particular", "", "", "", "", "", "", "", f"{summary.totals.private_revenue:.2f}", "", ""])
            writer.writerow(["Total", "", "", "", "", "", "", "", "", "", f"{summary.totals.grand_total:.2f}"])

            output.seek(0)
            filename = f"financeiro_{summary.start.isoformat()}_{summary.end.isoformat()}_{datetime.now().strftime('%H%M%S')}.csv"
            logger.info(f"✅ CSV export successful: {filename} ({len(summary.patients)} patients)")

            return StreamingResponse(
                iter([output.getvalue()]),
                media_type="text/csv",
                headers={
                    "Content-Disposition": f"attachment; filename={filename}",
                    "Cache-Control": "no-cache",
                },
            )
        except Exception as e:
            logger.error(f"❌ Financial CSV export failed for user {user.id}: {str(e)}")
            raise HTTPException(status_code=500, detail="Failed to export CSV")
