"""Builds the plain-text data blocks sent to the model"""

from datetime import date
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models import Clinic, Patient, User
from ...shared.periods import months_back
from ..evolutions.repository import EvolutionRepository
from ..financial.calculator import partition_attendance
from ..patients.repository import PatientRepository
from ..reports.service import presence_rate

PERIOD_MONTHS = {"month": 1, "quarter": 3, "semester": 6}
PERIOD_LABELS = {
    "month": "Último mês",
    "quarter": "Último trimestre",
    "semester": "Último semestre",
    "all": "Todo o período",
}

FREE_MODE_EVOLUTION_LIMIT = 200
FREE_MODE_EVOLUTION_LINES = 50
EVOLUTION_SNIPPET_LENGTH = 100


def _or_na(value) -> str:
    return str(value) if value else "N/A"


def period_start(period: str, today: Optional[date] = None) -> Optional[date]:
    months = PERIOD_MONTHS.get(period)
    if months is None:
        return None
    return months_back(today or date.today(), months)


def build_patient_context(
    db: Session, user: User, patient_id: int, period: str, today: Optional[date] = None
) -> str:
    patient = PatientRepository.get_patient_by_id(db, patient_id, user.id)
    if not patient:
        raise HTTPException(status_code=404, detail="Paciente não encontrado")

    evolutions = EvolutionRepository.get_evolutions(
        db, user.id, patient_id=patient.id, start_date=period_start(period, today)
    )
    buckets = partition_attendance(evolutions)
    absences = buckets.absent + buckets.paid_absent
    total = len(evolutions)

    lines = [
        "DADOS DO PACIENTE:",
        f"- Nome: {patient.name}",
        f"- Data de nascimento: {patient.birthdate.isoformat()}",
        f"- Clínica: {_or_na(patient.clinic.name if patient.clinic else None)}",
        f"- Área clínica: {_or_na(patient.clinical_area)}",
        f"- Diagnóstico: {_or_na(patient.diagnosis)}",
        f"- Profissionais: {_or_na(patient.professionals)}",
        f"- Observações: {_or_na(patient.observations)}",
        "",
        f"RESUMO DE FREQUÊNCIA ({PERIOD_LABELS.get(period, PERIOD_LABELS['all'])}):",
        f"- Total de sessões: {total}",
        f"- Presenças: {buckets.present}",
        f"- Faltas: {absences}",
        f"- Taxa de presença: {presence_rate(buckets.present, total)}%",
        "",
        "EVOLUÇÕES REGISTRADAS:",
    ]
    if evolutions:
        lines.extend(f"- {e.date.isoformat()}: [{e.attendance_status}] {e.text}" for e in evolutions)
    else:
        lines.append("Nenhuma evolução registrada.")
    return "\n".join(lines)


def build_overview_context(db: Session, user: User) -> str:
    clinics = db.query(Clinic).filter(Clinic.user_id == user.id).order_by(Clinic.name).all()
    patients = db.query(Patient).filter(Patient.user_id == user.id).order_by(Patient.name).all()
    evolutions = EvolutionRepository.get_evolutions(
        db, user.id, ascending=False, limit=FREE_MODE_EVOLUTION_LIMIT
    )

    clinic_names = {c.id: c.name for c in clinics}
    patient_names = {p.id: p.name for p in patients}

    lines = ["DADOS DISPONÍVEIS:", "", f"CLÍNICAS ({len(clinics)}):"]
    lines.extend([f"- {c.name} ({c.type})" for c in clinics] or ["Nenhuma"])

    lines += ["", f"PACIENTES ({len(patients)}):"]
    lines.extend(
        [
            f"- {p.name} | Clínica: {clinic_names.get(p.clinic_id, 'N/A')} | "
            f"Área: {_or_na(p.clinical_area)} | Diagnóstico: {_or_na(p.diagnosis)}"
            for p in patients
        ]
        or ["Nenhum"]
    )

    lines += ["", f"ÚLTIMAS EVOLUÇÕES ({len(evolutions)}):"]
    lines.extend(
        [
            f"- {e.date.isoformat()} | {patient_names.get(e.patient_id, '?')} | "
            f"[{e.attendance_status}] {(e.text or '')[:EVOLUTION_SNIPPET_LENGTH]}"
            for e in evolutions[:FREE_MODE_EVOLUTION_LINES]
        ]
        or ["Nenhuma"]
    )
    return "\n".join(lines)
