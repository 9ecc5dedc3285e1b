from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from .database import Base

# Attendance outcomes recorded on an evolution
ATTENDANCE_PRESENT = "presente"
ATTENDANCE_ABSENT = "falta"
ATTENDANCE_PAID_ABSENCE = "falta_remunerada"
ATTENDANCE_STATUSES = (ATTENDANCE_PRESENT, ATTENDANCE_ABSENT, ATTENDANCE_PAID_ABSENCE)

CLINIC_TYPES = ("propria", "terceirizada")
CLINIC_PAYMENT_TYPES = ("fixo_mensal", "fixo_diario", "sessao")
ABSENCE_PAYMENT_TYPES = ("always", "never", "confirmed_only")
PATIENT_PAYMENT_TYPES = ("sessao", "fixo")
CLINIC_NOTE_CATEGORIES = ("urgent", "protocol", "general")
ATTACHMENT_PARENT_TYPES = ("evolution", "patient", "clinic", "task")

PRIVATE_APPOINTMENT_COMPLETED = "concluído"
PRIVATE_APPOINTMENT_STATUSES = ("agendado", PRIVATE_APPOINTMENT_COMPLETED, "cancelado")


class User(Base):
    """The professional who owns every other record (also serves as the profile)"""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    auth_uid = Column(String(255), unique=True, index=True, nullable=False)
    email = Column(String(255), index=True, nullable=True)
    name = Column(String(255), nullable=True)
    phone = Column(String(50), nullable=True)
    professional_id = Column(String(100), nullable=True)  # e.g. CRP / CREFITO number
    avatar_url = Column(String(500), nullable=True)  # storage key

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    clinics = relationship("Clinic", back_populates="user", cascade="all, delete-orphan")
    stamps = relationship("Stamp", back_populates="user", cascade="all, delete-orphan")


class Clinic(Base):
    __tablename__ = "clinics"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    name = Column(String(255), nullable=False)
    type = Column(String(50), nullable=False, default="propria")  # propria, terceirizada
    address = Column(String(500), nullable=True)
    notes = Column(Text, nullable=True)

    # Schedule
    weekdays = Column(JSON, nullable=True)  # ["Segunda", "Quarta"]
    schedule_time = Column(String(50), nullable=True)
    schedule_by_day = Column(JSON, nullable=True)  # {"Segunda": {"start": "08:00", "end": "12:00"}}

    # Payment policy
    payment_type = Column(String(50), nullable=True)  # fixo_mensal, fixo_diario, sessao
    payment_amount = Column(Float, nullable=True)
    # Legacy flag kept alongside absence_payment_type; the explicit field wins when set
    pays_on_absence = Column(Boolean, default=True, nullable=False)
    absence_payment_type = Column(String(50), nullable=True)  # always, never, confirmed_only

    # Branding (storage keys)
    letterhead = Column(String(500), nullable=True)
    stamp = Column(String(500), nullable=True)

    is_archived = Column(Boolean, default=False, nullable=False)

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    user = relationship("User", back_populates="clinics")
    patients = relationship("Patient", back_populates="clinic", cascade="all, delete-orphan")
    packages = relationship(
        "ClinicPackage", back_populates="clinic", cascade="all, delete-orphan"
    )
    clinic_notes = relationship("ClinicNote", back_populates="clinic", cascade="all, delete-orphan")
    evolutions = relationship("Evolution", back_populates="clinic", cascade="all, delete-orphan")
    appointments = relationship(
        "Appointment", back_populates="clinic", cascade="all, delete-orphan"
    )


class ClinicPackage(Base):
    """Flat price defined by a clinic; copied into a patient's payment value on assignment"""

    __tablename__ = "clinic_packages"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    clinic_id = Column(Integer, ForeignKey("clinics.id"), nullable=False, index=True)

    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    price = Column(Float, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    clinic = relationship("Clinic", back_populates="packages")


class ClinicNote(Base):
    __tablename__ = "clinic_notes"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    clinic_id = Column(Integer, ForeignKey("clinics.id"), nullable=False, index=True)
    category = Column(String(20), nullable=False, default="general")  # urgent, protocol, general
    text = Column(Text, nullable=False)

    created_at = Column(DateTime, server_default=func.now())

    clinic = relationship("Clinic", back_populates="clinic_notes")


class Patient(Base):
    __tablename__ = "patients"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    clinic_id = Column(Integer, ForeignKey("clinics.id"), nullable=False, index=True)

    name = Column(String(255), nullable=False)
    birthdate = Column(Date, nullable=False)
    phone = Column(String(50), nullable=True)
    clinical_area = Column(String(255), nullable=True)
    diagnosis = Column(Text, nullable=True)
    professionals = Column(Text, nullable=True)
    observations = Column(Text, nullable=True)
    responsible_name = Column(String(255), nullable=True)
    responsible_email = Column(String(255), nullable=True)

    # Billing: value stored at record time; package price is not re-applied retroactively
    payment_type = Column(String(20), nullable=True)  # sessao, fixo
    payment_value = Column(Float, nullable=True)
    package_id = Column(
        Integer, ForeignKey("clinic_packages.id", ondelete="SET NULL"), nullable=True
    )
    contract_start_date = Column(Date, nullable=True)

    weekdays = Column(JSON, nullable=True)
    schedule_time = Column(String(50), nullable=True)
    schedule_by_day = Column(JSON, nullable=True)

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    clinic = relationship("Clinic", back_populates="patients")
    package = relationship("ClinicPackage")
    evolutions = relationship("Evolution", back_populates="patient", cascade="all, delete-orphan")
    appointments = relationship(
        "Appointment", back_populates="patient", cascade="all, delete-orphan"
    )


class Evolution(Base):
    """Dated session note with an attendance outcome"""

    __tablename__ = "evolutions"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    patient_id = Column(Integer, ForeignKey("patients.id"), nullable=False, index=True)
    clinic_id = Column(Integer, ForeignKey("clinics.id"), nullable=False, index=True)

    date = Column(Date, nullable=False, index=True)
    text = Column(Text, nullable=False, default="")
    attendance_status = Column(String(30), nullable=False, default=ATTENDANCE_PRESENT)
    confirmed_attendance = Column(Boolean, nullable=True)
    mood = Column(String(50), nullable=True)
    signature = Column(Text, nullable=True)
    stamp_id = Column(Integer, ForeignKey("stamps.id", ondelete="SET NULL"), nullable=True)

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    patient = relationship("Patient", back_populates="evolutions")
    clinic = relationship("Clinic", back_populates="evolutions")


class Appointment(Base):
    __tablename__ = "appointments"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    patient_id = Column(Integer, ForeignKey("patients.id"), nullable=False, index=True)
    clinic_id = Column(Integer, ForeignKey("clinics.id"), nullable=False, index=True)

    date = Column(Date, nullable=False, index=True)
    time = Column(String(5), nullable=False)  # HH:MM
    notes = Column(Text, nullable=True)

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    patient = relationship("Patient", back_populates="appointments")
    clinic = relationship("Clinic", back_populates="appointments")


class Service(Base):
    """Service offered in private (non-clinic) practice"""

    __tablename__ = "services"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    type = Column(String(50), nullable=False, default="individual")
    price = Column(Float, nullable=False, default=0)
    duration_minutes = Column(Integer, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())


class PrivateAppointment(Base):
    """Private appointment; revenue is tracked outside the attendance buckets"""

    __tablename__ = "private_appointments"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    service_id = Column(Integer, ForeignKey("services.id", ondelete="SET NULL"), nullable=True)

    client_name = Column(String(255), nullable=False)
    client_email = Column(String(255), nullable=True)
    client_phone = Column(String(50), nullable=True)

    date = Column(Date, nullable=False, index=True)
    time = Column(String(5), nullable=False)
    price = Column(Float, nullable=False, default=0)
    status = Column(String(30), nullable=False, default="agendado")
    notes = Column(Text, nullable=True)
    paid = Column(Boolean, default=False, nullable=True)

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    service = relationship("Service")


class Event(Base):
    """Calendar event not tied to a patient"""

    __tablename__ = "events"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    type = Column(String(50), nullable=False, default="event")
    date = Column(Date, nullable=False, index=True)
    time = Column(String(5), nullable=True)
    end_time = Column(String(5), nullable=True)
    all_day = Column(Boolean, default=False, nullable=True)
    color = Column(String(20), nullable=True)
    completed = Column(Boolean, default=False, nullable=True)
    reminder_minutes = Column(Integer, nullable=True)

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())


class Task(Base):
    __tablename__ = "tasks"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    patient_id = Column(Integer, ForeignKey("patients.id", ondelete="SET NULL"), nullable=True)

    title = Column(String(500), nullable=False)
    completed = Column(Boolean, default=False, nullable=False)

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())


class Attachment(Base):
    """Metadata for an object kept in storage"""

    __tablename__ = "attachments"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    parent_id = Column(Integer, nullable=False, index=True)
    parent_type = Column(String(20), nullable=False)  # evolution, patient, clinic, task
    name = Column(String(255), nullable=False)
    file_path = Column(String(500), nullable=False)
    file_type = Column(String(100), nullable=False)
    file_size = Column(Integer, nullable=True)

    created_at = Column(DateTime, server_default=func.now())


class Stamp(Base):
    """Professional stamp and signature used on evolutions and reports"""

    __tablename__ = "stamps"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    name = Column(String(255), nullable=False)
    clinical_area = Column(String(255), nullable=False)
    stamp_image = Column(String(500), nullable=True)
    signature_image = Column(String(500), nullable=True)
    is_default = Column(Boolean, default=False, nullable=True)

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    user = relationship("User", back_populates="stamps")
