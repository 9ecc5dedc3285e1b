"""Shared validation utilities"""

import re
from typing import Optional

TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")

WEEKDAYS = ("Domingo", "Segunda", "Terça", "Quarta", "Quinta", "Sexta", "Sábado")


def validate_br_phone(phone: Optional[str]) -> Optional[str]:
    """
    Validate and normalize a Brazilian phone number to E.164 format.

    Accepts landlines (10 digits with area code) and mobiles (11 digits),
    with or without the +55 country prefix.

    Raises:
        ValueError: If phone number is invalid
    """
    if not phone:
        return phone

    digits = re.sub(r"\D", "", phone)

    if digits.startswith("55") and len(digits) in (12, 13):
        digits = digits[2:]

    if len(digits) not in (10, 11):
        raise ValueError("Phone number must have 10 or 11 digits including area code")

    return f"+55{digits}"


def validate_email(email: Optional[str]) -> Optional[str]:
    """
    Validate email format.

    Returns:
        Lowercase email address

    Raises:
        ValueError: If email format is invalid
    """
    if not email:
        return email

    email = email.strip().lower()

    email_pattern = r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$"

    if not re.match(email_pattern, email):
        raise ValueError("Invalid email format")

    return email


def validate_time(value: Optional[str]) -> Optional[str]:
    """Validate a 24h ``HH:MM`` time string"""
    if value is None:
        return value
    value = value.strip()
    if not TIME_PATTERN.match(value):
        raise ValueError("Time must be in HH:MM format")
    return value


def validate_choice(value: Optional[str], allowed: tuple, field: str) -> Optional[str]:
    """Ensure ``value`` is one of ``allowed``"""
    if value is None:
        return value
    if value not in allowed:
        raise ValueError(f"{field} must be one of: {', '.join(allowed)}")
    return value


def validate_schedule_by_day(schedule: Optional[dict]) -> Optional[dict]:
    """
    Validate a per-weekday schedule.

    Example: ``{"Segunda": {"start": "08:00", "end": "12:00"}}``
    """
    if not schedule:
        return schedule

    for day, time_range in schedule.items():
        if day not in WEEKDAYS:
            raise ValueError(f"Unknown weekday: {day}")
        if not isinstance(time_range, dict):
            raise ValueError(f"Schedule for {day} must have start and end")
        start = validate_time(time_range.get("start"))
        end = validate_time(time_range.get("end"))
        if not start or not end:
            raise ValueError(f"Schedule for {day} must have start and end")
        if end <= start:
            raise ValueError(f"Schedule for {day} must end after it starts")

    return schedule


def validate_weekdays(days: Optional[list]) -> Optional[list]:
    if not days:
        return days
    for day in days:
        if day not in WEEKDAYS:
            raise ValueError(f"Unknown weekday: {day}")
    return days
