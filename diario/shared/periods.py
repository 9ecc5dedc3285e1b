"""Date range helpers for financial and attendance views"""

import calendar
from datetime import date, timedelta
from typing import Optional

from dateutil.relativedelta import relativedelta
from fastapi import HTTPException


def month_range(day: date) -> tuple[date, date]:
    """First and last day of ``day``'s month"""
    last_day = calendar.monthrange(day.year, day.month)[1]
    return day.replace(day=1), day.replace(day=last_day)


def week_range(day: date) -> tuple[date, date]:
    """Monday to Sunday of ``day``'s week"""
    start = day - timedelta(days=day.weekday())
    return start, start + timedelta(days=6)


def months_back(day: date, months: int) -> date:
    """Same day ``months`` calendar months earlier, clamped to month end"""
    return day - relativedelta(months=months)


def resolve_range(
    start: Optional[date], end: Optional[date], today: Optional[date] = None
) -> tuple[date, date]:
    """Explicit bounds, defaulting to the current month; both ends inclusive"""
    default_start, default_end = month_range(today or date.today())
    start = start or default_start
    end = end or default_end
    if end < start:
        raise HTTPException(status_code=400, detail="end must not be before start")
    return start, end


def each_day(start: date, end: date) -> list[date]:
    return [start + timedelta(days=i) for i in range((end - start).days + 1)]
