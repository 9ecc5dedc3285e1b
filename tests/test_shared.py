import time
from datetime import date

import pytest
import redis
from fastapi import HTTPException

from diario import rate_limiter
from diario.rate_limiter import check_rate_limit
from diario.shared.periods import each_day, month_range, months_back, resolve_range, week_range
from diario.shared.validators import (
    validate_br_phone,
    validate_schedule_by_day,
    validate_time,
)


def test_month_range_handles_leap_year():
    assert month_range(date(2024, 2, 10)) == (date(2024, 2, 1), date(2024, 2, 29))


def test_week_range_is_monday_to_sunday():
    start, end = week_range(date(2024, 5, 5))  # a Sunday
    assert start == date(2024, 4, 29)
    assert end == date(2024, 5, 5)


def test_months_back_clamps_to_month_end():
    assert months_back(date(2024, 3, 31), 1) == date(2024, 2, 29)
    assert months_back(date(2024, 1, 15), 3) == date(2023, 10, 15)


def test_resolve_range_defaults_and_validation():
    assert resolve_range(None, None, today=date(2024, 5, 17)) == (date(2024, 5, 1), date(2024, 5, 31))
    with pytest.raises(HTTPException):
        resolve_range(date(2024, 5, 2), date(2024, 5, 1))


def test_each_day_is_inclusive():
    assert len(each_day(date(2024, 5, 1), date(2024, 5, 31))) == 31


def test_br_phone_normalization():
    assert validate_br_phone("+55 (21) 99999-0000") == "+5521999990000"
    with pytest.raises(ValueError):
        validate_br_phone("99999")


def test_time_format():
    assert validate_time("08:05") == "08:05"
    for bad in ("8:05", "24:00", "12:60"):
        with pytest.raises(ValueError):
            validate_time(bad)


def test_schedule_by_day_rejects_unknown_weekday():
    with pytest.raises(ValueError):
        validate_schedule_by_day({"Monday": {"start": "08:00", "end": "09:00"}})


def test_memory_rate_limit_window():
    key = "test:memory-window"
    results = [check_rate_limit(key, 2, 60, None)[0] for _ in range(3)]
    assert results == [True, True, False]


def test_failed_redis_connection_is_not_retried_immediately(monkeypatch):
    attempts = []

    class UnreachableRedis:
        def __init__(self, **kwargs):
            attempts.append(kwargs)

        def ping(self):
            raise redis.ConnectionError("connection refused")

    monkeypatch.delenv("REDIS_URL", raising=False)
    monkeypatch.setattr(rate_limiter, "redis_client", None)
    monkeypatch.setattr(rate_limiter, "last_redis_failure", 0.0)
    monkeypatch.setattr(rate_limiter.redis, "Redis", UnreachableRedis)

    with pytest.raises(redis.ConnectionError):
        rate_limiter.get_redis_client()
    with pytest.raises(redis.ConnectionError):
        rate_limiter.get_redis_client()
    assert len(attempts) == 1

    monkeypatch.setattr(
        rate_limiter, "last_redis_failure", time.time() - rate_limiter.REDIS_RETRY_INTERVAL - 1
    )
    with pytest.raises(redis.ConnectionError):
        rate_limiter.get_redis_client()
    assert len(attempts) == 2
