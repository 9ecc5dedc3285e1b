from types import SimpleNamespace

import pytest

from diario.domain.financial.calculator import (
    AttendanceBuckets,
    billable_absence_count,
    calculate_patient_revenue,
    calculate_private_revenue,
    partition_attendance,
    resolve_absence_policy,
)


def evo(status, confirmed=None):
    return SimpleNamespace(attendance_status=status, confirmed_attendance=confirmed)


MIXED = [
    evo("presente"),
    evo("presente"),
    evo("falta", True),
    evo("falta", False),
    evo("falta"),
    evo("falta_remunerada"),
]


def test_worked_example_confirmed_only():
    evolutions = [
        evo("presente"),
        evo("falta", True),
        evo("falta", False),
        evo("falta_remunerada"),
    ]
    result = calculate_patient_revenue(evolutions, "sessao", 100, "confirmed_only")
    assert result.revenue == 300
    assert result.loss == 100
    assert result.net == 200


@pytest.mark.parametrize("policy", ["always", "never", "confirmed_only"])
def test_fixed_payment_ignores_attendance(policy):
    few = calculate_patient_revenue([evo("presente")], "fixo", 800, policy)
    many = calculate_patient_revenue(MIXED, "fixo", 800, policy)
    none = calculate_patient_revenue([], "fixo", 800, policy)
    assert few.revenue == many.revenue == none.revenue == 800
    assert few.loss == many.loss == none.loss == 0


def test_always_bills_every_absence_without_loss():
    result = calculate_patient_revenue(MIXED, "sessao", 50, "always")
    # 2 present + 1 paid absence + 3 absences
    assert result.revenue == 6 * 50
    assert result.loss == 0


def test_never_excludes_absences_and_reports_them_as_loss():
    result = calculate_patient_revenue(MIXED, "sessao", 50, "never")
    assert result.revenue == 3 * 50
    assert result.loss == 3 * 50
    assert result.billable_absences == 0
    assert result.lost_absences == 3


def test_confirmed_only_bills_confirmed_absences():
    result = calculate_patient_revenue(MIXED, "sessao", 50, "confirmed_only")
    assert result.revenue == 4 * 50
    # unconfirmed and unknown confirmation both count as loss
    assert result.loss == 2 * 50


def test_paid_absence_billed_under_every_policy():
    for policy in ("always", "never", "confirmed_only"):
        result = calculate_patient_revenue([evo("falta_remunerada")], "sessao", 70, policy)
        assert result.revenue == 70
        assert result.loss == 0


def test_missing_payment_value_contributes_nothing():
    result = calculate_patient_revenue(MIXED, "sessao", None, "never")
    assert result.revenue == 0
    assert result.loss == 0


def test_unknown_payment_type_is_billed_per_session():
    result = calculate_patient_revenue([evo("presente"), evo("presente")], None, 40)
    assert result.revenue == 80


def test_partition_ignores_unknown_statuses():
    buckets = partition_attendance(MIXED + [evo("cancelado")])
    assert buckets == AttendanceBuckets(present=2, absent=3, paid_absent=1, confirmed_absent=1)
    assert buckets.total == 6


def test_billable_absence_count_by_policy():
    buckets = AttendanceBuckets(present=1, absent=4, paid_absent=0, confirmed_absent=1)
    assert billable_absence_count(buckets, "always") == 4
    assert billable_absence_count(buckets, "never") == 0
    assert billable_absence_count(buckets, "confirmed_only") == 1


@pytest.mark.parametrize(
    "clinic, expected",
    [
        (None, "always"),
        (SimpleNamespace(absence_payment_type=None, pays_on_absence=True), "always"),
        (SimpleNamespace(absence_payment_type=None, pays_on_absence=False), "never"),
        (SimpleNamespace(absence_payment_type="confirmed_only", pays_on_absence=False), "confirmed_only"),
        (SimpleNamespace(absence_payment_type="always", pays_on_absence=False), "always"),
        (SimpleNamespace(absence_payment_type="bogus", pays_on_absence=False), "never"),
        (SimpleNamespace(), "always"),
    ],
)
def test_resolve_absence_policy(clinic, expected):
    assert resolve_absence_policy(clinic) == expected


def test_private_revenue_counts_completed_only():
    appointments = [
        SimpleNamespace(status="concluído", price=150),
        SimpleNamespace(status="agendado", price=150),
        SimpleNamespace(status="cancelado", price=150),
        SimpleNamespace(status="concluído", price=None),
        SimpleNamespace(status="concluído", price=90.5),
    ]
    assert calculate_private_revenue(appointments) == 240.5
