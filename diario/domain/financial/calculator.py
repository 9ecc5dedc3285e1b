"""
Attendance/revenue calculator

Pure functions over a snapshot of records: given a patient's evolutions for a
period plus the patient's and clinic's payment configuration, derive billable
revenue and the loss caused by non-billable absences.
"""

from dataclasses import dataclass
from typing import Iterable, Optional

from ...models import (
    ABSENCE_PAYMENT_TYPES,
    ATTENDANCE_ABSENT,
    ATTENDANCE_PAID_ABSENCE,
    ATTENDANCE_PRESENT,
    PRIVATE_APPOINTMENT_COMPLETED,
)

POLICY_ALWAYS = "always"
POLICY_NEVER = "never"
POLICY_CONFIRMED_ONLY = "confirmed_only"

PAYMENT_FIXED = "fixo"


@dataclass(frozen=True)
class AttendanceBuckets:
    present: int = 0
    absent: int = 0
    paid_absent: int = 0
    # Absences with confirmed_attendance == True
    confirmed_absent: int = 0

    @property
    def total(self) -> int:
        return self.present + self.absent + self.paid_absent


@dataclass(frozen=True)
class RevenueResult:
    revenue: float
    loss: float
    buckets: AttendanceBuckets
    billable_absences: int = 0
    lost_absences: int = 0

    @property
    def net(self) -> float:
        return self.revenue - self.loss


def resolve_absence_policy(clinic) -> str:
    """
    Resolve a clinic's absence policy.

    The explicit ``absence_payment_type`` wins whenever it holds a known value;
    otherwise the legacy ``pays_on_absence`` flag decides (``False`` means
    ``never``, anything else ``always``). A missing clinic yields ``always``.
    """
    if clinic is None:
        return POLICY_ALWAYS

    explicit = getattr(clinic, "absence_payment_type", None)
    if explicit in ABSENCE_PAYMENT_TYPES:
        return explicit

    if getattr(clinic, "pays_on_absence", None) is False:
        return POLICY_NEVER
    return POLICY_ALWAYS


def partition_attendance(evolutions: Iterable) -> AttendanceBuckets:
    """Count evolutions per attendance status; unknown statuses are ignored"""
    present = absent = paid_absent = confirmed_absent = 0
    for evolution in evolutions:
        status = getattr(evolution, "attendance_status", None)
        if status == ATTENDANCE_PRESENT:
            present += 1
        elif status == ATTENDANCE_PAID_ABSENCE:
            paid_absent += 1
        elif status == ATTENDANCE_ABSENT:
            absent += 1
            if getattr(evolution, "confirmed_attendance", None) is True:
                confirmed_absent += 1
    return AttendanceBuckets(present, absent, paid_absent, confirmed_absent)


def billable_absence_count(buckets: AttendanceBuckets, policy: str) -> int:
    if policy == POLICY_NEVER:
        return 0
    if policy == POLICY_CONFIRMED_ONLY:
        return buckets.confirmed_absent
    return buckets.absent


def calculate_patient_revenue(
    evolutions: Iterable,
    payment_type: Optional[str],
    payment_value: Optional[float],
    absence_policy: str = POLICY_ALWAYS,
) -> RevenueResult:
    """
    Compute revenue and loss for one patient over the given evolutions.

    Fixed-payment patients bill their flat value whatever their attendance.
    Per-session patients bill presences and paid absences, plus regular
    absences allowed by ``absence_policy``; the remaining absences are
    reported as loss unless the policy is ``always``.
    """
    buckets = partition_attendance(evolutions)
    value = payment_value or 0

    if payment_type == PAYMENT_FIXED:
        return RevenueResult(revenue=value, loss=0, buckets=buckets)

    billable_absences = billable_absence_count(buckets, absence_policy)
    revenue = (buckets.present + buckets.paid_absent + billable_absences) * value

    lost_absences = 0
    if absence_policy != POLICY_ALWAYS:
        lost_absences = buckets.absent - billable_absences

    return RevenueResult(
        revenue=revenue,
        loss=lost_absences * value,
        buckets=buckets,
        billable_absences=billable_absences,
        lost_absences=lost_absences,
    )


def calculate_private_revenue(appointments: Iterable) -> float:
    """Sum the flat price of completed private appointments"""
    return sum(
        (a.price or 0) for a in appointments if a.status == PRIVATE_APPOINTMENT_COMPLETED
    )
