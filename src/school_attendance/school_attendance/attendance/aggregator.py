from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Sequence

from ..common.datetime_utils import in_month, iter_month_dates
from ..core.enums import AttendanceStatus
from ..roster.model import Student, resolve_status


@dataclass(frozen=True)
class AttendanceSummary:
    """Counts by status for one date; the four counts always sum to `total`."""

    present: int = 0
    absent: int = 0
    justified: int = 0
    pending: int = 0
    total: int = 0


@dataclass(frozen=True)
class StudentMonthStats:
    student: Student
    present: int
    absent: int
    justified: int
    absences: int
    percentage: int


def summarize(students: Sequence[Student], iso_date: str) -> AttendanceSummary:
    counts = {status: 0 for status in AttendanceStatus}
    for s in students:
        counts[resolve_status(s.attendance, iso_date)] += 1

    return AttendanceSummary(
        present=counts[AttendanceStatus.PRESENT],
        absent=counts[AttendanceStatus.ABSENT],
        justified=counts[AttendanceStatus.JUSTIFIED],
        pending=counts[AttendanceStatus.PENDING],
        total=len(students),
    )


def class_days_in_month(students: Sequence[Student], year: int, month: int) -> set[str]:
    """Distinct dates of the month on which any student has a recorded mark."""
    days: set[str] = set()
    for s in students:
        for day, status in s.attendance.items():
            if status.is_recorded and in_month(day, year, month):
                days.add(day)
    return days


def attendance_percentage(present: int, class_days: int) -> int:
    if class_days <= 0:
        return 0
    ratio = Decimal(present) * 100 / Decimal(class_days)
    return int(ratio.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def monthly_stats(
    students: Sequence[Student],
    year: int,
    month: int,
    *,
    count_justified: bool = False,
) -> list[StudentMonthStats]:
    """Per-student totals for a month, in input order.

    `absences` counts Absent marks, plus Justified ones when `count_justified`.
    """
    class_days = len(class_days_in_month(students, year, month))
    dates = list(iter_month_dates(year, month))

    out: list[StudentMonthStats] = []
    for s in students:
        statuses = [resolve_status(s.attendance, d) for d in dates]
        present = statuses.count(AttendanceStatus.PRESENT)
        absent = statuses.count(AttendanceStatus.ABSENT)
        justified = statuses.count(AttendanceStatus.JUSTIFIED)
        out.append(
            StudentMonthStats(
                student=s,
                present=present,
                absent=absent,
                justified=justified,
                absences=absent + justified if count_justified else absent,
                percentage=attendance_percentage(present, class_days),
            )
        )
    return out
