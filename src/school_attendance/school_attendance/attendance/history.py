from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from ..core.enums import AttendanceStatus
from ..roster.model import Student, resolve_status


@dataclass(frozen=True)
class HistoryRow:
    student_id: str
    name: str
    statuses: tuple[AttendanceStatus, ...]


@dataclass(frozen=True)
class AttendanceHistory:
    """Every date with a recorded mark (most recent first) x every student (by name)."""

    dates: tuple[str, ...]
    rows: tuple[HistoryRow, ...]


def build_history(students: Sequence[Student]) -> AttendanceHistory:
    all_dates: set[str] = set()
    for s in students:
        all_dates.update(d for d, st in s.attendance.items() if st.is_recorded)
    dates = tuple(sorted(all_dates, reverse=True))

    rows = [
        HistoryRow(
            student_id=s.id,
            name=s.name,
            statuses=tuple(resolve_status(s.attendance, d) for d in dates),
        )
        for s in students
    ]
    rows.sort(key=lambda r: r.name.casefold())
    return AttendanceHistory(dates=dates, rows=tuple(rows))
