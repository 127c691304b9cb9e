from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

from ..attendance.aggregator import monthly_stats
from ..common.datetime_utils import iter_month_dates, month_name, parse_year_month
from ..core.constants import (
    REPORT_FILE_PREFIX,
    REPORT_LEGEND,
    REPORT_MONTH_LABEL,
    REPORT_NAME_HEADER,
    REPORT_NUMBER_HEADER,
    REPORT_SCHOOL_LABEL,
    REPORT_TITLE,
    REPORT_YEAR_LABEL,
)
from ..core.enums import AttendanceStatus, ReportVariant, SortOrder
from ..roster.model import SchoolClass, resolve_status, sorted_students
from .factory import TotalsColumnsFactory

STATUS_CODES = {
    AttendanceStatus.PRESENT: "P",
    AttendanceStatus.ABSENT: "F",
    AttendanceStatus.JUSTIFIED: "FJ",
}

UTF8_BOM = "\ufeff"

_UNSAFE_FILE_CHARS = re.compile(r"[\s/\\]+")


@dataclass(frozen=True)
class MonthlyReport:
    filename: str
    text: str

    def to_bytes(self) -> bytes:
        """CSV bytes with a BOM so spreadsheet tools detect UTF-8."""
        return (UTF8_BOM + self.text).encode("utf-8")


def quote_csv(value: str) -> str:
    return '"' + value.replace('"', '""') + '"'


def _file_part(name: str) -> str:
    return _UNSAFE_FILE_CHARS.sub("_", name)


def report_filename(class_name: str, school_name: Optional[str], year: int, month: int) -> str:
    parts = [REPORT_FILE_PREFIX]
    if school_name:
        parts.append(_file_part(school_name))
    parts += [_file_part(class_name), month_name(month), str(year)]
    return "_".join(parts) + ".csv"


class MonthlyReportService:
    """Student x day-of-month attendance grid for one class, as CSV text."""

    def __init__(
        self,
        *,
        variant: ReportVariant = ReportVariant.CLASS,
        factory: Optional[TotalsColumnsFactory] = None,
    ):
        self._variant = variant
        self._factory = factory or TotalsColumnsFactory()

    @property
    def variant(self) -> ReportVariant:
        return self._variant

    def build_monthly_report(
        self,
        school_class: SchoolClass,
        school_name: Optional[str],
        year_month: str,
        *,
        variant: Optional[ReportVariant] = None,
        sort_order: SortOrder = SortOrder.NONE,
    ) -> MonthlyReport:
        year, month = parse_year_month(year_month)
        columns = self._factory.for_variant(variant or self._variant)
        dates = list(iter_month_dates(year, month))
        students = sorted_students(school_class.students, sort_order)
        shown_school = school_name if columns.shows_school else None

        lines = [REPORT_TITLE, ""]
        if shown_school:
            lines.append(f"{REPORT_SCHOOL_LABEL},{quote_csv(shown_school)}")
        lines.append(f"{REPORT_YEAR_LABEL},{year},,{REPORT_MONTH_LABEL},{month_name(month)}")
        lines.append("")
        lines.extend(f"{code},{label}" for code, label in REPORT_LEGEND)
        lines.append("")

        header = [REPORT_NUMBER_HEADER, REPORT_NAME_HEADER]
        header += [str(day) for day in range(1, len(dates) + 1)]
        header += columns.headers()
        lines.append(",".join(header))

        stats = monthly_stats(students, year, month, count_justified=columns.count_justified)
        for number, (student, student_stats) in enumerate(zip(students, stats), start=1):
            row = [str(number), quote_csv(student.name)]
            row += [STATUS_CODES.get(resolve_status(student.attendance, d), "") for d in dates]
            row += columns.values(student_stats)
            lines.append(",".join(row))

        return MonthlyReport(
            filename=report_filename(school_class.name, shown_school, year, month),
            text="\n".join(lines),
        )
