from __future__ import annotations

from enum import Enum


class AttendanceStatus(str, Enum):
    """Per-date mark of a student.

    Values are the strings already found in saved data, so old blobs load as-is.
    """

    PRESENT = "Presente"
    ABSENT = "Falta"
    JUSTIFIED = "Justificada"
    PENDING = "Pendente"

    @property
    def is_recorded(self) -> bool:
        return self is not AttendanceStatus.PENDING


class SortOrder(str, Enum):
    """Display order of a class roster."""

    NONE = "none"
    ASC = "asc"
    DESC = "desc"


class ReportVariant(str, Enum):
    """Shape of the monthly CSV export.

    CLASS: absences + attendance percentage.
    SCHOOL: school-name line, a single absence count (absent + justified).
    """

    CLASS = "class"
    SCHOOL = "school"
