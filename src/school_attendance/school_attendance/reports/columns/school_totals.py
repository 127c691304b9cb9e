from __future__ import annotations

from .base import TotalsColumns
from ...attendance.aggregator import StudentMonthStats


class SchoolTotalsColumns(TotalsColumns):
    """School-scoped export: one absence count, justified included."""

    count_justified = True
    shows_school = True

    def headers(self) -> list[str]:
        return ["Quantidade de Faltas"]

    def values(self, stats: StudentMonthStats) -> list[str]:
        return [str(stats.absences)]
