from __future__ import annotations

from .base import TotalsColumns
from ...attendance.aggregator import StudentMonthStats


class ClassTotalsColumns(TotalsColumns):
    """Class-only export: absent count, then presence percentage over class days."""

    def headers(self) -> list[str]:
        return ["Total de Faltas", "% de Frequência"]

    def values(self, stats: StudentMonthStats) -> list[str]:
        return [str(stats.absences), f"{stats.percentage}%"]
