from __future__ import annotations

from abc import ABC, abstractmethod

from ...attendance.aggregator import StudentMonthStats


class TotalsColumns(ABC):
    """Strategy for the trailing per-student columns of the monthly report."""

    #: Justified marks count as absences in this variant.
    count_justified: bool = False
    #: The preamble carries a school-name line.
    shows_school: bool = False

    @abstractmethod
    def headers(self) -> list[str]:
        raise NotImplementedError

    @abstractmethod
    def values(self, stats: StudentMonthStats) -> list[str]:
        raise NotImplementedError
