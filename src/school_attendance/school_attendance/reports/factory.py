from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import ReportVariant
from .columns.base import TotalsColumns
from .columns.class_totals import ClassTotalsColumns
from .columns.school_totals import SchoolTotalsColumns


@dataclass
class TotalsColumnsFactory:
    """Factory Pattern: pick the trailing-columns strategy for a report variant."""

    def for_variant(self, variant: ReportVariant) -> TotalsColumns:
        if variant == ReportVariant.SCHOOL:
            return SchoolTotalsColumns()
        return ClassTotalsColumns()
