from __future__ import annotations

import calendar
from datetime import date, datetime
from typing import Iterator

from ..core.constants import MONTH_NAMES_PT_BR
from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    if not isinstance(value, str):
        raise ValidationError(f"Data inválida: {value!r} (use AAAA-MM-DD)")
    try:
        return datetime.strptime((value or "").strip(), "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError(f"Data inválida: {value!r} (use AAAA-MM-DD)")


def parse_year_month(value: str) -> tuple[int, int]:
    """Parse YYYY-MM (or a full YYYY-MM-DD) into (year, month)."""
    v = (value or "").strip()
    try:
        parsed = datetime.strptime(v[:7], "%Y-%m")
    except ValueError:
        raise ValidationError(f"Mês inválido: {value!r} (use AAAA-MM)")
    return parsed.year, parsed.month


def today_iso() -> str:
    """Current local date as YYYY-MM-DD.

    Note: Wrapped so tests can patch it.
    """
    return date.today().isoformat()


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def iter_month_dates(year: int, month: int) -> Iterator[str]:
    for day in range(1, days_in_month(year, month) + 1):
        yield f"{year:04d}-{month:02d}-{day:02d}"


def in_month(iso_date: str, year: int, month: int) -> bool:
    return iso_date.startswith(f"{year:04d}-{month:02d}-")


def month_name(month: int) -> str:
    """Upper-case pt-BR month name, as printed in report headers."""
    return MONTH_NAMES_PT_BR[month - 1].upper()
