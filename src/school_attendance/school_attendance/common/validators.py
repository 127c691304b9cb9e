from __future__ import annotations

from typing import Any, Optional

from ..core.enums import AttendanceStatus
from ..core.exceptions import ValidationError


def clean_name(value: Any) -> Optional[str]:
    """Trimmed name, or None when nothing is left (non-strings count as empty)."""
    if not isinstance(value, str):
        return None
    v = value.strip()
    return v or None


def parse_status(value: str) -> AttendanceStatus:
    """Accept either the enum name ("PRESENT") or its stored value ("Presente")."""
    v = (value or "").strip()
    for status in AttendanceStatus:
        if v == status.value or v.upper() == status.name:
            return status
    raise ValidationError(f"Status inválido: {value!r}")


def require_recorded_status(value: str) -> AttendanceStatus:
    status = parse_status(value)
    if not status.is_recorded:
        raise ValidationError("Pendente não pode ser gravado")
    return status
