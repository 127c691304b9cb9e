"""JSON codec for the school tree.

Shape (field names and status strings are kept stable across versions)::

    [{"id": ..., "name": ..., "classes": [
        {"id": ..., "name": ..., "students": [
            {"id": ..., "name": ..., "attendance": {"2024-02-01": "Presente"}}]}]}]

Decoding never raises: malformed or absent text yields an empty list and a log
record.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Optional

from ..core.enums import AttendanceStatus
from ..roster.model import School, SchoolClass, Student

logger = logging.getLogger(__name__)

_STATUS_BY_VALUE = {s.value: s for s in AttendanceStatus}


class _MalformedData(ValueError):
    pass


def _student_to_dict(s: Student) -> dict[str, Any]:
    return {
        "id": s.id,
        "name": s.name,
        "attendance": {d: st.value for d, st in s.attendance.items() if st.is_recorded},
    }


def _class_to_dict(c: SchoolClass) -> dict[str, Any]:
    return {"id": c.id, "name": c.name, "students": [_student_to_dict(s) for s in c.students]}


def school_to_dict(school: School) -> dict[str, Any]:
    return {"id": school.id, "name": school.name, "classes": [_class_to_dict(c) for c in school.classes]}


def dumps_schools(schools: list[School]) -> str:
    return json.dumps([school_to_dict(s) for s in schools], ensure_ascii=False)


def _require_str(obj: dict, key: str) -> str:
    value = obj.get(key)
    if not isinstance(value, str):
        raise _MalformedData(f"field {key!r} must be a string, got {type(value).__name__}")
    return value


def _require_list(obj: dict, key: str) -> list:
    value = obj.get(key, [])
    if not isinstance(value, list):
        raise _MalformedData(f"field {key!r} must be a list, got {type(value).__name__}")
    return value


def _require_dict(value: Any, what: str) -> dict:
    if not isinstance(value, dict):
        raise _MalformedData(f"{what} must be an object, got {type(value).__name__}")
    return value


def _student_from_dict(raw: Any) -> Student:
    obj = _require_dict(raw, "student")
    attendance_raw = _require_dict(obj.get("attendance", {}), "attendance")

    attendance: dict[str, AttendanceStatus] = {}
    for day, value in attendance_raw.items():
        status = _STATUS_BY_VALUE.get(value) if isinstance(value, str) else None
        if status is None:
            logger.warning("Skipping unknown attendance value %r for %s on %s", value, obj.get("id"), day)
            continue
        if status.is_recorded:
            attendance[str(day)] = status

    return Student(id=_require_str(obj, "id"), name=_require_str(obj, "name"), attendance=attendance)


def _class_from_dict(raw: Any) -> SchoolClass:
    obj = _require_dict(raw, "class")
    return SchoolClass(
        id=_require_str(obj, "id"),
        name=_require_str(obj, "name"),
        students=[_student_from_dict(s) for s in _require_list(obj, "students")],
    )


def _school_from_dict(raw: Any) -> School:
    obj = _require_dict(raw, "school")
    return School(
        id=_require_str(obj, "id"),
        name=_require_str(obj, "name"),
        classes=[_class_from_dict(c) for c in _require_list(obj, "classes")],
    )


def _parse_list(text: Optional[str]) -> list:
    if text is None or not text.strip():
        return []
    data = json.loads(text)
    if not isinstance(data, list):
        raise _MalformedData(f"top level must be a list, got {type(data).__name__}")
    return data


def loads_schools(text: Optional[str]) -> list[School]:
    try:
        return [_school_from_dict(item) for item in _parse_list(text)]
    except ValueError as e:
        # json.JSONDecodeError and _MalformedData are both ValueError
        logger.warning("Discarding malformed saved data, starting empty: %s", e)
        return []


def loads_legacy_classes(text: Optional[str], *, school_id: str, school_name: str) -> list[School]:
    """Load a single-tier blob (a list of classes) under one synthetic school."""
    try:
        classes = [_class_from_dict(item) for item in _parse_list(text)]
    except ValueError as e:
        logger.warning("Discarding malformed legacy data: %s", e)
        return []
    if not classes:
        return []
    return [School(id=school_id, name=school_name, classes=classes)]
