from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Mapping

from ..core.enums import AttendanceStatus, SortOrder


@dataclass(eq=False)
class Student:
    """Domain entity: a student and its per-date attendance marks.

    `attendance` only holds recorded marks (Present/Absent/Justified);
    a date with no key is Pending.
    """

    id: str
    name: str
    attendance: dict[str, AttendanceStatus] = field(default_factory=dict)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Student) and other.id == self.id

    def __hash__(self) -> int:
        return hash(("student", self.id))

    def status_on(self, iso_date: str) -> AttendanceStatus:
        return resolve_status(self.attendance, iso_date)


@dataclass(eq=False)
class SchoolClass:
    id: str
    name: str
    students: list[Student] = field(default_factory=list)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, SchoolClass) and other.id == self.id

    def __hash__(self) -> int:
        return hash(("class", self.id))

    def find_student(self, student_id: str) -> Student | None:
        for s in self.students:
            if s.id == student_id:
                return s
        return None


@dataclass(eq=False)
class School:
    id: str
    name: str
    classes: list[SchoolClass] = field(default_factory=list)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, School) and other.id == self.id

    def __hash__(self) -> int:
        return hash(("school", self.id))

    def find_class(self, class_id: str) -> SchoolClass | None:
        for c in self.classes:
            if c.id == class_id:
                return c
        return None


def resolve_status(attendance: Mapping[str, AttendanceStatus], iso_date: str) -> AttendanceStatus:
    """Status for a date; missing keys (and legacy explicit Pending) read as Pending."""
    return attendance.get(iso_date) or AttendanceStatus.PENDING


def sorted_students(students: Iterable[Student], order: SortOrder = SortOrder.NONE) -> list[Student]:
    items = list(students)
    if order == SortOrder.ASC:
        items.sort(key=lambda s: s.name.casefold())
    elif order == SortOrder.DESC:
        items.sort(key=lambda s: s.name.casefold(), reverse=True)
    return items
