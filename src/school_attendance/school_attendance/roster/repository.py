from __future__ import annotations

import functools
import logging
import threading
from typing import Any, Optional

from ..common.ids import IdProvider, UuidIdProvider
from ..common.validators import clean_name
from ..core.enums import AttendanceStatus
from ..storage.bridge import PersistenceBridge
from ..storage.codec import dumps_schools, loads_schools, school_to_dict
from .importer import parse_roster
from .model import School, SchoolClass, Student

logger = logging.getLogger(__name__)


def _synchronized(method):
    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        with self._lock:
            return method(self, *args, **kwargs)

    return wrapper


class SchoolRepository:
    """In-memory school tree plus the active school/class selection.

    Every structural change is persisted through the bridge right away.
    Invalid requests (empty names, unknown ids) are no-ops: they return
    None/False and never raise.

    Mutations and selection changes hold one re-entrant lock until their write
    has been handed to the bridge, so requests served from several threads are
    applied one at a time.
    """

    def __init__(self, bridge: PersistenceBridge, *, ids: Optional[IdProvider] = None):
        self._bridge = bridge
        self._ids = ids or UuidIdProvider()
        self._lock = threading.RLock()
        self._schools: list[School] = []
        self._active_school_id: Optional[str] = None
        self._active_class_id: Optional[str] = None
        self.hydrate()

    # ----- lifecycle -----

    @_synchronized
    def hydrate(self) -> None:
        self._schools = loads_schools(self._bridge.load())
        self._active_school_id = None
        self._active_class_id = None
        self._repair_selection()
        logger.debug("Loaded %d school(s)", len(self._schools))

    def _persist(self) -> None:
        self._bridge.save(dumps_schools(self._schools))

    # ----- queries -----

    @property
    def schools(self) -> tuple[School, ...]:
        return tuple(self._schools)

    @property
    def active_school_id(self) -> Optional[str]:
        return self._active_school_id

    @property
    def active_class_id(self) -> Optional[str]:
        return self._active_class_id

    @property
    def active_school(self) -> Optional[School]:
        return self.get_school(self._active_school_id) if self._active_school_id else None

    @property
    def active_class(self) -> Optional[SchoolClass]:
        return self.get_class(self._active_class_id) if self._active_class_id else None

    def get_school(self, school_id: str) -> Optional[School]:
        for s in self._schools:
            if s.id == school_id:
                return s
        return None

    def find_class_owner(self, class_id: str) -> Optional[School]:
        for s in self._schools:
            if s.find_class(class_id) is not None:
                return s
        return None

    def get_class(self, class_id: str) -> Optional[SchoolClass]:
        owner = self.find_class_owner(class_id)
        return owner.find_class(class_id) if owner else None

    @_synchronized
    def to_dict(self) -> dict[str, Any]:
        return {
            "active_school_id": self._active_school_id,
            "active_class_id": self._active_class_id,
            "schools": [school_to_dict(s) for s in self._schools],
        }

    # ----- selection -----

    def _repair_selection(self) -> None:
        if not self._schools:
            self._active_school_id = None
            self._active_class_id = None
            return

        school = self.get_school(self._active_school_id) if self._active_school_id else None
        if school is None:
            school = self._schools[0]
            self._active_school_id = school.id

        if not school.classes:
            self._active_class_id = None
        elif self._active_class_id is None or school.find_class(self._active_class_id) is None:
            self._active_class_id = school.classes[0].id

    @_synchronized
    def set_active_school(self, school_id: str) -> bool:
        if self.get_school(school_id) is None:
            return False
        if school_id != self._active_school_id:
            self._active_school_id = school_id
            self._active_class_id = None
        self._repair_selection()
        return True

    @_synchronized
    def set_active_class(self, class_id: str) -> bool:
        owner = self.find_class_owner(class_id)
        if owner is None:
            return False
        self._active_school_id = owner.id
        self._active_class_id = class_id
        self._repair_selection()
        return True

    # ----- schools -----

    @_synchronized
    def add_school(self, name: str) -> Optional[School]:
        clean = clean_name(name)
        if clean is None:
            return None

        school = School(id=self._ids.new_id(), name=clean)
        self._schools.append(school)
        self._active_school_id = school.id
        self._active_class_id = None
        self._repair_selection()
        self._persist()
        logger.info("Added school %r (%s)", clean, school.id)
        return school

    @_synchronized
    def delete_school(self, school_id: str) -> bool:
        index = next((i for i, s in enumerate(self._schools) if s.id == school_id), None)
        if index is None:
            return False

        removed = self._schools.pop(index)
        if self._active_school_id == school_id:
            self._active_class_id = None
            if self._schools:
                self._active_school_id = self._schools[max(0, index - 1)].id
            else:
                self._active_school_id = None
        self._repair_selection()
        self._persist()
        logger.info("Deleted school %r with %d class(es)", removed.name, len(removed.classes))
        return True

    # ----- classes -----

    @_synchronized
    def add_class(self, school_id: str, name: str) -> Optional[SchoolClass]:
        clean = clean_name(name)
        school = self.get_school(school_id)
        if clean is None or school is None:
            return None

        school_class = SchoolClass(id=self._ids.new_id(), name=clean)
        school.classes.append(school_class)
        self._active_school_id = school.id
        self._active_class_id = school_class.id
        self._repair_selection()
        self._persist()
        logger.info("Added class %r to school %r", clean, school.name)
        return school_class

    @_synchronized
    def delete_class(self, class_id: str) -> bool:
        owner = self.find_class_owner(class_id)
        if owner is None:
            return False

        index = next(i for i, c in enumerate(owner.classes) if c.id == class_id)
        removed = owner.classes.pop(index)
        if self._active_class_id == class_id:
            if owner.classes:
                self._active_class_id = owner.classes[max(0, index - 1)].id
            else:
                self._active_class_id = None
        self._repair_selection()
        self._persist()
        logger.info("Deleted class %r with %d student(s)", removed.name, len(removed.students))
        return True

    # ----- students -----

    @_synchronized
    def add_student(self, class_id: str, name: str) -> Optional[Student]:
        clean = clean_name(name)
        school_class = self.get_class(class_id)
        if clean is None or school_class is None:
            return None

        student = Student(id=self._ids.new_id(), name=clean)
        school_class.students.append(student)
        self._persist()
        return student

    @_synchronized
    def bulk_add_students(self, class_id: str, text: str) -> list[Student]:
        """Roster import: one student per non-blank line of `text`."""
        school_class = self.get_class(class_id)
        if school_class is None:
            return []

        created = [Student(id=self._ids.new_id(), name=name) for name in parse_roster(text)]
        if not created:
            return []

        school_class.students.extend(created)
        self._persist()
        logger.info("Imported %d student(s) into class %r", len(created), school_class.name)
        return created

    @_synchronized
    def delete_student(self, class_id: str, student_id: str) -> bool:
        school_class = self.get_class(class_id)
        if school_class is None or school_class.find_student(student_id) is None:
            return False

        school_class.students = [s for s in school_class.students if s.id != student_id]
        self._persist()
        return True

    @_synchronized
    def clear_students(self, class_id: str) -> bool:
        school_class = self.get_class(class_id)
        if school_class is None:
            return False

        school_class.students = []
        self._persist()
        return True

    # ----- attendance -----

    @_synchronized
    def set_attendance(self, class_id: str, student_id: str, iso_date: str, status: AttendanceStatus) -> bool:
        if not status.is_recorded:
            return False
        school_class = self.get_class(class_id)
        student = school_class.find_student(student_id) if school_class else None
        if student is None:
            return False

        student.attendance[iso_date] = status
        self._persist()
        return True

    @_synchronized
    def check_in_by_scanned_id(self, class_id: str, scanned_id: str, iso_date: str) -> Optional[str]:
        """Mark the student whose id equals the scanned payload as Present.

        The QR payload is the raw student id, with no further credential.
        Returns the student's name, or None when the id is not on the roster.
        """
        school_class = self.get_class(class_id)
        student = school_class.find_student(scanned_id) if school_class else None
        if student is None:
            logger.info("Check-in ignored, unknown id %r in class %s", scanned_id, class_id)
            return None

        student.attendance[iso_date] = AttendanceStatus.PRESENT
        self._persist()
        return student.name
