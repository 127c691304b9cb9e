from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional

from ..common.datetime_utils import today_iso
from ..core.constants import DEFAULT_SCAN_DEBOUNCE_SECONDS
from ..roster.repository import SchoolRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScanResult:
    scanned_id: str
    student_name: Optional[str]

    @property
    def success(self) -> bool:
        return self.student_name is not None

    @property
    def message(self) -> str:
        if self.student_name is not None:
            return f"Presente: {self.student_name}"
        return "QR Code não reconhecido"


class ScanSession:
    """Feeds decoded QR payloads into check-in for one class.

    After each handled delivery (recognized or not) further deliveries are
    ignored until `debounce_seconds` have elapsed, so consecutive camera frames
    of the same code produce a single check-in.
    """

    def __init__(
        self,
        repository: SchoolRepository,
        class_id: str,
        *,
        date_provider: Callable[[], str] = today_iso,
        clock: Callable[[], float] = time.monotonic,
        debounce_seconds: float = DEFAULT_SCAN_DEBOUNCE_SECONDS,
    ):
        self._repository = repository
        self._class_id = class_id
        self._date_provider = date_provider
        self._clock = clock
        self._debounce_seconds = float(debounce_seconds)
        self._blocked_until: Optional[float] = None

    @property
    def is_showing_result(self) -> bool:
        return self._blocked_until is not None and self._clock() < self._blocked_until

    def deliver(self, decoded_text: str) -> Optional[ScanResult]:
        """Handle one decoded payload; None when it was swallowed by the debounce."""
        if self.is_showing_result:
            return None

        name = self._repository.check_in_by_scanned_id(self._class_id, decoded_text, self._date_provider())
        result = ScanResult(scanned_id=decoded_text, student_name=name)
        self._blocked_until = self._clock() + self._debounce_seconds
        logger.info(result.message)
        return result
