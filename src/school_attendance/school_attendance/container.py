from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .common.ids import IdProvider, UuidIdProvider
from .core.constants import (
    DEFAULT_LEGACY_SCHOOL_NAME,
    DEFAULT_LEGACY_STORAGE_KEY,
    DEFAULT_QR_BORDER,
    DEFAULT_QR_BOX_SIZE,
    DEFAULT_SCAN_DEBOUNCE_SECONDS,
    DEFAULT_STORAGE_KEY,
)
from .core.enums import ReportVariant
from .qr.service import QRCodeService
from .reports.factory import TotalsColumnsFactory
from .reports.service import MonthlyReportService
from .roster.repository import SchoolRepository
from .scanning.session import ScanSession
from .storage.bridge import KeyValuePersistence, KeyValueStore
from .storage.json_file_store import JsonFileKeyValueStore
from .storage.migration import migrate_legacy_classes


@dataclass(frozen=True)
class Container:
    store: KeyValueStore
    persistence: KeyValuePersistence

    repository: SchoolRepository
    report_service: MonthlyReportService
    qr_service: QRCodeService

    scan_debounce_seconds: float
    scanner_devices: tuple[tuple[str, int], ...]

    def scan_session(self, class_id: str, **kwargs) -> ScanSession:
        kwargs.setdefault("debounce_seconds", self.scan_debounce_seconds)
        return ScanSession(self.repository, class_id, **kwargs)


def build_container(
    *,
    settings: dict,
    store: Optional[KeyValueStore] = None,
    ids: Optional[IdProvider] = None,
) -> Container:
    store = store or JsonFileKeyValueStore(settings.get("STORAGE_PATH", "data/storage.json"))
    ids = ids or UuidIdProvider()
    key = str(settings.get("STORAGE_KEY", DEFAULT_STORAGE_KEY))

    migrate_legacy_classes(
        store,
        key=key,
        legacy_key=str(settings.get("LEGACY_STORAGE_KEY", DEFAULT_LEGACY_STORAGE_KEY)),
        school_name=str(settings.get("LEGACY_SCHOOL_NAME", DEFAULT_LEGACY_SCHOOL_NAME)),
        ids=ids,
    )

    persistence = KeyValuePersistence(store, key)
    repository = SchoolRepository(persistence, ids=ids)

    report_service = MonthlyReportService(
        variant=ReportVariant(str(settings.get("REPORT_VARIANT", ReportVariant.CLASS.value)).lower()),
        factory=TotalsColumnsFactory(),
    )
    qr_service = QRCodeService(
        box_size=int(settings.get("QR_BOX_SIZE", DEFAULT_QR_BOX_SIZE)),
        border=int(settings.get("QR_BORDER", DEFAULT_QR_BORDER)),
    )

    return Container(
        store=store,
        persistence=persistence,
        repository=repository,
        report_service=report_service,
        qr_service=qr_service,
        scan_debounce_seconds=float(settings.get("SCAN_DEBOUNCE_SECONDS", DEFAULT_SCAN_DEBOUNCE_SECONDS)),
        scanner_devices=(
            ("rear", int(settings.get("SCANNER_REAR_DEVICE", 0))),
            ("front", int(settings.get("SCANNER_FRONT_DEVICE", 1))),
        ),
    )
