"""Camera check-in loop for one class: rear camera first, front camera as fallback.

Usage: python scripts/scan_checkin.py <class_id> [--date 2024-02-01]
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import load_settings

from src.school_attendance.school_attendance.common.datetime_utils import parse_iso_date, today_iso
from src.school_attendance.school_attendance.container import build_container
from src.school_attendance.school_attendance.core.exceptions import CaptureUnavailableError
from src.school_attendance.school_attendance.main import configure_logging
from src.school_attendance.school_attendance.scanning.capture import run_scanner
from src.school_attendance.school_attendance.scanning.opencv_capture import OpenCVCaptureSource


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("class_id")
    parser.add_argument("--date", default=None)
    args = parser.parse_args()

    load_dotenv(override=False)
    settings = load_settings()
    configure_logging(settings.get("LOG_LEVEL", "INFO"))
    container = build_container(settings=settings)

    if container.repository.get_class(args.class_id) is None:
        raise SystemExit(f"Turma não encontrada: {args.class_id}")

    day = parse_iso_date(args.date).isoformat() if args.date else today_iso()
    session = container.scan_session(args.class_id, date_provider=lambda: day)
    sources = [OpenCVCaptureSource(name, index) for name, index in container.scanner_devices]

    try:
        handled = run_scanner(session, sources, on_result=lambda r: print(r.message, flush=True))
    except CaptureUnavailableError as e:
        raise SystemExit(str(e))
    except KeyboardInterrupt:
        handled = None
    print(f"OK: scanner stopped ({handled if handled is not None else 'interrupted'})")


if __name__ == "__main__":
    main()
