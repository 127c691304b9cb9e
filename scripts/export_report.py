"""Export the monthly attendance CSV of one class.

Usage: python scripts/export_report.py <class_id> [--month 2024-02] [--variant class|school] [--sort asc|desc|none]
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

from src.school_attendance.school_attendance.common.datetime_utils import today_iso
from src.school_attendance.school_attendance.container import build_container
from src.school_attendance.school_attendance.core.enums import ReportVariant, SortOrder
from src.school_attendance.school_attendance.main import configure_logging


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("class_id")
    parser.add_argument("--month", default=today_iso()[:7])
    parser.add_argument("--variant", choices=[v.value for v in ReportVariant], default=None)
    parser.add_argument("--sort", choices=[s.value for s in SortOrder], default=SortOrder.NONE.value)
    parser.add_argument("--out-dir", default=".")
    args = parser.parse_args()

    load_dotenv(override=False)
    settings = load_settings()
    configure_logging(settings.get("LOG_LEVEL", "INFO"))
    container = build_container(settings=settings)
    repo = container.repository

    school_class = repo.get_class(args.class_id)
    if school_class is None:
        raise SystemExit(f"Turma não encontrada: {args.class_id}")
    owner = repo.find_class_owner(args.class_id)

    report = container.report_service.build_monthly_report(
        school_class,
        owner.name if owner else None,
        args.month,
        variant=ReportVariant(args.variant) if args.variant else None,
        sort_order=SortOrder(args.sort),
    )

    out_file = Path(args.out_dir) / report.filename
    out_file.parent.mkdir(parents=True, exist_ok=True)
    out_file.write_bytes(report.to_bytes())
    print(f"OK: Report written: {out_file}")


if __name__ == "__main__":
    main()
