import argparse
import sys
from datetime import date, datetime
from typing import List, Optional

from staffing_adherence.attendance.errors import AdherenceRunError
from staffing_adherence.attendance.monthly_adherence_usecase import compute_month
from staffing_adherence.presentation.console import render_monthly_adherence
from staffing_adherence.presentation.csv_export import write_attendance_csv
from staffing_adherence.utils.config import config
from staffing_adherence.utils.logger import get_logger

logger = get_logger(__name__)


def _first_of_current_month() -> date:
    return date.today().replace(day=1)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Monthly staffing adherence (required vs available headcount per day)"
    )

    parser.add_argument(
        "--region",
        type=str,
        default=None,
        help=f"Region code. Defaults to DEFAULT_REGION ({config.DEFAULT_REGION}).",
    )

    parser.add_argument(
        "--start",
        type=str,
        default=None,
        help="Any date in the target month (YYYY-MM-DD). Defaults to the current month.",
    )

    parser.add_argument(
        "--csv",
        action="store_true",
        help=f"Also write the attendance CSV under EXPORT_DIR ({config.EXPORT_DIR}).",
    )

    parser.add_argument(
        "--check-shares",
        action="store_true",
        help="Validate forecast share sums and list any anomalies.",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    start = (
        datetime.strptime(args.start, "%Y-%m-%d").date()
        if args.start
        else _first_of_current_month()
    )
    region = args.region or config.DEFAULT_REGION

    try:
        result = compute_month(region, start, check_shares=args.check_shares)
    except AdherenceRunError as exc:
        print(f"Adherence calculation failed: {exc}", file=sys.stderr)
        return 1

    print(render_monthly_adherence(result), end="")

    if args.csv:
        path = write_attendance_csv(result, config.EXPORT_DIR)
        logger.info("Attendance CSV written: %s", path)
        print(f"CSV: {path}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
