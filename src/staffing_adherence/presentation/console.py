from __future__ import annotations

import io
from typing import List, Sequence

from staffing_adherence.attendance.attendance_models import MonthlyAdherenceResult


def _format_table(rows: Sequence[Sequence[object]], headers: List[str]) -> str:
    output = io.StringIO()
    rows = list(rows)

    widths = [len(h) for h in headers]
    for row in rows:
        for i, v in enumerate(row):
            widths[i] = max(widths[i], len(str(v)))

    def fmt(r):
        return " ".join(str(r[i]).ljust(widths[i]) for i in range(len(headers)))

    print(fmt(headers), file=output)
    print(" ".join("-" * w for w in widths), file=output)
    for row in rows:
        print(fmt(row), file=output)

    return output.getvalue()


def render_warning_line(result: MonthlyAdherenceResult) -> str:
    if not result.warning_days:
        return "All days fully staffed"
    return " ".join(f"/!\\ D{r.day_of_month}" for r in result.warning_days)


def render_monthly_adherence(result: MonthlyAdherenceResult) -> str:
    """
    Plain-text monthly adherence report.

    Presentation-layer only:
    - No SQL
    - No business logic
    """
    out = io.StringIO()

    print("=" * 70, file=out)
    print(f"STAFFING ADHERENCE - {result.region} - {result.year:04d}-{result.month:02d}", file=out)
    print("=" * 70, file=out)
    print(f"Net Capacity per Agent: {result.net_capacity_minutes:g} min/day", file=out)
    print(f"Agents on Roster:       {len(result.roster)}", file=out)
    print(f"Average Adherence:      {result.average_adherence}%", file=out)
    print(file=out)

    rows = [
        (
            r.date_iso,
            r.day_of_month,
            f"{r.available_count}/{r.required_count}",
            f"{r.adherence_percent}%",
            "/!\\" if r.is_warning else "",
        )
        for r in result.daily_results
    ]
    print(_format_table(rows, ["date", "day", "avail/req", "adherence", "flag"]), file=out)

    print(render_warning_line(result), file=out)

    if result.share_warnings:
        print("\nWARNING: Forecast share checks:", file=out)
        for w in result.share_warnings:
            print(" -", w, file=out)

    return out.getvalue()
