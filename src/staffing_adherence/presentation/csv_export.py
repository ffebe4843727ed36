"""
Attendance CSV export.

Layout:
    Region,<region>
    <blank>
    Agent,Day 1,...,Day N          one row per agent (PTO / PTO (half) / status)
    <blank>
    Day,Available,Required,Adherence
"""

from __future__ import annotations

import io
from datetime import date
from pathlib import Path
from typing import Optional

import pandas as pd

from staffing_adherence.attendance.attendance_models import Agent, MonthlyAdherenceResult
from staffing_adherence.attendance.roster_domain import covering_leave, off_grid


def _cell(agent: Agent, day: date, off: bool) -> str:
    if not off:
        return agent.status.value
    return "PTO (half)" if covering_leave(agent, day).is_half_day else "PTO"


def roster_grid_frame(result: MonthlyAdherenceResult) -> pd.DataFrame:
    days = [date.fromisoformat(r.date_iso) for r in result.daily_results]
    grid = off_grid(result.roster, days)
    columns = ["Agent"] + [f"Day {d.day}" for d in days]
    rows = [
        [a.full_name] + [_cell(a, d, off) for d, off in zip(days, grid[a.id])]
        for a in result.roster
    ]
    return pd.DataFrame(rows, columns=columns)


def daily_summary_frame(result: MonthlyAdherenceResult) -> pd.DataFrame:
    return pd.DataFrame(
        [
            {
                "Day": r.day_of_month,
                "Available": r.available_count,
                "Required": r.required_count,
                "Adherence": f"{r.adherence_percent}%",
            }
            for r in result.daily_results
        ],
        columns=["Day", "Available", "Required", "Adherence"],
    )


def build_attendance_csv(result: MonthlyAdherenceResult) -> str:
    out = io.StringIO()
    out.write(f"Region,{result.region}\n\n")
    roster_grid_frame(result).to_csv(out, index=False, lineterminator="\n")
    out.write("\n")
    daily_summary_frame(result).to_csv(out, index=False, lineterminator="\n")
    return out.getvalue()


def write_attendance_csv(
    result: MonthlyAdherenceResult,
    output_dir: Path,
    today: Optional[date] = None,
) -> Path:
    today = today or date.today()
    output_path = Path(output_dir) / f"attendance_{result.region}_{today.isoformat()}.csv"
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(build_attendance_csv(result), encoding="utf-8")
    return output_path
