"""
Forecast share profile + sanity checks.

The profile is the full 12-month / 53-week / 7-weekday view of a region's
shares with defaults filled in, rounded to 2 decimals the way planners see
them. The checks flag sums that drift from 100%; they never block a run.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Mapping

import pandas as pd

from staffing_adherence.attendance.forecast_domain import (
    CATEGORY_COLUMNS,
    DAILY_FALLBACK_PERCENT,
    DEFAULT_CATEGORY_PERCENTS,
    MONTHLY_FALLBACK_PERCENT,
    WEEKLY_FALLBACK_PERCENT,
)

WEEKDAY_NAMES = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]

# Two-decimal defaults do not add up to exactly 100 (12 x 8.33 = 99.96)
SHARE_SUM_TOLERANCE = 0.05


def _by_key(rows: Iterable[Mapping], key: str) -> Dict[int, Mapping]:
    return {int(r[key]): r for r in rows or [] if r.get(key) is not None}


def _pct(row: Mapping | None, column: str, default: float) -> float:
    value = row.get(column) if row else None
    if value is None or pd.isna(value):
        value = default
    return round(float(value), 2)


def forecast_profile(
    monthly_rows: Iterable[Mapping],
    weekly_rows: Iterable[Mapping],
    daily_rows: Iterable[Mapping],
) -> Dict[str, pd.DataFrame]:
    """
    Returns {"monthly", "weekly", "daily"} DataFrames.

    monthly: month, percent
    weekly:  week, percent
    daily:   weekday, name, percent, mail_pct ... back_office_pct
    """
    monthly = _by_key(monthly_rows, "month")
    weekly = _by_key(weekly_rows, "week")
    daily = _by_key(daily_rows, "weekday")

    df_month = pd.DataFrame(
        [
            {"month": m, "percent": _pct(monthly.get(m), "percent", MONTHLY_FALLBACK_PERCENT)}
            for m in range(1, 13)
        ]
    )
    df_week = pd.DataFrame(
        [
            {"week": w, "percent": _pct(weekly.get(w), "percent", WEEKLY_FALLBACK_PERCENT)}
            for w in range(1, 54)
        ]
    )

    daily_records = []
    for wd, name in enumerate(WEEKDAY_NAMES, start=1):
        row = daily.get(wd)
        rec = {
            "weekday": wd,
            "name": name,
            "percent": _pct(row, "percent", DAILY_FALLBACK_PERCENT),
        }
        for cat, col in CATEGORY_COLUMNS.items():
            rec[col] = _pct(row, col, DEFAULT_CATEGORY_PERCENTS[cat])
        daily_records.append(rec)
    df_day = pd.DataFrame(daily_records)

    return {"monthly": df_month, "weekly": df_week, "daily": df_day}


def _off_target(total: float) -> bool:
    return abs(round(total, 2) - 100.0) > SHARE_SUM_TOLERANCE


def validate_shares(profile: Dict[str, pd.DataFrame]) -> List[str]:
    """
    Human-readable warnings for:
    - monthly shares not summing to 100%
    - weekday shares not summing to 100%
    - a weekday whose channel split does not sum to 100%

    Weekly shares are only a guide (53 ISO weeks) and are not checked.
    """
    warnings: List[str] = []

    month_sum = float(profile["monthly"]["percent"].sum())
    if _off_target(month_sum):
        warnings.append(f"Monthly shares sum to {month_sum:.2f}% (should be 100%)")

    daily = profile["daily"]
    day_sum = float(daily["percent"].sum())
    if _off_target(day_sum):
        warnings.append(f"Weekday shares sum to {day_sum:.2f}% (should be 100%)")

    channel_cols = list(CATEGORY_COLUMNS.values())
    channel_sums = daily[channel_cols].sum(axis=1)
    for name, total in zip(daily["name"], channel_sums):
        if _off_target(float(total)):
            warnings.append(f"{name}: channel split sums to {float(total):.2f}% (should be 100%)")

    return warnings
