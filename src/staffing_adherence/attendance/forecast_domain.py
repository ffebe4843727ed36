"""
Forecast Decomposer

Annual volume -> month share -> ISO-week share -> weekday share -> task
category split -> demand minutes (volume x AHT) for one day.

Rules:
- Pure functions only
- Missing share rows fall back to uniform shares, never raise
- Category percents default independently of each other
"""

from __future__ import annotations

from datetime import date
from typing import Dict, Iterable, List, Mapping, Optional

from staffing_adherence.attendance.attendance_models import (
    DailyShare,
    DayDemand,
    ForecastSnapshot,
    Task,
    TaskCategory,
)
from staffing_adherence.attendance.iso_week import iso_week_number, iso_weekday
from staffing_adherence.utils.logger import get_logger

logger = get_logger(__name__)


# ----------------------------
# Fallbacks (percent)
# ----------------------------

MONTHLY_FALLBACK_PERCENT = 100 / 12
WEEKLY_FALLBACK_PERCENT = 100 / 52
DAILY_FALLBACK_PERCENT = 100 / 7

DEFAULT_CATEGORY_PERCENTS: Dict[TaskCategory, float] = {
    TaskCategory.MAIL: 38.0,
    TaskCategory.CALL: 36.0,
    TaskCategory.CHAT: 0.0,
    TaskCategory.CLIENTELING: 3.0,
    TaskCategory.FRAUD: 0.0,
    TaskCategory.BACK_OFFICE: 26.0,
}

# Column names the forecast store uses for the per-category split
CATEGORY_COLUMNS: Dict[TaskCategory, str] = {
    TaskCategory.MAIL: "mail_pct",
    TaskCategory.CALL: "call_pct",
    TaskCategory.CHAT: "chat_pct",
    TaskCategory.CLIENTELING: "clienteling_pct",
    TaskCategory.FRAUD: "fraud_pct",
    TaskCategory.BACK_OFFICE: "back_office_pct",
}


def _opt_float(value) -> Optional[float]:
    if value is None:
        return None
    try:
        v = float(value)
    except (TypeError, ValueError):
        return None
    return None if v != v else v  # NaN from pandas


# ----------------------------
# Store rows -> models
# ----------------------------

def daily_share_from_row(row: Mapping) -> DailyShare:
    return DailyShare(
        weekday=int(row["weekday"]),
        percent=_opt_float(row.get("percent")),
        category_percents={
            cat: _opt_float(row.get(col)) for cat, col in CATEGORY_COLUMNS.items()
        },
    )


def tasks_from_rows(rows: Iterable[Mapping]) -> List[Task]:
    """Enabled task rows -> Task models; names outside TaskCategory are dropped."""
    tasks: List[Task] = []
    for row in rows or []:
        category = TaskCategory.from_label(row.get("name", ""))
        if category is None:
            logger.warning("Task %r matches no task category; it adds no demand", row.get("name"))
            continue
        tasks.append(
            Task(
                name=category,
                average_handle_time_minutes=_opt_float(row.get("average_handle_time_minutes")) or 0.0,
                enabled=bool(row.get("enabled", True)),
            )
        )
    return tasks


# ----------------------------
# Share resolution
# ----------------------------

def share_fraction(percent: Optional[float], fallback_percent: float) -> float:
    return (fallback_percent if percent is None else percent) / 100.0


def category_fractions(share: Optional[DailyShare]) -> Dict[TaskCategory, float]:
    explicit = share.category_percents if share is not None else {}
    out: Dict[TaskCategory, float] = {}
    for cat, default in DEFAULT_CATEGORY_PERCENTS.items():
        pct = explicit.get(cat)
        out[cat] = (default if pct is None else pct) / 100.0
    return out


# ----------------------------
# Volume / demand
# ----------------------------

def day_volume(
    total_volume: float,
    monthly_fraction: float,
    weekly_fraction: float,
    daily_fraction: float,
) -> float:
    return total_volume * monthly_fraction * weekly_fraction * daily_fraction


def category_volumes(volume: float, fractions: Mapping[TaskCategory, float]) -> Dict[TaskCategory, float]:
    return {cat: volume * fractions.get(cat, 0.0) for cat in TaskCategory}


def aht_by_category(tasks: Iterable[Task]) -> Dict[TaskCategory, float]:
    """Enabled tasks only; a later row for the same category wins."""
    return {t.name: t.average_handle_time_minutes for t in tasks if t.enabled}


def demand_minutes(volumes: Mapping[TaskCategory, float], tasks: Iterable[Task]) -> float:
    """Sum of volume x AHT; a category without an enabled task contributes 0."""
    aht = aht_by_category(tasks)
    return sum(volumes.get(cat, 0.0) * aht.get(cat, 0.0) for cat in TaskCategory)


def decompose_day(day: date, snapshot: ForecastSnapshot) -> DayDemand:
    week = iso_week_number(day)
    wd = iso_weekday(day)
    share = snapshot.daily_shares.get(wd)

    volume = day_volume(
        snapshot.total_volume,
        share_fraction(snapshot.monthly_percent.get(day.month), MONTHLY_FALLBACK_PERCENT),
        share_fraction(snapshot.weekly_percent.get(week), WEEKLY_FALLBACK_PERCENT),
        share_fraction(share.percent if share is not None else None, DAILY_FALLBACK_PERCENT),
    )
    volumes = category_volumes(volume, category_fractions(share))

    return DayDemand(
        day=day,
        iso_week=week,
        weekday=wd,
        day_volume=volume,
        category_volumes=volumes,
        demand_minutes=demand_minutes(volumes, snapshot.tasks),
    )
