"""
Capacity / Demand Reconciler

Pure functions of (demand minutes, net capacity minutes, available count).

- required = ceil(demand / capacity), or 0 when capacity is 0
- adherence = min(100, round(available / required * 100)), or 100 when
  nothing is required (no demand, or capacity collapsed to zero)
"""

from __future__ import annotations

import math
from datetime import date

from staffing_adherence.attendance.attendance_models import DailyResult


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def required_count(demand_minutes: float, net_capacity_minutes: float) -> int:
    if net_capacity_minutes <= 0:
        return 0
    return int(math.ceil(demand_minutes / net_capacity_minutes))


def adherence_percent(available: int, required: int) -> int:
    if required <= 0:
        return 100
    return min(100, round_half_up((available / required) * 100))


def reconcile_day(
    day: date,
    demand_minutes: float,
    net_capacity_minutes: float,
    available: int,
) -> DailyResult:
    required = required_count(demand_minutes, net_capacity_minutes)
    return DailyResult(
        date_iso=day.isoformat(),
        day_of_month=day.day,
        available_count=available,
        required_count=required,
        adherence_percent=adherence_percent(available, required),
    )
