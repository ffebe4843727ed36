"""
Monthly Adherence Use Case

Purpose:
- For every calendar day of ONE month, compare required headcount (forecast
  demand / net agent capacity) with available headcount (roster minus leave)
- Summarize warning days and the monthly average adherence

Important:
- All inputs are read once per run, in parallel, then every day is computed
  in order from memory
- Any store failure aborts the run; no partial month is returned
- Nothing is persisted
"""

from __future__ import annotations

import calendar
from concurrent.futures import ThreadPoolExecutor
from datetime import date, datetime
from typing import Dict, List, Optional

from staffing_adherence.attendance.attendance_models import (
    DailyResult,
    ForecastSnapshot,
    MonthlyAdherenceResult,
)
from staffing_adherence.attendance.errors import AdherenceRunError, MissingForecastTotalError
from staffing_adherence.attendance.forecast_checks import forecast_profile, validate_shares
from staffing_adherence.attendance.forecast_domain import (
    daily_share_from_row,
    decompose_day,
    tasks_from_rows,
)
from staffing_adherence.attendance.iso_week import as_date, iso_week_number
from staffing_adherence.attendance.reconcile import reconcile_day, round_half_up
from staffing_adherence.attendance.regulations import net_capacity_minutes, resolve_rule_set
from staffing_adherence.attendance.roster_domain import available_count, build_roster
from staffing_adherence.utils.config import config
from staffing_adherence.utils.logger import get_logger

logger = get_logger(__name__)


def month_days(year: int, month: int) -> List[date]:
    _, days_in_month = calendar.monthrange(year, month)
    return [date(year, month, d) for d in range(1, days_in_month + 1)]


def _default_stores(rule_store, forecast_store, roster_store):
    if rule_store is None or forecast_store is None or roster_store is None:
        from staffing_adherence.data.forecast import SqlForecastStore
        from staffing_adherence.data.roster import SqlRosterStore
        from staffing_adherence.data.rules import SqlRuleStore

        rule_store = rule_store or SqlRuleStore()
        forecast_store = forecast_store or SqlForecastStore()
        roster_store = roster_store or SqlRosterStore()
    return rule_store, forecast_store, roster_store


def average_adherence(results: List[DailyResult]) -> int:
    """Mean adherence rounded half-up, clamped to 0..100 for display."""
    if not results:
        return 0
    avg = round_half_up(sum(r.adherence_percent for r in results) / len(results))
    return min(100, max(0, avg))


def compute_month(
    region: Optional[str],
    any_date_in_month: str | datetime | date,
    *,
    rule_store=None,
    forecast_store=None,
    roster_store=None,
    check_shares: bool = False,
    max_workers: Optional[int] = None,
) -> MonthlyAdherenceResult:
    """
    Run the adherence calculation for the month containing any_date_in_month.

    Stores follow the read-only contracts in staffing_adherence.data; when
    omitted, the SQL-backed stores are used. region=None uses
    config.DEFAULT_REGION.
    """
    region = region or config.DEFAULT_REGION
    anchor = as_date(any_date_in_month)
    year, month = anchor.year, anchor.month
    days = month_days(year, month)
    weeks = sorted({iso_week_number(d) for d in days})

    rule_store, forecast_store, roster_store = _default_stores(
        rule_store, forecast_store, roster_store
    )

    logger.info(
        "Running Monthly Adherence | region=%s | month=%04d-%02d | days=%s",
        region, year, month, len(days),
    )

    # ------------------------------------------------------------
    # Month-wide reads (independent, dispatched together)
    # ------------------------------------------------------------
    try:
        with ThreadPoolExecutor(max_workers=max_workers or config.FETCH_WORKERS) as pool:
            f_rules = pool.submit(rule_store.get_enabled_rules, region)
            f_agents = pool.submit(roster_store.get_agents, region)
            f_leave = pool.submit(roster_store.get_leave_ranges)
            f_total = pool.submit(forecast_store.get_total, region)
            f_month = pool.submit(forecast_store.get_monthly_share, region, month)
            f_tasks = pool.submit(forecast_store.get_enabled_tasks, region)
            f_weeks = {w: pool.submit(forecast_store.get_weekly_share, region, w) for w in weeks}
            f_days = {wd: pool.submit(forecast_store.get_daily_share, region, wd) for wd in range(1, 8)}

            rule_rows = f_rules.result()
            agent_rows = f_agents.result()
            leave_rows = f_leave.result()
            total_row = f_total.result()
            month_row = f_month.result()
            task_rows = f_tasks.result()
            week_rows = {w: f.result() for w, f in f_weeks.items()}
            day_rows = {wd: f.result() for wd, f in f_days.items()}

            if check_shares:
                # weekly shares are a guide only and are not checked
                f_all_months = pool.submit(forecast_store.get_monthly_shares, region)
                f_all_days = pool.submit(forecast_store.get_daily_shares, region)
                profile = forecast_profile(f_all_months.result(), [], f_all_days.result())
    except Exception as exc:
        logger.error("Adherence run failed while reading inputs | region=%s", region, exc_info=True)
        raise AdherenceRunError(f"Could not load adherence inputs for region {region!r}: {exc}") from exc

    if total_row is None or total_row.get("total_volume") is None:
        logger.error("No forecast total | region=%s", region)
        raise MissingForecastTotalError(region)

    # ------------------------------------------------------------
    # Derived inputs
    # ------------------------------------------------------------
    try:
        rule_set = resolve_rule_set(rule_rows)
        capacity = net_capacity_minutes(rule_set)
        roster = build_roster(agent_rows, leave_rows)

        monthly_percent: Dict[int, float] = {}
        if month_row is not None and month_row.get("percent") is not None:
            monthly_percent[month] = float(month_row["percent"])

        snapshot = ForecastSnapshot(
            region=region,
            total_volume=float(total_row["total_volume"]),
            monthly_percent=monthly_percent,
            weekly_percent={
                w: float(r["percent"])
                for w, r in week_rows.items()
                if r is not None and r.get("percent") is not None
            },
            daily_shares={
                wd: daily_share_from_row({**r, "weekday": wd})
                for wd, r in day_rows.items()
                if r is not None
            },
            tasks=tasks_from_rows(task_rows),
        )
    except (ValueError, TypeError) as exc:
        logger.error("Malformed adherence inputs | region=%s | %s", region, exc)
        raise AdherenceRunError(f"Malformed adherence inputs for region {region!r}: {exc}") from exc

    logger.info(
        "Inputs loaded | net_capacity_min=%s | agents=%s | tasks=%s | total_volume=%s",
        capacity, len(roster), len(snapshot.tasks), snapshot.total_volume,
    )

    # ------------------------------------------------------------
    # Day-by-day reconciliation
    # ------------------------------------------------------------
    daily_results: List[DailyResult] = []
    for day in days:
        demand = decompose_day(day, snapshot)
        daily_results.append(
            reconcile_day(
                day,
                demand.demand_minutes,
                capacity,
                available_count(roster, day),
            )
        )

    warning_days = [r for r in daily_results if r.is_warning]
    avg = average_adherence(daily_results)

    share_warnings: List[str] = []
    if check_shares:
        share_warnings = validate_shares(profile)
        for w in share_warnings:
            logger.warning("Forecast shares | region=%s | %s", region, w)

    logger.info(
        "Monthly Adherence done | region=%s | avg=%s%% | warning_days=%s",
        region, avg, len(warning_days),
    )

    return MonthlyAdherenceResult(
        region=region,
        year=year,
        month=month,
        daily_results=daily_results,
        roster=roster,
        net_capacity_minutes=capacity,
        warning_days=warning_days,
        average_adherence=avg,
        share_warnings=share_warnings,
    )
