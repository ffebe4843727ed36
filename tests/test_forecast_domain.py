from datetime import date

import pytest

from staffing_adherence.attendance.attendance_models import (
    DailyShare,
    ForecastSnapshot,
    Task,
    TaskCategory,
)
from staffing_adherence.attendance.forecast_domain import (
    DEFAULT_CATEGORY_PERCENTS,
    category_fractions,
    category_volumes,
    daily_share_from_row,
    day_volume,
    decompose_day,
    demand_minutes,
    tasks_from_rows,
)

MON_2024_05_06 = date(2024, 5, 6)   # ISO week 19, weekday 1


def _snapshot(**overrides):
    base = dict(
        region="EMEA",
        total_volume=120000,
        monthly_percent={5: 10.0},
        weekly_percent={19: 25.0},
        daily_shares={
            1: DailyShare(
                weekday=1,
                percent=20.0,
                category_percents={
                    TaskCategory.CALL: 50.0,
                    TaskCategory.MAIL: 50.0,
                    TaskCategory.CHAT: 0.0,
                    TaskCategory.CLIENTELING: 0.0,
                    TaskCategory.FRAUD: 0.0,
                    TaskCategory.BACK_OFFICE: 0.0,
                },
            )
        },
        tasks=[Task(TaskCategory.CALL, 5), Task(TaskCategory.MAIL, 3)],
    )
    base.update(overrides)
    return ForecastSnapshot(**base)


def test_day_volume_is_product_of_shares():
    assert day_volume(120000, 0.10, 0.25, 0.20) == pytest.approx(600)


def test_scenario_demand_minutes():
    demand = decompose_day(MON_2024_05_06, _snapshot())
    assert demand.iso_week == 19
    assert demand.weekday == 1
    assert demand.day_volume == pytest.approx(600)
    assert demand.category_volumes[TaskCategory.CALL] == pytest.approx(300)
    assert demand.demand_minutes == pytest.approx(2400)


def test_missing_share_rows_use_uniform_fallbacks():
    demand = decompose_day(
        MON_2024_05_06,
        _snapshot(monthly_percent={}, weekly_percent={}, daily_shares={}),
    )
    assert demand.day_volume == pytest.approx(120000 / 12 / 52 / 7)


def test_missing_daily_row_uses_default_category_split():
    tasks = [Task(cat, 1.0) for cat in TaskCategory]
    demand = decompose_day(MON_2024_05_06, _snapshot(daily_shares={}, tasks=tasks))
    vol = demand.day_volume
    assert demand.category_volumes[TaskCategory.MAIL] == pytest.approx(vol * 0.38)
    assert demand.category_volumes[TaskCategory.CALL] == pytest.approx(vol * 0.36)
    assert demand.category_volumes[TaskCategory.CLIENTELING] == pytest.approx(vol * 0.03)
    assert demand.category_volumes[TaskCategory.BACK_OFFICE] == pytest.approx(vol * 0.26)
    assert demand.category_volumes[TaskCategory.CHAT] == 0
    assert demand.category_volumes[TaskCategory.FRAUD] == 0
    assert demand.demand_minutes == pytest.approx(vol * 1.03)


def test_category_percents_default_independently():
    share = DailyShare(weekday=3, percent=10.0, category_percents={TaskCategory.CHAT: 40.0})
    fractions = category_fractions(share)
    assert fractions[TaskCategory.CHAT] == pytest.approx(0.40)
    assert fractions[TaskCategory.MAIL] == pytest.approx(0.38)
    assert fractions[TaskCategory.BACK_OFFICE] == pytest.approx(0.26)


def test_category_without_enabled_task_adds_nothing():
    volumes = category_volumes(100, {TaskCategory.CALL: 0.5, TaskCategory.FRAUD: 0.5})
    assert demand_minutes(volumes, [Task(TaskCategory.CALL, 4)]) == pytest.approx(200)
    assert demand_minutes(volumes, [Task(TaskCategory.CALL, 4, enabled=False)]) == 0


def test_no_tasks_means_zero_demand():
    demand = decompose_day(MON_2024_05_06, _snapshot(tasks=[]))
    assert demand.day_volume > 0
    assert demand.demand_minutes == 0


def test_daily_share_row_maps_store_columns():
    share = daily_share_from_row(
        {"weekday": 2, "percent": 15, "mail_pct": 10, "back_office_pct": None, "fraud_pct": float("nan")}
    )
    assert share.weekday == 2
    assert share.percent == 15
    assert share.category_percents[TaskCategory.MAIL] == 10
    assert share.category_percents[TaskCategory.BACK_OFFICE] is None
    assert share.category_percents[TaskCategory.FRAUD] is None
    assert category_fractions(share)[TaskCategory.FRAUD] == 0


def test_task_rows_are_matched_to_categories():
    tasks = tasks_from_rows(
        [
            {"name": "Back Office", "average_handle_time_minutes": 7},
            {"name": "call", "average_handle_time_minutes": 4.5},
            {"name": "Social Media", "average_handle_time_minutes": 9},
        ]
    )
    assert [t.name for t in tasks] == [TaskCategory.BACK_OFFICE, TaskCategory.CALL]
    assert tasks[1].average_handle_time_minutes == 4.5


def test_default_split_constants():
    assert DEFAULT_CATEGORY_PERCENTS == {
        TaskCategory.MAIL: 38.0,
        TaskCategory.CALL: 36.0,
        TaskCategory.CHAT: 0.0,
        TaskCategory.CLIENTELING: 3.0,
        TaskCategory.FRAUD: 0.0,
        TaskCategory.BACK_OFFICE: 26.0,
    }
