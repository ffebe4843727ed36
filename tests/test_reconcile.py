from datetime import date

import pytest

from staffing_adherence.attendance.reconcile import (
    adherence_percent,
    reconcile_day,
    required_count,
    round_half_up,
)


def test_ceiling_division():
    assert required_count(2400, 390) == 7
    assert required_count(390, 390) == 1
    assert required_count(391, 390) == 2


def test_scenario_available_five_of_seven():
    r = reconcile_day(date(2024, 5, 6), 2400, 390, 5)
    assert r.required_count == 7
    assert r.adherence_percent == 71
    assert r.date_iso == "2024-05-06"
    assert r.day_of_month == 6
    assert r.is_warning


@pytest.mark.parametrize("available", [0, 1, 50])
def test_zero_demand_is_fully_met(available):
    r = reconcile_day(date(2024, 5, 6), 0, 390, available)
    assert r.required_count == 0
    assert r.adherence_percent == 100
    assert not r.is_warning


def test_capacity_collapse_is_fully_met():
    r = reconcile_day(date(2024, 5, 6), 5000, 0, 3)
    assert r.required_count == 0
    assert r.adherence_percent == 100


def test_overstaffing_is_capped_at_100():
    assert adherence_percent(10, 5) == 100


def test_no_staff_against_demand_is_zero():
    assert adherence_percent(0, 4) == 0


def test_half_up_rounding():
    # 1/8 = 12.5%
    assert adherence_percent(1, 8) == 13
    assert round_half_up(2.5) == 3
    assert round_half_up(2.4999) == 2


@pytest.mark.parametrize("available", range(0, 12))
@pytest.mark.parametrize("required", range(0, 12))
def test_adherence_bounds(available, required):
    assert 0 <= adherence_percent(available, required) <= 100
