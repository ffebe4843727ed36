from __future__ import annotations

from typing import Dict, List, Optional

import pytest


class FakeRuleStore:
    def __init__(self, rows: Optional[List[Dict]] = None):
        self.rows = rows or []
        self.calls = []

    def get_enabled_rules(self, region):
        self.calls.append(region)
        return list(self.rows)


class FakeForecastStore:
    """
    total:   annual volume or None (missing row)
    monthly: {month: percent}
    weekly:  {week: percent}, or a single percent for every week
    daily:   {weekday: row dict}, or a single row dict for every weekday
    tasks:   [{name, average_handle_time_minutes}]
    """

    def __init__(self, total=120000, monthly=None, weekly=None, daily=None, tasks=None):
        self.total = total
        self.monthly = monthly or {}
        self.weekly = weekly
        self.daily = daily
        self.tasks = tasks or []
        self.weekly_calls: List[int] = []
        self.daily_calls: List[int] = []
        self.bulk_calls: List[str] = []

    def get_total(self, region):
        return None if self.total is None else {"total_volume": self.total}

    def get_monthly_share(self, region, month):
        pct = self.monthly.get(month)
        return None if pct is None else {"month": month, "percent": pct}

    def get_weekly_share(self, region, week):
        self.weekly_calls.append(week)
        if self.weekly is None:
            return None
        pct = self.weekly if not isinstance(self.weekly, dict) else self.weekly.get(week)
        return None if pct is None else {"week": week, "percent": pct}

    def get_daily_share(self, region, weekday):
        self.daily_calls.append(weekday)
        if self.daily is None:
            return None
        if isinstance(self.daily, dict) and "percent" not in self.daily:
            row = self.daily.get(weekday)
        else:
            row = self.daily
        return None if row is None else {"weekday": weekday, **row}

    def get_enabled_tasks(self, region):
        return list(self.tasks)

    def get_monthly_shares(self, region):
        self.bulk_calls.append("monthly")
        return [{"month": m, "percent": p} for m, p in sorted(self.monthly.items())]

    def get_weekly_shares(self, region):
        self.bulk_calls.append("weekly")
        if isinstance(self.weekly, dict):
            return [{"week": w, "percent": p} for w, p in sorted(self.weekly.items())]
        return []

    def get_daily_shares(self, region):
        self.bulk_calls.append("daily")
        return [r for r in (self.get_daily_share(region, wd) for wd in range(1, 8)) if r]


class FakeRosterStore:
    def __init__(self, agents=None, leave=None):
        self.agents = agents or []
        self.leave = leave or []

    def get_agents(self, region):
        return list(self.agents)

    def get_leave_ranges(self):
        return list(self.leave)


class BrokenStore:
    """Every call fails like a dropped database connection."""

    def __getattr__(self, name):
        def fail(*args, **kwargs):
            raise ConnectionError(f"store unavailable ({name})")

        return fail


def make_agents(n: int, status: str = "Present", prefix: str = "a") -> List[Dict]:
    return [
        {"id": f"{prefix}{i}", "full_name": f"Agent {prefix.upper()}{i:02d}", "region": "EMEA", "status": status}
        for i in range(1, n + 1)
    ]


STANDARD_RULES = [
    {"key": "Max Hours per Day", "value": "8"},
    {"key": "Lunch Duration (minutes)", "value": "60"},
    {"key": "Breaks per Day (count)", "value": "2"},
    {"key": "Break Duration (minutes)", "value": "15"},
]

CALL_MAIL_SPLIT = {
    "percent": 20,
    "mail_pct": 50,
    "call_pct": 50,
    "chat_pct": 0,
    "clienteling_pct": 0,
    "fraud_pct": 0,
    "back_office_pct": 0,
}


@pytest.fixture
def rule_store():
    return FakeRuleStore(STANDARD_RULES)


@pytest.fixture
def scenario_forecast_store():
    """120000 x 10% x 25% x 20% = 600 contacts/day, half Call (5 min) half Mail (3 min)."""
    return FakeForecastStore(
        total=120000,
        monthly={m: 10 for m in range(1, 13)},
        weekly=25,
        daily=CALL_MAIL_SPLIT,
        tasks=[
            {"name": "Call", "average_handle_time_minutes": 5},
            {"name": "Mail", "average_handle_time_minutes": 3},
        ],
    )
