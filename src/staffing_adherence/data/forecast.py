"""
Forecast store.

Sources:
- dbo.forecast_totals  (region, total_volume)
- dbo.forecast_monthly (region, month_index, share_percent)
- dbo.forecast_weekly  (region, week_index, share_percent)
- dbo.forecast_daily   (region, weekday, share_percent, email_pct, call_pct,
                        chat_pct, clienteling_pct, fraud_pct, admin_pct)
- dbo.tasks            (region, name, avg_handle_time_min, enabled)

Single-row lookups return None when the row is absent; the engine decides
whether that is fatal (total) or defaulted (shares).
"""

from __future__ import annotations

from typing import Dict, List, Optional

from staffing_adherence.data.connection import read_records

_DAILY_COLUMNS = """
    weekday,
    share_percent   AS [percent],
    email_pct       AS mail_pct,
    call_pct,
    chat_pct,
    clienteling_pct,
    fraud_pct,
    admin_pct       AS back_office_pct
"""


def _first(rows: List[Dict]) -> Optional[Dict]:
    return rows[0] if rows else None


class SqlForecastStore:
    # ------------------------------------------------------------
    # Single lookups (per run)
    # ------------------------------------------------------------
    def get_total(self, region: str) -> Optional[Dict]:
        sql = """
            SELECT TOP 1 total_volume
            FROM dbo.forecast_totals
            WHERE region = ?
        """
        return _first(read_records(sql, [region]))

    def get_monthly_share(self, region: str, month: int) -> Optional[Dict]:
        sql = """
            SELECT TOP 1 month_index AS [month], share_percent AS [percent]
            FROM dbo.forecast_monthly
            WHERE region = ? AND month_index = ?
        """
        return _first(read_records(sql, [region, int(month)]))

    def get_weekly_share(self, region: str, week: int) -> Optional[Dict]:
        sql = """
            SELECT TOP 1 week_index AS [week], share_percent AS [percent]
            FROM dbo.forecast_weekly
            WHERE region = ? AND week_index = ?
        """
        return _first(read_records(sql, [region, int(week)]))

    def get_daily_share(self, region: str, weekday: int) -> Optional[Dict]:
        sql = f"""
            SELECT TOP 1 {_DAILY_COLUMNS}
            FROM dbo.forecast_daily
            WHERE region = ? AND weekday = ?
        """
        return _first(read_records(sql, [region, int(weekday)]))

    def get_enabled_tasks(self, region: str) -> List[Dict]:
        sql = """
            SELECT name, avg_handle_time_min AS average_handle_time_minutes
            FROM dbo.tasks
            WHERE region = ? AND enabled = 1
        """
        return read_records(sql, [region])

    # ------------------------------------------------------------
    # Full tables (share checks / profile)
    # ------------------------------------------------------------
    def get_monthly_shares(self, region: str) -> List[Dict]:
        sql = """
            SELECT month_index AS [month], share_percent AS [percent]
            FROM dbo.forecast_monthly
            WHERE region = ?
            ORDER BY month_index
        """
        return read_records(sql, [region])

    def get_weekly_shares(self, region: str) -> List[Dict]:
        sql = """
            SELECT week_index AS [week], share_percent AS [percent]
            FROM dbo.forecast_weekly
            WHERE region = ?
            ORDER BY week_index
        """
        return read_records(sql, [region])

    def get_daily_shares(self, region: str) -> List[Dict]:
        sql = f"""
            SELECT {_DAILY_COLUMNS}
            FROM dbo.forecast_daily
            WHERE region = ?
            ORDER BY weekday
        """
        return read_records(sql, [region])
