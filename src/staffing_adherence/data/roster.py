"""
Roster store.

Sources:
- dbo.agents    (id, full_name, region, status)
- dbo.agent_pto (agent_id, start_date, end_date, half_day_start, half_day_end)
"""

from __future__ import annotations

from typing import Dict, List

import pandas as pd

from staffing_adherence.data.connection import frame_to_records, get_connection


class SqlRosterStore:
    def get_agents(self, region: str) -> List[Dict]:
        sql = """
            SELECT id, full_name, region, status
            FROM dbo.agents
            WHERE region = ?
            ORDER BY full_name
        """
        with get_connection() as conn:
            df = pd.read_sql(sql, conn, params=[region])
        if not df.empty:
            df["id"] = df["id"].astype(str)
        return frame_to_records(df)

    def get_leave_ranges(self) -> List[Dict]:
        """All leave ranges; the engine joins them to the region's agents by id."""
        sql = """
            SELECT agent_id, start_date, end_date, half_day_start, half_day_end
            FROM dbo.agent_pto
        """
        with get_connection() as conn:
            df = pd.read_sql(sql, conn)
        if not df.empty:
            df["agent_id"] = df["agent_id"].astype(str)
            for col in ("start_date", "end_date"):
                df[col] = pd.to_datetime(df[col], errors="coerce").dt.date
            df = df.dropna(subset=["start_date", "end_date"])
        return frame_to_records(df)
