"""
Regulation rule store.

Source: dbo.regulation_rules (region, rule_key, value_text, enabled)
"""

from __future__ import annotations

from typing import Dict, List

from staffing_adherence.data.connection import read_records


class SqlRuleStore:
    def get_enabled_rules(self, region: str) -> List[Dict]:
        """
        Expected columns:
          - key
          - value
        """
        sql = """
            SELECT rule_key AS [key], value_text AS [value]
            FROM dbo.regulation_rules
            WHERE region = ? AND enabled = 1
        """
        return read_records(sql, [region])
