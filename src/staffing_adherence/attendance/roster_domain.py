"""
Roster Availability Resolver

An agent is available on a date when their status is Present and no leave
range covers that date (inclusive, date-only). Half-day flags are carried on
the leave ranges but any covering range counts as a full day off.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

import pandas as pd

from staffing_adherence.attendance.attendance_models import Agent, AgentStatus, LeaveRange
from staffing_adherence.utils.logger import get_logger

logger = get_logger(__name__)


def _to_date(value) -> Optional[date]:
    """None for NULL, NaT or unparseable values."""
    if value is None or pd.isna(value):
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    parsed = pd.to_datetime(value, errors="coerce")
    return None if pd.isna(parsed) else parsed.date()


# ----------------------------
# Store rows -> models
# ----------------------------

def leave_range_from_row(row: Mapping) -> Optional[LeaveRange]:
    """A range with a missing start or end date covers no day and is dropped."""
    start = _to_date(row.get("start_date"))
    end = _to_date(row.get("end_date"))
    if start is None or end is None:
        return None
    return LeaveRange(
        agent_id=str(row["agent_id"]),
        start_date=start,
        end_date=end,
        half_day_start=bool(row.get("half_day_start")),
        half_day_end=bool(row.get("half_day_end")),
    )


def build_roster(agent_rows: Iterable[Mapping], leave_rows: Iterable[Mapping]) -> List[Agent]:
    """
    Join leave ranges to agents by id, keeping the agent order from the store.

    Leave rows for agents outside the roster, or without a start/end date,
    are dropped.
    """
    leave_by_agent: Dict[str, List[LeaveRange]] = {}
    for row in leave_rows or []:
        lr = leave_range_from_row(row)
        if lr is None:
            logger.debug("Skipping leave row without dates | agent_id=%s", row.get("agent_id"))
            continue
        leave_by_agent.setdefault(lr.agent_id, []).append(lr)

    roster: List[Agent] = []
    for row in agent_rows or []:
        agent_id = str(row["id"])
        roster.append(
            Agent(
                id=agent_id,
                full_name=str(row.get("full_name") or ""),
                region=str(row.get("region") or ""),
                status=AgentStatus.from_label(row.get("status") or ""),
                leave_ranges=tuple(leave_by_agent.get(agent_id, ())),
            )
        )

    logger.debug("Roster built | agents=%s | leave_ranges=%s", len(roster),
                 sum(len(a.leave_ranges) for a in roster))
    return roster


# ----------------------------
# Availability
# ----------------------------

def covering_leave(agent: Agent, day: date) -> Optional[LeaveRange]:
    for lr in agent.leave_ranges:
        if lr.start_date <= day <= lr.end_date:
            return lr
    return None


def is_off(agent: Agent, day: date) -> bool:
    return covering_leave(agent, day) is not None


def is_available(agent: Agent, day: date) -> bool:
    return agent.status is AgentStatus.PRESENT and not is_off(agent, day)


def available_count(roster: Iterable[Agent], day: date) -> int:
    return sum(1 for a in roster if is_available(a, day))


def off_grid(roster: Iterable[Agent], days: Sequence[date]) -> Dict[str, List[bool]]:
    """Per-agent, per-day 'on leave' flags used to shade the roster grid."""
    return {a.id: [is_off(a, d) for d in days] for a in roster}
