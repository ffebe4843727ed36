"""
Regulation Resolver

Turns a region's enabled labor rules into the productive minutes one agent
can spend on contacts per day.

Pure functions only: the rule rows are fetched by the caller.
"""

from __future__ import annotations

from enum import Enum
from typing import Iterable, Mapping, Optional

from staffing_adherence.attendance.attendance_models import RegulationRuleSet
from staffing_adherence.utils.logger import get_logger

logger = get_logger(__name__)


class RuleKind(Enum):
    MAX_HOURS_PER_DAY = "Max Hours per Day"
    LUNCH_MINUTES = "Lunch Duration (minutes)"
    BREAKS_PER_DAY = "Breaks per Day (count)"
    BREAK_MINUTES = "Break Duration (minutes)"

    @classmethod
    def from_key(cls, key: str) -> Optional["RuleKind"]:
        wanted = str(key or "").strip().casefold()
        for member in cls:
            if member.value.casefold() == wanted:
                return member
        return None


RULE_DEFAULTS = {
    RuleKind.MAX_HOURS_PER_DAY: 8.0,
    RuleKind.LUNCH_MINUTES: 60,
    RuleKind.BREAKS_PER_DAY: 2,
    RuleKind.BREAK_MINUTES: 15,
}


def _parse_value(kind: RuleKind, raw) -> float | int:
    default = RULE_DEFAULTS[kind]
    if raw is None or str(raw).strip() == "":
        return default
    try:
        value = float(str(raw).strip())
    except ValueError:
        logger.warning("Unreadable value %r for rule %r, using %s", raw, kind.value, default)
        return default
    if kind is RuleKind.MAX_HOURS_PER_DAY:
        return value
    # Counts and minute durations are whole numbers
    return int(value)


def resolve_rule_set(rows: Iterable[Mapping]) -> RegulationRuleSet:
    """
    Build a RegulationRuleSet from enabled {key, value} rule rows.

    Missing keys keep their defaults (8 h, 60 min lunch, 2 breaks, 15 min);
    unrecognized keys are ignored.
    """
    values = dict(RULE_DEFAULTS)
    for row in rows or []:
        kind = RuleKind.from_key(row.get("key"))
        if kind is None:
            logger.debug("Ignoring unrecognized regulation rule %r", row.get("key"))
            continue
        values[kind] = _parse_value(kind, row.get("value"))

    return RegulationRuleSet(
        max_hours_per_day=float(values[RuleKind.MAX_HOURS_PER_DAY]),
        lunch_minutes=int(values[RuleKind.LUNCH_MINUTES]),
        breaks_per_day=int(values[RuleKind.BREAKS_PER_DAY]),
        break_minutes=int(values[RuleKind.BREAK_MINUTES]),
    )


def net_capacity_minutes(rules: RegulationRuleSet) -> float:
    """Scheduled minutes less lunch and breaks; never below zero."""
    work = rules.max_hours_per_day * 60
    breaks = rules.breaks_per_day * rules.break_minutes
    return max(0, work - rules.lunch_minutes - breaks)
