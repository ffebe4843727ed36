"""
Attendance Domain Models

Rules:
- No DB
- No formatting
- Data containers plus label parsing for the closed enumerations
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Dict, List, Optional, Tuple


def _label_key(value: str) -> str:
    return "".join(ch for ch in str(value).casefold() if ch.isalnum())


# -------------------------------------------------
# Enumerations
# -------------------------------------------------

class TaskCategory(Enum):
    MAIL = "Mail"
    CALL = "Call"
    CHAT = "Chat"
    CLIENTELING = "Clienteling"
    FRAUD = "Fraud"
    BACK_OFFICE = "Back Office"

    @classmethod
    def from_label(cls, value: str) -> Optional["TaskCategory"]:
        """Match 'Back Office', 'BackOffice', 'back_office' ... ; None if unknown."""
        key = _label_key(value)
        for member in cls:
            if key in (_label_key(member.value), _label_key(member.name)):
                return member
        # Email is how the forecast tables name the mail channel
        if key == "email":
            return cls.MAIL
        return None


class AgentStatus(Enum):
    PRESENT = "Present"
    UNAVAILABLE = "Unavailable"
    PTO = "PTO"
    SICK = "Sick"

    @classmethod
    def from_label(cls, value: str) -> "AgentStatus":
        key = _label_key(value)
        if key in ("sick", "sickleave"):
            return cls.SICK
        for member in cls:
            if key == _label_key(member.value):
                return member
        # Anything we cannot read is not counted as staffed
        return cls.UNAVAILABLE


# -------------------------------------------------
# Regulations
# -------------------------------------------------

@dataclass(frozen=True)
class RegulationRuleSet:
    max_hours_per_day: float = 8.0
    lunch_minutes: int = 60
    breaks_per_day: int = 2
    break_minutes: int = 15


# -------------------------------------------------
# Forecast inputs
# -------------------------------------------------

@dataclass(frozen=True)
class Task:
    name: TaskCategory
    average_handle_time_minutes: float
    enabled: bool = True


@dataclass(frozen=True)
class DailyShare:
    weekday: int                                  # 1=Monday .. 7=Sunday
    percent: Optional[float] = None
    category_percents: Dict[TaskCategory, Optional[float]] = field(default_factory=dict)


@dataclass(frozen=True)
class ForecastSnapshot:
    """Every forecast row one month needs, read once per run."""
    region: str
    total_volume: float
    monthly_percent: Dict[int, float]             # month index -> percent
    weekly_percent: Dict[int, float]              # ISO week -> percent
    daily_shares: Dict[int, DailyShare]           # ISO weekday -> share row
    tasks: List[Task]


@dataclass(frozen=True)
class DayDemand:
    day: date
    iso_week: int
    weekday: int
    day_volume: float
    category_volumes: Dict[TaskCategory, float]
    demand_minutes: float


# -------------------------------------------------
# Roster
# -------------------------------------------------

@dataclass(frozen=True)
class LeaveRange:
    agent_id: str
    start_date: date
    end_date: date
    half_day_start: bool = False
    half_day_end: bool = False

    @property
    def is_half_day(self) -> bool:
        return self.half_day_start or self.half_day_end


@dataclass(frozen=True)
class Agent:
    id: str
    full_name: str
    region: str
    status: AgentStatus
    leave_ranges: Tuple[LeaveRange, ...] = ()


# -------------------------------------------------
# Results
# -------------------------------------------------

@dataclass(frozen=True)
class DailyResult:
    date_iso: str
    day_of_month: int
    available_count: int
    required_count: int
    adherence_percent: int

    @property
    def is_warning(self) -> bool:
        return self.required_count > self.available_count


@dataclass(frozen=True)
class MonthlyAdherenceResult:
    region: str
    year: int
    month: int
    daily_results: List[DailyResult]
    roster: List[Agent]
    net_capacity_minutes: float
    warning_days: List[DailyResult]
    average_adherence: int

    # Metadata (not KPIs)
    share_warnings: List[str] = field(default_factory=list)
