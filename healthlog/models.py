"""
Domain types: enums, activity records, type metadata and statistic results.

Plain dataclasses only. Nothing here touches the store lock or pandas.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from enum import Enum
from typing import Any, Dict, List, Optional


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class ActivityCategory(Enum):
    EXERCISE = "Exercise"
    NUTRITION = "Nutrition"
    SLEEP = "Sleep"
    MENTAL_HEALTH = "MentalHealth"
    HYDRATION = "Hydration"
    MEDICAL = "Medical"
    LIFESTYLE = "Lifestyle"


class ReportPeriod(Enum):
    DAILY = "Daily"
    WEEKLY = "Weekly"
    MONTHLY = "Monthly"
    YEARLY = "Yearly"
    CUSTOM = "Custom"


class StatisticType(Enum):
    TOTAL = "Total"
    AVERAGE = "Average"
    MAXIMUM = "Maximum"
    MINIMUM = "Minimum"
    TREND = "Trend"
    COMPLIANCE = "Compliance"


# ---------------------------------------------------------------------------
# Activity type metadata
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ActivityTypeInfo:
    """Unit, description, recommended range and category of an activity type."""

    name: str
    unit: str
    description: str
    recommended_min: float
    recommended_max: float
    category: ActivityCategory

    def __post_init__(self):
        if self.recommended_min > self.recommended_max:
            raise ValueError(
                f"Recommended range for {self.name!r} is inverted: "
                f"{self.recommended_min} > {self.recommended_max}"
            )


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ActivityInput:
    """The caller-supplied part of a record: everything except identity and timestamps."""

    activity_type: str
    date: datetime
    value: float
    notes: str = ""
    duration: Optional[timedelta] = None
    intensity: int = 5


@dataclass
class ActivityRecord:
    id: int
    activity_type: str
    date: datetime
    value: float
    notes: str
    duration: Optional[timedelta]
    intensity: int
    created_at: datetime
    updated_at: Optional[datetime] = None


# ---------------------------------------------------------------------------
# Statistic results
# ---------------------------------------------------------------------------

@dataclass
class ActivitySummary:
    activity_type: str
    unit: str
    total: float = 0.0
    average: float = 0.0
    maximum: float = 0.0
    minimum: float = 0.0
    count: int = 0
    trend: float = 0.0
    compliance_rate: float = 0.0


@dataclass
class PeriodStatistic:
    """
    One aggregated point of a detailed or trend series.

    ``period_start``/``period_end`` are datetimes for bucketed statistics and
    calendar dates for day-over-day trend entries.
    """

    activity_type: str
    statistic_type: StatisticType
    value: float
    unit: str
    period_start: date
    period_end: date
    data_points: int
    percentage_change: float = 0.0
    additional_metrics: Dict[str, float] = field(default_factory=dict)


@dataclass
class ActivityReport:
    title: str
    period: ReportPeriod
    start_date: datetime
    end_date: datetime
    activity_types: List[str] = field(default_factory=list)
    statistics: List[ActivitySummary] = field(default_factory=list)
    insights: Dict[str, Any] = field(default_factory=dict)
    generated_at: datetime = field(default_factory=datetime.now)
