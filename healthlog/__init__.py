"""
HEALTHLOG v1.0 — In-Memory Health Activity Log with Analytics

Records timestamped measurements against named activity types and answers
summary, period, trend, compliance and correlation queries over them.

Architecture:
    config   — Predefined catalog, keyword rules, defaults (single source of truth)
    models   — Enums, records and result dataclasses
    catalog  — Type resolution: predefined table, then keyword rules
    store    — Thread-safe in-memory record collection
    signals  — OLS slope, Pearson correlation, compliance primitives
    periods  — Calendar bucketing (daily / weekly / monthly / yearly)
    engine   — Statistics engine over store snapshots
    reports  — Report assembly and insights (no rendering)
"""

from healthlog.catalog import list_predefined_types, resolve_activity_type
from healthlog.config import HealthLogConfig
from healthlog.engine import StatisticsEngine
from healthlog.models import (
    ActivityCategory,
    ActivityInput,
    ActivityRecord,
    ActivityReport,
    ActivitySummary,
    ActivityTypeInfo,
    PeriodStatistic,
    ReportPeriod,
    StatisticType,
)
from healthlog.store import ActivityStore, StoreInvariantError

__version__ = "1.0.0"

__all__ = [
    "ActivityCategory",
    "ActivityInput",
    "ActivityRecord",
    "ActivityReport",
    "ActivityStore",
    "ActivitySummary",
    "ActivityTypeInfo",
    "HealthLogConfig",
    "PeriodStatistic",
    "ReportPeriod",
    "StatisticType",
    "StatisticsEngine",
    "StoreInvariantError",
    "list_predefined_types",
    "resolve_activity_type",
]
