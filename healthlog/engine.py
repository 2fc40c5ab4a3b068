"""
Statistics engine: summary → detailed buckets → trends → compliance → correlations.

The engine holds no lock and no state beyond its store and config. Each
method reads one or more snapshots from the store and computes over them.
Snapshots taken by separate store calls are not atomic relative to each
other; a concurrent write between them can skew a combined statistic.
"""

import logging
from datetime import datetime
from typing import Dict, List, Optional, Sequence

import numpy as np
import pandas as pd

from healthlog.config import HealthLogConfig
from healthlog.models import (
    ActivityRecord,
    ActivitySummary,
    PeriodStatistic,
    ReportPeriod,
    StatisticType,
)
from healthlog.periods import bucket, period_end
from healthlog.signals import _ols_slope, _pearson, compliance_percentage
from healthlog.store import ActivityStore

logger = logging.getLogger(__name__)


def _filter_by_date(
    records: List[ActivityRecord],
    start: Optional[datetime],
    end: Optional[datetime],
) -> List[ActivityRecord]:
    if start is not None:
        records = [r for r in records if r.date >= start]
    if end is not None:
        records = [r for r in records if r.date <= end]
    return records


def records_to_frame(records: List[ActivityRecord]) -> pd.DataFrame:
    """Columns: id, date, value, intensity, in store order."""
    df = pd.DataFrame(
        {
            "id": [r.id for r in records],
            "date": [r.date for r in records],
            "value": [r.value for r in records],
            "intensity": [r.intensity for r in records],
        }
    )
    df["date"] = pd.to_datetime(df["date"])
    df["value"] = df["value"].astype(np.float64)
    return df


class StatisticsEngine:
    """Derived numeric views over the activity store."""

    def __init__(self, store: ActivityStore, cfg: HealthLogConfig | None = None):
        self.store = store
        self.cfg = cfg if cfg is not None else store.cfg

    def _filtered(
        self,
        activity_type: str,
        start: Optional[datetime],
        end: Optional[datetime],
    ) -> List[ActivityRecord]:
        return _filter_by_date(self.store.get_by_type(activity_type), start, end)

    # -----------------------------------------------------------------------
    # Summary
    # -----------------------------------------------------------------------

    def summary(
        self,
        activity_type: str,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> ActivitySummary:
        """
        Total, average, extremes, count, trend and compliance for one type.

        Trend is the OLS slope of value against sequential record index after
        a stable sort by date, i.e. change per record rather than per day.
        Compliance defaults its window to [earliest record, now].
        """
        records = self._filtered(activity_type, start, end)
        unit = self.store.get_type_info(activity_type).unit

        if not records:
            return ActivitySummary(activity_type=activity_type, unit=unit)

        values = np.array([r.value for r in records], dtype=np.float64)
        ordered = sorted(records, key=lambda r: r.date)
        trend = _ols_slope(np.array([r.value for r in ordered], dtype=np.float64))

        compliance = self.compliance_rate(
            activity_type,
            start if start is not None else ordered[0].date,
            end if end is not None else datetime.now(),
        )

        return ActivitySummary(
            activity_type=activity_type,
            unit=unit,
            total=float(values.sum()),
            average=float(values.mean()),
            maximum=float(values.max()),
            minimum=float(values.min()),
            count=len(records),
            trend=trend,
            compliance_rate=compliance,
        )

    # -----------------------------------------------------------------------
    # Period buckets
    # -----------------------------------------------------------------------

    def detailed_statistics(
        self,
        activity_type: str,
        period: ReportPeriod,
        start: datetime,
        end: datetime,
    ) -> List[PeriodStatistic]:
        """One Total statistic per calendar bucket, in order of first appearance."""
        records = self._filtered(activity_type, start, end)
        if not records:
            return []

        unit = self.store.get_type_info(activity_type).unit
        metric = self.cfg.statistics.intensity_metric
        df = records_to_frame(records)

        stats: List[PeriodStatistic] = []
        for bucket_start, group in bucket(df, period):
            stats.append(
                PeriodStatistic(
                    activity_type=activity_type,
                    statistic_type=StatisticType.TOTAL,
                    value=float(group["value"].sum()),
                    unit=unit,
                    period_start=bucket_start.to_pydatetime(),
                    period_end=period_end(bucket_start, period).to_pydatetime(),
                    data_points=len(group),
                    additional_metrics={metric: float(group["intensity"].mean())},
                )
            )
        return stats

    def overall_summary(self, start: datetime, end: datetime) -> Dict[str, ActivitySummary]:
        return {
            name: self.summary(name, start, end)
            for name in self.store.get_distinct_types()
        }

    # -----------------------------------------------------------------------
    # Day-over-day trend
    # -----------------------------------------------------------------------

    def trend_analysis(
        self,
        activity_type: str,
        start: datetime,
        end: datetime,
    ) -> List[PeriodStatistic]:
        """One entry per pair of consecutive active days: n days → n-1 entries."""
        totals = self.store.get_daily_totals(activity_type, start, end)
        if len(totals) < self.cfg.statistics.min_trend_points:
            logger.debug(
                f"Trend for {activity_type!r} skipped: {len(totals)} active day(s)"
            )
            return []

        unit = self.store.get_type_info(activity_type).unit
        days = sorted(totals)

        trends: List[PeriodStatistic] = []
        for prev_day, day in zip(days, days[1:]):
            previous = totals[prev_day]
            change = totals[day] - previous
            pct = change / previous * 100 if previous != 0 else 0.0
            trends.append(
                PeriodStatistic(
                    activity_type=activity_type,
                    statistic_type=StatisticType.TREND,
                    value=change,
                    unit=unit,
                    period_start=prev_day,
                    period_end=day,
                    data_points=2,
                    percentage_change=pct,
                )
            )
        return trends

    # -----------------------------------------------------------------------
    # Compliance
    # -----------------------------------------------------------------------

    def compliance_rate(self, activity_type: str, start: datetime, end: datetime) -> float:
        """Percentage of records within the type's recommended range."""
        info = self.store.get_type_info(activity_type)
        records = self._filtered(activity_type, start, end)
        values = np.array([r.value for r in records], dtype=np.float64)
        return compliance_percentage(values, info.recommended_min, info.recommended_max)

    # -----------------------------------------------------------------------
    # Cross-type correlation
    # -----------------------------------------------------------------------

    def correlations(
        self,
        activity_types: Sequence[str],
        start: datetime,
        end: datetime,
    ) -> Dict[str, float]:
        """
        Pearson coefficient of daily totals for every pair of types.

        Only days where both types have data are used. Pairs with too few
        common days, or where either series is constant, produce no entry.
        """
        min_points = self.cfg.statistics.min_correlation_points
        daily = [self.store.get_daily_totals(t, start, end) for t in activity_types]

        result: Dict[str, float] = {}
        for i in range(len(activity_types)):
            for j in range(i + 1, len(activity_types)):
                first, second = daily[i], daily[j]
                common = [d for d in first if d in second]
                if len(common) < min_points:
                    continue

                coefficient = _pearson(
                    np.array([first[d] for d in common], dtype=np.float64),
                    np.array([second[d] for d in common], dtype=np.float64),
                )
                key = f"{activity_types[i]}-{activity_types[j]}"
                if coefficient is None:
                    logger.debug(f"Correlation {key} undefined: constant series")
                    continue
                result[key] = coefficient
        return result
