"""
Report assembly: gathers summaries and derives insights.

Builds ActivityReport objects only. Rendering and export belong to the
caller.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from healthlog.engine import StatisticsEngine
from healthlog.models import ActivityReport, ActivitySummary, ReportPeriod


# ---------------------------------------------------------------------------
# Insights
# ---------------------------------------------------------------------------

def activity_insights(statistics: List[ActivitySummary]) -> Dict[str, Any]:
    """Most frequent activity, best compliance, and the average compliance."""
    insights: Dict[str, Any] = {}
    if not statistics:
        return insights

    most_frequent = max(statistics, key=lambda s: s.count)
    insights["most_frequent_activity"] = most_frequent.activity_type
    insights["most_frequent_count"] = most_frequent.count

    rated = [s for s in statistics if s.compliance_rate > 0]
    if rated:
        best = max(rated, key=lambda s: s.compliance_rate)
        insights["best_compliance_activity"] = best.activity_type
        insights["best_compliance_rate"] = best.compliance_rate

    insights["average_compliance"] = sum(s.compliance_rate for s in statistics) / len(statistics)
    return insights


def compliance_insights(statistics: List[ActivitySummary], threshold: float) -> Dict[str, Any]:
    compliant = [s for s in statistics if s.compliance_rate >= threshold]
    lagging = [s for s in statistics if s.compliance_rate < threshold]

    insights: Dict[str, Any] = {
        "compliant_activities": len(compliant),
        "non_compliant_activities": len(lagging),
    }
    if compliant:
        insights["best_activities"] = [
            s.activity_type
            for s in sorted(compliant, key=lambda s: s.compliance_rate, reverse=True)
        ]
    if lagging:
        insights["activities_to_improve"] = [
            s.activity_type for s in sorted(lagging, key=lambda s: s.compliance_rate)
        ]
    return insights


# ---------------------------------------------------------------------------
# Report builders
# ---------------------------------------------------------------------------

def activity_report(
    engine: StatisticsEngine,
    period: ReportPeriod,
    start: datetime,
    end: datetime,
    activity_types: Optional[List[str]] = None,
) -> ActivityReport:
    types = list(activity_types) if activity_types is not None else engine.store.get_distinct_types()
    statistics = [engine.summary(t, start, end) for t in types]
    return ActivityReport(
        title=f"Activity Report - {period.value}",
        period=period,
        start_date=start,
        end_date=end,
        activity_types=types,
        statistics=statistics,
        insights=activity_insights(statistics),
    )


def health_summary_report(engine: StatisticsEngine, start: datetime, end: datetime) -> ActivityReport:
    overall = engine.overall_summary(start, end)
    days = (end - start).total_seconds() / 86400
    recorded = sum(s.count for s in overall.values())

    return ActivityReport(
        title="Overall Health Summary",
        period=ReportPeriod.CUSTOM,
        start_date=start,
        end_date=end,
        activity_types=list(overall),
        statistics=list(overall.values()),
        insights={
            "total_activities": engine.store.count(),
            "period_days": days,
            "activities_per_day": recorded / days if days > 0 else 0.0,
        },
    )


def compliance_report(engine: StatisticsEngine, start: datetime, end: datetime) -> ActivityReport:
    types = engine.store.get_distinct_types()
    statistics = [engine.summary(t, start, end) for t in types]
    return ActivityReport(
        title="Compliance Report",
        period=ReportPeriod.CUSTOM,
        start_date=start,
        end_date=end,
        activity_types=types,
        statistics=statistics,
        insights=compliance_insights(statistics, engine.cfg.statistics.compliance_threshold),
    )
