"""
Calendar bucketing: one key function per period, one generic grouping routine.

Keys are computed vectorised over a datetime Series; a bucket's end is its
start plus one period unit minus one second.
"""

from typing import Callable, Dict, Iterator, Tuple

import pandas as pd

from healthlog.models import ReportPeriod


# ---------------------------------------------------------------------------
# Period keys
# ---------------------------------------------------------------------------

def _day_key(dates: pd.Series) -> pd.Series:
    return dates.dt.normalize()


def _week_key(dates: pd.Series) -> pd.Series:
    # dayofweek is 0 for Monday, so it is the distance back to the ISO week start
    return dates.dt.normalize() - pd.to_timedelta(dates.dt.dayofweek, unit="D")


def _month_key(dates: pd.Series) -> pd.Series:
    return dates.dt.to_period("M").dt.start_time


def _year_key(dates: pd.Series) -> pd.Series:
    return dates.dt.to_period("Y").dt.start_time


PERIOD_KEYS: Dict[ReportPeriod, Callable[[pd.Series], pd.Series]] = {
    ReportPeriod.DAILY: _day_key,
    ReportPeriod.WEEKLY: _week_key,
    ReportPeriod.MONTHLY: _month_key,
    ReportPeriod.YEARLY: _year_key,
}

PERIOD_LENGTHS: Dict[ReportPeriod, pd.DateOffset] = {
    ReportPeriod.DAILY: pd.DateOffset(days=1),
    ReportPeriod.WEEKLY: pd.DateOffset(weeks=1),
    ReportPeriod.MONTHLY: pd.DateOffset(months=1),
    ReportPeriod.YEARLY: pd.DateOffset(years=1),
}


def period_key(dates: pd.Series, period: ReportPeriod) -> pd.Series:
    """Bucket start for every date. Custom periods bucket by day."""
    return PERIOD_KEYS.get(period, _day_key)(dates)


def period_end(start: pd.Timestamp, period: ReportPeriod) -> pd.Timestamp:
    length = PERIOD_LENGTHS.get(period, PERIOD_LENGTHS[ReportPeriod.DAILY])
    return start + length - pd.Timedelta(seconds=1)


# ---------------------------------------------------------------------------
# Generic bucketing
# ---------------------------------------------------------------------------

def bucket(
    df: pd.DataFrame,
    period: ReportPeriod,
    date_column: str = "date",
) -> Iterator[Tuple[pd.Timestamp, pd.DataFrame]]:
    """
    Yield (bucket_start, rows) pairs.

    Buckets come out in order of first appearance in `df`, so identical input
    always produces identical output.
    """
    if df.empty:
        return
    keys = period_key(df[date_column], period)
    for start, group in df.groupby(keys, sort=False):
        yield start, group
