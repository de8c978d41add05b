"""Derived metrics over a user's activity log.

Everything here is a pure function of the records and a reference ``now``;
nothing is cached between requests. Dates are compared in server-local time.
"""

from collections import defaultdict
from datetime import date, datetime, timedelta
from typing import Dict, Iterable, List, Optional

from ..models.analytics_schema import (
    CarbonAnalytics,
    CarbonStats,
    DailyAmount,
    DashboardMetrics,
    TopCategory,
)
from ..schemas import CATEGORIES, ActivityRecord

WINDOW_DAYS = 30
WEEK = timedelta(days=7)

# Heuristic "what today would have been without tracking" baseline.
POTENTIAL_CARBON_MULTIPLIER = 1.5


def to_local(value: datetime) -> datetime:
    if value.tzinfo is not None:
        return value.astimezone().replace(tzinfo=None)
    return value


def resolve_now(now: Optional[datetime]) -> datetime:
    return to_local(now) if now is not None else datetime.now()


def _sum(records: Iterable[ActivityRecord]) -> float:
    return sum((r.amount for r in records), 0.0)


def category_breakdown(records: Iterable[ActivityRecord]) -> Dict[str, float]:
    breakdown: Dict[str, float] = {}
    for record in records:
        key = record.category.value
        breakdown[key] = breakdown.get(key, 0.0) + record.amount
    return breakdown


def top_category(breakdown: Dict[str, float]) -> Optional[str]:
    """Largest category; the first one encountered wins a tie."""
    best: Optional[str] = None
    for category, amount in breakdown.items():
        if best is None or amount > breakdown[best]:
            best = category
    return best


def compute_stats(records: List[ActivityRecord], now: Optional[datetime] = None) -> CarbonStats:
    current = resolve_now(now)
    start_of_month = datetime(current.year, current.month, 1)

    breakdown = category_breakdown(records)
    month_total = _sum(r for r in records if to_local(r.date) >= start_of_month)

    return CarbonStats(
        total=sum(breakdown.values(), 0.0),
        monthTotal=month_total,
        categoryBreakdown=breakdown,
        entryCount=len(records),
    )


def _window_days(today: date) -> List[date]:
    return [today - timedelta(days=offset) for offset in range(WINDOW_DAYS - 1, -1, -1)]


def _series(days: List[date], buckets: Dict[date, float]) -> List[DailyAmount]:
    return [DailyAmount(date=day.isoformat(), amount=buckets.get(day, 0.0)) for day in days]


def _in_range(records: Iterable[ActivityRecord], start: datetime, end: datetime, *, include_end: bool) -> List[ActivityRecord]:
    selected = []
    for record in records:
        when = to_local(record.date)
        if when < start:
            continue
        if when > end or (when == end and not include_end):
            continue
        selected.append(record)
    return selected


def compute_analytics(records: List[ActivityRecord], now: Optional[datetime] = None) -> CarbonAnalytics:
    current = resolve_now(now)
    days = _window_days(current.date())
    window = set(days)

    daily: Dict[date, float] = defaultdict(float)
    per_category: Dict[str, Dict[date, float]] = {c: defaultdict(float) for c in CATEGORIES}
    window_breakdown: Dict[str, float] = {}

    for record in records:
        day = to_local(record.date).date()
        if day not in window:
            continue
        category = record.category.value
        daily[day] += record.amount
        per_category.setdefault(category, defaultdict(float))[day] += record.amount
        window_breakdown[category] = window_breakdown.get(category, 0.0) + record.amount

    this_week = _sum(_in_range(records, current - WEEK, current, include_end=True))
    last_week = _sum(_in_range(records, current - 2 * WEEK, current - WEEK, include_end=False))
    change = (this_week - last_week) / last_week * 100 if last_week > 0 else 0.0

    top = top_category(window_breakdown)
    window_total = sum(daily.values(), 0.0)

    return CarbonAnalytics(
        dailyTotals=_series(days, daily),
        categoryTrends={c: _series(days, buckets) for c, buckets in per_category.items()},
        weekOverWeekChange=change,
        thisWeekTotal=this_week,
        lastWeekTotal=last_week,
        topCategory=TopCategory(category=top, amount=window_breakdown[top]) if top else None,
        totalEntries=len(records),
        averageDaily=window_total / WINDOW_DAYS,
    )


def sustainability_score(entry_count: int, average_daily: float, carbon_saved_today: float, distinct_categories: int) -> int:
    """Bounded 0-100 score: consistency 30, improvement 25, diversity 25, intensity 20."""
    activity = min(30, 30 if entry_count >= 7 else entry_count * 4)
    improvement = 25 if average_daily > 0 and carbon_saved_today > 0 else 0
    diversity = min(25, distinct_categories * 8)

    if 0 < average_daily < 15:
        intensity = 20
    elif 15 <= average_daily < 25:
        intensity = 10
    else:
        intensity = 0

    return max(0, min(100, activity + improvement + diversity + intensity))


def compute_dashboard_metrics(records: List[ActivityRecord], now: Optional[datetime] = None) -> DashboardMetrics:
    current = resolve_now(now)
    today = current.date()

    today_total = _sum(r for r in records if to_local(r.date).date() == today)
    average_daily = _sum(_in_range(records, current - WEEK, current, include_end=True)) / 7

    potential = average_daily * POTENTIAL_CARBON_MULTIPLIER
    saved = max(0.0, potential - today_total) if average_daily > 0 else 0.0

    score = sustainability_score(
        entry_count=len(records),
        average_daily=average_daily,
        carbon_saved_today=saved,
        distinct_categories=len({r.category for r in records}),
    )

    return DashboardMetrics(
        carbonSavedToday=round(saved, 2),
        sustainabilityScore=score,
        todayTotal=round(today_total, 2),
        averageDaily=round(average_daily, 2),
    )
