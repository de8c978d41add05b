import random
from datetime import datetime, timedelta

from ecoguardian.services.aggregation import (
    compute_analytics,
    compute_dashboard_metrics,
    compute_stats,
    sustainability_score,
    top_category,
)

from .conftest import NOW, make_record


def test_stats_scenario(scenario_records):
    stats = compute_stats(scenario_records, NOW)

    assert stats.total == 18.0
    assert stats.monthTotal == 15.0
    assert stats.entryCount == 3
    assert stats.categoryBreakdown == {"transportation": 10.0, "energy": 5.0, "food": 3.0}


def test_stats_conservation_and_idempotence(scenario_records):
    first = compute_stats(scenario_records, NOW)
    second = compute_stats(scenario_records, NOW)

    assert first == second
    assert first.total == sum(first.categoryBreakdown.values())


def test_stats_empty():
    stats = compute_stats([], NOW)

    assert stats.total == 0
    assert stats.monthTotal == 0
    assert stats.categoryBreakdown == {}
    assert stats.entryCount == 0


def test_analytics_scenario(scenario_records):
    analytics = compute_analytics(scenario_records, NOW)

    assert len(analytics.dailyTotals) == 30
    assert sum(d.amount for d in analytics.dailyTotals) == 15.0
    assert analytics.thisWeekTotal == 10.0
    assert analytics.lastWeekTotal == 5.0
    assert analytics.weekOverWeekChange == 100.0
    assert analytics.topCategory.category == "transportation"
    assert analytics.topCategory.amount == 10.0
    assert analytics.totalEntries == 3
    assert analytics.averageDaily == 0.5


def test_analytics_buckets_are_ascending_calendar_days(scenario_records):
    analytics = compute_analytics(scenario_records, NOW)
    dates = [d.date for d in analytics.dailyTotals]

    assert dates[0] == "2025-05-17"
    assert dates[-1] == "2025-06-15"
    assert dates == sorted(dates)
    assert set(analytics.categoryTrends) == {"transportation", "energy", "food", "shopping"}
    for series in analytics.categoryTrends.values():
        assert [d.date for d in series] == dates
    assert all(d.amount == 0 for d in analytics.categoryTrends["shopping"])
    assert sum(d.amount for d in analytics.categoryTrends["food"]) == 0


def test_analytics_window_boundaries():
    records = [
        make_record("energy", 1.0, datetime(2025, 5, 17, 0, 0)),
        make_record("energy", 2.0, datetime(2025, 5, 16, 23, 59)),
        make_record("food", 4.0, datetime(2025, 6, 15, 0, 0)),
        make_record("food", 8.0, datetime(2025, 6, 14, 23, 59, 59)),
    ]
    analytics = compute_analytics(records, NOW)
    by_date = {d.date: d.amount for d in analytics.dailyTotals}

    assert by_date["2025-05-17"] == 1.0
    assert "2025-05-16" not in by_date
    assert by_date["2025-06-15"] == 4.0
    assert by_date["2025-06-14"] == 8.0
    assert sum(by_date.values()) == 13.0
    assert compute_stats(records, NOW).total == 15.0


def test_analytics_is_order_independent(scenario_records):
    shuffled = list(scenario_records)
    random.Random(3).shuffle(shuffled)

    assert compute_analytics(shuffled, NOW) == compute_analytics(scenario_records, NOW)


def test_analytics_empty():
    analytics = compute_analytics([], NOW)

    assert analytics.topCategory is None
    assert analytics.weekOverWeekChange == 0
    assert analytics.averageDaily == 0
    assert all(d.amount == 0 for d in analytics.dailyTotals)


def test_dashboard_metrics_full_score():
    categories = ["transportation", "energy", "food", "shopping"]
    records = [
        make_record(categories[i % 4], 2.0, NOW - timedelta(days=i + 1))
        for i in range(7)
    ]
    metrics = compute_dashboard_metrics(records, NOW)

    assert metrics.todayTotal == 0
    assert metrics.averageDaily == 2.0
    assert metrics.carbonSavedToday == 3.0
    assert metrics.sustainabilityScore == 100


def test_dashboard_metrics_empty():
    metrics = compute_dashboard_metrics([], NOW)

    assert metrics.carbonSavedToday == 0
    assert metrics.sustainabilityScore == 0
    assert metrics.todayTotal == 0
    assert metrics.averageDaily == 0


def test_dashboard_score_stays_bounded_for_heavy_logs():
    records = [make_record("energy", 1000.0, NOW - timedelta(minutes=i)) for i in range(1000)]
    metrics = compute_dashboard_metrics(records, NOW)

    assert 0 <= metrics.sustainabilityScore <= 100
    assert metrics.carbonSavedToday == 0


def test_sustainability_sub_scores():
    assert sustainability_score(3, 0, 0, 1) == 12 + 8
    assert sustainability_score(10, 20, 0, 2) == 30 + 16 + 10
    assert sustainability_score(7, 5, 1, 5) == 30 + 25 + 25 + 20


def test_top_category_keeps_first_on_tie():
    assert top_category({"food": 2.0, "energy": 2.0}) == "food"
    assert top_category({}) is None
