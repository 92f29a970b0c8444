"""Unit tests for spending aggregation"""

import math
import pytest
from datetime import date, timedelta
from lifedash_gateway.domain.models import SpendingTrend, TransactionCategory
from lifedash_gateway.domain.spending import (
    anomaly_severity,
    calculate_spending_by_category,
    calculate_spending_trends,
    detect_spending_anomalies,
    identify_recurring_expenses,
    summarize_recurring_expenses,
    summarize_spending_trend,
)


def test_spending_by_category_empty():
    """All 12 categories present with zero amount and zero percentage"""
    result = calculate_spending_by_category([])

    assert len(result) == 12
    assert {item.category for item in result} == set(TransactionCategory)
    assert all(item.amount == 0 and item.percentage == 0 for item in result)


def test_spending_by_category_totals_and_order(make_categorized):
    purchases = [
        make_categorized(30, TransactionCategory.FOOD),
        make_categorized(20, TransactionCategory.FOOD),
        make_categorized(150, TransactionCategory.TRAVEL),
        make_categorized(50, TransactionCategory.HEALTH),
    ]

    result = calculate_spending_by_category(purchases)

    assert [item.category for item in result[:3]] == [
        TransactionCategory.TRAVEL,
        TransactionCategory.FOOD,
        TransactionCategory.HEALTH,
    ]
    assert result[0].amount == 150
    assert result[0].percentage == pytest.approx(60.0)
    assert result[1].percentage == pytest.approx(20.0)
    assert all(item.amount == 0 for item in result[3:])


def test_spending_percentages_sum_to_100(make_categorized):
    purchases = [
        make_categorized(amount, category)
        for amount, category in zip(
            [12.34, 0.01, 999.99, 45.5, 7.77, 3.33],
            list(TransactionCategory),
        )
    ]

    result = calculate_spending_by_category(purchases)

    assert math.isclose(sum(item.percentage for item in result), 100.0, abs_tol=1e-6)


def test_spending_percentages_zero_when_total_zero(make_categorized):
    result = calculate_spending_by_category([make_categorized(0, TransactionCategory.FOOD)])
    assert all(item.percentage == 0 for item in result)


def test_spending_trends_daily(make_purchase):
    purchases = [
        make_purchase(10, date(2024, 3, 2)),
        make_purchase(5, date(2024, 3, 1)),
        make_purchase(7.5, date(2024, 3, 2), merchant_id="m2"),
    ]

    result = calculate_spending_trends(purchases, "daily")

    assert result == [
        SpendingTrend(date="2024-03-01", amount=5),
        SpendingTrend(date="2024-03-02", amount=17.5),
    ]


def test_spending_trends_monthly(make_purchase):
    purchases = [
        make_purchase(100, date(2024, 11, 30)),
        make_purchase(40, date(2024, 2, 10)),
        make_purchase(60, date(2024, 2, 28)),
    ]

    result = calculate_spending_trends(purchases, "monthly")

    assert [(t.date, t.amount) for t in result] == [("2024-02", 100), ("2024-11", 100)]


def test_spending_trends_weekly_keys_sort_chronologically(make_purchase):
    """Zero-padded week numbers keep week 5 ahead of week 10"""
    purchases = [
        make_purchase(10, date(2024, 3, 5)),   # ISO week 10
        make_purchase(20, date(2024, 1, 30)),  # ISO week 5
        make_purchase(30, date(2024, 1, 31)),  # ISO week 5
    ]

    result = calculate_spending_trends(purchases, "weekly")

    assert [(t.date, t.amount) for t in result] == [("2024-W05", 50), ("2024-W10", 10)]


@pytest.mark.parametrize("granularity", ["daily", "weekly", "monthly"])
def test_spending_trends_sorted_for_all_granularities(make_purchase, granularity):
    start = date(2023, 12, 20)
    purchases = [make_purchase(1, start + timedelta(days=offset)) for offset in (60, 3, 45, 0, 17, 90, 8)]

    keys = [t.date for t in calculate_spending_trends(purchases, granularity)]

    assert keys == sorted(keys)


def test_spending_trends_unknown_granularity(make_purchase):
    with pytest.raises(ValueError):
        calculate_spending_trends([make_purchase(1)], "hourly")


def test_summarize_spending_trend():
    up = summarize_spending_trend([SpendingTrend("2024-01", 100), SpendingTrend("2024-02", 150)])
    assert up.direction == "up"
    assert up.change_amount == 50
    assert up.change_percent == pytest.approx(50.0)

    down = summarize_spending_trend([SpendingTrend("2024-01", 200), SpendingTrend("2024-02", 50)])
    assert down.direction == "down"
    assert down.change_percent == pytest.approx(-75.0)


def test_summarize_spending_trend_degenerate():
    assert summarize_spending_trend([]).direction == "neutral"
    assert summarize_spending_trend([SpendingTrend("2024-01", 10)]).change_amount == 0

    from_zero = summarize_spending_trend([SpendingTrend("2024-01", 0), SpendingTrend("2024-02", 40)])
    assert from_zero.direction == "up"
    assert from_zero.change_percent == 0


def test_anomaly_not_flagged_with_three_purchases(make_categorized):
    """
    mean 76.67, std dev 87.3: |200 - 76.67| = 123.3 is below 1.5 * 87.3 = 131.0.

    87.3 is the population std dev. A figure of 85.8 matches neither the
    population nor the sample formula; the sample std dev would be 106.9,
    so 200 is unflagged either way.
    """
    purchases = [
        make_categorized(10, TransactionCategory.FOOD, purchase_id="a"),
        make_categorized(20, TransactionCategory.FOOD, purchase_id="b"),
        make_categorized(200, TransactionCategory.FOOD, purchase_id="c"),
    ]

    mean = 230 / 3
    std_dev = math.sqrt(sum((x - mean) ** 2 for x in (10, 20, 200)) / 3)
    assert abs(200 - mean) <= 1.5 * std_dev

    assert detect_spending_anomalies(purchases, threshold=1.5) == []


def test_anomaly_flagged_in_larger_sample(make_categorized):
    amounts = [10, 12, 11, 9, 10, 95]
    purchases = [
        make_categorized(amount, TransactionCategory.FOOD, purchase_id=f"p{i}")
        for i, amount in enumerate(amounts)
    ]

    result = detect_spending_anomalies(purchases)

    assert [p.id for p in result] == ["p5"]


def test_anomaly_skips_small_categories(make_categorized):
    """A category with fewer than 3 purchases is never flagged, however extreme"""
    purchases = [
        make_categorized(1, TransactionCategory.TRAVEL, purchase_id="t1"),
        make_categorized(10_000, TransactionCategory.TRAVEL, purchase_id="t2"),
    ] + [
        make_categorized(amount, TransactionCategory.FOOD, purchase_id=f"f{i}")
        for i, amount in enumerate([5, 5, 5, 5, 5, 80])
    ]

    result = detect_spending_anomalies(purchases)

    assert {p.category for p in result} == {TransactionCategory.FOOD}


def test_anomaly_identical_amounts_flag_nothing(make_categorized):
    purchases = [make_categorized(25, TransactionCategory.HOME, purchase_id=f"h{i}") for i in range(5)]
    assert detect_spending_anomalies(purchases) == []


def test_anomaly_order_is_category_then_original(make_categorized):
    purchases = [
        make_categorized(100, TransactionCategory.HOME, purchase_id="h_big"),
        make_categorized(5, TransactionCategory.FOOD, purchase_id="f1"),
        make_categorized(1, TransactionCategory.HOME, purchase_id="h1"),
        make_categorized(5, TransactionCategory.FOOD, purchase_id="f2"),
        make_categorized(1, TransactionCategory.HOME, purchase_id="h2"),
        make_categorized(5, TransactionCategory.FOOD, purchase_id="f3"),
        make_categorized(1, TransactionCategory.HOME, purchase_id="h3"),
        make_categorized(5, TransactionCategory.FOOD, purchase_id="f4"),
        make_categorized(1, TransactionCategory.HOME, purchase_id="h4"),
        make_categorized(90, TransactionCategory.FOOD, purchase_id="f_big"),
    ]

    result = detect_spending_anomalies(purchases)

    assert [p.id for p in result] == ["h_big", "f_big"]


def test_recurring_two_purchases_ten_days_apart(make_categorized):
    start = date(2024, 1, 1)
    purchases = [
        make_categorized(9.99, merchant_id="netflix", purchase_date=start + timedelta(days=10), purchase_id="b"),
        make_categorized(9.99, merchant_id="netflix", purchase_date=start, purchase_id="a"),
    ]

    result = identify_recurring_expenses(purchases, timeframe_in_days=90, min_occurrences=2)

    assert [p.id for p in result] == ["a", "b"]


def test_recurring_timeframe_boundary(make_categorized):
    """Span equal to the timeframe is included; one day more is excluded"""
    start = date(2024, 1, 1)
    on_boundary = [
        make_categorized(50, merchant_id="gym", purchase_date=start, purchase_id="g1"),
        make_categorized(50, merchant_id="gym", purchase_date=start + timedelta(days=90), purchase_id="g2"),
    ]
    past_boundary = [
        make_categorized(20, merchant_id="isp", purchase_date=start, purchase_id="i1"),
        make_categorized(20, merchant_id="isp", purchase_date=start + timedelta(days=91), purchase_id="i2"),
    ]

    result = identify_recurring_expenses(on_boundary + past_boundary, timeframe_in_days=90, min_occurrences=2)

    assert [p.id for p in result] == ["g1", "g2"]


def test_recurring_requires_exact_amount_and_min_occurrences(make_categorized):
    start = date(2024, 1, 1)
    purchases = [
        make_categorized(15.00, merchant_id="spotify", purchase_date=start, purchase_id="s1"),
        make_categorized(15.01, merchant_id="spotify", purchase_date=start + timedelta(days=30), purchase_id="s2"),
        make_categorized(12, merchant_id="coffee", purchase_date=start, purchase_id="c1"),
        make_categorized(12, merchant_id="coffee", purchase_date=start + timedelta(days=7), purchase_id="c2"),
    ]

    assert identify_recurring_expenses(purchases) == [p for p in purchases if p.merchant_id == "coffee"]
    assert identify_recurring_expenses(purchases, min_occurrences=3) == []


def test_summarize_recurring_expenses(make_categorized):
    start = date(2024, 1, 1)
    recurring = [
        make_categorized(15.99, merchant_id="netflix", purchase_date=start, purchase_id="n1"),
        make_categorized(50, TransactionCategory.HEALTH, merchant_id="gym", purchase_date=start, purchase_id="g1"),
        make_categorized(15.99, merchant_id="netflix", purchase_date=start + timedelta(days=31), purchase_id="n2"),
        make_categorized(9.99, merchant_id="spotify", purchase_date=start, purchase_id="s1"),
        make_categorized(50, TransactionCategory.HEALTH, merchant_id="gym", purchase_date=start + timedelta(days=30), purchase_id="g2"),
        make_categorized(15.99, merchant_id="netflix", purchase_date=start + timedelta(days=60), purchase_id="n3"),
        make_categorized(9.99, merchant_id="spotify", purchase_date=start + timedelta(days=30), purchase_id="s2"),
        make_categorized(5, merchant_id="coffee", purchase_date=start, purchase_id="c1"),
    ]

    summary = summarize_recurring_expenses(recurring)

    assert [(g.merchant_id, g.amount, g.occurrences) for g in summary.groups] == [
        ("gym", 50, 2),
        ("netflix", 15.99, 3),
        ("spotify", 9.99, 2),
    ]
    assert summary.groups[0].category == TransactionCategory.HEALTH
    assert summary.groups[1].last_date == start + timedelta(days=60)
    # One charge per group, single coffee left out
    assert summary.monthly_total == pytest.approx(75.98)
    assert summary.yearly_total == pytest.approx(75.98 * 12)


def test_summarize_recurring_expenses_same_merchant_different_amounts(make_categorized):
    """A price change splits a merchant into two groups"""
    recurring = [
        make_categorized(10, merchant_id="isp", purchase_id="a"),
        make_categorized(10, merchant_id="isp", purchase_id="b"),
        make_categorized(12, merchant_id="isp", purchase_id="c"),
        make_categorized(12, merchant_id="isp", purchase_id="d"),
    ]

    summary = summarize_recurring_expenses(recurring)

    assert [g.amount for g in summary.groups] == [12, 10]
    assert summary.monthly_total == 22


def test_summarize_recurring_expenses_empty():
    summary = summarize_recurring_expenses([])
    assert summary.groups == []
    assert summary.monthly_total == 0
    assert summary.yearly_total == 0


@pytest.mark.parametrize(
    "amount, expected",
    [
        (1500, "high"),
        (1000.01, "high"),
        (1000, "medium"),
        (750, "medium"),
        (500, "low"),
        (20, "low"),
    ],
)
def test_anomaly_severity(amount, expected):
    assert anomaly_severity(amount) == expected
