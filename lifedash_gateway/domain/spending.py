"""Spending aggregation: category breakdown, trends, anomalies and recurring expenses"""

import math
from typing import Callable, Dict, List, Sequence, Tuple

from lifedash_gateway.domain.models import (
    CategorizedPurchase,
    Purchase,
    RecurringExpenseGroup,
    RecurringExpenseSummary,
    SpendingByCategory,
    SpendingTrend,
    SpendingTrendSummary,
    TransactionCategory,
)
from lifedash_gateway.utils.date_utils import day_key, iso_week_key, month_key

BUCKET_KEYS: Dict[str, Callable] = {
    "daily": day_key,
    "weekly": iso_week_key,
    "monthly": month_key,
}


def calculate_spending_by_category(purchases: Sequence[CategorizedPurchase]) -> List[SpendingByCategory]:
    """
    Total spend per category with its share of overall spend.

    Every category is present (zero-amount ones included), sorted by amount
    descending. Percentages are 0 when nothing was spent.
    """
    totals: Dict[TransactionCategory, float] = {category: 0.0 for category in TransactionCategory}
    for purchase in purchases:
        totals[purchase.category] += purchase.amount

    total_spending = sum(totals.values())

    breakdown = [
        SpendingByCategory(
            category=category,
            amount=amount,
            percentage=(amount / total_spending) * 100 if total_spending > 0 else 0.0,
        )
        for category, amount in totals.items()
    ]
    return sorted(breakdown, key=lambda item: item.amount, reverse=True)


def calculate_spending_trends(purchases: Sequence[Purchase], granularity: str = "daily") -> List[SpendingTrend]:
    """
    Sum purchase amounts per time bucket.

    Bucket keys: YYYY-MM-DD (daily), YYYY-Www (weekly), YYYY-MM (monthly).
    Result is ordered by key, which is chronological for all three formats.
    """
    try:
        bucket_key = BUCKET_KEYS[granularity]
    except KeyError:
        raise ValueError(f"Unknown trend granularity: {granularity!r}") from None

    spending_by_bucket: Dict[str, float] = {}
    for purchase in purchases:
        key = bucket_key(purchase.purchase_date)
        spending_by_bucket[key] = spending_by_bucket.get(key, 0.0) + purchase.amount

    return [SpendingTrend(date=key, amount=spending_by_bucket[key]) for key in sorted(spending_by_bucket)]


def summarize_spending_trend(trends: Sequence[SpendingTrend]) -> SpendingTrendSummary:
    """Compare the first and last buckets of a trend series"""
    if len(trends) < 2:
        return SpendingTrendSummary(direction="neutral", change_amount=0.0, change_percent=0.0)

    first_amount = trends[0].amount
    change_amount = trends[-1].amount - first_amount
    change_percent = (change_amount / first_amount) * 100 if first_amount > 0 else 0.0

    if change_amount > 0:
        direction = "up"
    elif change_amount < 0:
        direction = "down"
    else:
        direction = "neutral"

    return SpendingTrendSummary(direction=direction, change_amount=change_amount, change_percent=change_percent)


def detect_spending_anomalies(
    purchases: Sequence[CategorizedPurchase],
    threshold: float = 1.5,
) -> List[CategorizedPurchase]:
    """
    Flag purchases that deviate from their category's mean by more than
    threshold population standard deviations.

    Categories with fewer than 3 purchases are never flagged. Output keeps
    category first-seen order, then original purchase order.
    """
    by_category: Dict[TransactionCategory, List[CategorizedPurchase]] = {}
    for purchase in purchases:
        by_category.setdefault(purchase.category, []).append(purchase)

    anomalies: List[CategorizedPurchase] = []
    for category_purchases in by_category.values():
        if len(category_purchases) < 3:
            continue

        amounts = [p.amount for p in category_purchases]
        mean = sum(amounts) / len(amounts)
        variance = sum((amount - mean) ** 2 for amount in amounts) / len(amounts)
        std_dev = math.sqrt(variance)

        anomalies.extend(p for p in category_purchases if abs(p.amount - mean) > threshold * std_dev)

    return anomalies


def identify_recurring_expenses(
    purchases: Sequence[CategorizedPurchase],
    timeframe_in_days: int = 90,
    min_occurrences: int = 2,
) -> List[CategorizedPurchase]:
    """
    Find repeated charges: same merchant and exact same amount, at least
    min_occurrences times, all within timeframe_in_days of each other.

    All members of each qualifying group are returned, sorted by date.
    """
    groups: Dict[Tuple[str, float], List[CategorizedPurchase]] = {}
    for purchase in purchases:
        groups.setdefault((purchase.merchant_id, purchase.amount), []).append(purchase)

    recurring: List[CategorizedPurchase] = []
    for group in groups.values():
        if len(group) < min_occurrences:
            continue

        ordered = sorted(group, key=lambda p: p.purchase_date)
        span_days = (ordered[-1].purchase_date - ordered[0].purchase_date).days
        if span_days <= timeframe_in_days:
            recurring.extend(ordered)

    return recurring


def summarize_recurring_expenses(
    recurring: Sequence[CategorizedPurchase],
    min_occurrences: int = 2,
) -> RecurringExpenseSummary:
    """
    Roll recurring purchases up into one group per (merchant, amount).

    Groups are sorted by amount descending. Each group is counted once
    towards the monthly total; the yearly total is monthly * 12.
    """
    groups: Dict[Tuple[str, float], List[CategorizedPurchase]] = {}
    for purchase in recurring:
        groups.setdefault((purchase.merchant_id, purchase.amount), []).append(purchase)

    rolled_up = [
        RecurringExpenseGroup(
            merchant_id=group[0].merchant_id,
            merchant_name=group[0].merchant_name,
            category=group[0].category,
            amount=group[0].amount,
            occurrences=len(group),
            last_date=max(p.purchase_date for p in group),
        )
        for group in groups.values()
        if len(group) >= min_occurrences
    ]
    rolled_up.sort(key=lambda g: g.amount, reverse=True)

    monthly_total = sum(g.amount for g in rolled_up)
    return RecurringExpenseSummary(groups=rolled_up, monthly_total=monthly_total, yearly_total=monthly_total * 12)


def anomaly_severity(amount: float) -> str:
    """
    Severity of a flagged purchase by absolute size:
    - > $1000: high
    - > $500:  medium
    - otherwise low
    """
    if amount > 1000:
        return "high"
    elif amount > 500:
        return "medium"
    return "low"
