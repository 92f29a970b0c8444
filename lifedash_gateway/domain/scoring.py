"""Financial health scoring - composite 0-100 heuristic from balances and spending"""

from datetime import date, timedelta
from typing import Sequence

from lifedash_gateway.domain.models import Account, FinancialScoreBand, Purchase

SPENDING_WINDOW_DAYS = 30
TREND_MIN_PURCHASES = 10


def _savings_points(savings_ratio: float) -> int:
    """Months of spending covered by balances"""
    if savings_ratio > 6:
        return 20
    elif savings_ratio > 3:
        return 15
    elif savings_ratio > 1:
        return 10
    elif savings_ratio > 0.5:
        return 5
    return 0


def _income_points(income_ratio: float) -> int:
    """Income relative to spending; spending at or above income is penalized"""
    if income_ratio > 2:
        return 20
    elif income_ratio > 1.5:
        return 15
    elif income_ratio > 1.2:
        return 10
    elif income_ratio > 1:
        return 5
    return -10


def _trend_points(recent_purchases: Sequence[Purchase]) -> int:
    """Compare the later half of the window against the earlier half"""
    ordered = sorted(recent_purchases, key=lambda p: p.purchase_date)
    halfway = len(ordered) // 2
    first_half = sum(p.amount for p in ordered[:halfway])
    second_half = sum(p.amount for p in ordered[halfway:])

    spending_trend = second_half - first_half
    if spending_trend < 0:
        return 10
    elif spending_trend > first_half * 0.2:
        return -10
    return 0


def calculate_financial_health_score(
    accounts: Sequence[Account],
    purchases: Sequence[Purchase],
    income: float = 0,
    now: date | None = None,
) -> int:
    """
    Calculate financial health score from 0 (worst) to 100 (best).

    Starts from a neutral 50 and adjusts by:
    - Savings ratio (total balance / last-30-day spending): up to +20
    - Income/spending ratio when income is known: +20 down to -10
    - Spending trend across the window (>= 10 purchases): +10 / -10

    Ratios are skipped when there is no spending to divide by, so the
    result never carries NaN or infinity.
    """
    if now is None:
        now = date.today()
    window_start = now - timedelta(days=SPENDING_WINDOW_DAYS)

    total_balance = sum(account.balance for account in accounts)
    recent_purchases = [p for p in purchases if p.purchase_date >= window_start]
    monthly_spending = sum(p.amount for p in recent_purchases)

    score = 50

    savings_ratio = total_balance / monthly_spending if monthly_spending > 0 else 0.0
    score += _savings_points(savings_ratio)

    if income > 0 and monthly_spending > 0:
        score += _income_points(income / monthly_spending)

    if len(recent_purchases) >= TREND_MIN_PURCHASES:
        score += _trend_points(recent_purchases)

    return max(0, min(100, score))


def determine_score_band(score: float) -> FinancialScoreBand:
    """
    Map a financial health score to a qualitative band.

    Score bands:
    - 80+:     Excellent
    - 60 - 80: Good
    - 40 - 60: Fair
    - < 40:    Needs Improvement
    """
    if score >= 80:
        return FinancialScoreBand(
            label="Excellent",
            description="Your financial health is excellent! You're managing your money well "
            "and making smart financial decisions.",
            recommendations=[
                "Continue your excellent financial habits",
                "Consider increasing your investments",
                "Look into optimizing your tax strategy",
            ],
        )
    elif score >= 60:
        return FinancialScoreBand(
            label="Good",
            description="Your financial health is good. You're on the right track, but there's "
            "room for improvement in some areas.",
            recommendations=[
                "Build up your emergency fund",
                "Look for ways to reduce unnecessary expenses",
                "Consider increasing your savings rate",
            ],
        )
    elif score >= 40:
        return FinancialScoreBand(
            label="Fair",
            description="Your financial health is fair. Consider making some changes to improve "
            "your financial situation.",
            recommendations=[
                "Create a budget and stick to it",
                "Reduce non-essential spending",
                "Start building an emergency fund",
            ],
        )
    else:
        return FinancialScoreBand(
            label="Needs Improvement",
            description="Your financial health needs improvement. Consider reviewing your "
            "spending habits and creating a budget.",
            recommendations=[
                "Create a detailed budget immediately",
                "Cut back on all non-essential spending",
                "Consider seeking financial counseling",
            ],
        )
