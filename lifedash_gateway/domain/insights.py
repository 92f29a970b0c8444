"""Cross-domain insight generation from health logs and categorized purchases"""

from datetime import datetime, timezone
from typing import List, Sequence

from lifedash_gateway.domain.health import (
    calculate_average_exercise,
    calculate_average_meals,
    calculate_average_sleep,
    calculate_health_score,
    calculate_mood_score,
    mood_value,
)
from lifedash_gateway.domain.models import CategorizedPurchase, HealthLog, TransactionCategory, UserInsight

RECENT_LOG_COUNT = 7
TREND_MIN_LOGS = 3
CORRELATION_MIN_LOGS = 5
CORRELATION_MIN_DELTA = 0.5

HEALTHY_SLEEP_HOURS = 7
ACTIVE_EXERCISE_MINUTES = 20

DELIVERY_KEYWORDS = ("delivery", "doordash", "uber eats", "grubhub", "postmates")
FITNESS_KEYWORDS = ("gym", "fitness")

NO_HEALTH_DATA = "Not enough health data to generate insights."
NO_FINANCIAL_DATA = "Not enough financial data to generate insights."
START_LOGGING = "Start logging your daily health to get personalized insights."
DEFAULT_RECOMMENDATIONS = (
    "Continue maintaining your healthy lifestyle.",
    "Consider tracking your water intake for better hydration.",
)


def _mean_mood(logs: Sequence[HealthLog]) -> float:
    return sum(mood_value(log.mood) for log in logs) / len(logs)


def _mood_delta(high: Sequence[HealthLog], low: Sequence[HealthLog]) -> float:
    """Mean mood of the high group minus the low group; 0 if either group is empty"""
    if not high or not low:
        return 0.0
    return _mean_mood(high) - _mean_mood(low)


def _health_clauses(recent_logs: Sequence[HealthLog], health_score: int, recommendations: List[str]) -> List[str]:
    """Narrative clauses about the recent logs; appends to recommendations as it goes"""
    avg_sleep = calculate_average_sleep(recent_logs)
    avg_exercise = calculate_average_exercise(recent_logs)
    avg_meals = calculate_average_meals(recent_logs)
    mood_score = calculate_mood_score(recent_logs)

    clauses = [f"Your health score is {health_score}/100."]

    if avg_sleep < HEALTHY_SLEEP_HOURS:
        clauses.append(f"You're averaging only {avg_sleep:.1f} hours of sleep.")
        recommendations.append("Try to get 7-8 hours of sleep each night for better health.")
    else:
        clauses.append(f"You're getting a healthy {avg_sleep:.1f} hours of sleep on average.")

    if avg_exercise < ACTIVE_EXERCISE_MINUTES:
        clauses.append(f"You're only exercising {avg_exercise:.1f} minutes per day on average.")
        recommendations.append("Aim for at least 20-30 minutes of exercise daily.")
    else:
        clauses.append(f"You're maintaining a good exercise routine with {avg_exercise:.1f} minutes per day.")

    if avg_meals < 2:
        clauses.append(f"You're eating only {avg_meals:.1f} meals a day on average.")
        recommendations.append("Try to eat regular, balanced meals throughout the day.")

    if mood_score < 2.5:
        clauses.append("Your mood has been lower than optimal.")
        recommendations.append("Consider speaking with a mental health professional about your mood.")
    elif mood_score >= 3.5:
        clauses.append("Your mood has been consistently positive.")

    if len(recent_logs) >= TREND_MIN_LOGS:
        # recent_logs is newest first
        newest_score = calculate_health_score(recent_logs[:1])
        oldest_score = calculate_health_score(recent_logs[-1:])
        if newest_score > oldest_score:
            clauses.append(f"Your daily health score has improved from {oldest_score} to {newest_score}.")
        elif newest_score < oldest_score:
            clauses.append(f"Your daily health score has dropped from {oldest_score} to {newest_score}.")
            recommendations.append("Look back at what changed in your sleep, meals, or exercise this week.")
        else:
            clauses.append(f"Your daily health score has held steady at {newest_score}.")

    if len(recent_logs) >= CORRELATION_MIN_LOGS:
        sleep_delta = _mood_delta(
            [log for log in recent_logs if log.sleep_hours >= HEALTHY_SLEEP_HOURS],
            [log for log in recent_logs if log.sleep_hours < HEALTHY_SLEEP_HOURS],
        )
        if sleep_delta > CORRELATION_MIN_DELTA:
            clauses.append("Your mood tends to be better on days when you sleep at least 7 hours.")
            recommendations.append("Keep a consistent bedtime; better sleep lines up with your better days.")

        exercise_delta = _mood_delta(
            [log for log in recent_logs if log.exercise_minutes >= ACTIVE_EXERCISE_MINUTES],
            [log for log in recent_logs if log.exercise_minutes < ACTIVE_EXERCISE_MINUTES],
        )
        if exercise_delta > CORRELATION_MIN_DELTA:
            clauses.append("Your mood tends to be better on days when you exercise at least 20 minutes.")
            recommendations.append("Schedule short workouts on busy days; exercise lines up with your better moods.")

    return clauses


def _mentions(purchase: CategorizedPurchase, keywords: Sequence[str]) -> bool:
    description = (purchase.description or "").lower()
    return any(keyword in description for keyword in keywords)


def _financial_clauses(
    transactions: Sequence[CategorizedPurchase],
    avg_exercise: float,
    recommendations: List[str],
) -> List[str]:
    """Health-related spending sentences; appends to recommendations as it goes"""
    food_delivery = [
        t for t in transactions
        if t.category == TransactionCategory.FOOD and _mentions(t, DELIVERY_KEYWORDS)
    ]
    healthcare = [t for t in transactions if t.category == TransactionCategory.HEALTH]
    fitness = [
        t for t in transactions
        if t.category == TransactionCategory.HEALTH or _mentions(t, FITNESS_KEYWORDS)
    ]

    clauses: List[str] = []

    if food_delivery:
        total_food_delivery = sum(t.amount for t in food_delivery)
        clauses.append(f"You've spent ${total_food_delivery:.2f} on food delivery recently.")
        if avg_exercise < ACTIVE_EXERCISE_MINUTES and total_food_delivery > 50:
            recommendations.append("Consider cooking at home more often and using the savings for fitness activities.")

    if healthcare:
        total_healthcare = sum(t.amount for t in healthcare)
        clauses.append(f"You've spent ${total_healthcare:.2f} on healthcare.")

    if fitness:
        total_fitness = sum(t.amount for t in fitness)
        clauses.append(f"You've invested ${total_fitness:.2f} in fitness.")
        if avg_exercise < ACTIVE_EXERCISE_MINUTES and total_fitness > 20:
            recommendations.append("Make the most of your fitness investments by using them regularly.")

    return clauses


def generate_health_finance_insights(
    health_logs: Sequence[HealthLog],
    transactions: Sequence[CategorizedPurchase],
    now: datetime | None = None,
) -> UserInsight:
    """
    Build a narrative insight from the last week of health logs and recent purchases.

    Flow:
    1. No health logs: fixed "not enough data" insight
    2. Summarize the 7 most recent logs (score, sleep, exercise, meals, mood,
       day-over-week trend, mood correlations with sleep and exercise)
    3. No transactions: fixed financial summary
    4. Summarize food delivery, healthcare and fitness spend, cross-referenced
       with exercise habits

    week_of is the generation time, not the start of a calendar week.
    """
    if now is None:
        now = datetime.now(timezone.utc)

    if not health_logs:
        return UserInsight(
            user_id="",
            week_of=now,
            health_summary=NO_HEALTH_DATA,
            financial_summary=NO_FINANCIAL_DATA,
            recommendations=[START_LOGGING],
        )

    recent_logs = sorted(health_logs, key=lambda log: log.date, reverse=True)[:RECENT_LOG_COUNT]

    health_score = calculate_health_score(recent_logs)

    recommendations: List[str] = []
    health_summary = " ".join(_health_clauses(recent_logs, health_score, recommendations))

    if transactions:
        avg_exercise = calculate_average_exercise(recent_logs)
        financial_summary = " ".join(_financial_clauses(transactions, avg_exercise, recommendations))
    else:
        financial_summary = NO_FINANCIAL_DATA

    if not recommendations:
        recommendations.extend(DEFAULT_RECOMMENDATIONS)

    return UserInsight(
        user_id=health_logs[0].user_id,
        week_of=now,
        health_summary=health_summary,
        financial_summary=financial_summary,
        recommendations=recommendations,
        health_score=health_score,
    )
