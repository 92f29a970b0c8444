"""Health log statistics, composite health score, anomalies and trends"""

import math
from typing import Callable, Dict, List, Sequence

from lifedash_gateway.domain.models import HealthAnomaly, HealthLog, HealthTrend
from lifedash_gateway.utils.date_utils import day_key, month_key, week_start_key

MOOD_VALUES: Dict[str, int] = {
    "Happy": 4,
    "Neutral": 3,
    "Sad": 2,
    "Anxious": 1,
}

TREND_KEYS: Dict[str, Callable] = {
    "daily": day_key,
    "weekly": week_start_key,
    "monthly": month_key,
}


def mood_value(mood: str) -> int:
    """Numeric mood; unrecognized moods count as 0"""
    return MOOD_VALUES.get(mood, 0)


def calculate_mood_score(logs: Sequence[HealthLog]) -> float:
    """Average mood on the 1-4 scale (0 for no logs)"""
    if not logs:
        return 0.0
    return sum(mood_value(log.mood) for log in logs) / len(logs)


def calculate_average_sleep(logs: Sequence[HealthLog]) -> float:
    if not logs:
        return 0.0
    return sum(log.sleep_hours for log in logs) / len(logs)


def calculate_average_meals(logs: Sequence[HealthLog]) -> float:
    if not logs:
        return 0.0
    return sum(log.meals for log in logs) / len(logs)


def calculate_average_exercise(logs: Sequence[HealthLog]) -> float:
    if not logs:
        return 0.0
    return sum(log.exercise_minutes for log in logs) / len(logs)


def calculate_health_score(logs: Sequence[HealthLog]) -> int:
    """
    Calculate health score from 0 to 100.

    Weights: mood 40%, sleep 30%, meals 15%, exercise 15%.
    Each component is normalized against its optimum (mood 4, 8 hours of
    sleep, 3 meals, 30 minutes of exercise). Sleep and exercise are capped
    at 1.0; the meal component is not, so extra meals can offset weaker
    components. The final score is clamped to 0-100.
    """
    if not logs:
        return 0

    mood_score = calculate_mood_score(logs) / 4
    sleep_score = min(calculate_average_sleep(logs) / 8, 1.0)
    meal_score = calculate_average_meals(logs) / 3
    exercise_score = min(calculate_average_exercise(logs) / 30, 1.0)

    weighted_score = (0.4 * mood_score) + (0.3 * sleep_score) + (0.15 * meal_score) + (0.15 * exercise_score)

    # Round half up on the 0-100 scale
    score = math.floor(weighted_score * 100 + 0.5)
    return max(0, min(100, score))


def detect_health_anomalies(logs: Sequence[HealthLog]) -> List[HealthAnomaly]:
    """
    Flag check-ins that stand out from the user's own averages.

    Requires at least 3 logs. A single log can produce several anomalies:
    - Sleep below 70% of average (high below 50%)
    - Meals below 70% of average (high below 50%)
    - Exercise below 50% of average, only when the average exceeds 10 minutes
    - Sad (medium) or Anxious (high) mood
    - Any reported symptoms (medium)
    """
    if len(logs) < 3:
        return []

    sorted_logs = sorted(logs, key=lambda log: log.date)
    avg_sleep = calculate_average_sleep(sorted_logs)
    avg_meals = calculate_average_meals(sorted_logs)
    avg_exercise = calculate_average_exercise(sorted_logs)

    anomalies: List[HealthAnomaly] = []
    for log in sorted_logs:
        if log.sleep_hours < avg_sleep * 0.7:
            anomalies.append(HealthAnomaly(
                date=log.date,
                anomaly=f"Significantly less sleep than usual ({log.sleep_hours:.1f} hours vs. avg {avg_sleep:.1f})",
                severity="high" if log.sleep_hours < avg_sleep * 0.5 else "medium",
            ))

        if log.meals < avg_meals * 0.7:
            anomalies.append(HealthAnomaly(
                date=log.date,
                anomaly=f"Fewer meals than usual ({log.meals} vs. avg {avg_meals:.1f})",
                severity="high" if log.meals < avg_meals * 0.5 else "medium",
            ))

        if log.exercise_minutes < avg_exercise * 0.5 and avg_exercise > 10:
            anomalies.append(HealthAnomaly(
                date=log.date,
                anomaly=f"Less exercise than usual ({log.exercise_minutes} mins vs. avg {avg_exercise:.1f})",
                severity="medium",
            ))

        if log.mood in ("Sad", "Anxious"):
            anomalies.append(HealthAnomaly(
                date=log.date,
                anomaly=f"Mood reported as {log.mood}",
                severity="high" if log.mood == "Anxious" else "medium",
            ))

        if log.symptoms and log.symptoms.strip():
            anomalies.append(HealthAnomaly(
                date=log.date,
                anomaly=f"Reported symptoms: {log.symptoms}",
                severity="medium",
            ))

    return anomalies


def calculate_health_trends(logs: Sequence[HealthLog], period: str = "daily") -> List[HealthTrend]:
    """
    Health score per period.

    Keys: YYYY-MM-DD (daily), Monday's date (weekly), YYYY-MM (monthly).
    """
    try:
        bucket_key = TREND_KEYS[period]
    except KeyError:
        raise ValueError(f"Unknown trend period: {period!r}") from None

    grouped: Dict[str, List[HealthLog]] = {}
    for log in sorted(logs, key=lambda log: log.date):
        grouped.setdefault(bucket_key(log.date), []).append(log)

    return [HealthTrend(date=key, score=calculate_health_score(bucket)) for key, bucket in grouped.items()]
