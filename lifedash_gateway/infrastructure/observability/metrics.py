"""Prometheus metrics for monitoring scores, anomalies, insights and bank fetches"""

from typing import Optional
from prometheus_client import Counter, Histogram

SCORE_BUCKETS = [10, 20, 30, 40, 50, 60, 70, 80, 90, 100]

# Insight metrics
insight_counter = Counter(
    "lifedash_insights_total",
    "Total insights generated",
    ["outcome"],  # full | no_health_data | no_financial_data
)

# Score distributions
financial_score_histogram = Histogram(
    "lifedash_financial_score",
    "Financial health scores issued",
    buckets=SCORE_BUCKETS,
)

health_score_histogram = Histogram(
    "lifedash_health_score",
    "Health scores issued",
    buckets=SCORE_BUCKETS,
)

spending_anomaly_counter = Counter(
    "lifedash_spending_anomalies_total",
    "Purchases flagged as spending anomalies",
)

# Bank API metrics
bank_fetch_failures_counter = Counter(
    "bank_fetch_failures_total",
    "Failed bank API calls",
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_finance_analysis(financial_score: int, anomaly_count: int) -> None:
    """Record score distribution and anomaly volume for a finance analysis"""
    financial_score_histogram.observe(financial_score)
    spending_anomaly_counter.inc(anomaly_count)


def record_insight(health_log_count: int, transaction_count: int, health_score: Optional[int] = None) -> None:
    """Record which path insight generation took, and the health score it was based on"""
    if health_log_count == 0:
        outcome = "no_health_data"
    elif transaction_count == 0:
        outcome = "no_financial_data"
    else:
        outcome = "full"

    insight_counter.labels(outcome=outcome).inc()
    if health_score is not None:
        health_score_histogram.observe(health_score)
