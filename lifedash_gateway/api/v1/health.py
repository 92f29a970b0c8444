"""Health endpoints - health score, anomalies, trends and myth busting"""

import logging
from typing import List
from fastapi import APIRouter, HTTPException, Request

from lifedash_gateway.api.dependencies import get_request_id
from lifedash_gateway.api.v1.schemas import (
    HealthAnomalySchema,
    HealthMythSchema,
    HealthSummaryRequest,
    HealthSummaryResponse,
    HealthTrendSchema,
)
from lifedash_gateway.domain.health import (
    calculate_average_exercise,
    calculate_average_meals,
    calculate_average_sleep,
    calculate_health_score,
    calculate_health_trends,
    calculate_mood_score,
    detect_health_anomalies,
)
from lifedash_gateway.domain.myths import HEALTH_MYTHS_AND_FACTS
from lifedash_gateway.infrastructure.observability.metrics import health_score_histogram

router = APIRouter()


@router.post("/health/summary", response_model=HealthSummaryResponse)
def create_health_summary(request_body: HealthSummaryRequest, request: Request):
    """
    Summarize a set of health check-ins.

    Returns:
        Composite health score, averages, per-log anomalies and score trend per period
    """
    request_id = get_request_id(request)

    try:
        logs = [log.to_domain() for log in request_body.logs]
        health_score = calculate_health_score(logs)
        if logs:
            health_score_histogram.observe(health_score)

        return HealthSummaryResponse(
            health_score=health_score,
            mood_score=calculate_mood_score(logs),
            average_sleep=calculate_average_sleep(logs),
            average_meals=calculate_average_meals(logs),
            average_exercise=calculate_average_exercise(logs),
            anomalies=[HealthAnomalySchema.from_domain(a) for a in detect_health_anomalies(logs)],
            trends=[HealthTrendSchema.from_domain(t) for t in calculate_health_trends(logs, request_body.period)],
        )

    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")


@router.get("/health/myths", response_model=List[HealthMythSchema])
def get_health_myths():
    """Return the list of common health myths and the facts behind them"""
    return [HealthMythSchema(myth=m.myth, fact=m.fact) for m in HEALTH_MYTHS_AND_FACTS]
