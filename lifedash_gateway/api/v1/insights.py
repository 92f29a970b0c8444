"""POST /v1/insights - Health and finance insight generation"""

import time
import logging
from fastapi import APIRouter, HTTPException, Request

from lifedash_gateway.api.v1.schemas import InsightRequest, InsightResponse
from lifedash_gateway.api.dependencies import get_request_id
from lifedash_gateway.domain.categorization import categorize_purchases
from lifedash_gateway.domain.insights import generate_health_finance_insights
from lifedash_gateway.infrastructure.observability.metrics import record_insight
from lifedash_gateway.infrastructure.observability.logging import log_insight_generated

router = APIRouter()


@router.post("/insights", response_model=InsightResponse)
def create_insight(request_body: InsightRequest, request: Request):
    """
    Generate a health-finance insight.

    Flow:
    1. Categorize purchases against the supplied merchants
    2. Summarize the most recent week of health logs
    3. Cross-reference health habits with health-related spending

    The insight is returned, not stored; persisting it is up to the caller.
    """
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        health_logs = [log.to_domain() for log in request_body.health_logs]
        transactions = categorize_purchases(
            [p.to_domain() for p in request_body.purchases],
            [m.to_domain() for m in request_body.merchants],
        )

        insight = generate_health_finance_insights(health_logs, transactions)

        duration_ms = (time.time() - start_time) * 1000
        record_insight(len(health_logs), len(transactions), insight.health_score)
        log_insight_generated(
            request_id,
            insight.user_id,
            len(health_logs),
            len(transactions),
            len(insight.recommendations),
            duration_ms,
        )

        return InsightResponse.from_domain(insight)

    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")
