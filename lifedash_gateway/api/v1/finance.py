"""Finance analysis endpoints - categorization, spending aggregates and financial score"""

import time
import logging
from typing import List, Optional, Sequence
from fastapi import APIRouter, Depends, HTTPException, Query, Request

from lifedash_gateway.api.v1.schemas import (
    CategorizedPurchaseSchema,
    FinanceAnalysisRequest,
    FinanceAnalysisResponse,
    Granularity,
    RecurringSummarySchema,
    ScoreBandSchema,
    SpendingAnomalySchema,
    SpendingByCategorySchema,
    SpendingTrendSchema,
    TrendSummarySchema,
)
from lifedash_gateway.api.dependencies import get_nessie_client, get_request_id
from lifedash_gateway.infrastructure.clients.nessie import NessieClient
from lifedash_gateway.config import settings
from lifedash_gateway.domain.categorization import categorize_purchases
from lifedash_gateway.domain.exceptions import BankAPIError
from lifedash_gateway.domain.models import Account, Merchant, Purchase
from lifedash_gateway.domain.scoring import calculate_financial_health_score, determine_score_band
from lifedash_gateway.domain.spending import (
    anomaly_severity,
    calculate_spending_by_category,
    calculate_spending_trends,
    detect_spending_anomalies,
    identify_recurring_expenses,
    summarize_recurring_expenses,
    summarize_spending_trend,
)
from lifedash_gateway.infrastructure.observability.metrics import bank_fetch_failures_counter, record_finance_analysis
from lifedash_gateway.infrastructure.observability.logging import log_finance_analysis

router = APIRouter()


def analyze_finances(
    purchases: Sequence[Purchase],
    merchants: Sequence[Merchant],
    accounts: Sequence[Account],
    income: float = 0,
    granularity: Optional[str] = None,
) -> FinanceAnalysisResponse:
    """Run the full categorize -> aggregate -> score pipeline over one snapshot"""
    categorized = categorize_purchases(purchases, merchants)
    trends = calculate_spending_trends(purchases, granularity or settings.trend_granularity)
    anomalies = detect_spending_anomalies(categorized, threshold=settings.anomaly_threshold)
    recurring = identify_recurring_expenses(
        categorized,
        timeframe_in_days=settings.recurring_timeframe_days,
        min_occurrences=settings.recurring_min_occurrences,
    )
    score = calculate_financial_health_score(accounts, purchases, income)

    return FinanceAnalysisResponse(
        financial_score=score,
        score_band=ScoreBandSchema.from_domain(determine_score_band(score)),
        purchases=[CategorizedPurchaseSchema.from_domain(p) for p in categorized],
        spending_by_category=[SpendingByCategorySchema.from_domain(s) for s in calculate_spending_by_category(categorized)],
        spending_trends=[SpendingTrendSchema.from_domain(t) for t in trends],
        trend_summary=TrendSummarySchema.from_domain(summarize_spending_trend(trends)),
        anomalies=[SpendingAnomalySchema.from_anomaly(p, anomaly_severity(p.amount)) for p in anomalies],
        recurring_expenses=[CategorizedPurchaseSchema.from_domain(p) for p in recurring],
        recurring_summary=RecurringSummarySchema.from_domain(
            summarize_recurring_expenses(recurring, min_occurrences=settings.recurring_min_occurrences)
        ),
    )


@router.post("/finance/analysis", response_model=FinanceAnalysisResponse)
def create_finance_analysis(request_body: FinanceAnalysisRequest, request: Request):
    """
    Analyze a snapshot of purchases supplied by the caller.

    Returns categorized purchases, category breakdown, spending trends,
    anomalies, recurring expenses and the financial health score.
    """
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        analysis = analyze_finances(
            purchases=[p.to_domain() for p in request_body.purchases],
            merchants=[m.to_domain() for m in request_body.merchants],
            accounts=[a.to_domain() for a in request_body.accounts],
            income=request_body.income,
            granularity=request_body.granularity,
        )

        duration_ms = (time.time() - start_time) * 1000
        record_finance_analysis(analysis.financial_score, len(analysis.anomalies))
        log_finance_analysis(request_id, len(analysis.purchases), analysis.financial_score, len(analysis.anomalies), duration_ms)

        return analysis

    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")


async def _fetch_merchants(nessie: NessieClient, merchant_ids: List[str], request_id: str) -> List[Merchant]:
    """Look up each merchant once; unknown merchants are left out and categorize as OTHER"""
    merchants = []
    for merchant_id in merchant_ids:
        try:
            merchants.append(await nessie.get_merchant(merchant_id))
        except BankAPIError as e:
            bank_fetch_failures_counter.inc()
            logging.warning(f"Merchant lookup failed for {merchant_id}: {e}", extra={"request_id": request_id})
    return merchants


@router.get("/customers/{customer_id}/finance", response_model=FinanceAnalysisResponse)
async def get_customer_finance(
    customer_id: str,
    request: Request,
    income: float = Query(0, ge=0, description="Monthly income"),
    granularity: Optional[Granularity] = Query(None, description="Trend bucket size"),
    nessie: NessieClient = Depends(get_nessie_client),
):
    """
    Analyze a customer's finances using live banking sandbox data.

    Flow:
    1. Fetch the customer's accounts
    2. Fetch purchases for every account
    3. Fetch the merchants those purchases reference
    4. Run the finance analysis pipeline
    """
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        accounts = await nessie.get_accounts(customer_id)
        purchases: List[Purchase] = []
        for account in accounts:
            purchases.extend(await nessie.get_purchases(account.id))

        merchant_ids = list(dict.fromkeys(p.merchant_id for p in purchases))
        merchants = await _fetch_merchants(nessie, merchant_ids, request_id)

        analysis = analyze_finances(purchases, merchants, accounts, income, granularity)

        duration_ms = (time.time() - start_time) * 1000
        record_finance_analysis(analysis.financial_score, len(analysis.anomalies))
        log_finance_analysis(
            request_id,
            len(analysis.purchases),
            analysis.financial_score,
            len(analysis.anomalies),
            duration_ms,
            customer_id=customer_id,
        )

        return analysis

    except BankAPIError as e:
        bank_fetch_failures_counter.inc()
        logging.error(f"Bank API error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=503, detail="Bank service unavailable")

    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")
