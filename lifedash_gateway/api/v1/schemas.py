"""Pydantic schemas for API request/response validation"""

from pydantic import BaseModel, Field
from datetime import date, datetime
from typing import Any, Dict, List, Literal, Optional

from lifedash_gateway.domain.models import (
    Account,
    CategorizedPurchase,
    FinancialScoreBand,
    HealthAnomaly,
    HealthLog,
    HealthTrend,
    Merchant,
    Purchase,
    RecurringExpenseGroup,
    RecurringExpenseSummary,
    SpendingByCategory,
    SpendingTrend,
    SpendingTrendSummary,
    TransactionCategory,
    UserInsight,
)

Granularity = Literal["daily", "weekly", "monthly"]


class PurchaseSchema(BaseModel):
    """Purchase as delivered by the banking sandbox"""

    id: str
    merchant_id: str
    payer_id: str = ""
    purchase_date: date
    amount: float = Field(..., ge=0)
    status: str = ""
    medium: str = ""
    description: str = ""
    type: str = "merchant"

    def to_domain(self) -> Purchase:
        return Purchase(**self.model_dump())


class MerchantSchema(BaseModel):
    """Merchant reference data; category is free text and may be absent"""

    id: str
    name: Optional[str] = None
    category: Optional[Any] = None
    address: Optional[Dict[str, Any]] = None
    geocode: Optional[Dict[str, float]] = None

    def to_domain(self) -> Merchant:
        return Merchant(**self.model_dump())


class AccountSchema(BaseModel):
    id: str
    type: str = "Checking"
    balance: float
    nickname: str = ""
    rewards: int = 0
    customer_id: str = ""

    def to_domain(self) -> Account:
        return Account(**self.model_dump())


class HealthLogSchema(BaseModel):
    """Daily health check-in"""

    user_id: str = Field(..., min_length=1)
    date: date
    mood: Literal["Happy", "Sad", "Anxious", "Neutral"]
    sleep_hours: float = Field(..., ge=0, le=24)
    meals: int = Field(..., ge=0)
    exercise_minutes: int = Field(..., ge=0)
    symptoms: str = ""

    def to_domain(self) -> HealthLog:
        return HealthLog(**self.model_dump())


class FinanceAnalysisRequest(BaseModel):
    """Request body for POST /v1/finance/analysis"""

    purchases: List[PurchaseSchema] = Field(default_factory=list)
    merchants: List[MerchantSchema] = Field(default_factory=list)
    accounts: List[AccountSchema] = Field(default_factory=list)
    income: float = Field(0, ge=0, description="Monthly income")
    granularity: Optional[Granularity] = None


class CategorizedPurchaseSchema(BaseModel):
    id: str
    merchant_id: str
    purchase_date: date
    amount: float
    description: str
    category: TransactionCategory
    merchant_name: Optional[str] = None

    @classmethod
    def from_domain(cls, purchase: CategorizedPurchase) -> "CategorizedPurchaseSchema":
        return cls(
            id=purchase.id,
            merchant_id=purchase.merchant_id,
            purchase_date=purchase.purchase_date,
            amount=purchase.amount,
            description=purchase.description,
            category=purchase.category,
            merchant_name=purchase.merchant_name,
        )


class SpendingAnomalySchema(CategorizedPurchaseSchema):
    severity: Literal["low", "medium", "high"]

    @classmethod
    def from_anomaly(cls, purchase: CategorizedPurchase, severity: str) -> "SpendingAnomalySchema":
        return cls(**CategorizedPurchaseSchema.from_domain(purchase).model_dump(), severity=severity)


class RecurringExpenseGroupSchema(BaseModel):
    merchant_id: str
    merchant_name: Optional[str] = None
    category: TransactionCategory
    amount: float
    occurrences: int
    last_date: date

    @classmethod
    def from_domain(cls, group: RecurringExpenseGroup) -> "RecurringExpenseGroupSchema":
        return cls(
            merchant_id=group.merchant_id,
            merchant_name=group.merchant_name,
            category=group.category,
            amount=group.amount,
            occurrences=group.occurrences,
            last_date=group.last_date,
        )


class RecurringSummarySchema(BaseModel):
    """Recurring charges with their monthly and yearly cost"""

    groups: List[RecurringExpenseGroupSchema]
    monthly_total: float
    yearly_total: float

    @classmethod
    def from_domain(cls, summary: RecurringExpenseSummary) -> "RecurringSummarySchema":
        return cls(
            groups=[RecurringExpenseGroupSchema.from_domain(g) for g in summary.groups],
            monthly_total=summary.monthly_total,
            yearly_total=summary.yearly_total,
        )


class SpendingByCategorySchema(BaseModel):
    category: TransactionCategory
    amount: float
    percentage: float

    @classmethod
    def from_domain(cls, item: SpendingByCategory) -> "SpendingByCategorySchema":
        return cls(category=item.category, amount=item.amount, percentage=item.percentage)


class SpendingTrendSchema(BaseModel):
    date: str
    amount: float

    @classmethod
    def from_domain(cls, item: SpendingTrend) -> "SpendingTrendSchema":
        return cls(date=item.date, amount=item.amount)


class TrendSummarySchema(BaseModel):
    direction: Literal["up", "down", "neutral"]
    change_amount: float
    change_percent: float

    @classmethod
    def from_domain(cls, item: SpendingTrendSummary) -> "TrendSummarySchema":
        return cls(direction=item.direction, change_amount=item.change_amount, change_percent=item.change_percent)


class ScoreBandSchema(BaseModel):
    label: str
    description: str
    recommendations: List[str]

    @classmethod
    def from_domain(cls, band: FinancialScoreBand) -> "ScoreBandSchema":
        return cls(label=band.label, description=band.description, recommendations=list(band.recommendations))


class FinanceAnalysisResponse(BaseModel):
    """Response for finance analysis endpoints"""

    financial_score: int
    score_band: ScoreBandSchema
    purchases: List[CategorizedPurchaseSchema]
    spending_by_category: List[SpendingByCategorySchema]
    spending_trends: List[SpendingTrendSchema]
    trend_summary: TrendSummarySchema
    anomalies: List[SpendingAnomalySchema]
    recurring_expenses: List[CategorizedPurchaseSchema]
    recurring_summary: RecurringSummarySchema


class HealthSummaryRequest(BaseModel):
    """Request body for POST /v1/health/summary"""

    logs: List[HealthLogSchema] = Field(default_factory=list)
    period: Granularity = "daily"


class HealthAnomalySchema(BaseModel):
    date: date
    anomaly: str
    severity: Literal["low", "medium", "high"]

    @classmethod
    def from_domain(cls, item: HealthAnomaly) -> "HealthAnomalySchema":
        return cls(date=item.date, anomaly=item.anomaly, severity=item.severity)


class HealthTrendSchema(BaseModel):
    date: str
    score: int

    @classmethod
    def from_domain(cls, item: HealthTrend) -> "HealthTrendSchema":
        return cls(date=item.date, score=item.score)


class HealthSummaryResponse(BaseModel):
    """Response for POST /v1/health/summary"""

    health_score: int
    mood_score: float
    average_sleep: float
    average_meals: float
    average_exercise: float
    anomalies: List[HealthAnomalySchema]
    trends: List[HealthTrendSchema]


class HealthMythSchema(BaseModel):
    myth: str
    fact: str


class InsightRequest(BaseModel):
    """Request body for POST /v1/insights"""

    health_logs: List[HealthLogSchema] = Field(default_factory=list)
    purchases: List[PurchaseSchema] = Field(default_factory=list)
    merchants: List[MerchantSchema] = Field(default_factory=list)


class InsightResponse(BaseModel):
    """Response for POST /v1/insights"""

    user_id: str
    week_of: datetime
    health_summary: str
    financial_summary: str
    recommendations: List[str]
    health_score: Optional[int] = None

    @classmethod
    def from_domain(cls, insight: UserInsight) -> "InsightResponse":
        return cls(
            user_id=insight.user_id,
            week_of=insight.week_of,
            health_summary=insight.health_summary,
            financial_summary=insight.financial_summary,
            recommendations=list(insight.recommendations),
            health_score=insight.health_score,
        )
