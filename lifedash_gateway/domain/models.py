"""Domain models - pure Python dataclasses representing finance and health records"""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, List, Optional


class TransactionCategory(str, Enum):
    """Spending category assigned to every purchase (declaration order is match priority)"""

    FOOD = "Food & Dining"
    SHOPPING = "Shopping"
    ENTERTAINMENT = "Entertainment"
    TRAVEL = "Travel"
    TRANSPORTATION = "Transportation"
    UTILITIES = "Utilities"
    HEALTH = "Health & Medical"
    EDUCATION = "Education"
    PERSONAL = "Personal Care"
    HOME = "Home"
    INCOME = "Income"
    OTHER = "Other"


@dataclass(frozen=True)
class Purchase:
    """Purchase from the banking sandbox"""

    id: str
    merchant_id: str
    payer_id: str
    purchase_date: date
    amount: float
    status: str = ""
    medium: str = ""
    description: str = ""
    type: str = "merchant"


@dataclass(frozen=True)
class CategorizedPurchase(Purchase):
    """Purchase enriched with its spending category"""

    category: TransactionCategory = TransactionCategory.OTHER
    merchant_name: Optional[str] = None


@dataclass(frozen=True)
class Merchant:
    """Merchant reference data; category is free text and may be missing"""

    id: str
    name: Optional[str] = None
    category: Any = None
    address: Optional[Dict[str, Any]] = None
    geocode: Optional[Dict[str, float]] = None


@dataclass(frozen=True)
class Account:
    """Bank account snapshot"""

    id: str
    type: str
    balance: float
    nickname: str = ""
    rewards: int = 0
    customer_id: str = ""


@dataclass(frozen=True)
class SpendingByCategory:
    category: TransactionCategory
    amount: float
    percentage: float


@dataclass(frozen=True)
class SpendingTrend:
    date: str  # bucket key
    amount: float


@dataclass(frozen=True)
class SpendingTrendSummary:
    """Change between the first and last trend buckets"""

    direction: str  # "up" | "down" | "neutral"
    change_amount: float
    change_percent: float


@dataclass(frozen=True)
class RecurringExpenseGroup:
    """One repeated charge: same merchant, same amount"""

    merchant_id: str
    merchant_name: Optional[str]
    category: TransactionCategory
    amount: float
    occurrences: int
    last_date: date


@dataclass(frozen=True)
class RecurringExpenseSummary:
    """Recurring charges rolled up into monthly and yearly cost"""

    groups: List[RecurringExpenseGroup]
    monthly_total: float
    yearly_total: float


@dataclass(frozen=True)
class FinancialScoreBand:
    """Qualitative reading of a financial health score"""

    label: str
    description: str
    recommendations: List[str]


@dataclass(frozen=True)
class HealthLog:
    """Daily health check-in"""

    user_id: str
    date: date
    mood: str  # "Happy" | "Sad" | "Anxious" | "Neutral"
    sleep_hours: float
    meals: int
    exercise_minutes: int
    symptoms: str = ""


@dataclass(frozen=True)
class HealthAnomaly:
    date: date
    anomaly: str
    severity: str  # "low" | "medium" | "high"


@dataclass(frozen=True)
class HealthTrend:
    date: str  # bucket key
    score: int


@dataclass(frozen=True)
class UserInsight:
    """Narrative health and finance summary for a user"""

    user_id: str
    week_of: datetime
    health_summary: str
    financial_summary: str
    recommendations: List[str] = field(default_factory=list)
    health_score: Optional[int] = None  # None when there were no health logs


@dataclass(frozen=True)
class HealthMyth:
    myth: str
    fact: str
