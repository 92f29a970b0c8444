"""Pytest fixtures for testing"""

import pytest
from datetime import date, timedelta
from fastapi.testclient import TestClient
from lifedash_gateway.api.main import create_app
from lifedash_gateway.domain.models import Account, CategorizedPurchase, HealthLog, Merchant, Purchase, TransactionCategory


@pytest.fixture
def client() -> TestClient:
    """Create FastAPI test client"""
    return TestClient(create_app())


@pytest.fixture
def make_purchase():
    """Factory for purchases with sensible defaults"""

    def _make(
        amount: float,
        purchase_date: date | None = None,
        merchant_id: str = "m1",
        description: str = "",
        purchase_id: str | None = None,
    ) -> Purchase:
        purchase_date = purchase_date or date.today()
        return Purchase(
            id=purchase_id or f"p_{merchant_id}_{purchase_date.isoformat()}_{amount}",
            merchant_id=merchant_id,
            payer_id="acct_1",
            purchase_date=purchase_date,
            amount=amount,
            status="executed",
            medium="balance",
            description=description,
        )

    return _make


@pytest.fixture
def make_categorized():
    """Factory for categorized purchases"""

    def _make(
        amount: float,
        category: TransactionCategory = TransactionCategory.FOOD,
        purchase_date: date | None = None,
        merchant_id: str = "m1",
        description: str = "",
        purchase_id: str | None = None,
    ) -> CategorizedPurchase:
        purchase_date = purchase_date or date.today()
        return CategorizedPurchase(
            id=purchase_id or f"p_{merchant_id}_{purchase_date.isoformat()}_{amount}",
            merchant_id=merchant_id,
            payer_id="acct_1",
            purchase_date=purchase_date,
            amount=amount,
            description=description,
            category=category,
        )

    return _make


@pytest.fixture
def make_log():
    """Factory for health logs"""

    def _make(
        day: date,
        mood: str = "Happy",
        sleep_hours: float = 8,
        meals: int = 3,
        exercise_minutes: int = 30,
        symptoms: str = "",
        user_id: str = "user_1",
    ) -> HealthLog:
        return HealthLog(
            user_id=user_id,
            date=day,
            mood=mood,
            sleep_hours=sleep_hours,
            meals=meals,
            exercise_minutes=exercise_minutes,
            symptoms=symptoms,
        )

    return _make


@pytest.fixture
def sample_merchants() -> list[Merchant]:
    return [
        Merchant(id="m_coffee", name="Starbucks", category="Coffee Shop"),
        Merchant(id="m_gym", name="Planet Fitness", category="Health & Fitness"),
        Merchant(id="m_stream", name="Netflix", category=None),
    ]


@pytest.fixture
def sample_accounts() -> list[Account]:
    return [
        Account(id="acct_1", type="Checking", balance=3000.0),
        Account(id="acct_2", type="Savings", balance=2000.0),
    ]


@pytest.fixture
def week_of_logs(make_log) -> list[HealthLog]:
    """Seven consecutive ideal check-ins ending today"""
    today = date.today()
    return [make_log(today - timedelta(days=offset)) for offset in range(7)]
