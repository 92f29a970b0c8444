"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict
from pythonjsonlogger import jsonlogger

from lifedash_gateway.config import settings


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = settings.service_name


def setup_logging(level: str = "INFO") -> None:
    """Configure structured JSON logging"""
    logger = logging.getLogger()
    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers.clear()

    # JSON handler for stdout
    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_finance_analysis(
    request_id: str,
    purchase_count: int,
    financial_score: int,
    anomaly_count: int,
    duration_ms: float,
    customer_id: str | None = None,
) -> None:
    """Log structured finance analysis outcome"""
    logging.info(
        "Finance analysis completed",
        extra={
            "request_id": request_id,
            "customer_id": customer_id,
            "step": "finance_analysis_complete",
            "purchase_count": purchase_count,
            "financial_score": financial_score,
            "anomaly_count": anomaly_count,
            "duration_ms": duration_ms,
        },
    )


def log_insight_generated(
    request_id: str,
    user_id: str,
    health_log_count: int,
    transaction_count: int,
    recommendation_count: int,
    duration_ms: float,
) -> None:
    """Log structured insight generation outcome"""
    logging.info(
        "Insight generated",
        extra={
            "request_id": request_id,
            "user_id": user_id,
            "step": "insight_complete",
            "health_log_count": health_log_count,
            "transaction_count": transaction_count,
            "recommendation_count": recommendation_count,
            "duration_ms": duration_ms,
        },
    )
