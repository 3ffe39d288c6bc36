"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict
from pythonjsonlogger import jsonlogger

from lending_engine.config import settings


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

    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_assessment(
    request_id: str,
    score: int,
    category: str,
    initial: bool,
    duration_ms: float,
) -> None:
    """Log structured credit assessment outcome for analysis"""
    logging.info(
        "Credit assessment completed",
        extra={
            "request_id": request_id,
            "step": "assessment_complete",
            "score": score,
            "category": category,
            "scoring_path": "initial" if initial else "history",
            "duration_ms": duration_ms,
        },
    )


def log_schedule(
    request_id: str,
    loan_id: str | None,
    frequency: str,
    installment_count: int,
    total_due: float,
) -> None:
    """Log structured schedule generation outcome"""
    logging.info(
        "Repayment schedule generated",
        extra={
            "request_id": request_id,
            "step": "schedule_generated",
            "loan_id": loan_id,
            "frequency": frequency,
            "installment_count": installment_count,
            "total_due": total_due,
        },
    )
