"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional
from pythonjsonlogger import jsonlogger
from budget_forecaster.config import settings


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


def log_analysis(
    request_id: str,
    strategy: str,
    prediction: Optional[float],
    recommendation_count: int,
    month_count: int,
    duration_ms: float,
) -> None:
    """Log structured forecast/recommendation outcome"""
    logging.info(
        "Analysis completed",
        extra={
            "request_id": request_id,
            "step": "analysis_complete",
            "strategy": strategy,
            "forecast_outcome": "unavailable" if prediction is None else "predicted",
            "prediction": prediction,
            "recommendation_count": recommendation_count,
            "month_count": month_count,
            "duration_ms": duration_ms,
        },
    )


def log_backtest(
    request_id: str,
    total_predictions: int,
    average_accuracy: float,
    duration_ms: float,
) -> None:
    """Log structured backtest outcome"""
    logging.info(
        "Backtest completed",
        extra={
            "request_id": request_id,
            "step": "backtest_complete",
            "total_predictions": total_predictions,
            "average_accuracy": average_accuracy,
            "duration_ms": duration_ms,
        },
    )
