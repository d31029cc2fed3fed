"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from pythonjsonlogger import jsonlogger

from finpulse.config import settings


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


def log_dashboard_load(
    request_id: str,
    transaction_count: int,
    cash_flow_count: int,
    duration_ms: float,
) -> None:
    """Log structured dashboard load outcome"""
    logging.info(
        "Dashboard loaded",
        extra={
            "request_id": request_id,
            "step": "dashboard_load",
            "transaction_count": transaction_count,
            "cash_flow_count": cash_flow_count,
            "duration_ms": duration_ms,
        },
    )


def log_analysis(
    request_id: str,
    mode: str,
    row_count: int,
    duration_ms: float,
    source_file: Optional[str] = None,
) -> None:
    """Log structured analysis outcome (local or api)"""
    logging.info(
        "Analysis completed",
        extra={
            "request_id": request_id,
            "step": "analysis_complete",
            "mode": mode,
            "row_count": row_count,
            "source_file": source_file,
            "duration_ms": duration_ms,
        },
    )
