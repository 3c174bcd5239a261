"""Structured JSON logging"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional
from pythonjsonlogger import jsonlogger
from forex_compliance.config import settings

logger = logging.getLogger("forex_compliance")


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = settings.service_name


def setup_logging(level: str = "INFO") -> None:
    """Configure structured JSON logging"""
    root = logging.getLogger()
    root.setLevel(level)

    root.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s"
    )
    handler.setFormatter(formatter)
    root.addHandler(handler)


def log_tds_calculation(
    request_id: str,
    user_id: str,
    purpose: str,
    direction: str,
    applicable: bool,
    amount_due: Any,
) -> None:
    logger.info(
        "TDS calculated",
        extra={
            "request_id": request_id,
            "user_id": user_id,
            "step": "tds_calculated",
            "purpose": purpose,
            "direction": direction,
            "tds_applicable": applicable,
            "tds_amount_due": str(amount_due),
        },
    )


def log_limit_check(
    request_id: str,
    user_id: str,
    amount_usd: Any,
    allowed: bool,
    usage_percentage: Any,
) -> None:
    logger.info(
        "LRS limit checked",
        extra={
            "request_id": request_id,
            "user_id": user_id,
            "step": "lrs_checked",
            "amount_usd": str(amount_usd),
            "allowed": allowed,
            "usage_percentage": str(usage_percentage),
        },
    )


def log_usage_recorded(request_id: str, user_id: str, service_type: str, entry_id: Optional[str]) -> None:
    logger.info(
        "LRS usage recorded",
        extra={
            "request_id": request_id,
            "user_id": user_id,
            "step": "lrs_recorded",
            "service_type": service_type,
            "entry_id": entry_id,
        },
    )


def log_unmapped_status(request_id: str, raw_status: str, service_type: Optional[str]) -> None:
    """Unknown raw statuses fall back to 'created'; surface them so the map gets updated"""
    logger.warning(
        "Unmapped order status",
        extra={
            "request_id": request_id,
            "step": "status_normalized",
            "raw_status": raw_status,
            "service_type": service_type or "unknown",
        },
    )
