"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, List
from pythonjsonlogger import jsonlogger

SERVICE_NAME = "debt-gateway"


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def __init__(self, *args: Any, service_name: str = SERVICE_NAME, **kwargs: Any) -> None:
        self.service_name = service_name
        super().__init__(*args, **kwargs)

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = self.service_name


def setup_logging(level: str = "INFO", service_name: str = SERVICE_NAME) -> None:
    """Configure structured JSON logging"""
    logger = logging.getLogger()
    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers.clear()

    # JSON handler for stdout
    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s",
        service_name=service_name,
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_listing(
    request_id: str,
    listing: str,
    filter_mode: str,
    page: int,
    page_size: int,
    row_count: int,
    total: int,
    duration_ms: float,
) -> None:
    """Log structured listing outcome"""
    logging.info(
        "Listing served",
        extra={
            "request_id": request_id,
            "step": "listing_complete",
            "listing": listing,
            "filter_mode": filter_mode,
            "page": page,
            "page_size": page_size,
            "row_count": row_count,
            "total": total,
            "duration_ms": duration_ms,
        },
    )


def log_transition(
    request_id: str,
    to_stage: str,
    requested_count: int,
    moved_ids: List[Any],
    duration_ms: float,
) -> None:
    """Log which accounts a batch stage move actually touched"""
    logging.info(
        "Stage transition completed",
        extra={
            "request_id": request_id,
            "step": "transition_complete",
            "to_stage": to_stage,
            "requested_count": requested_count,
            "moved_count": len(moved_ids),
            "moved_ids": moved_ids,
            "duration_ms": duration_ms,
        },
    )


def log_request(request_id: str, method: str, endpoint: str, status: int, duration_ms: float) -> None:
    """Access log line, one per HTTP request"""
    logging.info(
        "Request handled",
        extra={
            "request_id": request_id,
            "step": "request_complete",
            "method": method,
            "endpoint": endpoint,
            "status": status,
            "duration_ms": duration_ms,
        },
    )
