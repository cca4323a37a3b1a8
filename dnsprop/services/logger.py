"""Structured JSON logging."""

import logging
import sys
import uuid
from datetime import datetime, timezone
from typing import Any, Dict

from pythonjsonlogger import jsonlogger


# Process-wide run ID for correlation across log entries
RUN_ID = str(uuid.uuid4())


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """JSON formatter that adds run_id and standardized fields."""

    def add_fields(
        self,
        log_record: Dict[str, Any],
        record: logging.LogRecord,
        message_dict: Dict[str, Any],
    ) -> None:
        """Add custom fields to log record.

        Args:
            log_record: The log record to modify.
            record: The original logging.LogRecord.
            message_dict: Additional fields from the logging call.
        """
        super().add_fields(log_record, record, message_dict)

        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["run_id"] = RUN_ID
        log_record["level"] = record.levelname
        log_record["logger"] = record.name


def setup_logging(verbose: bool = False) -> logging.Logger:
    """Configure structured JSON logging for the application.

    Args:
        verbose: Log at DEBUG instead of INFO.

    Returns:
        logging.Logger: Configured root logger.
    """
    logger = logging.getLogger()
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)

    # Remove existing handlers to avoid duplicates
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    # stdout carries command output
    json_handler = logging.StreamHandler(sys.stderr)
    json_handler.setFormatter(CustomJsonFormatter("%(message)s"))
    logger.addHandler(json_handler)

    return logger


def log_query_result(
    query_name: str,
    record_type: str,
    total_servers: int,
    successful_servers: int,
    class_count: int,
    propagation_percentage: int,
    all_agree: bool,
    duration_ms: int,
) -> None:
    """Log one analysed query.

    Args:
        query_name: Queried domain name.
        record_type: Queried record type.
        total_servers: Number of resolvers in the batch.
        successful_servers: Resolvers with an OK status and answers.
        class_count: Number of distinct answer sets.
        propagation_percentage: Share of the largest class.
        all_agree: Whether every resolver succeeded and agreed.
        duration_ms: Time from submission to analysis.
    """
    logger = logging.getLogger(__name__)
    logger.info(
        "Query analysed",
        extra={
            "query_name": query_name,
            "record_type": record_type,
            "total_servers": total_servers,
            "successful_servers": successful_servers,
            "class_count": class_count,
            "propagation_percentage": propagation_percentage,
            "all_agree": all_agree,
            "duration_ms": duration_ms,
        },
    )


def log_resolver_failure(server: str, status: str, detail: str) -> None:
    """Log a resolver that did not return a usable answer."""
    logger = logging.getLogger(__name__)
    logger.debug(
        "Resolver query failed",
        extra={"server": server, "status": status, "detail": detail},
    )


def log_stale_response(sequence: int, latest_sequence: int) -> None:
    """Log a response discarded because a newer query was submitted.

    Args:
        sequence: Submission number the response belongs to.
        latest_sequence: Submission number currently displayed.
    """
    logger = logging.getLogger(__name__)
    logger.warning(
        "Discarded stale resolver response",
        extra={"sequence": sequence, "latest_sequence": latest_sequence},
    )
