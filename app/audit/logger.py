"""
Structured event logging for payment operations.

Every orchestration stage emits one line in a grep-friendly form:

    event=payment.processed status=Authorized amount=100 currency=GBP last_four=8877

Each line also carries the correlation ID of the HTTP request that caused
it, injected by CorrelationIdFilter. Card numbers and CVVs are never
passed in here; only the last four digits are.
"""

import logging
import uuid
from contextvars import ContextVar
from typing import Any, Optional

logger = logging.getLogger("payment_gateway.events")

correlation_id_ctx: ContextVar[str] = ContextVar("correlation_id", default="-")


def set_correlation_id(correlation_id: Optional[str] = None) -> str:
    """Set the correlation ID for the current context, generating one if absent."""
    value = correlation_id or str(uuid.uuid4())
    correlation_id_ctx.set(value)
    return value


def get_correlation_id() -> str:
    return correlation_id_ctx.get()


class CorrelationIdFilter(logging.Filter):
    """Inject the current correlation ID into every log record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = correlation_id_ctx.get()
        return True


def format_event(action: str, details: dict[str, Any]) -> str:
    parts = [f"event={action}"]
    parts.extend(f"{key}={value}" for key, value in details.items())
    return " ".join(parts)


def log_event(action: str, level: int = logging.INFO, **details: Any) -> str:
    """
    Emit a structured event line.

    Args:
        action: Event name (e.g. "payment.received", "payment.bank_responded").
        level: Logging level for the line.
        **details: Key/value context appended in order.

    Returns:
        The formatted line.
    """
    line = format_event(action, details)
    logger.log(level, line)
    return line
