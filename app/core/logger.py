"""
Structured logging with correlation id propagation.
Emits one JSON document per line so log aggregators can index every field.
"""
import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, MutableMapping, Optional, Tuple

from app.core.config import settings


class CorrelationIdFilter(logging.Filter):
    """Guarantees every record carries a correlation_id attribute."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "correlation_id"):
            record.correlation_id = "-"
        return True


class JsonFormatter(logging.Formatter):
    """Serializes log records as single-line JSON."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "correlation_id": getattr(record, "correlation_id", "-"),
        }

        details = getattr(record, "details", None)
        if details is not None:
            payload["details"] = details

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        return json.dumps(payload, default=str, ensure_ascii=False)


class CorrelationAdapter(logging.LoggerAdapter):
    """Stamps the bound correlation id on every record emitted through it."""

    def process(self, msg: Any, kwargs: MutableMapping[str, Any]) -> Tuple[Any, MutableMapping[str, Any]]:
        extra = dict(kwargs.get("extra") or {})
        extra.setdefault("correlation_id", self.extra["correlation_id"])
        kwargs["extra"] = extra
        return msg, kwargs


def _build_logger(name: str) -> logging.Logger:
    built = logging.getLogger(name)
    built.setLevel(settings.LOG_LEVEL.upper())

    # Idempotent: uvicorn --reload re-imports modules in the same process
    if not built.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(JsonFormatter())
        handler.addFilter(CorrelationIdFilter())
        built.addHandler(handler)

    built.propagate = False
    return built


logger = _build_logger("sac_simulator")
audit_logger = _build_logger("sac_simulator.audit")


def get_logger_with_correlation(correlation_id: Optional[str]) -> CorrelationAdapter:
    """Returns a logger adapter bound to the given correlation id."""
    return CorrelationAdapter(logger, {"correlation_id": correlation_id or "-"})


def audit_log(action: str, user: str, resource: str, details: Optional[Dict[str, Any]] = None) -> None:
    """
    Records an audit trail entry.
    The correlation id, when present in details, is promoted to the record itself.
    """
    details = dict(details or {})
    audit_logger.info(
        f"AUDIT action={action} user={user} resource={resource}",
        extra={
            "correlation_id": details.pop("correlation_id", "-"),
            "details": {"action": action, "user": user, "resource": resource, **details},
        }
    )
