"""Structured JSON log formatters."""
import json
import logging
import traceback
from datetime import datetime, timezone
from typing import Any


# Attributes every LogRecord carries; anything else came in through ``extra``
_RESERVED_ATTRS = frozenset(
    vars(logging.LogRecord("", 0, "", 0, "", (), None)).keys()
) | {"message", "asctime", "extra_context"}

# Key fragments whose values are never written to logs
_SENSITIVE_PATTERNS = (
    "pass",
    "token",
    "secret",
    "authorization",
    "api_key",
)

REDACTED = "[REDACTED]"


def _serialize_value(value: Any) -> Any:
    """Safely serialize value to JSON-compatible type."""
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    elif isinstance(value, (list, dict)):
        return value
    elif hasattr(value, "isoformat"):
        return value.isoformat()
    else:
        return str(value)


def redact_sensitive(data: Any) -> Any:
    """Redact sensitive values from data.

    Args:
        data: Data to redact (can be dict, list, or primitive)

    Returns:
        Redacted copy with sensitive values replaced with [REDACTED]
    """
    if isinstance(data, dict):
        redacted = {}
        for key, value in data.items():
            key_lower = str(key).lower()
            if any(pattern in key_lower for pattern in _SENSITIVE_PATTERNS):
                redacted[key] = REDACTED
            elif isinstance(value, (dict, list)):
                redacted[key] = redact_sensitive(value)
            else:
                redacted[key] = value
        return redacted
    elif isinstance(data, list):
        return [redact_sensitive(item) for item in data]
    else:
        return data


class StructuredJSONFormatter(logging.Formatter):
    """JSON formatter for structured logging.

    Formats log records as one JSON object per line with:
    - timestamp (ISO 8601 UTC)
    - level, logger_name, message, service_name
    - load_id / operation_name (from log context, when set)
    - every ``extra`` field passed to the logging call (redacted)
    - exception and stack_trace (if applicable)
    """

    def __init__(self, service_name: str = "layered-config"):
        super().__init__()
        self.service_name = service_name

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "service_name": self.service_name,
            "logger_name": record.name,
            "message": record.getMessage(),
        }
        log_entry.update(getattr(record, "extra_context", {}))

        extra = {
            key: value
            for key, value in vars(record).items()
            if key not in _RESERVED_ATTRS and not key.startswith("_")
        }
        log_entry.update(redact_sensitive(extra))

        if record.exc_info:
            exc_type, exc_value, exc_tb = record.exc_info
            log_entry["exception"] = {
                "type": exc_type.__name__ if exc_type else None,
                "message": str(exc_value) if exc_value else None,
            }
            if exc_tb:
                log_entry["stack_trace"] = traceback.format_exception(exc_type, exc_value, exc_tb)

        serializable = {key: _serialize_value(value) for key, value in log_entry.items()}
        return json.dumps(serializable, default=str)
