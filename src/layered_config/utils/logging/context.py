"""Log context management using contextvars for async-safe metadata."""
import contextvars
import logging
import uuid
from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional


_load_id_var: contextvars.ContextVar[Optional[str]] = contextvars.ContextVar(
    "load_id", default=None
)
_operation_name_var: contextvars.ContextVar[Optional[str]] = contextvars.ContextVar(
    "operation_name", default=None
)


def get_load_id() -> Optional[str]:
    """Get the id of the load currently running in this context."""
    return _load_id_var.get(None)


def get_operation_name() -> Optional[str]:
    """Get current operation name from context."""
    return _operation_name_var.get(None)


def get_context() -> Dict[str, Any]:
    """Get all context values as a dictionary."""
    return {
        "load_id": get_load_id(),
        "operation_name": get_operation_name(),
    }


@contextmanager
def load_context(
    load_id: Optional[str] = None,
    operation_name: str = "config_load",
) -> Iterator[str]:
    """Stamp every record logged inside the block with a load id.

    Example:
        with load_context() as load_id:
            logger.info("Reading application config")
    """
    new_id = load_id or uuid.uuid4().hex
    id_token = _load_id_var.set(new_id)
    operation_token = _operation_name_var.set(operation_name)
    try:
        yield new_id
    finally:
        _operation_name_var.reset(operation_token)
        _load_id_var.reset(id_token)


class ContextFilter(logging.Filter):
    """Copies the current log context onto each record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.extra_context = {
            key: value for key, value in get_context().items() if value is not None
        }
        return True
