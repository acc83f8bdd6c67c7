"""Structured JSON logging utility."""

from src.layered_config.utils.logging.context import (  # noqa: F401
    ContextFilter,
    get_context,
    get_load_id,
    get_operation_name,
    load_context,
)
from src.layered_config.utils.logging.formatters import StructuredJSONFormatter, redact_sensitive  # noqa: F401
from src.layered_config.utils.logging.factory import (  # noqa: F401
    configure_logging,
    set_package_log_level,
)

__all__ = [
    # Context management
    "ContextFilter",
    "get_context",
    "get_load_id",
    "get_operation_name",
    "load_context",
    # Formatters
    "StructuredJSONFormatter",
    "redact_sensitive",
    # Configuration
    "configure_logging",
    "set_package_log_level",
]
