"""Logger configuration helpers."""
import logging
import logging.handlers
import sys
from typing import Optional, Union

from src.layered_config.utils.logging.context import ContextFilter
from src.layered_config.utils.logging.formatters import StructuredJSONFormatter

_logger = logging.getLogger(__name__)

PACKAGE_LOGGER_NAME = "src.layered_config"


def _coerce_level(level: Union[int, str]) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.strip().upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level}")
    return resolved


def configure_logging(
    level: Union[int, str] = logging.INFO,
    service_name: str = "layered-config",
    log_file: Optional[str] = None,
    enable_console: bool = True,
) -> None:
    """Configure root logging with structured JSON output.

    Meant for applications and the CLI; the library itself never touches
    root handlers.

    Args:
        level: Global log level (name or number)
        service_name: Service name written on every record
        log_file: Path to a rotating log file (optional)
        enable_console: Enable console output (stderr)
    """
    numeric_level = _coerce_level(level)

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    root_logger.handlers.clear()

    formatter = StructuredJSONFormatter(service_name=service_name)
    context_filter = ContextFilter()
    handlers = []

    if enable_console:
        handlers.append(logging.StreamHandler(sys.stderr))

    if log_file:
        handlers.append(
            logging.handlers.RotatingFileHandler(
                filename=log_file,
                maxBytes=10 * 1024 * 1024,  # 10MB
                backupCount=5,
            )
        )

    for handler in handlers:
        handler.setLevel(numeric_level)
        handler.setFormatter(formatter)
        handler.addFilter(context_filter)
        root_logger.addHandler(handler)

    _logger.info(
        "Logging configured",
        extra={
            "service_name": service_name,
            "level": logging.getLevelName(numeric_level),
            "log_file": log_file,
            "handlers_count": len(handlers),
        },
    )


def set_package_log_level(level: Union[int, str]) -> None:
    """Set the level of this package's loggers only.

    Raises:
        ValueError: If ``level`` is not a known level name
    """
    logging.getLogger(PACKAGE_LOGGER_NAME).setLevel(_coerce_level(level))
