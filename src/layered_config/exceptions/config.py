"""Configuration-related exceptions."""
from typing import Dict, List, Optional

from src.layered_config.exceptions.base import LayeredConfigError


class ConfigError(LayeredConfigError):
    """Base exception for configuration errors.

    Args:
        message: Human-readable error message
        config_file: Path to config file
        details: Additional error context
    """

    def __init__(
        self,
        message: str,
        config_file: Optional[str] = None,
        details: Optional[dict] = None,
        error_code: str = "CONFIG_ERROR",
        original: Optional[Exception] = None,
    ):
        self.config_file = config_file
        super().__init__(message, error_code, details, original)

    def __str__(self) -> str:
        parts = [super().__str__()]
        if self.config_file:
            parts.append(f"Config: {self.config_file}")
        return " | ".join(parts)


class ConfigNotFoundError(ConfigError):
    """Required configuration file not found."""

    def __init__(
        self,
        message: str = "Configuration file not found",
        config_file: Optional[str] = None,
        searched_paths: Optional[List[str]] = None,
    ):
        details = {}
        if searched_paths is not None:
            details["searched_paths"] = searched_paths
        super().__init__(message, config_file, details, "CONFIG_NOT_FOUND")


class BootstrapNotFoundError(ConfigNotFoundError):
    """Explicitly named remote bootstrap file does not exist."""

    def __init__(
        self,
        config_file: str,
        env_var: Optional[str] = None,
    ):
        message = "Remote bootstrap file not found"
        if env_var:
            message += f" (set by {env_var})"
        super().__init__(message, config_file, [config_file])
        self.error_code = "BOOTSTRAP_NOT_FOUND"
        if env_var:
            self.details["env_var"] = env_var


class ConfigParseError(ConfigError):
    """Failed to parse configuration source."""

    def __init__(
        self,
        message: str = "Failed to parse config file",
        config_file: Optional[str] = None,
        line_number: Optional[int] = None,
        column_number: Optional[int] = None,
        original_error: Optional[Exception] = None,
    ):
        details = {}
        if line_number is not None:
            details["line"] = line_number
        if column_number is not None:
            details["column"] = column_number
        super().__init__(message, config_file, details, "CONFIG_PARSE_ERROR", original_error)
        self.original_error = original_error


class ConfigValidationError(ConfigError):
    """Configuration failed validation.

    ``field_errors`` maps a dotted field path to the violated constraint.
    """

    def __init__(
        self,
        message: str = "Configuration validation failed",
        config_file: Optional[str] = None,
        field_errors: Optional[Dict[str, str]] = None,
        original_error: Optional[Exception] = None,
    ):
        self.field_errors = field_errors or {}
        details = {}
        if field_errors is not None:
            details["field_errors"] = field_errors
        super().__init__(message, config_file, details, "CONFIG_VALIDATION_ERROR", original_error)
        self.original_error = original_error

    def __str__(self) -> str:
        text = super().__str__()
        if self.field_errors:
            first_field, first_error = next(iter(self.field_errors.items()))
            text += f" | {first_field}: {first_error}"
        return text


class ConfigNotLoadedError(ConfigError):
    """Configuration accessed before a successful load."""

    def __init__(
        self,
        message: str = "Configuration hasn't been loaded yet. Call 'load' first.",
    ):
        super().__init__(message, None, None, "CONFIG_NOT_LOADED")
