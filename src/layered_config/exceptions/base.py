"""Base exception classes for the configuration loader."""
from typing import Any, Dict, Optional


class LayeredConfigError(Exception):
    """Base exception for all configuration loader errors.

    Every error raised out of ``load()`` inherits from this, so callers can
    catch one type and still inspect structured context.

    Args:
        message: Human-readable error message
        error_code: Machine-readable error code (e.g., "CONFIG_NOT_FOUND")
        details: Additional context as dictionary
        original: Original exception if wrapping another exception
    """

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        original: Optional[Exception] = None,
    ):
        self.message = message
        self.error_code = error_code or "UNKNOWN_ERROR"
        self.details = details or {}
        self.original = original
        super().__init__(message)

    def __str__(self) -> str:
        message = self.message
        if self.original is not None:
            message += f" (caused by: {type(self.original).__name__}: {self.original})"
        return message

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging.

        Returns:
            Dict with error details
        """
        return {
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
            "exception_type": self.__class__.__name__,
        }
