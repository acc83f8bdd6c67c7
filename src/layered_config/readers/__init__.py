"""Local configuration readers."""

from src.layered_config.readers.local import read_application_config  # noqa: F401

__all__ = ["read_application_config"]
