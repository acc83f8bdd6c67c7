"""Document value type shared by every configuration source.

A Document is a plain ``dict`` whose keys are strings and whose values are
restricted to the JSON-like variants:

    None | bool | int | float | str | list[Value] | dict[str, Value]

Sources that can produce richer values (PyYAML turns ``2024-01-01`` into a
``date``, and integer keys stay integers) are normalized once at the parse
boundary by :func:`ensure_document`, so merge and flatten only ever see the
variants above.
"""
from datetime import date, datetime, time
from typing import Any, Dict, Optional

from src.layered_config.exceptions import ConfigParseError


Document = Dict[str, Any]

_SCALAR_TYPES = (type(None), bool, int, float, str)


def _normalize_key(key: Any, path: str, source: Optional[str]) -> str:
    if isinstance(key, str):
        return key
    # YAML spelling for booleans and null keys
    if isinstance(key, bool):
        return "true" if key else "false"
    if key is None:
        return "null"
    if isinstance(key, (int, float)):
        return str(key)
    raise ConfigParseError(
        message=f"Unsupported key type {type(key).__name__} at '{path or '<root>'}'",
        config_file=source,
    )


def _normalize_value(value: Any, path: str, source: Optional[str]) -> Any:
    if isinstance(value, _SCALAR_TYPES):
        return value
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, dict):
        normalized = {}
        for key, child in value.items():
            name = _normalize_key(key, path, source)
            child_path = f"{path}.{name}" if path else name
            normalized[name] = _normalize_value(child, child_path, source)
        return normalized
    if isinstance(value, (list, tuple)):
        return [
            _normalize_value(item, f"{path}[{index}]", source)
            for index, item in enumerate(value)
        ]
    raise ConfigParseError(
        message=f"Unsupported value type {type(value).__name__} at '{path or '<root>'}'",
        config_file=source,
    )


def ensure_document(value: Any, source: Optional[str] = None) -> Document:
    """Validate and normalize a parsed value into a Document.

    Args:
        value: Parsed mapping (from YAML, JSON or a remote response)
        source: File path or source label used in error messages

    Returns:
        New Document built from ``value``

    Raises:
        ConfigParseError: If the root is not a mapping or a value has an
            unsupported type
    """
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigParseError(
            message=f"Configuration must contain a mapping, got {type(value).__name__}",
            config_file=source,
        )
    return _normalize_value(value, "", source)
