"""Environment variable property sources."""
import json
import logging
import os
from dataclasses import dataclass
from typing import Dict, Iterable, Mapping, Optional

from src.layered_config.document import Document, ensure_document
from src.layered_config.exceptions import ConfigParseError
from src.layered_config.utils.config.properties import to_nested


logger = logging.getLogger(__name__)

APPLICATION_JSON_ENV = "APPLICATION_JSON"


@dataclass(frozen=True)
class EnvPropertyMapping:
    """Maps one environment variable onto a dotted property path."""
    env_var: str
    property_path: str


def read_env_values(
    mappings: Iterable[EnvPropertyMapping],
    environ: Optional[Mapping[str, str]] = None,
) -> Dict[str, str]:
    """Collect the raw values of every mapped variable that is set.

    Returns:
        Flat mapping of property path to raw string value
    """
    env = os.environ if environ is None else environ
    values: Dict[str, str] = {}

    for mapping in mappings:
        value = env.get(mapping.env_var)
        if value is not None:
            values[mapping.property_path] = value
            logger.debug(
                f"Env property found: {mapping.env_var}",
                extra={"env_var": mapping.env_var, "property": mapping.property_path},
            )

    return values


def read_env_properties(
    mappings: Iterable[EnvPropertyMapping],
    environ: Optional[Mapping[str, str]] = None,
) -> Document:
    """Read mapped environment variables into a nested Document.

    Args:
        mappings: Variable to property path table
        environ: Environment to read (defaults to ``os.environ``)

    Returns:
        Nested Document holding only the variables that are set
    """
    return to_nested(read_env_values(mappings, environ))


def read_application_json(
    environ: Optional[Mapping[str, str]] = None,
    env_var: str = APPLICATION_JSON_ENV,
) -> Document:
    """Read the JSON blob override from the environment.

    Dotted keys inside the blob are expanded like file keys.

    Returns:
        Nested Document, empty when the variable is unset or blank

    Raises:
        ConfigParseError: If the value is not a JSON object
    """
    env = os.environ if environ is None else environ
    raw = env.get(env_var)
    if raw is None or not raw.strip():
        return {}

    try:
        parsed = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ConfigParseError(
            message=f"Invalid JSON in environment variable {env_var}: {e.msg}",
            config_file=f"env:{env_var}",
            line_number=e.lineno,
            column_number=e.colno,
            original_error=e,
        )

    document = to_nested(ensure_document(parsed, source=f"env:{env_var}"))
    logger.debug(
        f"Application JSON read from {env_var}",
        extra={"env_var": env_var, "keys": list(document.keys())},
    )
    return document
