"""Configuration source utilities."""

from src.layered_config.utils.config.merger import ConfigMerger, deep_merge, merge_documents  # noqa: F401
from src.layered_config.utils.config.properties import flatten, to_nested  # noqa: F401
from src.layered_config.utils.config.profiles import (  # noqa: F401
    parse_profile_directive,
    should_include,
    strip_profile_directive,
)
from src.layered_config.utils.config.yaml_loader import YAMLLoader  # noqa: F401
from src.layered_config.utils.config.locator import ConfigLocator  # noqa: F401
from src.layered_config.utils.config.env import (  # noqa: F401
    EnvPropertyMapping,
    read_application_json,
    read_env_properties,
    read_env_values,
)

__all__ = [
    # Config merging
    "ConfigMerger",
    "deep_merge",
    "merge_documents",
    # Dot-path normalization
    "flatten",
    "to_nested",
    # Profile selection
    "parse_profile_directive",
    "should_include",
    "strip_profile_directive",
    # YAML loading
    "YAMLLoader",
    # Config discovery
    "ConfigLocator",
    # Environment sources
    "EnvPropertyMapping",
    "read_application_json",
    "read_env_properties",
    "read_env_values",
]
