"""Dot-path normalization between flat property keys and nested documents."""
from typing import Any, Dict, Mapping

from src.layered_config.document import Document
from src.layered_config.utils.config.merger import ConfigMerger


PATH_SEPARATOR = "."


def _object_for_path(segments: list, value: Any) -> Any:
    """Build ``{'a': {'b': value}}`` from ``['a', 'b']``."""
    nested = value
    for segment in reversed(segments):
        nested = {segment: nested}
    return nested


def to_nested(flat: Mapping[str, Any]) -> Document:
    """Expand dot-separated keys into nested documents.

    ``{'spring.profiles.active': 'dev'}`` becomes
    ``{'spring': {'profiles': {'active': 'dev'}}}``. Keys without a dot stay
    at the top level. Expanded fragments are deep-merged together, so
    ``{'a.b': 1, 'a': {'c': 2}}`` yields ``{'a': {'b': 1, 'c': 2}}``.

    A key used both as a scalar and as a prefix (``a`` and ``a.b``) is a
    caller error; the later key in iteration order wins.

    Args:
        flat: Mapping of (possibly dotted) keys to values

    Returns:
        New nested Document
    """
    merger = ConfigMerger()
    result: Dict[str, Any] = {}
    if not flat:
        return result

    for key, value in flat.items():
        segments = key.split(PATH_SEPARATOR)
        result = merger.merge(result, _object_for_path(segments, value))

    return result


def flatten(document: Mapping[str, Any], prefix: str = "") -> Dict[str, Any]:
    """Collapse a nested document into dot-separated keys.

    Inverse of :func:`to_nested` for documents whose own keys contain no
    dots. Lists and scalars are leaves. An empty nested mapping is kept as
    a leaf so the round trip does not drop it.

    Args:
        document: Nested Document
        prefix: Key prefix used for recursion

    Returns:
        Flat mapping of dotted keys to leaf values
    """
    flat: Dict[str, Any] = {}

    for key, value in document.items():
        path = f"{prefix}{PATH_SEPARATOR}{key}" if prefix else key
        if isinstance(value, Mapping) and value:
            flat.update(flatten(value, path))
        else:
            flat[path] = value

    return flat
