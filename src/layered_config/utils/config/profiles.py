"""Profile-based selection of configuration documents.

A document may carry a ``profiles`` directive, a comma-separated list of
profile names. A name prefixed with ``!`` excludes the document when that
profile is active. Documents without the directive apply to every profile.
"""
from typing import Any, List, Mapping, Optional, Sequence


PROFILES_KEY = "profiles"
NEGATION_PREFIX = "!"


def parse_profile_directive(directive: Any) -> List[str]:
    """Split a ``profiles`` directive into tokens.

    Accepts the comma-separated string form as well as a YAML list.
    Surrounding whitespace is stripped and empty tokens are dropped.
    """
    if directive is None:
        return []
    if isinstance(directive, (list, tuple)):
        raw_tokens = [str(token) for token in directive]
    else:
        raw_tokens = str(directive).split(",")
    return [token.strip() for token in raw_tokens if token.strip()]


def should_include(
    document: Optional[Mapping[str, Any]],
    active_profiles: Optional[Sequence[str]],
) -> bool:
    """Decide whether a document applies to the active profiles.

    Exclusions short-circuit: a negated token naming an active profile
    rejects the document immediately, even if an earlier token matched.
    Inclusions accumulate and only decide the result once every token has
    been scanned. A directive listing only exclusions (``!dev``) includes
    the document unless one of them is active.

    Args:
        document: Parsed document (None is never included)
        active_profiles: Active profile names

    Returns:
        True if the document should be merged
    """
    if document is None:
        return False

    directive = document.get(PROFILES_KEY)
    if directive is None or directive == "":
        return True

    active = set(active_profiles or ())
    tokens = parse_profile_directive(directive)
    # A directive made only of exclusions applies wherever none of them match
    include = all(token.startswith(NEGATION_PREFIX) for token in tokens)

    for token in tokens:
        if token.startswith(NEGATION_PREFIX):
            if token[len(NEGATION_PREFIX):] in active:
                return False
        elif token in active:
            include = True

    return include


def strip_profile_directive(document: Mapping[str, Any]) -> dict:
    """Return a copy of the document without its ``profiles`` directive."""
    return {key: value for key, value in document.items() if key != PROFILES_KEY}
