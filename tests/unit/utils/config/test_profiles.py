"""Unit tests for profile-based document selection."""
import pytest

from src.layered_config.utils.config.profiles import (
    parse_profile_directive,
    should_include,
    strip_profile_directive,
)


def test_document_without_directive_is_always_included():
    """No directive should apply to every profile set."""
    assert should_include({"a": 1}, ["dev"])
    assert should_include({"a": 1}, [])
    assert should_include({"a": 1, "profiles": ""}, None)


def test_none_document_is_excluded():
    """A missing document should never be merged."""
    assert not should_include(None, ["dev"])


def test_positive_profile_matches_active_profile():
    """A named profile should only apply while active."""
    document = {"profiles": "dev"}

    assert should_include(document, ["dev"])
    assert not should_include(document, ["prod"])
    assert not should_include(document, [])


def test_negated_profile():
    """A negated profile should exclude while active and include otherwise."""
    document = {"profiles": "!dev"}

    assert not should_include(document, ["dev"])
    assert should_include(document, [])
    assert should_include(document, ["prod"])


def test_exclusion_vetoes_earlier_inclusion():
    """An active exclusion should win even after an inclusion matched."""
    document = {"profiles": "dev, !cloud"}

    assert should_include(document, ["dev"])
    assert not should_include(document, ["dev", "cloud"])


def test_inclusion_accumulates_across_tokens():
    """Any one matching inclusion should be enough."""
    document = {"profiles": "prod,dev"}

    assert should_include(document, ["dev"])
    assert not should_include(document, ["test"])


def test_mixed_directive_needs_an_inclusion():
    """With positive tokens present, absence of exclusions is not enough."""
    assert not should_include({"profiles": "dev,!cloud"}, ["test"])


@pytest.mark.parametrize(
    "directive,expected",
    [
        ("dev", ["dev"]),
        (" dev , prod ,, ", ["dev", "prod"]),
        (["dev", " !prod "], ["dev", "!prod"]),
        (None, []),
    ],
)
def test_parse_profile_directive(directive, expected):
    """Tokens should be stripped with blanks dropped."""
    assert parse_profile_directive(directive) == expected


def test_strip_profile_directive_removes_only_directive():
    """The directive should not leak into merged config."""
    document = {"profiles": "dev", "a": 1}

    assert strip_profile_directive(document) == {"a": 1}
    assert document == {"profiles": "dev", "a": 1}
