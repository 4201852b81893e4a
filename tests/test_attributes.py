from __future__ import annotations

import pytest

from operationdocs.attributes import (
    normalise_attributes,
    parse_attribute_list,
    split_front_matter,
    substitute_attributes,
)
from operationdocs.exceptions import MacroSyntaxError


def test_single_quoted_value_may_contain_commas() -> None:
    assert parse_attribute_list("snippets='curl-request,http-request'") == {
        "snippets": "curl-request,http-request"
    }


def test_multiple_attributes_with_mixed_quoting() -> None:
    assert parse_attribute_list('snippets="links", level=3') == {
        "snippets": "links",
        "level": "3",
    }


def test_empty_value_is_kept() -> None:
    assert parse_attribute_list("snippets=") == {"snippets": ""}


def test_empty_list_yields_no_attributes() -> None:
    assert parse_attribute_list("") == {}
    assert parse_attribute_list("   ") == {}
    assert parse_attribute_list(None) == {}


def test_positional_attributes_are_skipped() -> None:
    positional: list[str] = []

    attributes = parse_attribute_list("curl-request, snippets=links, 'extra'", positional)

    assert attributes == {"snippets": "links"}
    assert positional == ["curl-request", "extra"]


def test_entry_without_name_is_rejected() -> None:
    with pytest.raises(MacroSyntaxError, match="Malformed attribute list"):
        parse_attribute_list("=links")


def test_attribute_references_are_substituted() -> None:
    assert substitute_attributes("{name}-operation", {"name": "some"}) == "some-operation"


def test_unknown_attribute_references_are_kept() -> None:
    assert substitute_attributes("{missing}-operation", {}) == "{missing}-operation"


def test_front_matter_is_split_from_lines() -> None:
    lines = ["---", "snippets: build/snippets", "operation-links-title: Relations", "---", "# Doc"]

    metadata, body = split_front_matter(lines)

    assert metadata == {"snippets": "build/snippets", "operation-links-title": "Relations"}
    assert body == ["# Doc"]


def test_unterminated_front_matter_is_left_alone() -> None:
    lines = ["---", "title: Missing end", "# Doc"]
    assert split_front_matter(lines) == ({}, lines)


def test_invalid_yaml_front_matter_is_left_alone() -> None:
    lines = ["---", "key: [unclosed", "---", "text"]
    assert split_front_matter(lines) == ({}, lines)


def test_normalise_attributes_flattens_scalars() -> None:
    assert normalise_attributes({"level": 3, "draft": True, "nested": {"a": 1}, "none": None}) == {
        "level": "3",
        "draft": "true",
    }
