from __future__ import annotations

import logging
from pathlib import Path

from bs4 import BeautifulSoup
import markdown
from pydantic import ValidationError
import pytest

from operationdocs.diagnostics import CollectingEmitter
from operationdocs.extension import OperationExtension, makeExtension


def _convert(
    source: str,
    /,
    snippets_root: Path | None = None,
    *,
    emitter: CollectingEmitter | None = None,
    extensions: list[str] | None = None,
    **config: object,
) -> BeautifulSoup:
    if snippets_root is not None:
        config.setdefault("snippets", str(snippets_root))
    if emitter is not None:
        config["emitter"] = emitter
    md = markdown.Markdown(
        extensions=[*(extensions or ["attr_list", "toc"]), OperationExtension(**config)]
    )
    return BeautifulSoup(md.convert(source), "html.parser")


def _headings(soup: BeautifulSoup, tag: str) -> list[tuple[str, str | None]]:
    return [(node.get_text(), node.get("id")) for node in soup.find_all(tag)]


def test_every_snippet_is_included_one_level_below_the_section(snippets_root: Path) -> None:
    soup = _convert("## Create user\n\noperation::create-user[]\n", snippets_root)

    assert _headings(soup, "h2") == [("Create user", "create-user")]
    assert _headings(soup, "h3") == [
        ("HTTP request", "create-user_http_request"),
        ("HTTP response", "create-user_http_response"),
    ]
    request = soup.find("h3", id="create-user_http_request")
    assert request.find_next_sibling("p").get_text() == "POST /users HTTP/1.1"


def test_explicit_snippets_keep_their_order_and_report_missing_ones(
    snippets_root: Path,
) -> None:
    emitter = CollectingEmitter()
    soup = _convert(
        "## Create user\n\noperation::create-user[snippets='response-body,http-request']\n",
        snippets_root,
        emitter=emitter,
    )

    assert [text for text, _ in _headings(soup, "h3")] == ["Response body", "HTTP request"]
    placeholder = soup.find("h3", id="create-user_response_body").find_next_sibling("p")
    assert placeholder.get_text() == "Snippet response-body not found for operation::create-user"
    assert len(emitter.warnings) == 1
    assert emitter.warnings[0].startswith("Snippet response-body not found at ")
    assert emitter.warnings[0].endswith(" for operation create-user")


def test_unknown_operation_renders_a_placeholder(snippets_root: Path) -> None:
    emitter = CollectingEmitter()
    soup = _convert("operation::missing-op[]\n", snippets_root, emitter=emitter)

    assert soup.find("p").get_text() == "No snippets found for operation::missing-op"
    assert soup.find_all(["h1", "h2", "h3"]) == []
    assert emitter.warnings == [
        f"No snippets were found for operation missing-op in {snippets_root}"
    ]


def test_anchors_without_enclosing_section_start_with_underscore(snippets_root: Path) -> None:
    soup = _convert("operation::create-user[snippets=http-request]\n", snippets_root)
    assert _headings(soup, "h2") == [("HTTP request", "_http_request")]


def test_section_id_from_attribute_list_is_used(snippets_root: Path) -> None:
    soup = _convert(
        "# API\n\n## Create user {#users}\n\noperation::create-user[snippets=http-request]\n",
        snippets_root,
    )
    assert soup.find("h2")["id"] == "users"
    assert _headings(soup, "h3") == [("HTTP request", "users_http_request")]


def test_explicit_level_overrides_nesting(snippets_root: Path) -> None:
    soup = _convert(
        "## Create user\n\noperation::create-user[snippets=http-request, level=4]\n",
        snippets_root,
    )
    assert _headings(soup, "h5") == [("HTTP request", "create-user_http_request")]
    assert soup.find("h3") is None


def test_front_matter_overrides_titles_and_snippets_directory(snippets_root: Path) -> None:
    source = (
        "---\n"
        "snippets: generated-snippets\n"
        "operation-http-request-title: Request line\n"
        "---\n"
        "\n"
        "## Create user\n"
        "\n"
        "operation::create-user[snippets=http-request]\n"
    )
    soup = _convert(source, attributes={"docdir": str(snippets_root.parent)})

    assert _headings(soup, "h3") == [("Request line", "create-user_http_request")]
    assert "snippets:" not in soup.get_text()


def test_operation_name_may_reference_attributes(snippets_root: Path) -> None:
    soup = _convert(
        "## Users\n\noperation::{name}[snippets=http-response]\n",
        snippets_root,
        attributes={"name": "create-user"},
    )
    assert _headings(soup, "h3") == [("HTTP response", "users_http_response")]


def test_second_macro_in_section_is_not_nested_below_the_first(snippets_root: Path) -> None:
    emitter = CollectingEmitter()
    source = (
        "## Create user\n\n"
        "operation::create-user[snippets=http-request]\n\n"
        "operation::create-user[snippets=http-request]\n"
    )
    soup = _convert(source, snippets_root, emitter=emitter)

    assert len(soup.find_all("h3")) == 2
    assert soup.find("h4") is None
    assert emitter.warnings == [
        "Duplicate anchor id create-user_http_request; links resolve to its first use"
    ]


def test_text_around_the_macro_is_kept(snippets_root: Path) -> None:
    soup = _convert(
        "Before the macro\noperation::create-user[snippets=http-request]\nAfter the macro\n",
        snippets_root,
    )
    paragraphs = [node.get_text() for node in soup.find_all("p")]
    assert paragraphs == ["Before the macro", "POST /users HTTP/1.1", "After the macro"]


def test_malformed_attribute_list_is_left_in_place(snippets_root: Path) -> None:
    emitter = CollectingEmitter()
    soup = _convert("operation::create-user[=http-request]\n", snippets_root, emitter=emitter)

    assert soup.find("p").get_text() == "operation::create-user[=http-request]"
    assert emitter.warnings == ["Malformed attribute list: [=http-request]"]


def test_positional_attribute_is_ignored_with_a_warning(snippets_root: Path) -> None:
    emitter = CollectingEmitter()
    soup = _convert(
        "## Create user\n\noperation::create-user[curl-request]\n", snippets_root, emitter=emitter
    )

    assert [text for text, _ in _headings(soup, "h3")] == ["HTTP request", "HTTP response"]
    assert emitter.warnings == [
        "Ignoring positional attribute curl-request of operation::create-user"
    ]


def test_out_of_range_level_is_reported(snippets_root: Path) -> None:
    emitter = CollectingEmitter()
    _convert("operation::create-user[level=9]\n", snippets_root, emitter=emitter)
    assert emitter.warnings == ["Section level must be between 1 and 5, got 9"]


def test_conversions_are_independent(snippets_root: Path) -> None:
    emitter = CollectingEmitter()
    extension = OperationExtension(snippets=str(snippets_root), emitter=emitter)
    md = markdown.Markdown(extensions=["toc", extension])
    source = "## Create user\n\noperation::create-user[]\n"

    first = md.convert(source)
    md.reset()
    second = md.convert(source)

    assert first == second
    assert emitter.warnings == []
    assert list(extension.anchors) == [
        "create-user_http_request",
        "create-user_http_response",
    ]


def test_source_label_prefixes_warnings(snippets_root: Path) -> None:
    emitter = CollectingEmitter()
    _convert(
        "operation::missing-op[]\n", snippets_root, emitter=emitter, source="docs/api.md"
    )
    assert emitter.warnings[0].startswith("docs/api.md: No snippets were found")


def test_splice_event_is_emitted(snippets_root: Path) -> None:
    emitter = CollectingEmitter()
    _convert("## Create user\n\noperation::create-user[]\n", snippets_root, emitter=emitter)
    assert emitter.events == [
        ("operation_spliced", {"operation": "create-user", "snippets": 2, "level": 2})
    ]


def test_adoc_suffix_selects_asciidoc_snippets(tmp_path: Path) -> None:
    operation = tmp_path / "get-user"
    operation.mkdir()
    (operation / "curl-request.adoc").write_text("curl example\n", encoding="utf-8")
    (operation / "notes.md").write_text("ignored\n", encoding="utf-8")

    soup = _convert("operation::get-user[]\n", tmp_path, suffix=".adoc")

    assert _headings(soup, "h2") == [("Curl request", "_curl_request")]


def test_invalid_suffix_is_rejected(snippets_root: Path) -> None:
    with pytest.raises(ValidationError):
        _convert("text", snippets_root, suffix="adoc")


def test_default_emitter_logs_warnings(
    snippets_root: Path, caplog: pytest.LogCaptureFixture
) -> None:
    with caplog.at_level(logging.WARNING, logger="operationdocs"):
        _convert("operation::missing-op[]\n", snippets_root)
    assert any(
        record.name == "operationdocs.diagnostics"
        and record.getMessage().startswith("No snippets were found for operation missing-op")
        for record in caplog.records
    )


def test_make_extension_is_loadable_by_name(snippets_root: Path) -> None:
    assert isinstance(makeExtension(snippets=str(snippets_root)), OperationExtension)
    html = markdown.markdown(
        "operation::create-user[snippets=http-request]\n",
        extensions=["operationdocs.extension"],
        extension_configs={"operationdocs.extension": {"snippets": str(snippets_root)}},
    )
    assert 'id="_http_request"' in html


def test_document_metadata_survives_expansion(snippets_root: Path) -> None:
    extension = OperationExtension(snippets=str(snippets_root), emitter=CollectingEmitter())
    md = markdown.Markdown(extensions=["meta", "toc", extension])

    html = md.convert("Title: My API\n\n## Create user\n\noperation::create-user[]\n")

    assert md.Meta == {"title": ["My API"]}
    assert 'id="create-user_http_request"' in html


def test_repeated_section_titles_get_distinct_anchors(snippets_root: Path) -> None:
    soup = _convert(
        "## Users\n\n## Users\n\noperation::create-user[snippets=http-request]\n",
        snippets_root,
    )

    assert [node["id"] for node in soup.find_all("h2")] == ["users", "users_1"]
    assert _headings(soup, "h3") == [("HTTP request", "users_1_http_request")]


def test_anchor_prefix_uses_rendered_heading_text(snippets_root: Path) -> None:
    soup = _convert(
        "## [Users](https://example.test/users) and *roles*\n\n"
        "operation::create-user[snippets=http-request]\n",
        snippets_root,
    )

    assert soup.find("h2")["id"] == "users-and-roles"
    assert _headings(soup, "h3") == [("HTTP request", "users-and-roles_http_request")]


def test_attribute_list_classes_are_not_part_of_the_prefix(snippets_root: Path) -> None:
    soup = _convert(
        "## Users {.lead}\n\noperation::create-user[snippets=http-request]\n",
        snippets_root,
    )

    assert soup.find("h2")["id"] == "users"
    assert _headings(soup, "h3") == [("HTTP request", "users_http_request")]


def test_asciidoc_snippets_need_the_adoc_suffix(tmp_path: Path) -> None:
    operation = tmp_path / "create-user"
    operation.mkdir()
    for name in ("http-request", "http-response"):
        (operation / f"{name}.adoc").write_text(f"{name}\n", encoding="utf-8")
    source = "## Create user\n\noperation::create-user[]\n"

    default = _convert(source, tmp_path, emitter=CollectingEmitter())
    asciidoc = _convert(source, tmp_path, suffix=".adoc")

    assert default.find("p").get_text() == "No snippets found for operation::create-user"
    assert [text for text, _ in _headings(asciidoc, "h3")] == ["HTTP request", "HTTP response"]
