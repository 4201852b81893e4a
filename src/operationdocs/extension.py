"""Python-Markdown extension providing the ``operation::`` block macro.

Usage::

    operation::create-user[snippets='curl-request,http-response']

Every snippet of the operation is rendered below its own heading, one level
below the section holding the macro.
"""

from __future__ import annotations

import html
from pathlib import Path
import re
from typing import Any
from xml.etree import ElementTree

from markdown import Markdown
from markdown.blockparser import BlockParser
from markdown.blockprocessors import BlockProcessor
from markdown.extensions import Extension
from markdown.extensions.meta import MetaPreprocessor
from markdown.extensions.toc import (
    TocExtension,
    remove_fnrefs,
    render_inner_html,
    slugify as toc_slugify,
    strip_tags,
    unique,
)
from markdown.preprocessors import Preprocessor

from .anchors import AnchorRegistry
from .attributes import (
    normalise_attributes,
    parse_attribute_list,
    split_front_matter,
    substitute_attributes,
)
from .composer import compose_fragment, parse_fragment
from .config import OperationSettings
from .diagnostics import DiagnosticEmitter, PrefixedEmitter
from .exceptions import MacroSyntaxError
from .resolver import apply_default_attributes
from .selection import select_snippets
from .splicing import ATTRIBUTE_TRAILER, heading_level, splice_fragment, trailing_anchor
from .titles import SnippetTitles


OPERATION_MACRO = re.compile(
    r"^operation::(?P<target>[^\s\[\]]+)\[(?P<attrs>[^\]\n]*)\][ \t]*$",
    re.MULTILINE,
)


class _DocumentPreprocessor(Preprocessor):
    """Reset per-document state and read document attributes from front matter."""

    def __init__(self, md: Markdown, extension: OperationExtension) -> None:
        super().__init__(md)
        self.extension = extension

    def run(self, lines: list[str]) -> list[str]:  # type: ignore[override]
        self.extension.reset()
        if not self.extension.settings.front_matter:
            return lines
        metadata, body = split_front_matter(lines)
        self.extension.front_matter = normalise_attributes(metadata)
        return body


class OperationBlockProcessor(BlockProcessor):
    """Expand ``operation::`` lines into the snippets of the operation."""

    # Preprocessors bound to the whole document; the fragment must not reach them.
    document_preprocessors: tuple[type[Preprocessor], ...] = (
        _DocumentPreprocessor,
        MetaPreprocessor,
    )

    def __init__(self, parser: BlockParser, extension: OperationExtension) -> None:
        super().__init__(parser)
        self.extension = extension
        self._composing = False

    def test(self, parent: ElementTree.Element, block: str) -> bool:
        # Snippets are parsed without macro support.
        return not self._composing and OPERATION_MACRO.search(block) is not None

    def run(self, parent: ElementTree.Element, blocks: list[str]) -> None:
        block = blocks.pop(0)
        match = OPERATION_MACRO.search(block)
        if match is None:  # pragma: no cover - guarded by test()
            blocks.insert(0, block)
            return
        before = block[: match.start()].rstrip("\n")
        after = block[match.end() :].lstrip("\n")
        if before:
            self.parser.parseBlocks(parent, [before])
        self._expand(parent, match)
        if after:
            blocks.insert(0, after)

    def _expand(self, parent: ElementTree.Element, match: re.Match[str]) -> None:
        extension = self.extension
        emitter = extension.emitter
        attributes = extension.document_attributes()

        positional: list[str] = []
        try:
            macro_attributes = parse_attribute_list(match.group("attrs"), positional)
            explicit_level = _explicit_level(macro_attributes)
        except MacroSyntaxError as exc:
            emitter.warning(str(exc), exc)
            paragraph = ElementTree.SubElement(parent, "p")
            paragraph.text = match.group(0)
            return
        for value in positional:
            emitter.warning(
                f"Ignoring positional attribute {value} of operation::{match.group('target')}"
            )

        operation = substitute_attributes(match.group("target"), attributes)
        snippets_dir = extension.snippets_directory(attributes)
        section_level, section_id = self._parent_section()
        target_level = explicit_level if explicit_level is not None else section_level + 1

        snippets = select_snippets(
            operation,
            snippets_dir,
            macro_attributes.get("snippets"),
            suffix=extension.settings.suffix,
        )
        fragment = compose_fragment(
            operation,
            snippets,
            snippets_dir=snippets_dir,
            titles=SnippetTitles(attributes),
            section_id=section_id,
            emitter=emitter,
        )
        root = parse_fragment(fragment, self._parse_isolated)
        nodes = list(root)
        splice_fragment(
            root,
            parent,
            target_level=target_level,
            registry=extension.anchors,
            emitter=emitter,
        )
        extension.remember_spliced(nodes)
        emitter.event(
            "operation_spliced",
            {"operation": operation, "snippets": len(snippets), "level": target_level},
        )

    def _parse_isolated(self, text: str) -> ElementTree.Element:
        lines = text.split("\n")
        for preprocessor in self.parser.md.preprocessors:
            if isinstance(preprocessor, self.document_preprocessors):
                continue
            lines = preprocessor.run(lines)
        root = ElementTree.Element("div")
        self._composing = True
        try:
            self.parser.parseChunk(root, "\n".join(lines))
        finally:
            self._composing = False
        return root

    def _parent_section(self) -> tuple[int, str | None]:
        """Return the level and id of the section the macro belongs to."""
        document = getattr(self.parser, "root", None)
        if document is None:
            return 0, None
        headings = [
            element
            for element in document.iter()
            if heading_level(element) is not None and not self.extension.is_spliced(element)
        ]
        if not headings:
            return 0, None
        ids = self._heading_ids(document, headings)
        return heading_level(headings[-1]) or 0, ids[-1]

    def _heading_ids(
        self, document: ElementTree.Element, headings: list[ElementTree.Element]
    ) -> list[str]:
        """Return the ids ``toc`` assigns to ``headings``, in document order.

        Explicit ids are reserved first, then every other heading gets the
        unique slug of its rendered text.
        """
        used = {element.get("id") for element in document.iter() if element.get("id")}
        declared = [heading.get("id") or self._declared_anchor(heading) for heading in headings]
        used.update(anchor for anchor in declared if anchor)
        slugify, separator = self._slugify()
        ids: list[str] = []
        for heading, anchor in zip(headings, declared):
            if not anchor:
                anchor = unique(slugify(self._heading_name(heading), separator), used)
            ids.append(anchor)
        return ids

    def _declared_anchor(self, heading: ElementTree.Element) -> str | None:
        if not self._uses_attr_list():
            return None
        return trailing_anchor(heading.text)

    def _heading_name(self, heading: ElementTree.Element) -> str:
        """Render the inline Markdown of ``heading`` into plain text."""
        md = self.parser.md
        text = heading.text or ""
        if self._uses_attr_list():
            text = ATTRIBUTE_TRAILER.sub("", text)
        holder = ElementTree.Element("div")
        rendered = ElementTree.SubElement(holder, heading.tag)
        rendered.text = text.strip()
        if "inline" in md.treeprocessors:
            md.treeprocessors["inline"].run(holder)
        return html.unescape(strip_tags(render_inner_html(remove_fnrefs(rendered), md)))

    def _uses_attr_list(self) -> bool:
        return "attr_list" in self.parser.md.treeprocessors

    def _slugify(self) -> tuple[Any, str]:
        for extension in getattr(self.parser.md, "registeredExtensions", []):
            if isinstance(extension, TocExtension):
                return extension.getConfig("slugify"), extension.getConfig("separator")
        return toc_slugify, "-"


def _explicit_level(attributes: dict[str, str]) -> int | None:
    raw = attributes.get("level")
    if raw is None or raw == "":
        return None
    try:
        level = int(raw)
    except ValueError as exc:
        raise MacroSyntaxError(f"Section level must be an integer, got '{raw}'") from exc
    if not 1 <= level <= 5:
        raise MacroSyntaxError(f"Section level must be between 1 and 5, got {level}")
    return level


class OperationExtension(Extension):
    """Register the ``operation::`` block macro with Python-Markdown."""

    def __init__(self, **kwargs: Any) -> None:
        self.config = {
            "snippets": ["", "Base directory holding one folder per operation."],
            "suffix": [".md", "File extension of generated snippets."],
            "attributes": [{}, "Document attributes shared by every document."],
            "build_tool": ["", "Layout used to locate snippets: 'maven' or 'gradle'."],
            "source": ["", "Label prefixed to warnings."],
            "front_matter": [True, "Read document attributes from YAML front matter."],
            "emitter": ["", "Diagnostic emitter receiving warnings."],
        }
        super().__init__(**kwargs)
        self.anchors = AnchorRegistry()
        self.front_matter: dict[str, str] = {}
        self._spliced: dict[int, ElementTree.Element] = {}
        self._settings: OperationSettings | None = None
        self._emitter: DiagnosticEmitter | None = None

    @property
    def settings(self) -> OperationSettings:
        if self._settings is None:
            values = {key: value or None for key, value in self.getConfigs().items()}
            values["front_matter"] = bool(self.getConfig("front_matter"))
            values["suffix"] = self.getConfig("suffix") or ".md"
            values["attributes"] = self.getConfig("attributes") or {}
            self._settings = OperationSettings(**values)
        return self._settings

    @property
    def emitter(self) -> DiagnosticEmitter:
        if self._emitter is None:
            self._emitter = PrefixedEmitter(self.settings.resolve_emitter(), self.settings.source)
        return self._emitter

    def extendMarkdown(self, md: Markdown) -> None:  # noqa: N802 - Markdown API hook
        """Validate the configuration and register the processors."""
        md.registerExtension(self)
        self._settings = None
        self._emitter = None
        _ = self.settings
        md.preprocessors.register(_DocumentPreprocessor(md, self), "operation_document", 29)
        md.parser.blockprocessors.register(
            OperationBlockProcessor(md.parser, self), "operation_macro", 75
        )

    def reset(self) -> None:
        """Forget the state of the previous document."""
        self.anchors.clear()
        self.front_matter = {}
        self._spliced.clear()

    def remember_spliced(self, nodes: list[ElementTree.Element]) -> None:
        """Record headings added by a macro so later macros do not nest below them."""
        for node in nodes:
            for element in node.iter():
                if heading_level(element) is not None:
                    self._spliced[id(element)] = element

    def is_spliced(self, element: ElementTree.Element) -> bool:
        return self._spliced.get(id(element)) is element

    def document_attributes(self) -> dict[str, Any]:
        """Return the attributes of the document being converted."""
        settings = self.settings
        attributes: dict[str, Any] = dict(settings.attributes)
        if settings.snippets is not None:
            attributes.setdefault("snippets", str(settings.snippets))
        attributes.update(self.front_matter)
        return apply_default_attributes(attributes, build_tool=settings.build_tool)

    def snippets_directory(self, attributes: dict[str, Any]) -> Path:
        """Return the snippets root, relative paths being anchored at ``docdir``."""
        directory = Path(str(attributes.get("snippets") or "."))
        docdir = attributes.get("docdir")
        if not directory.is_absolute() and docdir:
            return Path(str(docdir)) / directory
        return directory


def makeExtension(**kwargs: Any) -> OperationExtension:  # noqa: N802 - Markdown API hook
    """Entry point exposed to Python-Markdown."""
    return OperationExtension(**kwargs)


__all__ = [
    "OPERATION_MACRO",
    "OperationBlockProcessor",
    "OperationExtension",
    "makeExtension",
]
