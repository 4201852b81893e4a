"""MkDocs plugin enabling the ``operation::`` macro for every page."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from mkdocs.config import config_options
from mkdocs.config.defaults import MkDocsConfig
from mkdocs.plugins import BasePlugin

from .diagnostics import LoggingEmitter
from .exceptions import SnippetsDirectoryError
from .resolver import resolve_snippets_directory


EXTENSION = "operationdocs.extension:OperationExtension"

log = logging.getLogger("mkdocs.plugins.operationdocs")


class OperationDocsPlugin(BasePlugin):
    """Inject the Markdown extension and point it at the generated snippets."""

    config_scheme = (
        ("snippets", config_options.Type(str, default="")),
        ("suffix", config_options.Type(str, default=".md")),
        ("build_tool", config_options.Choice(("maven", "gradle", ""), default="")),
        ("attributes", config_options.Type(dict, default={})),
    )

    def on_config(self, config: MkDocsConfig) -> MkDocsConfig:
        """Register the extension with a resolved snippets directory."""
        project_dir = Path(config.config_file_path or ".").resolve().parent
        docs_dir = Path(config.docs_dir)

        attributes: dict[str, Any] = {
            "projectdir": str(project_dir),
            "docdir": str(docs_dir),
            **dict(self.config.get("attributes") or {}),
        }
        snippets = self._snippets_directory(attributes)

        extensions = list(config.markdown_extensions or [])
        if EXTENSION not in extensions:
            extensions.append(EXTENSION)
            config.markdown_extensions = extensions

        mdx_configs = dict(config.mdx_configs or {})
        mdx_configs[EXTENSION] = {
            "snippets": str(snippets),
            "suffix": self.config.get("suffix") or ".md",
            "attributes": attributes,
            "build_tool": self.config.get("build_tool") or "",
            "front_matter": False,
            "emitter": LoggingEmitter(logger_obj=log),
        }
        config.mdx_configs = mdx_configs
        return config

    def _snippets_directory(self, attributes: dict[str, Any]) -> Path:
        configured = self.config.get("snippets")
        if configured:
            path = Path(configured)
            if not path.is_absolute():
                path = Path(attributes["projectdir"]) / path
            return path
        try:
            path = resolve_snippets_directory(
                attributes, build_tool=self.config.get("build_tool") or None
            )
        except SnippetsDirectoryError as exc:
            log.warning("Unable to locate generated snippets: %s", exc)
            return Path(attributes["projectdir"])
        if not path.is_absolute():
            path = Path(attributes["docdir"]) / path
        return path


__all__ = ["EXTENSION", "OperationDocsPlugin"]
