from __future__ import annotations

from pathlib import Path

import pytest


SNIPPETS = {
    "http-request.md": "POST /users HTTP/1.1\n",
    "http-response.md": "HTTP/1.1 201 Created\n",
}


@pytest.fixture
def snippets_root(tmp_path: Path) -> Path:
    """Snippet tree holding the ``create-user`` operation."""
    root = tmp_path / "generated-snippets"
    operation = root / "create-user"
    operation.mkdir(parents=True)
    for name, content in SNIPPETS.items():
        (operation / name).write_text(content, encoding="utf-8")
    return root
