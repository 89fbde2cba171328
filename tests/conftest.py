from __future__ import annotations

"""
Shared pytest configuration.

Puts the project root on sys.path so the flat modules import without an
install, and provides a helper for laying out sample source trees.
"""

import os
import sys
from pathlib import Path
from typing import Callable, Dict

import pytest

_ROOT_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if _ROOT_PATH not in sys.path:
    sys.path.insert(0, _ROOT_PATH)


@pytest.fixture
def make_tree() -> Callable[[Path, Dict[str, str]], Path]:
    """Write ``{"relative/path.md": "text"}`` under a base directory.

    Keys ending with "/" create empty directories.
    """

    def _make(base: Path, files: Dict[str, str]) -> Path:
        base.mkdir(parents=True, exist_ok=True)
        for rel, text in files.items():
            target = base / rel
            if rel.endswith("/"):
                target.mkdir(parents=True, exist_ok=True)
                continue
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(text, encoding="utf-8")
        return base

    return _make


@pytest.fixture
def articles(tmp_path: Path, make_tree) -> Path:
    """A small content tree: root README, one nested README dir, one listing dir."""
    return make_tree(
        tmp_path / "articles",
        {
            "README.md": "# Welcome\n",
            "intro.md": "Intro *text*\n",
            "guides/README.md": "# Guides\n",
            "guides/setup.md": "## Setup\n",
            "notes/first.md": "first\n",
            "notes/deeper/second.md": "second\n",
        },
    )
