"""Pytest configuration and shared fixtures.

Ensures the repository root is importable (so tests can import packages like
`cli`, `tools`, `schemas` without an editable install), isolates the home
directory so a user's own config file never leaks into a test, and provides a
helper for building temporary trees with exact file sizes.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest

# Make repo root importable for tests (avoid requiring `pip install -e .`).
_REPO_ROOT = Path(__file__).resolve().parent.parent
if str(_REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(_REPO_ROOT))


@pytest.fixture(autouse=True)
def isolated_home(tmp_path_factory: pytest.TempPathFactory, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point ``HOME`` at an empty directory for the duration of a test."""
    home = tmp_path_factory.mktemp("home")
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("USERPROFILE", str(home))
    monkeypatch.delenv("SPACEHOGS_CONFIG", raising=False)
    return home


@pytest.fixture
def chdir_tmp_path(tmp_path: Path) -> Path:
    """Change CWD to a fresh tmp path for isolation.

    Returns:
        The temporary directory path now set as the process CWD.
    """
    cwd = os.getcwd()
    os.chdir(tmp_path)
    try:
        yield tmp_path
    finally:
        os.chdir(cwd)


@pytest.fixture
def make_tree(tmp_path: Path):
    """Factory to create a file tree under ``tmp_path``.

    Integer values are file sizes in bytes; a trailing ``/`` creates an empty
    directory.

    Example:
        make_tree({"a/b.txt": 500, "a/c.txt": 300, "empty/": None})
    """

    def _make(spec: dict[str, int | bytes | None], *, root: Path | None = None) -> Path:
        base = root or tmp_path
        base.mkdir(parents=True, exist_ok=True)
        for rel, content in spec.items():
            p = base / rel
            if rel.endswith("/"):
                p.mkdir(parents=True, exist_ok=True)
                continue
            p.parent.mkdir(parents=True, exist_ok=True)
            if content is None:
                p.touch()
            elif isinstance(content, bytes):
                p.write_bytes(content)
            else:
                p.write_bytes(b"x" * content)
        return base

    return _make


@pytest.fixture
def sample_tree(make_tree, tmp_path: Path) -> Path:
    """The reference tree: ``a/b.txt`` (500), ``a/c.txt`` (300), ``d.txt`` (200)."""
    return make_tree({"a/b.txt": 500, "a/c.txt": 300, "d.txt": 200}, root=tmp_path / "root")
