"""Path helpers shared by the scanner and the reporter.

Both sides of the pipeline compare paths by their components (depth counting,
ancestor checks), so every path must go through the same normalization before
it is stored or compared. The helpers here never touch the filesystem.
"""

from __future__ import annotations

import os
from pathlib import Path


def normalize_path(p: str | os.PathLike[str]) -> Path:
    """Return an absolute, normalized form of ``p``.

    ``.`` and ``..`` segments and trailing separators are collapsed. Symbolic
    links are deliberately not resolved so that reported paths stay under the
    root the user asked for.

    Args:
      p: The input path (relative or absolute).

    Returns:
      The normalized absolute ``Path``.
    """
    return Path(os.path.abspath(os.fspath(p)))


def relative_depth(path: Path, root: Path) -> int:
    """Return the number of path components of ``path`` beyond ``root``.

    The root itself is depth 0 and a direct child is depth 1. Paths with no
    more components than the root report 0 or less; callers treat those as
    "never too deep".
    """
    return len(path.parts) - len(root.parts)


def display_path(path: Path, root: Path) -> str:
    """Render ``path`` relative to ``root`` when it lives below it."""
    try:
        rel = path.relative_to(root)
    except ValueError:
        return str(path)
    return str(rel) if rel.parts else str(path)


__all__ = ["normalize_path", "relative_depth", "display_path"]
