"""Reparse point and symlink detection.

The scanner never follows links: a symbolic link (or, on Windows, a junction or
any other reparse point) is neither descended into nor counted. The check works
from ``lstat`` data so that no link is ever followed.
"""

from __future__ import annotations

import os
import stat

# FILE_ATTRIBUTE_REPARSE_POINT from WinBase.h
_FILE_ATTRIBUTE_REPARSE_POINT = 0x0400


def is_link_stat(st: os.stat_result) -> bool:
    """Return True if ``st`` describes a symlink or a Windows reparse point.

    Args:
      st: A stat result obtained without following links.
    """
    if stat.S_ISLNK(st.st_mode):
        return True
    # Windows exposes st_file_attributes; guard access for portability.
    attrs = getattr(st, "st_file_attributes", None)
    if attrs is not None:
        return bool(attrs & _FILE_ATTRIBUTE_REPARSE_POINT)
    return False


__all__ = ["is_link_stat"]
