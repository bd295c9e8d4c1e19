"""Exhaustive directory scanner.

Walks every directory under a root and produces a flat list of file and
directory entries with exact cumulative sizes. The walk is never limited by
display filters: an ancestor's size is only correct once every descendant has
been visited.

- Does not follow symlinks or Windows reparse points (they are not counted)
- Per-node read failures are counted in ``error_count`` and never raised
- Optionally walks the root's subdirectories on a thread pool; each worker
  keeps its own accumulator table and the tables are summed at the end

Progress reporting is a plain callback so the scanner stays testable without
any UI attached.
"""

from __future__ import annotations

import os
import stat
import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Callable, Dict, List, Optional, Sequence

import structlog

from fsutil.paths import normalize_path
from fsutil.reparse_points import is_link_stat

logger = structlog.get_logger(__name__)

ProgressCallback = Callable[[int], None]


class EntryKind(str, Enum):
    """Kind of a scanned filesystem node."""

    FILE = "file"
    DIRECTORY = "directory"


@dataclass(frozen=True)
class Entry:
    """One file or directory observed during a scan."""

    path: Path
    size: int
    kind: EntryKind

    @property
    def is_dir(self) -> bool:
        return self.kind is EntryKind.DIRECTORY


@dataclass(frozen=True)
class ScanResult:
    """Outcome of a single scan.

    Attributes:
        root: Normalized scan root.
        entries: Every file and directory found below the root (root excluded).
        total_size: Sum of all file sizes; equals the root's cumulative size.
        error_count: Nodes whose metadata or listing could not be read.
        incomplete: True when the walk was cancelled before finishing.
    """

    root: Path
    entries: tuple[Entry, ...] = ()
    total_size: int = 0
    error_count: int = 0
    incomplete: bool = False


@dataclass
class _Partial:
    """Mutable accumulator owned by a single walker thread."""

    files: List[Entry] = field(default_factory=list)
    dir_sizes: Dict[Path, int] = field(default_factory=dict)
    total: int = 0
    errors: int = 0
    incomplete: bool = False

    def add_file(self, path: Path, size: int, root: Path) -> None:
        self.files.append(Entry(path=path, size=size, kind=EntryKind.FILE))
        self.total += size
        # Attribute to every ancestor from the parent up to and including root
        cur = path.parent
        while True:
            self.dir_sizes[cur] = self.dir_sizes.get(cur, 0) + size
            if cur == root or cur.parent == cur:
                break
            cur = cur.parent

    def merge(self, other: "_Partial") -> None:
        self.files.extend(other.files)
        for path, size in other.dir_sizes.items():
            self.dir_sizes[path] = self.dir_sizes.get(path, 0) + size
        self.total += other.total
        self.errors += other.errors
        self.incomplete = self.incomplete or other.incomplete


class _ProgressTicker:
    """Thread-safe file counter that fires ``callback`` every ``interval`` files."""

    def __init__(self, callback: Optional[ProgressCallback], interval: int) -> None:
        self._callback = callback
        self._interval = interval
        self._count = 0
        self._lock = threading.Lock()

    def tick(self) -> None:
        if self._callback is None:
            return
        with self._lock:
            self._count += 1
            if self._count % self._interval == 0:
                self._callback(self._count)


def _matches_any(p: Path, patterns: Sequence[str]) -> bool:
    name = p.name
    for glob in patterns:
        if p.match(glob) or name == glob:
            return True
    return False


def _visit_dir(
    current: Path,
    root: Path,
    part: _Partial,
    *,
    exclude: Sequence[str],
    ticker: _ProgressTicker,
) -> List[Path]:
    """List ``current``, record its files into ``part`` and return its subdirectories."""
    try:
        with os.scandir(current) as it:
            children = list(it)
    except OSError as e:
        part.errors += 1
        logger.debug("scan_dir_unreadable", path=str(current), error=str(e))
        return []

    subdirs: List[Path] = []
    for entry in children:
        path = current / entry.name
        if exclude and _matches_any(path, exclude):
            continue
        try:
            st = entry.stat(follow_symlinks=False)
        except OSError as e:
            part.errors += 1
            logger.debug("scan_entry_unreadable", path=str(path), error=str(e))
            continue
        if is_link_stat(st):
            continue
        if stat.S_ISDIR(st.st_mode):
            subdirs.append(path)
        elif stat.S_ISREG(st.st_mode):
            part.add_file(path, int(st.st_size), root)
            ticker.tick()
    return subdirs


def _walk(
    start: Path,
    root: Path,
    *,
    exclude: Sequence[str],
    ticker: _ProgressTicker,
    cancel: Optional[threading.Event],
) -> _Partial:
    part = _Partial()
    stack = [start]
    while stack:
        if cancel is not None and cancel.is_set():
            part.incomplete = True
            break
        current = stack.pop()
        stack.extend(_visit_dir(current, root, part, exclude=exclude, ticker=ticker))
    return part


def scan(
    root: str | os.PathLike[str],
    *,
    progress: Optional[ProgressCallback] = None,
    progress_interval: int = 1000,
    exclude: Optional[Sequence[str]] = None,
    workers: int = 1,
    cancel: Optional[threading.Event] = None,
) -> ScanResult:
    """Walk ``root`` and compute exact sizes for every file and directory.

    Args:
        root: Directory to scan. A missing root is zero work, not an error.
        progress: Optional callback receiving the running file count.
        progress_interval: Number of files between progress callbacks.
        exclude: Optional globs/names of files and directories to prune.
        workers: Number of threads; values above 1 walk the root's
            subdirectories concurrently.
        cancel: Optional event; once set, no new directories are visited and
            the partial result is returned with ``incomplete=True``.

    Returns:
        The scan result; per-node failures are reflected in ``error_count``.
    """
    if progress_interval < 1:
        raise ValueError("progress_interval must be >= 1")
    if workers < 1:
        raise ValueError("workers must be >= 1")

    root_path = normalize_path(root)
    patterns = tuple(exclude or ())
    ticker = _ProgressTicker(progress, progress_interval)

    if not os.path.isdir(root_path):
        try:
            st = os.lstat(root_path)
        except OSError:
            logger.warning("scan_root_missing", root=str(root_path))
            return ScanResult(root=root_path)
        size = int(st.st_size) if stat.S_ISREG(st.st_mode) else 0
        return ScanResult(root=root_path, total_size=size)

    if workers == 1 or (cancel is not None and cancel.is_set()):
        part = _walk(root_path, root_path, exclude=patterns, ticker=ticker, cancel=cancel)
    else:
        # The root listing happens here; each subdirectory becomes one task.
        part = _Partial()
        subdirs = _visit_dir(root_path, root_path, part, exclude=patterns, ticker=ticker)
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="scan") as pool:
            futures = [
                pool.submit(_walk, d, root_path, exclude=patterns, ticker=ticker, cancel=cancel)
                for d in subdirs
            ]
            for fut in futures:
                part.merge(fut.result())

    dirs = [
        Entry(path=path, size=size, kind=EntryKind.DIRECTORY)
        for path, size in part.dir_sizes.items()
        if path != root_path
    ]
    result = ScanResult(
        root=root_path,
        entries=tuple(part.files) + tuple(dirs),
        total_size=part.total,
        error_count=part.errors,
        incomplete=part.incomplete,
    )
    logger.info(
        "scan_complete",
        root=str(root_path),
        files=len(part.files),
        dirs=len(dirs),
        errors=part.errors,
        total_size=part.total,
        incomplete=part.incomplete,
    )
    return result


__all__ = ["Entry", "EntryKind", "ProgressCallback", "ScanResult", "scan"]
