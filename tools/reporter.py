"""Turn a flat scan into a ranked, deduplicated report.

The pipeline runs in a fixed order:

1. size filter (``min_size``)
2. depth filter (``max_depth``, relative to the scan root)
3. rank by size descending, ties by path
4. take ``limit * 5`` candidates
5. suppress every candidate that is an ancestor of another candidate
6. keep the survivors in rank order, truncated to ``limit``

Suppression prefers the most specific entries: a directory whose contents are
already itemized among the candidates adds nothing new. When suppression
leaves fewer than ``limit`` survivors the report is short; the candidate pool
is not grown again.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Sequence

import structlog

from fsutil.paths import normalize_path, relative_depth
from schemas.report import EntryModel, ReportFilters, ReportModel
from tools.scanner import Entry, ScanResult

logger = structlog.get_logger(__name__)

# Slack between the requested limit and the pool considered for suppression.
CANDIDATE_FACTOR = 5


def _rank_key(entry: Entry) -> tuple[int, str]:
    return (-entry.size, str(entry.path))


def _suppressed(candidates: Sequence[Entry], root: Path) -> set[Path]:
    """Return paths of candidates that are strict ancestors of another candidate."""
    pool = {c.path for c in candidates}
    hidden: set[Path] = set()
    for cand in candidates:
        for parent in cand.path.parents:
            if parent in pool:
                hidden.add(parent)
            if parent == root:
                break
    return hidden


def select_entries(entries: Iterable[Entry], filters: ReportFilters, *, root: Path) -> List[Entry]:
    """Apply filters, ranking and ancestor suppression to ``entries``.

    Args:
        entries: All entries of a scan.
        filters: Size, depth and limit settings.
        root: Scan root that depths are measured from.

    Returns:
        Entries to display, largest first.
    """
    if filters.limit == 0:
        return []
    root = normalize_path(root)

    kept = list(entries)
    if filters.min_size is not None:
        kept = [e for e in kept if e.size >= filters.min_size]
    if filters.max_depth is not None:
        kept = [e for e in kept if relative_depth(e.path, root) <= filters.max_depth]

    ranked = sorted(kept, key=_rank_key)
    candidates = ranked[: filters.limit * CANDIDATE_FACTOR]
    hidden = _suppressed(candidates, root)
    selected = [c for c in candidates if c.path not in hidden][: filters.limit]
    logger.debug(
        "report_selected",
        filtered=len(kept),
        candidates=len(candidates),
        suppressed=len(hidden),
        selected=len(selected),
    )
    return selected


@dataclass(frozen=True)
class Report:
    """Displayable report: the selected entries plus scan-wide totals."""

    root: Path
    entries: tuple[Entry, ...]
    total_size: int
    error_count: int
    filters: ReportFilters
    incomplete: bool = False

    def to_model(self) -> ReportModel:
        return ReportModel(
            root=self.root,
            total_size=self.total_size,
            error_count=self.error_count,
            incomplete=self.incomplete,
            filters=self.filters,
            entries=[
                EntryModel(path=e.path, size=e.size, kind=e.kind.value) for e in self.entries
            ],
        )


def build_report(result: ScanResult, filters: ReportFilters) -> Report:
    """Build a report from a finished scan.

    The total size and error count come from the scan as a whole and are not
    affected by the filters.
    """
    selected = select_entries(result.entries, filters, root=result.root)
    return Report(
        root=result.root,
        entries=tuple(selected),
        total_size=result.total_size,
        error_count=result.error_count,
        filters=filters,
        incomplete=result.incomplete,
    )


__all__ = ["CANDIDATE_FACTOR", "Report", "build_report", "select_entries"]
