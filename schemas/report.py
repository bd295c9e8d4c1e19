"""Report schemas and JSON helpers."""

from __future__ import annotations

from pathlib import Path
from typing import TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T", bound="_JsonMixin")


class _JsonMixin(BaseModel):
    def to_json(self) -> str:
        return self.model_dump_json()

    @classmethod
    def from_json(cls: type[T], data: str) -> T:
        return cls.model_validate_json(data)


class ReportFilters(_JsonMixin):
    """User filters applied when turning a scan into a report.

    Attributes:
        min_size: Inclusive lower bound in bytes; ``None`` disables the filter.
        max_depth: Maximum depth relative to the root (root = 0) for display;
            ``None`` disables the filter. Never limits the scan itself.
        limit: Maximum number of entries to present.
    """

    model_config = ConfigDict(frozen=True)

    min_size: int | None = Field(default=None, ge=0)
    max_depth: int | None = Field(default=None, ge=0)
    limit: int = Field(default=10, ge=0)


class EntryModel(_JsonMixin):
    path: Path
    size: int = Field(ge=0)
    kind: str


class ReportModel(_JsonMixin):
    root: Path
    total_size: int = Field(ge=0)
    error_count: int = Field(ge=0)
    incomplete: bool = False
    filters: ReportFilters
    entries: list[EntryModel]
