"""Configuration schema."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class Settings(BaseModel):
    """Defaults for a report, as read from a config file.

    Command-line flags take precedence over every field here.
    """

    model_config = ConfigDict(extra="forbid")

    limit: int = Field(default=10, ge=0)
    # Size string, parsed with ``tools.sizes.parse_size``
    min_size: str | None = None
    depth: int | None = Field(default=None, ge=0)
    workers: int = Field(default=1, ge=1)
    exclude: list[str] = Field(default_factory=list)
