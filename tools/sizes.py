"""Size string parsing and formatting.

Sizes are decimal (SI) throughout: ``1K`` is 1,000 bytes, not 1,024. Parsing
uses ``Decimal`` so fractional inputs like ``"2.5K"`` are exact before being
truncated to whole bytes.
"""

from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation

_MULTIPLIERS: dict[str, int] = {
    "": 1,
    "K": 1_000,
    "KB": 1_000,
    "M": 1_000_000,
    "MB": 1_000_000,
    "G": 1_000_000_000,
    "GB": 1_000_000_000,
    "T": 1_000_000_000_000,
    "TB": 1_000_000_000_000,
}

_SIZE_RE = re.compile(r"^\s*(\d+(?:\.\d*)?|\.\d+)\s*([A-Za-z]*)\s*$")

_DISPLAY_UNITS = ["B", "kB", "MB", "GB", "TB", "PB", "EB"]


class SizeParseError(ValueError):
    """Raised when a size string does not match ``<number>[unit]``."""


def parse_size(text: str) -> int:
    """Parse a human size string into bytes.

    Accepts a decimal number optionally followed (directly or after
    whitespace) by a case-insensitive unit: ``K``/``KB``, ``M``/``MB``,
    ``G``/``GB`` or ``T``/``TB``.

    Args:
        text: Size string such as ``"100MB"``, ``"2.5K"`` or ``"1024"``.

    Returns:
        Size in bytes, truncated toward zero.

    Raises:
        SizeParseError: If the number part is not numeric or the unit is unknown.
    """
    m = _SIZE_RE.match(text or "")
    if not m:
        raise SizeParseError(f"Invalid size format: {text!r}")
    number, unit = m.group(1), m.group(2).upper()
    multiplier = _MULTIPLIERS.get(unit)
    if multiplier is None:
        raise SizeParseError(f"Invalid size unit {m.group(2)!r} in {text!r}")
    try:
        value = Decimal(number)
    except InvalidOperation as e:  # pragma: no cover - regex already guards this
        raise SizeParseError(f"Invalid size format: {text!r}") from e
    return int(value * multiplier)


def format_size(size: int) -> str:
    """Format ``size`` bytes with decimal units, e.g. ``1500000 -> "1.5 MB"``."""
    if size < 1000:
        return f"{size} B"
    value = float(size)
    idx = 0
    while value >= 1000 and idx < len(_DISPLAY_UNITS) - 1:
        value /= 1000
        idx += 1
    text = f"{value:.2f}".rstrip("0").rstrip(".")
    return f"{text} {_DISPLAY_UNITS[idx]}"


__all__ = ["SizeParseError", "parse_size", "format_size"]
