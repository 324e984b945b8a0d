"""Lenient numeric parsing for census-style text values."""

from __future__ import annotations

import math
import re
from typing import Any

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")
_LEADING_FLOAT = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def _strip_separators(value: str) -> str:
    return value.replace(",", "")


def parse_int(value: Any, default: int = 0) -> int:
    """Parse the leading integer of ``value``; ``"2020-01-01"`` gives 2020, ``"1,234"`` gives 1234."""
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else default
    match = _LEADING_INT.match(_strip_separators(str(value)))
    if match is None:
        return default
    return int(match.group(1))


def parse_float(value: Any) -> float | None:
    """Parse the leading float of ``value`` or return None when there is none."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
        return number if math.isfinite(number) else None
    match = _LEADING_FLOAT.match(_strip_separators(str(value)))
    if match is None:
        return None
    number = float(match.group(1))
    return number if math.isfinite(number) else None


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def clamp(value: int, *, minimum: int, maximum: int) -> int:
    return max(minimum, min(maximum, value))
