# src/timekeeper/core/duration.py

"""
Duration literals ("45h30m", "5m", "90s") and the H:MM:SS display form.

Grammar: one or more <digits><unit> pairs, unit in d/h/m/s, units strictly
decreasing and never repeated, nothing between pairs.
"""

from __future__ import annotations

import re

from .errors import InvalidDurationLiteral

UNIT_SECONDS: dict[str, int] = {"d": 86400, "h": 3600, "m": 60, "s": 1}
_UNIT_ORDER = tuple(UNIT_SECONDS)

# Largest total accepted by parse(); matches an unsigned 64-bit counter.
MAX_SECONDS = 2**64 - 1
_MAX_DIGITS = len(str(MAX_SECONDS))

_PAIR_RE = re.compile(r"([^a-zA-Z]*)([a-zA-Z])")


def parse(text: str) -> int:
    """Parse a duration literal into a number of seconds."""
    if not text:
        raise InvalidDurationLiteral(text, "empty literal")

    pairs = _PAIR_RE.findall(text)
    consumed = sum(len(magnitude) + 1 for magnitude, _ in pairs)
    if consumed != len(text):
        raise InvalidDurationLiteral(text, "trailing magnitude without a unit")

    total = 0
    last_rank = -1
    for magnitude, unit in pairs:
        if unit not in UNIT_SECONDS:
            raise InvalidDurationLiteral(text, f"unknown unit '{unit}'")
        rank = _UNIT_ORDER.index(unit)
        if rank == last_rank:
            raise InvalidDurationLiteral(text, f"unit '{unit}' repeated")
        if rank < last_rank:
            raise InvalidDurationLiteral(text, f"unit '{unit}' out of order")
        if not magnitude or not (magnitude.isascii() and magnitude.isdigit()):
            raise InvalidDurationLiteral(text, f"'{magnitude}' is not a number")
        digits = magnitude.lstrip("0") or "0"
        if len(digits) > _MAX_DIGITS:
            raise InvalidDurationLiteral(text, "duration too large")
        total += int(digits) * UNIT_SECONDS[unit]
        last_rank = rank

    if total > MAX_SECONDS:
        raise InvalidDurationLiteral(text, "duration too large")
    return total


def format_duration(seconds: int) -> str:
    """Render seconds as H:MM:SS; hours are not wrapped at 24."""
    if seconds < 0:
        raise ValueError("seconds must be non-negative")
    hours, rest = divmod(int(seconds), 3600)
    minutes, secs = divmod(rest, 60)
    return f"{hours}:{minutes:02d}:{secs:02d}"


def format_literal(seconds: int) -> str:
    """Canonical literal accepted by parse(): 163800 -> "45h30m", 0 -> "0s".

    Hours are not folded into days, matching format_duration().
    """
    if seconds < 0:
        raise ValueError("seconds must be non-negative")
    rest = int(seconds)
    parts: list[str] = []
    for unit in ("h", "m", "s"):
        amount, rest = divmod(rest, UNIT_SECONDS[unit])
        if amount:
            parts.append(f"{amount}{unit}")
    return "".join(parts) or "0s"
