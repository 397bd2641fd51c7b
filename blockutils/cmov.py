"""Conditional moves of unsigned integers.

The selection is done with bit masks rather than a branch on the value
being moved.
"""

from __future__ import annotations

_MAX_CONDITION = 0xFF


def _check(current: int, value: int, condition: int) -> None:
    if current < 0 or value < 0:
        raise ValueError("values must be non-negative integers")
    if not 0 <= condition <= _MAX_CONDITION:
        raise ValueError(f"condition must be between 0 and {_MAX_CONDITION}")


def _is_non_zero(condition: int) -> int:
    # (c | -c) has its sign bit set exactly when c is non-zero.
    return ((condition | -condition) >> 8) & 1


def _select(current: int, value: int, take_value: int) -> int:
    mask = -take_value
    return (current & ~mask) | (value & mask)


def cmovz(current: int, value: int, condition: int) -> int:
    """Return ``value`` if ``condition`` is zero, otherwise ``current``."""
    _check(current, value, condition)
    return _select(current, value, 1 ^ _is_non_zero(condition))


def cmovnz(current: int, value: int, condition: int) -> int:
    """Return ``value`` if ``condition`` is non-zero, otherwise ``current``."""
    _check(current, value, condition)
    return _select(current, value, _is_non_zero(condition))