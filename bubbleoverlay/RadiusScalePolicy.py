#!/usr/bin/env python3
# tab-width:4

from __future__ import annotations

MIN_RADIUS = 10.0
MAX_BUBBLE_RELATIVE_SIZE = 0.3


def _is_set(value: float | None) -> bool:
    return value is not None


def compute_radius_range(
    min_override: float | None,
    max_override: float | None,
    width: float,
    max_relative_size: float,
    builtin_min_radius: float = MIN_RADIUS,
) -> tuple[float, float]:
    """
    Compute the (min, max) bubble radius range in surface pixels.

    Overrides win in this order: a lone min override, a lone max override,
    then a consistent pair. Anything else (nothing set, negative values,
    max below min) falls back to the built-in range without complaint.

    Args:
        min_override: Caller supplied minimum radius, or None
        max_override: Caller supplied maximum radius, or None
        width: Width of the drawing surface
        max_relative_size: Largest bubble as a fraction of width
        builtin_min_radius: Minimum radius used when no valid min applies

    Returns:
        (lo, hi) radius range
    """
    builtin_max = width * max_relative_size

    if _is_set(min_override) and min_override >= 0 and not _is_set(max_override):
        return (float(min_override), float(builtin_max))

    if _is_set(max_override) and max_override >= 0 and not _is_set(min_override):
        return (float(builtin_min_radius), float(max_override))

    if (
        _is_set(min_override)
        and _is_set(max_override)
        and min_override >= 0
        and max_override >= 0
        and max_override >= min_override
    ):
        return (float(min_override), float(max_override))

    return (float(builtin_min_radius), float(builtin_max))
