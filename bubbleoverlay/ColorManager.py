#!/usr/bin/env python3
# tab-width:4

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import numpy as np
from matplotlib import colormaps
from matplotlib.colors import to_rgba

DEFAULT_PALETTE = "tab20c"


def make_colors_from_scalar(
    color_data: np.ndarray,
    colormap: str,
    global_min: float | None = None,
    global_max: float | None = None,
) -> np.ndarray:
    """
    Map scalar data to RGBA colors using the specified colormap.

    Args:
        color_data: (N,) array of scalar values
        colormap: Name of a matplotlib colormap
        global_min: Minimum for normalization (if None, uses data min)
        global_max: Maximum for normalization (if None, uses data max)

    Returns:
        (N, 4) RGBA array
    """
    color_data = np.asarray(color_data, dtype=np.float64)

    if global_min is not None and global_max is not None:
        data_min = global_min
        data_max = global_max
    else:
        data_min = color_data.min()
        data_max = color_data.max()

    color_range = data_max - data_min
    if color_range > 1e-9:
        color_norm = (color_data - data_min) / color_range
    else:
        # Uniform data, use middle
        color_norm = np.full_like(color_data, 0.5)

    color_norm = np.clip(
        color_norm,
        0.0,
        1.0,
    )
    return colormaps[colormap](color_norm)


class ColorManager:
    """
    Color function for bubbles.

    Two modes:
    - ordinal (default): each distinct category gets the next palette color,
      in first-seen order, and keeps it for the chart's lifetime
    - scalar: when a color domain is set, numeric values are normalized into
      the domain and mapped through the colormap
    """

    def __init__(
        self,
        colormap: str = DEFAULT_PALETTE,
        palette: None | Sequence[Any] = None,
        color_domain: None | tuple[float, float] = None,
    ):
        """
        Args:
            colormap: Matplotlib colormap name
            palette: Explicit list of colors for ordinal mode (overrides colormap)
            color_domain: (min, max) enabling scalar mode
        """
        self.colormap = colormap
        self.palette = palette
        self.color_domain = color_domain
        self._assigned: dict[Any, tuple[float, float, float, float]] = {}

    def _palette_colors(self) -> list[tuple[float, float, float, float]]:
        if self.palette is not None:
            return [to_rgba(c) for c in self.palette]
        cmap = colormaps[self.colormap]
        n = getattr(cmap, "N", 256)
        if n > 64:
            # Continuous colormap, sample a fixed number of steps
            n = 10
            return [tuple(c) for c in cmap(np.linspace(0.0, 1.0, n))]
        return [tuple(c) for c in cmap(np.arange(n))]

    def reset(self) -> None:
        """Forget ordinal category assignments."""
        self._assigned.clear()

    def make_color(self, value: Any) -> tuple[float, float, float, float]:
        """
        Map one category or scalar value to an RGBA tuple.

        Args:
            value: Category (ordinal mode) or number (scalar mode)

        Returns:
            RGBA tuple
        """
        if self.color_domain is not None:
            lo, hi = self.color_domain
            rgba = make_colors_from_scalar(
                np.asarray([float(value)]),
                colormap=self.colormap,
                global_min=lo,
                global_max=hi,
            )
            return tuple(float(c) for c in rgba[0])

        if value not in self._assigned:
            palette = self._palette_colors()
            self._assigned[value] = palette[len(self._assigned) % len(palette)]
        return self._assigned[value]
