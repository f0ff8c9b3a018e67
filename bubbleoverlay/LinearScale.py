#!/usr/bin/env python3
# tab-width:4

from __future__ import annotations

from dataclasses import dataclass
from dataclasses import field

import numpy as np


@dataclass
class LinearScale:
    """
    Linear mapping from a value domain onto a pixel range.

    The mapping is not clamped: values outside the domain extrapolate.
    Used as the bubble radius scale; the overlay writes the range on
    every full render.
    """

    domain: tuple[float, float] = (0.0, 100.0)
    range: tuple[float, float] = (0.0, 1.0)

    scale: float = field(default=1.0, init=False, repr=False)
    offset: float = field(default=0.0, init=False, repr=False)

    def __post_init__(self):
        self.set_domain(self.domain)
        self.set_range(self.range)

    def _recompute(self) -> None:
        """Recompute scale/offset from the current domain and range."""
        d0, d1 = self.domain
        r0, r1 = self.range
        domain_span = d1 - d0

        if domain_span == 0:
            self.scale = 0.0
            self.offset = (r0 + r1) / 2
        else:
            self.scale = (r1 - r0) / domain_span
            self.offset = r0 - self.scale * d0

    def _as_pair(
        self,
        values,
        name: str,
    ) -> tuple[float, float]:
        pair = tuple(float(v) for v in values)
        if len(pair) != 2:
            raise ValueError(f"{name} must have exactly two values, got {len(pair)}")
        if not np.isfinite(pair).all():
            raise ValueError(f"{name} contains NaN/Inf values: {pair}")
        return pair

    def set_domain(self, values) -> LinearScale:
        self.domain = self._as_pair(values, "domain")
        self._recompute()
        return self

    def set_range(self, values) -> LinearScale:
        self.range = self._as_pair(values, "range")
        self._recompute()
        return self

    def __call__(self, value):
        """Map a scalar (or array) from the domain onto the range."""
        if isinstance(value, np.ndarray):
            return value * self.scale + self.offset
        return float(value) * self.scale + self.offset

    def invert(self, pixel: float) -> float:
        """Map a range value back onto the domain."""
        if self.scale == 0:
            return self.domain[0]
        return (float(pixel) - self.offset) / self.scale
