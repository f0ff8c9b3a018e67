#!/usr/bin/env python3
# tab-width:4

from __future__ import annotations

import math
from collections.abc import Callable
from typing import Any

from .LinearScale import LinearScale
from .RadiusScalePolicy import MAX_BUBBLE_RELATIVE_SIZE
from .RadiusScalePolicy import MIN_RADIUS


class BubbleSizer:
    """
    Converts datums into bubble radii.

    Owns the radius scale and the radius value accessor. The overlay sets
    the scale's range on every full render; the domain is either fixed or,
    with elastic_radius, recomputed from the data.
    """

    def __init__(self, chart):
        """
        Args:
            chart: Owning chart (supplies the dataset and value accessor)
        """
        self.chart = chart
        self.r = LinearScale(domain=(0.0, 100.0), range=(0.0, 1.0))
        self.radius_value_accessor: None | Callable[[Any], Any] = None
        self.min_radius = MIN_RADIUS
        self.max_bubble_relative_size = MAX_BUBBLE_RELATIVE_SIZE
        self.elastic_radius = False

    def radius_value(self, datum) -> Any:
        accessor = self.radius_value_accessor or self.chart.value_accessor
        return accessor(datum)

    def bubble_r(self, datum) -> float:
        """
        Radius for datum through the radius scale.

        Non-positive values and NaN radii collapse to 0. Values that cannot
        be converted to float raise from the scale.
        """
        value = self.radius_value(datum)
        r = self.r(value)
        if math.isnan(r) or value <= 0:
            r = 0.0
        return r

    def r_min(self) -> float:
        values = [self.radius_value(d) for d in self.chart.data()]
        return min(values) if values else 0.0

    def r_max(self) -> float:
        values = [self.radius_value(d) for d in self.chart.data()]
        return max(values) if values else 0.0

    def calculate_radius_domain(self) -> None:
        """Set the scale domain to the current data's value extent."""
        if self.elastic_radius:
            self.r.set_domain((self.r_min(), self.r_max()))

    def set_range(self, lo_hi: tuple[float, float]) -> None:
        self.r.set_range(lo_hi)
