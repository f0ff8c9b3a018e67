#!/usr/bin/env python3
# tab-width:4

from __future__ import annotations

import logging
from collections.abc import Callable
from collections.abc import Iterable
from collections.abc import Iterator
from collections.abc import Mapping

from .errors import ValidationError
from .Point import Point

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("name", "x", "y")


def _has_field(
    entry,
    name: str,
) -> bool:
    if isinstance(entry, Mapping):
        return name in entry
    return hasattr(entry, name)


def _get_field(
    entry,
    name: str,
):
    if isinstance(entry, Mapping):
        return entry[name]
    return getattr(entry, name)


class PointRegistry:
    """
    Ordered collection of named anchor points.

    Names are not deduplicated; every registration is kept in insertion
    order and reconciled against the dataset on each render cycle.
    """

    def __init__(self):
        self._points: list[Point] = []

    def __len__(self) -> int:
        return len(self._points)

    def __iter__(self) -> Iterator[Point]:
        return iter(list(self._points))

    @property
    def points(self) -> list[Point]:
        """Snapshot of the registered points."""
        return list(self._points)

    def add_point(
        self,
        name: str,
        x: float,
        y: float,
    ) -> Point:
        """Append a point without any validation."""
        point = Point(name=name, x=x, y=y)
        self._points.append(point)
        return point

    def add_points(self, entries: Iterable) -> list[Point]:
        """
        Append a batch of points.

        Entries may be mappings or objects carrying name, x and y.
        Validation runs entry by entry; entries before a failing one are
        already registered when ValidationError is raised.

        Args:
            entries: Point-like records

        Returns:
            The points appended by this call
        """
        entries = list(entries)
        if len(entries) < 1:
            raise ValidationError("There must be at least one point")

        added = []
        for index, entry in enumerate(entries):
            missing = [f for f in REQUIRED_FIELDS if not _has_field(entry, f)]
            if missing:
                raise ValidationError(
                    "All points must have name, x and y; "
                    f"entry {index} is missing {', '.join(missing)}"
                )
            added.append(
                self.add_point(
                    _get_field(entry, "name"),
                    _get_field(entry, "x"),
                    _get_field(entry, "y"),
                )
            )
        return added

    def reset(self, cleanup: None | Callable[[Point], None] = None) -> None:
        """
        Run cleanup for every registered point, then forget all points.

        Args:
            cleanup: Called once per point, in registration order
        """
        if cleanup is not None:
            for point in list(self._points):
                cleanup(point)

        logger.debug("Cleared %d registered point(s)", len(self._points))
        self._points.clear()
