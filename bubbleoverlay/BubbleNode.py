#!/usr/bin/env python3
# tab-width:4

from __future__ import annotations

from dataclasses import dataclass
from dataclasses import field
from typing import Any

from matplotlib.transforms import Transform


@dataclass
class BubbleNode:
    """Persistent visual node owning one point's bubble, label and title."""

    token: str
    x: float
    y: float
    transform: Transform
    datum: Any = None
    state: None | str = None  # "selected", "deselected" or None

    # Artist tracking, created lazily by the reconciler
    bubble: Any = field(default=None, repr=False)
    label: Any = field(default=None, repr=False)
    title: Any = field(default=None, repr=False)

    @property
    def translation(self) -> tuple[float, float]:
        """The (x, y) translation this node was created with."""
        return (self.x, self.y)

    def is_empty(self) -> bool:
        """True when the node is a bare shell without sub-elements."""
        return self.bubble is None and self.label is None and self.title is None
