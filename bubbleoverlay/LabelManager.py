#!/usr/bin/env python3
# tab-width:4

from __future__ import annotations

from collections.abc import Callable
from typing import Any

MIN_RADIUS_WITH_LABEL = 10.0


class LabelManager:
    """
    Creates and updates the text label and hover title of bubble nodes.

    Labels sit centered on the bubble and fade out for bubbles smaller than
    min_radius_with_label. Titles are annotations shown while the pointer
    hovers the bubble.
    """

    def __init__(self, chart):
        """
        Args:
            chart: Owning chart (accessors, sizer, transitions)
        """
        self.chart = chart
        self.render_label = True
        self.render_title = True
        self.min_radius_with_label = MIN_RADIUS_WITH_LABEL
        self.label_function: None | Callable[[Any], Any] = None
        self.title_function: None | Callable[[Any], Any] = None
        self.label_color = "black"
        self.label_fontsize = 8

    def label_text(self, datum) -> str:
        if self.label_function is not None:
            return str(self.label_function(datum))
        return str(self.chart.key_accessor(datum))

    def title_text(self, datum) -> str:
        if self.title_function is not None:
            return str(self.title_function(datum))
        return f"{self.chart.key_accessor(datum)}: {self.chart.value_accessor(datum)}"

    def label_opacity(self, datum) -> float:
        radius = self.chart.sizer.bubble_r(datum)
        return 1.0 if radius > self.min_radius_with_label else 0.0

    # -------- Labels --------
    def render_labels(self, node) -> None:
        """Create the node's label if missing, then fade it in."""
        if not self.render_label:
            return

        if node.label is None:
            node.label = self.chart.surface.text(
                0.0,
                0.0,
                "",
                transform=node.transform,
                ha="center",
                va="center",
                color=self.label_color,
                fontsize=self.label_fontsize,
                zorder=4,
                clip_on=True,
            )
            node.label.set_gid(f"label {node.token}")

        node.label.set_alpha(0.0)
        node.label.set_text(self.label_text(node.datum))
        self.chart.transitions.start(
            node.label,
            "alpha",
            self.label_opacity(node.datum),
            self.chart.transition_duration,
        )

    def update_labels(self, node) -> None:
        if not self.render_label or node.label is None:
            return
        node.label.set_text(self.label_text(node.datum))
        self.chart.transitions.start(
            node.label,
            "alpha",
            self.label_opacity(node.datum),
            self.chart.transition_duration,
        )

    # -------- Titles --------
    def render_titles(self, node) -> None:
        """Create the node's hover title if missing."""
        if not self.render_title or node.title is not None:
            return
        node.title = self.chart.surface.annotate(
            self.title_text(node.datum),
            xy=(0.0, 0.0),
            xycoords=node.transform,
            xytext=(10, 10),
            textcoords="offset points",
            fontsize=self.label_fontsize,
            bbox={"boxstyle": "round", "fc": "lightyellow", "alpha": 0.9},
            zorder=5,
            visible=False,
        )
        node.title.set_gid(f"title {node.token}")

    def update_titles(self, node) -> None:
        if not self.render_title or node.title is None:
            return
        node.title.set_text(self.title_text(node.datum))
