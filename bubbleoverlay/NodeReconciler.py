#!/usr/bin/env python3
# tab-width:4

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from matplotlib.axes import Axes
from matplotlib.patches import Circle
from matplotlib.transforms import Affine2D

from .BubbleNode import BubbleNode
from .Point import Point
from .utils import name_to_id

logger = logging.getLogger(__name__)

BUBBLE_OVERLAY_GID = "bubble-overlay"


class NodeContainer:
    """
    The single group holding every bubble node of one chart.

    Nodes are indexed by identity token. The container also owns the
    canvas callbacks its nodes need: a press on a bubble is forwarded
    to on_click, and pointer motion shows the title of the hovered bubble.
    """

    def __init__(
        self,
        ax: Axes,
        on_click: None | Callable[[Any], None] = None,
    ):
        self.ax = ax
        self.gid = BUBBLE_OVERLAY_GID
        self.on_click = on_click
        self._nodes: dict[str, BubbleNode] = {}

        canvas = ax.figure.canvas
        self._cids = [
            canvas.mpl_connect("button_press_event", self._on_press),
            canvas.mpl_connect("motion_notify_event", self._on_motion),
        ]

    def __len__(self) -> int:
        return len(self._nodes)

    def find(self, token: str) -> None | BubbleNode:
        """Look up a node by token; None when absent."""
        return self._nodes.get(token)

    def create(
        self,
        token: str,
        x: float,
        y: float,
    ) -> BubbleNode:
        """Create a node translated to (x, y) and index it by token."""
        transform = Affine2D().translate(x, y) + self.ax.transData
        node = BubbleNode(
            token=token,
            x=x,
            y=y,
            transform=transform,
        )
        self._nodes[token] = node
        logger.debug("Created node %r at (%s, %s)", token, x, y)
        return node

    def nodes(self) -> list[BubbleNode]:
        return list(self._nodes.values())

    def node_for_artist(self, artist) -> None | BubbleNode:
        for node in self._nodes.values():
            if artist is node.bubble:
                return node
        return None

    def node_at(self, event) -> None | BubbleNode:
        """Topmost node whose bubble contains the mouse event."""
        for artist in reversed(self.ax.get_children()):
            node = self.node_for_artist(artist)
            if node is None:
                continue
            hit, _ = artist.contains(event)
            if hit:
                return node
        return None

    # ---------- Matplotlib callbacks ----------
    def _on_press(self, event):
        if event.inaxes is not self.ax or self.on_click is None:
            return
        node = self.node_at(event)
        if node is None:
            return
        self.on_click(node.datum)

    def _on_motion(self, event):
        if event.inaxes is not self.ax:
            return
        changed = False
        for node in self._nodes.values():
            if node.title is None or node.bubble is None:
                continue
            hovered, _ = node.bubble.contains(event)
            if node.title.get_visible() != hovered:
                node.title.set_visible(hovered)
                changed = True
        if changed:
            self.ax.figure.canvas.draw_idle()

    def disconnect(self) -> None:
        canvas = self.ax.figure.canvas
        for cid in self._cids:
            canvas.mpl_disconnect(cid)
        self._cids = []


class NodeReconciler:
    """
    Matches registered points against the current data map.

    Every point resolves to one persistent node (created on first use) and
    gets the current datum bound to it; bubbles are created or retargeted
    and label/title work is delegated to the chart's label manager.
    """

    def __init__(self, chart):
        """
        Args:
            chart: Owning overlay chart
        """
        self.chart = chart

    @property
    def container(self) -> NodeContainer:
        return self.chart.container

    def resolve_node(
        self,
        point: Point,
        data_map: dict[Any, Any],
    ) -> BubbleNode:
        """
        Find or create the node for point and bind its datum.

        The datum binding is overwritten on every call, with None when the
        dataset has no entry for the point's name. An existing node is
        never moved.
        """
        token = name_to_id(point.name)
        node = self.container.find(token)
        if node is None:
            node = self.container.create(token, point.x, point.y)
        node.datum = data_map.get(point.name)
        return node

    def _create_bubble(self, node: BubbleNode) -> None:
        bubble = Circle(
            (0.0, 0.0),
            radius=0.0,
            transform=node.transform,
            facecolor=self.chart.get_color(node.datum),
            edgecolor="none",
            linewidth=0.0,
            zorder=3,
        )
        bubble.set_gid(f"bubble {node.token}")
        self.chart.surface.add_artist(bubble)
        node.bubble = bubble

    def initialize_bubble(self, node: BubbleNode) -> None:
        """Full-render path: create the bubble if needed and grow it."""
        if node.bubble is None:
            self._create_bubble(node)

        self.chart.transitions.start(
            node.bubble,
            "radius",
            self.chart.sizer.bubble_r(node.datum),
            self.chart.transition_duration,
        )

        self.chart.label_manager.render_labels(node)
        self.chart.label_manager.render_titles(node)

    def update_bubble(self, node: BubbleNode) -> None:
        """Redraw path: retarget radius and fill of the node's bubble."""
        if node.bubble is None:
            # Point registered after the last full render
            self.initialize_bubble(node)
            return

        self.chart.transitions.start(
            node.bubble,
            "radius",
            self.chart.sizer.bubble_r(node.datum),
            self.chart.transition_duration,
        )
        self.chart.transitions.start(
            node.bubble,
            "facecolor",
            self.chart.get_color(node.datum),
            self.chart.transition_duration,
        )

        self.chart.label_manager.update_labels(node)
        self.chart.label_manager.update_titles(node)

    def strip_node(self, node: BubbleNode) -> None:
        """Remove the bubble, label and title, leaving an empty shell."""
        for attr in ("bubble", "label", "title"):
            artist = getattr(node, attr)
            if artist is None:
                continue
            self.chart.transitions.cancel(artist)
            artist.remove()
            setattr(node, attr, None)
        node.state = None
