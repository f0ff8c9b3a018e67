#!/usr/bin/env python3
# tab-width:4

from __future__ import annotations

import logging
from collections.abc import Callable
from collections.abc import Iterable
from typing import Any

from matplotlib.axes import Axes

from .BaseChart import BaseChart
from .BubbleNode import BubbleNode
from .BubbleSizer import BubbleSizer
from .DataBinder import map_data
from .DiagnosticOverlay import DiagnosticOverlay
from .errors import ConfigurationError
from .LabelManager import LabelManager
from .NodeReconciler import NodeContainer
from .NodeReconciler import NodeReconciler
from .Point import Point
from .PointRegistry import PointRegistry
from .RadiusScalePolicy import compute_radius_range
from .utils import name_to_id

logger = logging.getLogger(__name__)


class BubbleOverlayChart(BaseChart):
    """
    Bubbles at named anchor points on an existing drawing surface.

    Unlike a regular bubble chart the overlay does not lay anything out:
    the caller registers named points (for example city locations on a map
    image) and the chart draws a bubble at each point whose name matches a
    dataset key, sized by the value and colored by category.

    Lifecycle:
    - render(): full pass; creates the node container once, recomputes the
      radius range and (re)initializes every bubble
    - redraw(): incremental pass; retargets radius and fill of existing
      bubbles, never touches the container or radius range
    - reset(): strips every registered point's visuals and clears points

    Usage:
        fig, ax = plt.subplots()
        ax.imshow(map_image)
        chart = BubbleOverlayChart(ax)
        chart.set_data(rows).add_point("Toronto", 410, 310).render()
    """

    def __init__(self, surface: None | Axes = None):
        super().__init__(surface)

        self.registry = PointRegistry()
        self.sizer = BubbleSizer(self)
        self.label_manager = LabelManager(self)
        self.reconciler = NodeReconciler(self)
        self.diagnostics = DiagnosticOverlay(self)

        self.container: None | NodeContainer = None
        self.radius_range: None | tuple[float, float] = None

        self._min_bubble_r: None | float = None
        self._max_bubble_r: None | float = None

    # ===== POINTS =====

    def add_point(
        self,
        name: str,
        x: float,
        y: float,
    ) -> BubbleOverlayChart:
        """
        Register an anchor point.

        name should match a dataset key; x and y are surface coordinates.
        """
        self.registry.add_point(name, x, y)
        return self

    def add_points(self, points: Iterable[Any]) -> BubbleOverlayChart:
        """Register a batch of {name, x, y} records (see PointRegistry.add_points)."""
        self.registry.add_points(points)
        return self

    @property
    def points(self) -> list[Point]:
        return self.registry.points

    def reset(self) -> BubbleOverlayChart:
        """
        Remove bubble, label and title of every registered point and clear
        the points. Emptied nodes stay in the container and are reused if a
        point with the same name is registered again.
        """
        if self.container is None:
            self.registry.reset()
        else:
            data_map = map_data(self.data(), self.key_accessor)

            def _strip(point: Point) -> None:
                node = self.reconciler.resolve_node(point, data_map)
                self.reconciler.strip_node(node)

            self.registry.reset(_strip)

        self.signals.pointsReset.emit()
        self._request_draw()
        return self

    # ===== RADIUS OVERRIDES =====

    @property
    def min_bubble_r(self) -> None | float:
        return self._min_bubble_r

    def set_min_bubble_r(self, value: None | float) -> BubbleOverlayChart:
        """Minimum bubble radius override (None to unset)."""
        self._min_bubble_r = value
        return self

    @property
    def max_bubble_r(self) -> None | float:
        return self._max_bubble_r

    def set_max_bubble_r(self, value: None | float) -> BubbleOverlayChart:
        """Maximum bubble radius override (None to unset)."""
        self._max_bubble_r = value
        return self

    def set_max_bubble_relative_size(self, fraction: float) -> BubbleOverlayChart:
        self.sizer.max_bubble_relative_size = fraction
        return self

    def set_r_domain(self, domain: tuple[float, float]) -> BubbleOverlayChart:
        self.sizer.r.set_domain(domain)
        return self

    def set_elastic_radius(self, enabled: bool) -> BubbleOverlayChart:
        self.sizer.elastic_radius = enabled
        return self

    def set_radius_value_accessor(
        self, accessor: Callable[[Any], Any]
    ) -> BubbleOverlayChart:
        self.sizer.radius_value_accessor = accessor
        return self

    # ===== LABELS / TITLES =====

    def set_render_label(self, enabled: bool) -> BubbleOverlayChart:
        self.label_manager.render_label = enabled
        return self

    def set_render_title(self, enabled: bool) -> BubbleOverlayChart:
        self.label_manager.render_title = enabled
        return self

    def set_label(self, label_function: Callable[[Any], Any]) -> BubbleOverlayChart:
        self.label_manager.label_function = label_function
        return self

    def set_title(self, title_function: Callable[[Any], Any]) -> BubbleOverlayChart:
        self.label_manager.title_function = title_function
        return self

    def set_min_radius_with_label(self, radius: float) -> BubbleOverlayChart:
        self.label_manager.min_radius_with_label = radius
        return self

    # ===== DIAGNOSTICS =====

    def debug(self, flag: bool) -> BubbleOverlayChart:
        """Toggle the pointer position readout."""
        self.diagnostics.set_debug(flag)
        self._request_draw()
        return self

    # ===== RENDERING =====

    def _ensure_container(self) -> NodeContainer:
        if self.container is None:
            self.container = NodeContainer(self.surface, on_click=self.on_click)
        return self.container

    def _set_radius_range(self) -> None:
        self.radius_range = compute_radius_range(
            self._min_bubble_r,
            self._max_bubble_r,
            self.width,
            self.sizer.max_bubble_relative_size,
            self.sizer.min_radius,
        )
        self.sizer.set_range(self.radius_range)

    def node_for(self, name: str) -> None | BubbleNode:
        """The node a point name resolves to, if it exists yet."""
        if self.container is None:
            return None
        return self.container.find(name_to_id(name))

    def nodes(self) -> list[BubbleNode]:
        if self.container is None:
            return []
        return self.container.nodes()

    def _selectable_nodes(self) -> list[BubbleNode]:
        return self.nodes()

    def _do_render(self) -> None:
        self._ensure_container()
        self._set_radius_range()
        self.sizer.calculate_radius_domain()

        data_map = map_data(self.data(), self.key_accessor)
        for point in self.registry:
            node = self.reconciler.resolve_node(point, data_map)
            self.reconciler.initialize_bubble(node)

        self.fade_deselected_area()
        logger.debug(
            "Rendered %d point(s) into %d node(s), radius range %s",
            len(self.registry),
            len(self.container),
            self.radius_range,
        )

    def _do_redraw(self) -> None:
        if self.container is None:
            raise ConfigurationError("redraw() called before the first render()")

        data_map = map_data(self.data(), self.key_accessor)
        for point in self.registry:
            node = self.reconciler.resolve_node(point, data_map)
            self.reconciler.update_bubble(node)

        self.fade_deselected_area()
        logger.debug("Redrew %d point(s)", len(self.registry))
