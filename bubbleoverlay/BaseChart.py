#!/usr/bin/env python3
# tab-width:4
# pylint: disable=no-name-in-module

from __future__ import annotations

import logging
from collections.abc import Callable
from collections.abc import Iterable
from typing import Any

from matplotlib.axes import Axes
from matplotlib.colors import to_rgba
from PyQt6.QtCore import QObject
from PyQt6.QtCore import pyqtSignal

from .ColorManager import ColorManager
from .errors import ConfigurationError
from .TransitionManager import TransitionManager

logger = logging.getLogger(__name__)

DEFAULT_TRANSITION_DURATION = 750  # ms
SELECTED_EDGE_COLOR = "#cccccc"
SELECTED_EDGE_WIDTH = 3.0
DESELECTED_ALPHA = 0.5


def default_key_accessor(datum):
    return datum["key"]


def default_value_accessor(datum):
    return datum["value"]


class ChartSignals(QObject):
    """Signal hub for chart lifecycle and selection events."""

    filtered = pyqtSignal(object)  # toggled filter key
    rendered = pyqtSignal()
    redrawn = pyqtSignal()
    pointsReset = pyqtSignal()


class BaseChart:
    """
    Chart plumbing shared by overlay charts.

    Holds the drawing surface, the dataset and its accessors, the color
    function, the filter set used for selection, and the transition
    manager. Subclasses implement _do_render() and _do_redraw() and
    expose their nodes through _selectable_nodes() for the fade pass.
    """

    def __init__(self, surface: None | Axes = None):
        self.signals = ChartSignals()
        self.transitions = TransitionManager()
        self.color_manager = ColorManager()

        self.surface: None | Axes = None
        self._data_source: Callable[[], Iterable[Any]] | Iterable[Any] = ()
        self.key_accessor: Callable[[Any], Any] = default_key_accessor
        self.value_accessor: Callable[[Any], Any] = default_value_accessor
        self.color_accessor: None | Callable[[Any], Any] = None

        self.transition_duration: float = DEFAULT_TRANSITION_DURATION
        self._width: None | float = None
        self._height: None | float = None

        self.filters: list[Any] = []

        if surface is not None:
            self.set_surface(surface)

    # ===== CONFIGURATION =====

    def set_surface(self, surface: Axes):
        """Attach the existing matplotlib Axes the overlay draws on."""
        if not isinstance(surface, Axes):
            raise TypeError(
                f"surface must be a matplotlib Axes, got {type(surface).__name__}"
            )
        self.surface = surface
        self.transitions.attach_canvas(surface.figure.canvas)
        return self

    def set_data(self, source: Callable[[], Iterable[Any]] | Iterable[Any]):
        """
        Set the dataset.

        Args:
            source: Sequence of datum records, or a zero-argument callable
                    returning one (called on every render/redraw)
        """
        self._data_source = source
        return self

    def set_key_accessor(self, accessor: Callable[[Any], Any]):
        self.key_accessor = accessor
        return self

    def set_value_accessor(self, accessor: Callable[[Any], Any]):
        self.value_accessor = accessor
        return self

    def set_color_accessor(self, accessor: Callable[[Any], Any]):
        self.color_accessor = accessor
        return self

    def set_colors(self, color_manager: ColorManager):
        self.color_manager = color_manager
        return self

    def set_transition_duration(self, duration_ms: float):
        if duration_ms < 0:
            raise ConfigurationError(
                f"transition duration must be >= 0, got {duration_ms}"
            )
        self.transition_duration = duration_ms
        return self

    def set_width(self, width: None | float):
        self._width = width
        return self

    def set_height(self, height: None | float):
        self._height = height
        return self

    @property
    def width(self) -> float:
        """Configured width, or the x extent of the surface."""
        if self._width is not None:
            return float(self._width)
        if self.surface is None:
            return 0.0
        x0, x1 = self.surface.get_xlim()
        return abs(x1 - x0)

    @property
    def height(self) -> float:
        """Configured height, or the y extent of the surface."""
        if self._height is not None:
            return float(self._height)
        if self.surface is None:
            return 0.0
        y0, y1 = self.surface.get_ylim()
        return abs(y1 - y0)

    # ===== DATA =====

    def data(self) -> list[Any]:
        """The current dataset, re-read from the source."""
        source = self._data_source
        if callable(source):
            source = source()
        return list(source)

    def get_color(self, datum) -> tuple[float, float, float, float]:
        accessor = self.color_accessor or self.key_accessor
        return self.color_manager.make_color(accessor(datum))

    # ===== FILTERS / SELECTION =====

    def has_filter(self, key: Any = None) -> bool:
        if key is None:
            return len(self.filters) > 0
        return key in self.filters

    def filter(self, key: Any):
        """Toggle key in the filter set."""
        if key in self.filters:
            self.filters.remove(key)
        else:
            self.filters.append(key)
        self.signals.filtered.emit(key)
        return self

    def filter_all(self):
        """Clear every filter."""
        self.filters.clear()
        self.signals.filtered.emit(None)
        return self

    def on_click(self, datum) -> None:
        """Selection toggle for a clicked bubble."""
        key = self.key_accessor(datum)
        logger.debug("Bubble clicked: %r", key)
        self.filter(key)
        self.redraw()

    def is_selected_node(self, datum) -> bool:
        if datum is None:
            return False
        return self.has_filter(self.key_accessor(datum))

    def _selectable_nodes(self) -> list:
        return []

    def highlight_selected(self, node) -> None:
        node.state = "selected"
        node.bubble.set_edgecolor(to_rgba(SELECTED_EDGE_COLOR))
        node.bubble.set_linewidth(SELECTED_EDGE_WIDTH)
        node.bubble.set_alpha(1.0)

    def fade_deselected(self, node) -> None:
        node.state = "deselected"
        node.bubble.set_edgecolor("none")
        node.bubble.set_linewidth(0.0)
        node.bubble.set_alpha(DESELECTED_ALPHA)

    def reset_highlight(self, node) -> None:
        node.state = None
        node.bubble.set_edgecolor("none")
        node.bubble.set_linewidth(0.0)
        node.bubble.set_alpha(1.0)

    def fade_deselected_area(self) -> None:
        """Post-pass marking bubbles selected/deselected from the filters."""
        nodes = [n for n in self._selectable_nodes() if n.bubble is not None]
        if self.has_filter():
            for node in nodes:
                if self.is_selected_node(node.datum):
                    self.highlight_selected(node)
                else:
                    self.fade_deselected(node)
        else:
            for node in nodes:
                self.reset_highlight(node)

    # ===== LIFECYCLE =====

    def _do_render(self) -> None:
        raise NotImplementedError

    def _do_redraw(self) -> None:
        raise NotImplementedError

    def _request_draw(self) -> None:
        if self.surface is not None:
            self.surface.figure.canvas.draw_idle()

    def render(self):
        """Full render: (re)build the overlay."""
        if self.surface is None:
            raise ConfigurationError(
                "No drawing surface attached; call set_surface(ax) before render()"
            )
        self._do_render()
        self.signals.rendered.emit()
        self._request_draw()
        return self

    def redraw(self):
        """Incremental redraw of existing visuals."""
        self._do_redraw()
        self.signals.redrawn.emit()
        self._request_draw()
        return self
