#!/usr/bin/env python3
# tab-width:4

from __future__ import annotations

import logging

from matplotlib.patches import Rectangle

from .errors import ConfigurationError

logger = logging.getLogger(__name__)

DEBUG_GROUP_GID = "debug"


class DiagnosticOverlay:
    """
    Development readout of the pointer position in surface coordinates.

    Enabling adds a text label and a transparent full-surface capture
    rectangle; pointer motion over the surface writes "x, y" into the
    label. Disabling removes every artist tagged as diagnostic.
    """

    def __init__(self, chart):
        self.chart = chart
        self.text = None
        self.capture = None
        self._cid = None

    @property
    def enabled(self) -> bool:
        return self.text is not None

    def set_debug(self, enabled: bool) -> None:
        if enabled:
            self._enable()
        else:
            self._disable()

    def _enable(self) -> None:
        if self.enabled:
            return

        ax = self.chart.surface
        if ax is None:
            raise ConfigurationError("No drawing surface attached; cannot enable debug")

        self.text = ax.text(
            10,
            20,
            "",
            color="red",
            fontsize=9,
            zorder=10,
        )
        self.text.set_gid(DEBUG_GROUP_GID)

        self.capture = Rectangle(
            (0.0, 0.0),
            1.0,
            1.0,
            transform=ax.transAxes,
            facecolor="none",
            edgecolor="none",
            zorder=9,
        )
        self.capture.set_gid(DEBUG_GROUP_GID)
        ax.add_artist(self.capture)

        self._cid = ax.figure.canvas.mpl_connect(
            "motion_notify_event", self.on_mouse_move
        )
        logger.debug("Diagnostic overlay enabled")

    def _disable(self) -> None:
        ax = self.chart.surface
        if ax is not None:
            for artist in list(ax.get_children()):
                if artist.get_gid() == DEBUG_GROUP_GID:
                    artist.remove()
            if self._cid is not None:
                ax.figure.canvas.mpl_disconnect(self._cid)
        self._cid = None
        self.text = None
        self.capture = None

    # ---------- Matplotlib callbacks ----------
    def on_mouse_move(self, event):
        if self.text is None or event.inaxes is not self.chart.surface:
            return
        if event.xdata is None or event.ydata is None:
            return
        self.text.set_text(f"{event.xdata:g}, {event.ydata:g}")
        self.chart.surface.figure.canvas.draw_idle()
