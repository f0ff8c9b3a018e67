from __future__ import annotations

from types import SimpleNamespace

import pytest

from bubbleoverlay import BubbleOverlayChart
from bubbleoverlay import ConfigurationError
from bubbleoverlay.DiagnosticOverlay import DEBUG_GROUP_GID


def _debug_artists(ax) -> list:
    return [a for a in ax.get_children() if a.get_gid() == DEBUG_GROUP_GID]


def test_enable_is_idempotent(chart, surface) -> None:
    chart.debug(True)
    chart.debug(True)

    assert chart.diagnostics.enabled
    assert len(_debug_artists(surface)) == 2


def test_disable_removes_every_debug_artist(chart, surface) -> None:
    chart.debug(True)
    chart.debug(False)
    chart.debug(False)

    assert not chart.diagnostics.enabled
    assert _debug_artists(surface) == []


def test_pointer_motion_updates_readout(chart, surface) -> None:
    chart.debug(True)
    event = SimpleNamespace(inaxes=surface, xdata=12.5, ydata=7.0)
    chart.diagnostics.on_mouse_move(event)
    assert chart.diagnostics.text.get_text() == "12.5, 7"

    outside = SimpleNamespace(inaxes=None, xdata=1.0, ydata=1.0)
    chart.diagnostics.on_mouse_move(outside)
    assert chart.diagnostics.text.get_text() == "12.5, 7"


def test_enable_without_surface_raises() -> None:
    with pytest.raises(ConfigurationError):
        BubbleOverlayChart().debug(True)
