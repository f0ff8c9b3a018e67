from __future__ import annotations

import matplotlib

matplotlib.use("Agg")

import numpy as np
import pytest
from matplotlib.backends.backend_agg import FigureCanvasAgg
from matplotlib.figure import Figure

from bubbleoverlay import BubbleOverlayChart

ROWS = [
    {"key": "Toronto", "value": 50},
    {"key": "Montreal", "value": 25},
    {"key": "Ottawa", "value": 0},
]


@pytest.fixture
def surface():
    """A 400x300 'map' image on an Agg figure."""
    fig = Figure(figsize=(4, 3), dpi=100)
    FigureCanvasAgg(fig)
    ax = fig.add_axes([0.0, 0.0, 1.0, 1.0])
    ax.imshow(np.zeros((300, 400, 3)))
    ax.set_axis_off()
    return ax


@pytest.fixture
def rows():
    return [dict(row) for row in ROWS]


@pytest.fixture
def chart(surface, rows):
    return (
        BubbleOverlayChart(surface)
        .set_transition_duration(0)
        .set_data(lambda: rows)
    )


def bubbles_on(ax) -> list:
    return [p for p in ax.patches if (p.get_gid() or "").startswith("bubble ")]


def texts_on(
    ax,
    prefix: str,
) -> list:
    return [t for t in ax.texts if (t.get_gid() or "").startswith(prefix)]
