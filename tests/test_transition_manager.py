from __future__ import annotations

import pytest
from matplotlib.backends.backend_agg import FigureCanvasAgg
from matplotlib.figure import Figure
from matplotlib.patches import Circle

from bubbleoverlay import TransitionManager
from bubbleoverlay.TransitionManager import ease_cubic_in_out


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def manager(clock):
    return TransitionManager(clock=clock)


def test_easing_endpoints_and_midpoint() -> None:
    assert ease_cubic_in_out(0.0) == 0.0
    assert ease_cubic_in_out(0.5) == pytest.approx(0.5)
    assert ease_cubic_in_out(1.0) == 1.0
    assert ease_cubic_in_out(2.0) == 1.0


def test_zero_duration_applies_immediately(manager) -> None:
    circle = Circle((0, 0), radius=0)
    manager.start(circle, "radius", 12, 0)
    assert circle.get_radius() == 12
    assert manager.active_count == 0


def test_step_interpolates_and_finishes(manager) -> None:
    circle = Circle((0, 0), radius=0)
    manager.start(circle, "radius", 10, 1000)

    assert manager.step(0.5) == 1
    assert circle.get_radius() == pytest.approx(5)

    assert manager.step(1.0) == 0
    assert circle.get_radius() == pytest.approx(10)
    assert not manager.is_animating(circle)


def test_latest_write_wins_from_current_value(manager, clock) -> None:
    circle = Circle((0, 0), radius=0)
    manager.start(circle, "radius", 10, 1000)
    manager.step(0.5)

    clock.now = 0.5
    manager.start(circle, "radius", 20, 1000)
    assert manager.active_count == 1
    assert manager.target_of(circle, "radius") == 20

    manager.step(1.0)
    assert circle.get_radius() == pytest.approx(12.5)


def test_explicit_start_value_is_applied(manager) -> None:
    circle = Circle((0, 0), radius=3)
    manager.start(circle, "radius", 10, 1000, start=0)
    assert circle.get_radius() == 0


def test_facecolor_interpolates_in_rgba(manager) -> None:
    circle = Circle((0, 0), radius=1, facecolor="red")
    manager.start(circle, "facecolor", "blue", 1000)
    manager.step(0.5)
    assert circle.get_facecolor() == pytest.approx((0.5, 0.0, 0.5, 1.0))


def test_flush_jumps_to_end_values(manager) -> None:
    circle = Circle((0, 0), radius=0)
    manager.start(circle, "radius", 7, 1000)
    manager.start(circle, "alpha", 0.25, 1000)

    manager.flush()

    assert circle.get_radius() == 7
    assert circle.get_alpha() == 0.25
    assert manager.active_count == 0


def test_cancel_leaves_current_value(manager) -> None:
    circle = Circle((0, 0), radius=0)
    manager.start(circle, "radius", 10, 1000)
    manager.step(0.5)

    manager.cancel(circle)
    manager.step(1.0)

    assert circle.get_radius() == pytest.approx(5)
    assert manager.target_of(circle, "radius") is None


def test_unknown_property_rejected(manager) -> None:
    with pytest.raises(ValueError):
        manager.start(Circle((0, 0)), "linewidth", 2, 100)


def test_on_frame_called_after_each_step(clock) -> None:
    frames = []
    manager = TransitionManager(clock=clock, on_frame=lambda: frames.append(1))
    manager.step(0.1)
    assert frames == []

    manager.start(Circle((0, 0)), "radius", 1, 1000)
    manager.step(0.1)
    manager.step(2.0)
    assert len(frames) == 2


def test_attach_canvas_follows_the_latest_canvas() -> None:
    first = FigureCanvasAgg(Figure())
    second = FigureCanvasAgg(Figure())
    manager = TransitionManager()

    manager.attach_canvas(first)
    manager.attach_canvas(second)

    assert manager.on_frame == second.draw_idle


def test_attach_canvas_keeps_a_caller_frame_callback() -> None:
    def frame():
        return None

    manager = TransitionManager(on_frame=frame)
    manager.attach_canvas(FigureCanvasAgg(Figure()))
    assert manager.on_frame is frame
