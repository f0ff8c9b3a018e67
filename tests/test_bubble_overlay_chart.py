from __future__ import annotations

import numpy as np
import pytest
from matplotlib.backend_bases import MouseEvent

from bubbleoverlay import BubbleOverlayChart
from bubbleoverlay import ConfigurationError
from bubbleoverlay.BaseChart import DESELECTED_ALPHA
from tests.conftest import bubbles_on
from tests.conftest import texts_on


def _points(chart: BubbleOverlayChart) -> BubbleOverlayChart:
    return (
        chart.add_point("Toronto", 300, 200)
        .add_point("Montreal", 350, 150)
        .add_point("Ottawa", 320, 170)
    )


# ---------- lifecycle errors ----------


def test_render_without_surface_raises() -> None:
    chart = BubbleOverlayChart().add_point("Toronto", 1, 1)
    with pytest.raises(ConfigurationError):
        chart.render()


def test_redraw_before_render_raises(chart) -> None:
    _points(chart)
    with pytest.raises(ConfigurationError):
        chart.redraw()


def test_set_surface_rejects_non_axes() -> None:
    with pytest.raises(TypeError):
        BubbleOverlayChart().set_surface(object())


def test_negative_transition_duration_rejected(chart) -> None:
    with pytest.raises(ConfigurationError):
        chart.set_transition_duration(-1)


# ---------- placement and identity ----------


def test_node_is_placed_at_its_point_and_redraw_does_not_move_it(
    chart,
    surface,
) -> None:
    chart.set_data([{"key": "x", "value": 10}]).add_point("x", 10, 20).render()

    node = chart.node_for("x")
    assert node.translation == (10, 20)
    assert np.allclose(
        node.transform.transform((0.0, 0.0)),
        surface.transData.transform((10.0, 20.0)),
    )

    chart.redraw()
    assert chart.node_for("x") is node
    assert node.translation == (10, 20)


def test_render_then_redraw_keeps_one_container_and_same_nodes(
    chart,
    surface,
) -> None:
    _points(chart).render()
    container = chart.container
    toronto = chart.node_for("Toronto")

    chart.redraw()
    chart.render()

    assert chart.container is container
    assert chart.node_for("Toronto") is toronto
    assert len(container) == 3
    assert len(bubbles_on(surface)) == 3


def test_node_tokens_come_from_names(chart) -> None:
    chart.set_data([{"key": "St. John's", "value": 5}])
    chart.add_point("St. John's", 5, 5).render()
    assert chart.container.find("st_johns") is chart.node_for("St. John's")


def test_duplicate_names_share_the_first_node(chart, surface) -> None:
    chart.add_point("Toronto", 10, 10).add_point("Toronto", 90, 90).render()

    assert len(chart.points) == 2
    assert len(chart.container) == 1
    assert chart.node_for("Toronto").translation == (10, 10)
    assert len(bubbles_on(surface)) == 1


# ---------- sizing ----------


def test_radius_follows_value_through_scale(chart) -> None:
    _points(chart).render()

    # width 400 -> range (10, 120) over the default domain (0, 100)
    assert chart.radius_range == pytest.approx((10, 120))
    assert chart.sizer.r.range == pytest.approx((10, 120))
    assert chart.node_for("Toronto").bubble.get_radius() == pytest.approx(65)
    assert chart.node_for("Montreal").bubble.get_radius() == pytest.approx(37.5)
    assert chart.node_for("Ottawa").bubble.get_radius() == 0


def test_radius_overrides_feed_the_range(chart) -> None:
    chart.set_min_bubble_r(5)
    _points(chart).render()
    assert chart.radius_range == pytest.approx((5, 120))

    chart.set_min_bubble_r(10).set_max_bubble_r(30).render()
    assert chart.radius_range == pytest.approx((10, 30))


def test_min_and_max_getters_are_independent(chart) -> None:
    chart.set_min_bubble_r(5).set_max_bubble_r(50)
    assert chart.min_bubble_r == 5
    assert chart.max_bubble_r == 50


def test_redraw_keeps_radius_range_and_follows_data(chart, rows) -> None:
    _points(chart).render()
    chart.set_min_bubble_r(30)
    rows[0]["value"] = 100

    chart.redraw()

    assert chart.radius_range == pytest.approx((10, 120))
    assert chart.node_for("Toronto").bubble.get_radius() == pytest.approx(120)


def test_elastic_radius_uses_data_extent(chart) -> None:
    chart.set_elastic_radius(True)
    _points(chart).render()
    assert chart.sizer.r.domain == (0, 50)
    assert chart.node_for("Toronto").bubble.get_radius() == pytest.approx(120)


def test_point_without_datum_raises(chart) -> None:
    chart.add_point("Nowhere", 1, 1)
    with pytest.raises(TypeError):
        chart.render()


# ---------- redraw ----------


def test_redraw_creates_bubble_for_point_added_after_render(chart) -> None:
    chart.add_point("Toronto", 300, 200).render()
    chart.add_point("Montreal", 350, 150)

    chart.redraw()

    node = chart.node_for("Montreal")
    assert node.bubble is not None
    assert node.bubble.get_radius() == pytest.approx(37.5)
    assert node.label is not None


def test_redraw_starts_one_label_fade_for_a_new_bubble(chart, monkeypatch) -> None:
    chart.add_point("Toronto", 300, 200).render()
    chart.add_point("Montreal", 350, 150)

    started = []
    start = chart.transitions.start

    def _record(artist, prop, *args, **kwargs):
        started.append((artist, prop))
        return start(artist, prop, *args, **kwargs)

    monkeypatch.setattr(chart.transitions, "start", _record)
    chart.redraw()

    label = chart.node_for("Montreal").label
    assert started.count((label, "alpha")) == 1


# ---------- reset ----------


def test_reset_strips_visuals_and_keeps_shells(chart, surface) -> None:
    _points(chart).render()
    container = chart.container

    chart.reset()

    assert len(chart.points) == 0
    assert chart.container is container
    assert len(container) == 3
    assert all(node.is_empty() for node in container.nodes())
    assert bubbles_on(surface) == []
    assert texts_on(surface, "label ") == []
    assert texts_on(surface, "title ") == []

    chart.render()
    assert bubbles_on(surface) == []


def test_reset_shell_is_reused_at_its_original_position(chart) -> None:
    _points(chart).render()
    shell = chart.node_for("Toronto")
    chart.reset()

    chart.add_point("Toronto", 99, 99).render()

    assert chart.node_for("Toronto") is shell
    assert shell.translation == (300, 200)
    assert shell.bubble is not None


def test_reset_before_render_only_clears_points() -> None:
    chart = BubbleOverlayChart().add_point("a", 1, 1)
    chart.reset()
    assert chart.points == []
    assert chart.container is None


# ---------- labels / titles ----------


def test_labels_show_key_and_fade_for_small_bubbles(chart) -> None:
    _points(chart).render()

    toronto = chart.node_for("Toronto")
    assert toronto.label.get_text() == "Toronto"
    assert toronto.label.get_alpha() == 1.0
    assert chart.node_for("Ottawa").label.get_alpha() == 0.0


def test_titles_are_hidden_key_value_annotations(chart) -> None:
    _points(chart).render()
    title = chart.node_for("Toronto").title
    assert title.get_text() == "Toronto: 50"
    assert not title.get_visible()


def test_custom_label_and_disabled_title(chart) -> None:
    chart.set_label(lambda d: d["key"].upper()).set_render_title(False)
    _points(chart).render()
    node = chart.node_for("Montreal")
    assert node.label.get_text() == "MONTREAL"
    assert node.title is None


def test_disabled_labels_are_not_created(chart, surface) -> None:
    chart.set_render_label(False)
    _points(chart).render()
    assert texts_on(surface, "label ") == []


# ---------- color / selection ----------


def test_bubble_fill_comes_from_color_function(chart) -> None:
    _points(chart).render()
    node = chart.node_for("Montreal")
    assert node.bubble.get_facecolor() == pytest.approx(chart.get_color(node.datum))


def test_click_toggles_selection_and_fades_the_rest(chart) -> None:
    _points(chart).render()
    emitted = []
    chart.signals.filtered.connect(lambda key: emitted.append(key))

    toronto = chart.node_for("Toronto")
    chart.on_click(toronto.datum)

    assert chart.filters == ["Toronto"]
    assert toronto.state == "selected"
    assert toronto.bubble.get_alpha() == 1.0
    montreal = chart.node_for("Montreal")
    assert montreal.state == "deselected"
    assert montreal.bubble.get_alpha() == DESELECTED_ALPHA

    chart.on_click(toronto.datum)

    assert chart.filters == []
    assert all(node.state is None for node in chart.nodes())
    assert emitted == ["Toronto", "Toronto"]


def _press_at(
    surface,
    x: float,
    y: float,
) -> None:
    """Send a real left-button press at data coordinates (x, y)."""
    canvas = surface.figure.canvas
    canvas.draw()
    px, py = surface.transData.transform((x, y))
    event = MouseEvent("button_press_event", canvas, px, py, button=1)
    canvas.callbacks.process("button_press_event", event)


def test_click_on_bubble_center_selects_it_once(chart, surface) -> None:
    _points(chart).render()
    emitted = []
    chart.signals.filtered.connect(lambda key: emitted.append(key))

    _press_at(surface, 300, 200)

    assert emitted == ["Toronto"]
    assert chart.filters == ["Toronto"]
    assert chart.node_for("Toronto").state == "selected"


def test_click_on_small_bubble_with_hidden_label_selects_it(chart, surface) -> None:
    chart.set_data([{"key": "Tiny", "value": 1}]).set_min_bubble_r(2)
    chart.add_point("Tiny", 100, 100)
    chart.render()
    node = chart.node_for("Tiny")
    assert node.label.get_alpha() == 0.0

    _press_at(surface, 100, 100)

    assert chart.filters == ["Tiny"]
    assert node.state == "selected"


def test_click_on_overlap_selects_topmost_bubble(chart, surface, rows) -> None:
    # Ottawa (r=21) is drawn after and inside Toronto (r=65)
    rows[2]["value"] = 10
    _points(chart).render()

    _press_at(surface, 320, 170)

    assert chart.filters == ["Ottawa"]


def test_click_outside_bubbles_does_nothing(chart, surface) -> None:
    _points(chart).render()
    _press_at(surface, 20, 280)
    assert chart.filters == []


def test_lifecycle_signals_are_emitted(chart) -> None:
    seen = []
    chart.signals.rendered.connect(lambda: seen.append("rendered"))
    chart.signals.redrawn.connect(lambda: seen.append("redrawn"))
    chart.signals.pointsReset.connect(lambda: seen.append("reset"))

    _points(chart).render().redraw().reset()

    assert seen == ["rendered", "redrawn", "reset"]


# ---------- animated transitions ----------


def test_transitions_animate_radius_towards_target(chart) -> None:
    now = [0.0]
    chart.transitions.clock = lambda: now[0]
    chart.set_transition_duration(1000)
    _points(chart).render()

    bubble = chart.node_for("Toronto").bubble
    assert bubble.get_radius() == 0
    assert chart.transitions.target_of(bubble, "radius") == pytest.approx(65)

    chart.transitions.step(0.5)
    assert bubble.get_radius() == pytest.approx(32.5)

    chart.transitions.step(1.0)
    assert bubble.get_radius() == pytest.approx(65)
    assert not chart.transitions.is_animating(bubble)
