#!/usr/bin/env python3
# tab-width:4

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

import numpy as np
from matplotlib.colors import to_rgba

logger = logging.getLogger(__name__)


def _get_alpha(artist) -> float:
    alpha = artist.get_alpha()
    return 1.0 if alpha is None else float(alpha)


# property name -> (getter, setter)
PROPERTY_ACCESSORS: dict[str, tuple[Callable, Callable]] = {
    "radius": (
        lambda artist: float(artist.get_radius()),
        lambda artist, value: artist.set_radius(float(value)),
    ),
    "facecolor": (
        lambda artist: to_rgba(artist.get_facecolor()),
        lambda artist, value: artist.set_facecolor(tuple(float(v) for v in value)),
    ),
    "alpha": (
        _get_alpha,
        lambda artist, value: artist.set_alpha(float(value)),
    ),
}


def ease_cubic_in_out(t: float) -> float:
    """Cubic in/out easing over t in [0, 1]."""
    t = min(max(t, 0.0), 1.0)
    if t < 0.5:
        return 4.0 * t * t * t
    return 1.0 - ((-2.0 * t + 2.0) ** 3) / 2.0


def _normalize_value(
    prop: str,
    value: Any,
):
    if prop == "facecolor":
        return np.asarray(to_rgba(value), dtype=np.float64)
    return np.asarray(float(value), dtype=np.float64)


@dataclass
class Transition:
    """One in-flight interpolation of a single artist property."""

    artist: Any
    prop: str
    start: np.ndarray
    end: np.ndarray
    duration: float  # seconds
    started_at: float

    def value_at(self, now: float) -> np.ndarray:
        t = (now - self.started_at) / self.duration if self.duration > 0 else 1.0
        k = ease_cubic_in_out(t)
        return self.start + (self.end - self.start) * k

    def is_done(self, now: float) -> bool:
        return now - self.started_at >= self.duration


class TransitionManager:
    """
    Fire-and-forget timed property interpolation for matplotlib artists.

    Callers only issue targets; nothing is awaited or reported back.
    Starting a transition on an (artist, property) pair that is already
    animating replaces it, beginning from the artist's current value, so
    the latest write always wins.

    Progress is made by step(), called from a timer (a canvas timer via
    attach_canvas(), or a Qt timer owned by the viewer). flush() jumps
    everything to its end value.
    """

    def __init__(
        self,
        clock: Callable[[], float] = time.monotonic,
        on_frame: None | Callable[[], None] = None,
    ):
        """
        Args:
            clock: Monotonic time source in seconds
            on_frame: Called after each step that changed an artist
        """
        self.clock = clock
        self.on_frame = on_frame
        self._active: dict[tuple[int, str], Transition] = {}
        self._timer = None
        self._canvas_on_frame = None

    @property
    def active_count(self) -> int:
        return len(self._active)

    def is_animating(
        self,
        artist,
        prop: None | str = None,
    ) -> bool:
        """Check whether an artist (or one of its properties) is animating."""
        for (artist_id, p), _ in self._active.items():
            if artist_id == id(artist) and (prop is None or p == prop):
                return True
        return False

    def target_of(
        self,
        artist,
        prop: str,
    ):
        """End value of the in-flight transition, or None."""
        transition = self._active.get((id(artist), prop))
        if transition is None:
            return None
        if prop == "facecolor":
            return tuple(float(v) for v in transition.end)
        return float(transition.end)

    def attach_canvas(
        self,
        canvas,
        interval_ms: int = 16,
    ) -> None:
        """Drive step() from a matplotlib canvas timer."""
        if self._timer is not None:
            self._timer.stop()
        self._timer = canvas.new_timer(interval=interval_ms)
        self._timer.add_callback(self._on_timer)
        # Only replace a frame callback that came from a previous canvas
        if self.on_frame is None or self.on_frame == self._canvas_on_frame:
            self.on_frame = canvas.draw_idle
        self._canvas_on_frame = canvas.draw_idle

    def _on_timer(self):
        if self.step() == 0 and self._timer is not None:
            self._timer.stop()

    def start(
        self,
        artist,
        prop: str,
        end: Any,
        duration_ms: float,
        start: Any = None,
    ) -> None:
        """
        Start interpolating artist.prop towards end.

        Args:
            artist: Matplotlib artist supporting prop
            prop: One of PROPERTY_ACCESSORS
            end: Target value
            duration_ms: Duration in milliseconds; <= 0 applies end immediately
            start: Starting value (defaults to the artist's current value)
        """
        if prop not in PROPERTY_ACCESSORS:
            raise ValueError(f"Unknown transition property: {prop}")
        getter, setter = PROPERTY_ACCESSORS[prop]
        key = (id(artist), prop)

        end_value = _normalize_value(prop, end)

        if duration_ms is None or duration_ms <= 0:
            self._active.pop(key, None)
            setter(artist, end_value)
            return

        if start is None:
            start_value = _normalize_value(prop, getter(artist))
        else:
            start_value = _normalize_value(prop, start)
            setter(artist, start_value)

        self._active[key] = Transition(
            artist=artist,
            prop=prop,
            start=start_value,
            end=end_value,
            duration=float(duration_ms) / 1000.0,
            started_at=self.clock(),
        )

        if self._timer is not None:
            self._timer.start()

    def cancel(self, artist) -> None:
        """Drop every transition on artist, leaving its current value."""
        for key in [k for k in self._active if k[0] == id(artist)]:
            del self._active[key]

    def step(self, now: None | float = None) -> int:
        """
        Advance every transition to time now.

        Returns:
            Number of transitions still in flight
        """
        if not self._active:
            return 0

        now = self.clock() if now is None else now
        for key, transition in list(self._active.items()):
            _, setter = PROPERTY_ACCESSORS[transition.prop]
            if transition.is_done(now):
                setter(transition.artist, transition.end)
                del self._active[key]
            else:
                setter(transition.artist, transition.value_at(now))

        if self.on_frame is not None:
            self.on_frame()
        return len(self._active)

    def flush(self) -> None:
        """Apply every pending end value immediately."""
        if not self._active:
            return
        logger.debug("Flushing %d transition(s)", len(self._active))
        for transition in self._active.values():
            _, setter = PROPERTY_ACCESSORS[transition.prop]
            setter(transition.artist, transition.end)
        self._active.clear()
