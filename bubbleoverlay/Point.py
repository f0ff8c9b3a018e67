#!/usr/bin/env python3
# tab-width:4

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Point:
    """Named anchor on the drawing surface, in surface-local coordinates."""

    name: str
    x: float
    y: float
