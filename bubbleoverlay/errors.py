#!/usr/bin/env python3
# tab-width:4

from __future__ import annotations


class BubbleOverlayError(Exception):
    """Base class for errors raised by the bubble overlay."""


class ValidationError(BubbleOverlayError, ValueError):
    """Raised when point registration input is malformed."""


class ConfigurationError(BubbleOverlayError, RuntimeError):
    """Raised when the chart is used before it is fully configured."""
