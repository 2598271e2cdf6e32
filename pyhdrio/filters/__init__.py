"""Image statistics and filters."""

from __future__ import annotations

from .autoexposure import autoexposure, luminance

__all__ = ["autoexposure", "luminance"]
