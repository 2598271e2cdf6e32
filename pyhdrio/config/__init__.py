"""Settings files and process-wide defaults."""

from __future__ import annotations

from .io import Settings, get_settings, load_config, load_settings, set_settings

__all__ = [
    "Settings",
    "get_settings",
    "load_config",
    "load_settings",
    "set_settings",
]
