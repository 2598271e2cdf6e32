"""Utility helpers for pyhdrio."""

from __future__ import annotations

from .optional_deps import optional_import, require
from .param_check import check_parameter

__all__ = [
    "check_parameter",
    "optional_import",
    "require",
]
