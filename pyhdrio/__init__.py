"""pyhdrio - float image tensors on disk, and automatic exposure.

Submodules are loaded on first attribute access so that `import pyhdrio`
does not import joblib or probe for OpenEXR until they are needed.
"""

from __future__ import annotations

from importlib import import_module
from typing import Any

__version__ = "0.1.0"

__all__ = [
    # Modules
    "config",
    "filters",
    "io",
    # Tensor
    "Tensor",
    "as_tensor",
    "float3_view",
    # Errors
    "CorruptDataError",
    "ImageIOError",
    "InvalidArgumentError",
    "PyHdrIOError",
    "UnsupportedFormatError",
    # I/O
    "load_image",
    "save_image",
    "load_pfm",
    "save_pfm",
    "load_ppm",
    "save_ppm",
    "load_exr",
    "save_exr",
    # Filters
    "autoexposure",
]


_LAZY_SUBMODULES = {
    "config",
    "filters",
    "io",
}

_LAZY_EXPORTS = {
    # Tensor
    "Tensor": ("tensor", "Tensor"),
    "as_tensor": ("tensor", "as_tensor"),
    "float3_view": ("tensor", "float3_view"),
    # Errors
    "CorruptDataError": ("errors", "CorruptDataError"),
    "ImageIOError": ("errors", "ImageIOError"),
    "InvalidArgumentError": ("errors", "InvalidArgumentError"),
    "PyHdrIOError": ("errors", "PyHdrIOError"),
    "UnsupportedFormatError": ("errors", "UnsupportedFormatError"),
    # I/O
    "load_image": ("io.image", "load_image"),
    "save_image": ("io.image", "save_image"),
    "load_pfm": ("io.pfm", "load_pfm"),
    "save_pfm": ("io.pfm", "save_pfm"),
    "load_ppm": ("io.ppm", "load_ppm"),
    "save_ppm": ("io.ppm", "save_ppm"),
    "load_exr": ("io.exr", "load_exr"),
    "save_exr": ("io.exr", "save_exr"),
    # Filters
    "autoexposure": ("filters.autoexposure", "autoexposure"),
}


def __getattr__(name: str) -> Any:  # pragma: no cover - thin delegation
    if name in _LAZY_SUBMODULES:
        module = import_module(f"{__name__}.{name}")
        globals()[name] = module
        return module

    target = _LAZY_EXPORTS.get(name)
    if target is not None:
        module_name, attr = target
        module = import_module(f"{__name__}.{module_name}")
        value = getattr(module, attr)
        globals()[name] = value
        return value

    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


def __dir__() -> list[str]:  # pragma: no cover - tooling convenience
    return sorted(set(globals()) | set(__all__))
