"""Exception types raised by `pyhdrio`.

Each class also derives from the builtin callers would naturally catch
(`ValueError` for bad input, `OSError` for filesystem failures).
"""

from __future__ import annotations


class PyHdrIOError(Exception):
    """Base exception for all `pyhdrio` errors."""


class InvalidArgumentError(PyHdrIOError, ValueError):
    """A caller-supplied image or filename violates a format's preconditions."""


class ImageIOError(PyHdrIOError, OSError):
    """A file could not be opened for reading or writing."""


class CorruptDataError(PyHdrIOError, ValueError):
    """File content is malformed or ends before the declared amount of data."""


class UnsupportedFormatError(CorruptDataError):
    """File is well-formed but uses a variant this package does not read."""


__all__ = [
    "CorruptDataError",
    "ImageIOError",
    "InvalidArgumentError",
    "PyHdrIOError",
    "UnsupportedFormatError",
]
