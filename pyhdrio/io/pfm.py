"""Portable float map (PFM) codec.

Layout: an ASCII header ``<magic> <W> <H> <scale>`` followed by exactly one
whitespace byte, then ``H*W*C`` float32 samples stored bottom row first.
``PF`` means 3 channels, ``Pf`` one channel. A negative scale marks a
little-endian body and ``|scale|`` multiplies every sample; big-endian files
are rejected.
"""

from __future__ import annotations

import logging
import math
import re
from pathlib import Path
from typing import Tuple

import numpy as np

from pyhdrio.constants import PFM_SAVE_SCALE
from pyhdrio.errors import CorruptDataError, UnsupportedFormatError
from pyhdrio.io._files import read_bytes, write_bytes
from pyhdrio.tensor import HWC, Tensor, TensorLike, require_rgb_hwc

logger = logging.getLogger(__name__)

_WHITESPACE = b" \t\n\r\v\f"
_CHANNELS_BY_MAGIC = {b"PF": 3, b"Pf": 1}
_SCALE_PATTERN = re.compile(rb"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def _next_token(data: bytes, pos: int) -> Tuple[bytes, int]:
    n = len(data)
    while pos < n and data[pos] in _WHITESPACE:
        pos += 1
    start = pos
    while pos < n and data[pos] not in _WHITESPACE:
        pos += 1
    if start == pos:
        raise CorruptDataError("invalid PFM image: header ends prematurely")
    return data[start:pos], pos


def _parse_dimension(token: bytes, name: str) -> int:
    if not token.isdigit():
        raise CorruptDataError(f"invalid PFM image: bad {name} {token!r}")
    value = int(token)
    if value <= 0:
        raise CorruptDataError(f"invalid PFM image: {name} must be positive, got {value}")
    return value


def _parse_scale(token: bytes) -> float:
    if _SCALE_PATTERN.fullmatch(token) is None:
        raise CorruptDataError(f"invalid PFM image: bad scale {token!r}")
    scale = float(token)
    if not math.isfinite(scale):
        raise CorruptDataError(f"invalid PFM image: scale must be finite, got {scale}")
    return scale


def _parse_header(data: bytes) -> Tuple[int, int, int, float, int]:
    """Return ``(H, W, C, scale, body_offset)``."""

    magic, pos = _next_token(data, 0)
    channels = _CHANNELS_BY_MAGIC.get(magic)
    if channels is None:
        raise UnsupportedFormatError(f"invalid PFM image: unknown magic {magic!r}")

    token, pos = _next_token(data, pos)
    width = _parse_dimension(token, "width")
    token, pos = _next_token(data, pos)
    height = _parse_dimension(token, "height")

    token, pos = _next_token(data, pos)
    scale = _parse_scale(token)

    # Single separator byte between header and body.
    if pos >= len(data):
        raise CorruptDataError("invalid PFM image: missing pixel data")
    pos += 1

    if scale >= 0.0:
        raise UnsupportedFormatError("big-endian PFM images are not supported")

    return height, width, channels, abs(scale), pos


def decode_pfm(data: bytes) -> Tensor:
    """Decode PFM bytes into a ``[H, W, C]`` tensor with the top row first."""

    height, width, channels, multiplier, offset = _parse_header(data)
    count = height * width * channels
    available = len(data) - offset
    if available < count * 4:
        raise CorruptDataError(
            f"invalid PFM image: expected {count * 4} bytes of pixel data, got {available}"
        )

    body = np.frombuffer(data, dtype="<f4", count=count, offset=offset)
    image = body.reshape(height, width, channels)[::-1].astype(np.float32)
    if multiplier != 1.0:
        image *= np.float32(multiplier)

    logger.debug("Decoded PFM %dx%dx%d (scale=%g)", width, height, channels, multiplier)
    return Tensor(image, HWC)


def encode_pfm(image: TensorLike) -> bytes:
    """Encode a 3-channel tensor as little-endian PFM bytes."""

    tensor = require_rgb_hwc(image)
    height, width, _ = tensor.dims
    header = f"PF\n{width} {height}\n{PFM_SAVE_SCALE:.1f}\n".encode("ascii")
    body = tensor.data[::-1].astype("<f4").tobytes()
    return header + body


def load_pfm(path: str | Path) -> Tensor:
    """Load an image from a PFM file."""

    return decode_pfm(read_bytes(path))


def save_pfm(image: TensorLike, path: str | Path) -> None:
    """Save a 3-channel image to a PFM file."""

    write_bytes(path, encode_pfm(image))
