"""Binary PPM (``P6``) codec for display-referred, gamma-encoded 8-bit output.

Saving applies the display gamma ``x ** (1/2.2)``, scales to ``[0, 255]``
with truncation and clamps; loading inverts the gamma to recover linear
floats (lossy, 8 bits per channel). The netpbm container itself is handled
by Pillow.
"""

from __future__ import annotations

import io
import logging
from pathlib import Path

import numpy as np
from PIL import Image

from pyhdrio.constants import DISPLAY_GAMMA, PPM_MAX_VALUE
from pyhdrio.errors import CorruptDataError, UnsupportedFormatError
from pyhdrio.io._files import read_bytes, write_bytes
from pyhdrio.tensor import HWC, Tensor, TensorLike, require_rgb_hwc

logger = logging.getLogger(__name__)

# Pillow decodes binary 8-bit netpbm bodies with its "raw" codec; plain-text
# variants and other max values go through the "ppm"/"ppm_plain" decoders.
_RAW_DECODER = "raw"


def gamma_encode_u8(values: np.ndarray) -> np.ndarray:
    """Map linear floats to display bytes: gamma, scale by 255, truncate, clamp.

    Negative and NaN inputs become 0, anything at or above 1.0 becomes 255.
    """

    x = np.maximum(np.asarray(values, dtype=np.float32), np.float32(0.0))
    with np.errstate(over="ignore"):
        scaled = np.power(x, np.float32(1.0 / DISPLAY_GAMMA)) * np.float32(PPM_MAX_VALUE)
    scaled = np.nan_to_num(scaled, nan=0.0, posinf=float(PPM_MAX_VALUE), neginf=0.0)
    return np.clip(np.trunc(scaled), 0, PPM_MAX_VALUE).astype(np.uint8)


def encode_ppm(image: TensorLike) -> bytes:
    tensor = require_rgb_hwc(image)
    buf = io.BytesIO()
    Image.fromarray(gamma_encode_u8(tensor.data)).save(buf, format="PPM")
    return buf.getvalue()


def decode_ppm(data: bytes) -> Tensor:
    try:
        with Image.open(io.BytesIO(data)) as img:
            if img.format != "PPM" or img.mode != "RGB":
                raise UnsupportedFormatError(
                    f"invalid PPM image: expected binary RGB PPM, got format={img.format!r} mode={img.mode!r}"
                )
            if not img.tile or img.tile[0][0] != _RAW_DECODER:
                raise UnsupportedFormatError(
                    f"invalid PPM image: only binary P6 with max value {PPM_MAX_VALUE} is supported"
                )
            img.load()
            body = np.asarray(img, dtype=np.uint8)
    except UnsupportedFormatError:
        raise
    except (OSError, ValueError) as exc:
        # UnidentifiedImageError and truncated bodies are OSErrors.
        raise CorruptDataError(f"invalid PPM image: {exc}") from exc

    linear = np.power(body.astype(np.float32) / np.float32(PPM_MAX_VALUE), np.float32(DISPLAY_GAMMA))

    logger.debug("Decoded PPM %dx%d", body.shape[1], body.shape[0])
    return Tensor(linear.astype(np.float32, copy=False), HWC)


def load_ppm(path: str | Path) -> Tensor:
    """Load an 8-bit binary PPM file as linear floats."""

    return decode_ppm(read_bytes(path))


def save_ppm(image: TensorLike, path: str | Path) -> None:
    """Save a 3-channel image to a gamma-encoded PPM file."""

    write_bytes(path, encode_ppm(image))
