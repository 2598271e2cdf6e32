"""OpenEXR codec (optional, requires the ``exr`` extra).

Images are stored as three 32-bit float planes named ``R``, ``G`` and ``B``.
"""

from __future__ import annotations

import logging
from pathlib import Path

import numpy as np

from pyhdrio.config import get_settings
from pyhdrio.errors import CorruptDataError, ImageIOError, InvalidArgumentError
from pyhdrio.tensor import HWC, Tensor, TensorLike, require_rgb_hwc
from pyhdrio.utils.optional_deps import optional_import, require

logger = logging.getLogger(__name__)

PLANES = ("R", "G", "B")

EXR_AVAILABLE = optional_import("OpenEXR")[0] is not None and optional_import("Imath")[0] is not None

_COMPRESSION_NAMES = {
    "none": "NO_COMPRESSION",
    "zip": "ZIP_COMPRESSION",
    "zips": "ZIPS_COMPRESSION",
    "piz": "PIZ_COMPRESSION",
}


def _modules():
    openexr = require("OpenEXR", extra="exr", purpose="reading and writing EXR images")
    imath = require("Imath", extra="exr", purpose="reading and writing EXR images")
    return openexr, imath


def load_exr(path: str | Path) -> Tensor:
    """Load an image from an EXR file holding exactly the planes R, G and B."""

    openexr, imath = _modules()
    p = Path(path)
    if not p.is_file():
        raise ImageIOError(f"cannot open file '{p}'")

    try:
        exr = openexr.InputFile(str(p))
    except OSError as exc:
        raise ImageIOError(f"cannot open file '{p}'") from exc
    except Exception as exc:  # noqa: BLE001 - library boundary
        raise CorruptDataError(f"invalid EXR image '{p}': {exc}") from exc

    try:
        header = exr.header()
        channels = set(header["channels"].keys())
        if channels != set(PLANES):
            raise InvalidArgumentError(
                f"image must have 3 channels named R, G, B, got {sorted(channels)}"
            )

        window = header["dataWindow"]
        width = window.max.x - window.min.x + 1
        height = window.max.y - window.min.y + 1

        float_type = imath.PixelType(imath.PixelType.FLOAT)
        try:
            raw = [exr.channel(name, float_type) for name in PLANES]
        except Exception as exc:  # noqa: BLE001 - library boundary
            raise CorruptDataError(f"invalid EXR image '{p}': {exc}") from exc
    finally:
        exr.close()

    expected = width * height * 4
    if any(len(plane) != expected for plane in raw):
        raise CorruptDataError(f"invalid EXR image '{p}': plane size does not match data window")

    planes = [np.frombuffer(plane, dtype=np.float32).reshape(height, width) for plane in raw]
    image = np.stack(planes, axis=-1)

    logger.debug("Decoded EXR %dx%d from %s", width, height, p)
    return Tensor(image, HWC)


def save_exr(image: TensorLike, path: str | Path) -> None:
    """Save a 3-channel image to an EXR file as float R, G, B planes."""

    tensor = require_rgb_hwc(image)
    openexr, imath = _modules()
    height, width, _ = tensor.dims

    compression = _COMPRESSION_NAMES[get_settings().exr_compression]
    float_channel = imath.Channel(imath.PixelType(imath.PixelType.FLOAT))
    header = openexr.Header(width, height)
    header["channels"] = {name: float_channel for name in PLANES}
    header["compression"] = imath.Compression(getattr(imath.Compression, compression))

    p = Path(path)
    try:
        exr = openexr.OutputFile(str(p), header)
    except Exception as exc:  # noqa: BLE001 - library boundary
        raise ImageIOError(f"cannot open file '{p}'") from exc

    try:
        exr.writePixels(
            {name: np.ascontiguousarray(tensor.data[..., i]).tobytes() for i, name in enumerate(PLANES)}
        )
    except Exception as exc:  # noqa: BLE001 - library boundary
        raise ImageIOError(f"failed to write EXR image '{p}': {exc}") from exc
    finally:
        exr.close()

    logger.debug("Wrote EXR %dx%d to %s (%s)", width, height, p, compression)
