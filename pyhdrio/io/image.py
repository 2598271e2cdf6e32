from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Callable, Mapping

from pyhdrio.errors import InvalidArgumentError
from pyhdrio.io.exr import EXR_AVAILABLE, load_exr, save_exr
from pyhdrio.io.pfm import load_pfm, save_pfm
from pyhdrio.io.ppm import load_ppm, save_ppm
from pyhdrio.tensor import Tensor, TensorLike

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FormatCodec:
    name: str
    decode: Callable[[str | Path], Tensor]
    encode: Callable[[TensorLike, str | Path], None]


def _build_registry() -> Mapping[str, FormatCodec]:
    entries = {
        "pfm": FormatCodec("pfm", load_pfm, save_pfm),
        "ppm": FormatCodec("ppm", load_ppm, save_ppm),
    }
    if EXR_AVAILABLE:
        entries["exr"] = FormatCodec("exr", load_exr, save_exr)
    else:
        logger.debug("OpenEXR not installed; .exr images are unavailable")
    return MappingProxyType(entries)


FORMAT_REGISTRY = _build_registry()


def supported_formats() -> list[str]:
    return sorted(FORMAT_REGISTRY)


def extension_of(filename: str | Path) -> str:
    """Return the text after the last ``.`` in `filename`.

    The extension is returned as-is; lookups are case-sensitive.
    """

    name = str(filename)
    index = name.rfind(".")
    if index < 0:
        raise InvalidArgumentError(f"filename has no extension: {name!r}")
    return name[index + 1 :]


def _codec_for(filename: str | Path) -> FormatCodec:
    ext = extension_of(filename)
    codec = FORMAT_REGISTRY.get(ext)
    if codec is None:
        raise InvalidArgumentError(
            f"image format is not supported: {ext!r}. Supported: {', '.join(supported_formats())}."
        )
    return codec


def load_image(filename: str | Path) -> Tensor:
    """Load an image, choosing the decoder from the filename extension."""

    codec = _codec_for(filename)
    logger.debug("Loading %s as %s", filename, codec.name)
    return codec.decode(filename)


def save_image(image: TensorLike, filename: str | Path) -> None:
    """Save an image in the format named by the filename extension."""

    codec = _codec_for(filename)
    codec.encode(image, filename)
    logger.info("Saved %s image to %s", codec.name, filename)
