"""Image file codecs and the extension-based dispatcher."""

from __future__ import annotations

from .exr import EXR_AVAILABLE, load_exr, save_exr
from .image import FORMAT_REGISTRY, FormatCodec, extension_of, load_image, save_image, supported_formats
from .pfm import decode_pfm, encode_pfm, load_pfm, save_pfm
from .ppm import decode_ppm, encode_ppm, load_ppm, save_ppm

__all__ = [
    "EXR_AVAILABLE",
    "FORMAT_REGISTRY",
    "FormatCodec",
    "decode_pfm",
    "decode_ppm",
    "encode_pfm",
    "encode_ppm",
    "extension_of",
    "load_exr",
    "load_image",
    "load_pfm",
    "load_ppm",
    "save_exr",
    "save_image",
    "save_pfm",
    "save_ppm",
    "supported_formats",
]
