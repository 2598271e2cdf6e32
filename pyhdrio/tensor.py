"""In-memory image representation.

Images travel through `pyhdrio` as a :class:`Tensor`: a fixed-shape float32
numpy buffer plus an axis-order tag. The only layout the codecs produce or
accept is ``"hwc"`` (height, width, channel; row-major, channel-interleaved).
"""

from __future__ import annotations

from typing import Any, Sequence, Tuple, Union

import numpy as np

from pyhdrio.errors import InvalidArgumentError

HWC = "hwc"

_VALID_CHANNELS = (1, 3)


def _require_ndarray(obj: Any) -> np.ndarray:
    if not isinstance(obj, np.ndarray):
        raise TypeError(f"Expected np.ndarray, got {type(obj)}")
    return obj


class Tensor:
    """A float32 image buffer with a named axis order.

    The shape is fixed at construction; the content is mutable through
    :attr:`data` or flat indexing (``tensor[i]`` addresses the row-major
    buffer, so ``tensor[((h * W) + w) * C + c]`` is pixel ``(h, w)``,
    channel ``c``).
    """

    __slots__ = ("data", "layout")

    def __init__(self, data: np.ndarray, layout: str = HWC) -> None:
        arr = _require_ndarray(data)
        if arr.dtype != np.float32 or not arr.flags.c_contiguous:
            arr = np.ascontiguousarray(arr, dtype=np.float32)

        layout = str(layout)
        if layout == HWC:
            if arr.ndim != 3:
                raise InvalidArgumentError(f"Expected shape (H,W,C) for {HWC}, got {arr.shape}")
            h, w, c = arr.shape
            if h <= 0 or w <= 0:
                raise InvalidArgumentError(f"Image dimensions must be positive, got {w}x{h}")
            if c not in _VALID_CHANNELS:
                raise InvalidArgumentError(f"Image must have 1 or 3 channels, got {c}")

        self.data = arr
        self.layout = layout

    @classmethod
    def zeros(cls, dims: Sequence[int], layout: str = HWC) -> "Tensor":
        return cls(np.zeros(tuple(int(d) for d in dims), dtype=np.float32), layout)

    @property
    def dims(self) -> Tuple[int, ...]:
        return tuple(int(d) for d in self.data.shape)

    @property
    def ndims(self) -> int:
        return int(self.data.ndim)

    @property
    def num_elements(self) -> int:
        return int(self.data.size)

    @property
    def height(self) -> int:
        return self.dims[0]

    @property
    def width(self) -> int:
        return self.dims[1]

    @property
    def channels(self) -> int:
        return self.dims[2]

    def __getitem__(self, index: int) -> float:
        return float(self.data.reshape(-1)[index])

    def __setitem__(self, index: int, value: float) -> None:
        self.data.reshape(-1)[index] = value

    def __len__(self) -> int:
        return self.num_elements

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Tensor):
            return NotImplemented
        return self.layout == other.layout and np.array_equal(self.data, other.data)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Tensor(dims={self.dims}, layout={self.layout!r})"


TensorLike = Union[Tensor, np.ndarray]


def as_tensor(image: TensorLike) -> Tensor:
    """Return `image` as a :class:`Tensor`, wrapping raw arrays as ``"hwc"``."""

    if isinstance(image, Tensor):
        return image
    return Tensor(_require_ndarray(image), HWC)


def require_rgb_hwc(image: TensorLike) -> Tensor:
    """Check the precondition every encoder shares: a 3-channel ``"hwc"`` image."""

    tensor = as_tensor(image)
    if tensor.ndims != 3 or tensor.dims[2] != 3 or tensor.layout != HWC:
        raise InvalidArgumentError(
            f"image must have 3 channels, got dims={tensor.dims} layout={tensor.layout!r}"
        )
    return tensor


def float3_view(image: TensorLike) -> np.ndarray:
    """Return a read-only ``(H, W, 3)`` float32 view of `image`.

    No copy is made when the input already holds float32 data. Raw arrays
    may have zero height or width; :class:`Tensor` inputs never do.
    """

    if isinstance(image, Tensor):
        if image.layout != HWC:
            raise InvalidArgumentError(f"Expected layout {HWC!r}, got {image.layout!r}")
        arr = image.data
    else:
        arr = _require_ndarray(image)

    if arr.ndim != 3 or arr.shape[2] != 3:
        raise InvalidArgumentError(f"Expected shape (H,W,3) float RGB image, got {arr.shape}")
    if not np.issubdtype(arr.dtype, np.floating):
        raise InvalidArgumentError(f"Expected floating point image, got dtype={arr.dtype}")

    view = arr.view() if arr.dtype == np.float32 else arr.astype(np.float32)
    view.flags.writeable = False
    return view


__all__ = [
    "HWC",
    "Tensor",
    "TensorLike",
    "as_tensor",
    "float3_view",
    "require_rgb_hwc",
]
