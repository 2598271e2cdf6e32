"""Automatic exposure from the log-average luminance of an image.

The scene average is the geometric mean of luminance over all pixels
brighter than ``BLACK_EPSILON``; the exposure maps it onto the mid-gray key:

    exposure = key / 2 ** mean(log2(L))

Rows are split into contiguous chunks reduced on a joblib thread pool. Each
chunk returns its own ``(log2_sum, count)`` pair and the pairs are added
together once every chunk has finished, so workers never share an
accumulator.
"""

from __future__ import annotations

import logging
import math
from functools import reduce
from typing import List, Optional, Tuple

import numpy as np
from joblib import Parallel, delayed, effective_n_jobs

from pyhdrio.config import get_settings
from pyhdrio.constants import BLACK_EPSILON, EXPOSURE_KEY, LUMINANCE_WEIGHTS
from pyhdrio.tensor import TensorLike, float3_view
from pyhdrio.utils.param_check import check_n_jobs, check_parameter

logger = logging.getLogger(__name__)

LogSum = Tuple[float, int]

_WEIGHTS = np.asarray(LUMINANCE_WEIGHTS, dtype=np.float32)


def luminance(rgb: np.ndarray) -> np.ndarray:
    """Relative luminance of RGB values stored along the last axis."""

    rgb = np.asarray(rgb, dtype=np.float32)
    return rgb[..., 0] * _WEIGHTS[0] + rgb[..., 1] * _WEIGHTS[1] + rgb[..., 2] * _WEIGHTS[2]


def _chunk_log_sum(rows: np.ndarray) -> LogSum:
    lum = luminance(rows)
    lit = lum[lum > BLACK_EPSILON]
    if lit.size == 0:
        return 0.0, 0
    return float(np.log2(lit.astype(np.float64)).sum()), int(lit.size)


def _combine(a: LogSum, b: LogSum) -> LogSum:
    return a[0] + b[0], a[1] + b[1]


def _row_ranges(height: int, rows_per_chunk: int) -> List[Tuple[int, int]]:
    return [(start, min(start + rows_per_chunk, height)) for start in range(0, height, rows_per_chunk)]


def autoexposure(
    image: TensorLike,
    *,
    n_jobs: Optional[int] = None,
    rows_per_chunk: Optional[int] = None,
) -> float:
    """Estimate an exposure multiplier for a float RGB image.

    Parameters
    ----------
    image:
        A 3-channel ``"hwc"`` :class:`~pyhdrio.tensor.Tensor` or an
        ``(H, W, 3)`` float array. It is only read.
    n_jobs:
        Worker threads (joblib semantics). Defaults to the process settings.
    rows_per_chunk:
        Rows per work item. Defaults to the process settings, or to one
        chunk per worker when unset there too.

    Returns
    -------
    float
        ``0.18 / 2 ** mean(log2(L))`` over non-black pixels, or exactly
        ``1.0`` when every pixel is black.
    """

    view = float3_view(image)
    settings = get_settings()
    n_jobs = check_n_jobs(settings.n_jobs if n_jobs is None else n_jobs)
    if rows_per_chunk is None:
        rows_per_chunk = settings.rows_per_chunk

    height = int(view.shape[0])
    if height == 0 or view.shape[1] == 0:
        return 1.0

    workers = effective_n_jobs(n_jobs)
    if rows_per_chunk is None:
        rows_per_chunk = max(1, math.ceil(height / workers))
    check_parameter(rows_per_chunk, 1, param_name="rows_per_chunk", integer=True)

    ranges = _row_ranges(height, int(rows_per_chunk))
    logger.debug("Reducing %d rows in %d chunk(s) on %d worker(s)", height, len(ranges), workers)

    partials = Parallel(n_jobs=n_jobs, prefer="threads")(
        delayed(_chunk_log_sum)(view[start:stop]) for start, stop in ranges
    )
    log_sum, count = reduce(_combine, partials, (0.0, 0))

    if count == 0:
        logger.debug("Image is black; using unit exposure")
        return 1.0

    exposure = EXPOSURE_KEY / 2.0 ** (log_sum / count)
    logger.debug("Log-average over %d pixel(s); exposure=%g", count, exposure)
    return float(exposure)


__all__ = ["autoexposure", "luminance"]
