"""Numeric constants shared by the codecs and the exposure estimator."""

from __future__ import annotations

# ITU-R BT.709 derived RGB -> luminance weights.
LUMINANCE_WEIGHTS = (0.212671, 0.715160, 0.072169)

# Pixels with luminance at or below this are treated as black and skipped.
BLACK_EPSILON = 1e-7

# Mid-gray target for the log-average luminance.
EXPOSURE_KEY = 0.18

DISPLAY_GAMMA = 2.2

# PFM files are always written little-endian with a unit multiplier.
PFM_SAVE_SCALE = -1.0

PPM_MAX_VALUE = 255
