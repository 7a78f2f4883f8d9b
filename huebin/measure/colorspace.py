# Copyright (c) 2026 Huebin
# SPDX-License-Identifier: MIT

"""
Colour space conversions and encodings.

- RGB → HSL (normalized, h/s/l in [0, 1])
- RGB ↔ hex ("#rrggbb", lowercase)
- RGB ↔ 24-bit decimal (r*65536 + g*256 + b)

The scalar HSL conversion delegates to the vectorized one so both paths
share a single piece of arithmetic. Channel values are assumed to be in
[0, 255]; range checking is the caller's job.
"""

from __future__ import annotations

import re

import numpy as np
from numpy.typing import NDArray


# =============================================================================
# RGB → HSL
# =============================================================================


def rgb_to_hsl_array(rgb: NDArray) -> NDArray[np.float64]:
    """
    Convert RGB values [0, 255] to HSL.

    Hue is resolved with priority red, green, blue when several channels
    share the maximum. Achromatic colours (max == min) get h = s = 0.

    Args:
        rgb: Array of shape (..., 3) with RGB values [0, 255]

    Returns:
        Array of shape (..., 3) with (h, s, l), each in [0, 1]
    """
    rgb = np.asarray(rgb, dtype=np.float64) / 255.0

    r = rgb[..., 0]
    g = rgb[..., 1]
    b = rgb[..., 2]

    mx = np.maximum(np.maximum(r, g), b)
    mn = np.minimum(np.minimum(r, g), b)
    l = (mx + mn) / 2
    d = mx - mn

    chromatic = d > 0
    safe_d = np.where(chromatic, d, 1.0)

    s = np.where(
        l > 0.5,
        d / np.where(chromatic, 2.0 - mx - mn, 1.0),
        d / np.where(chromatic, mx + mn, 1.0),
    )

    h = np.select(
        [mx == r, mx == g],
        [
            (g - b) / safe_d + np.where(g < b, 6.0, 0.0),
            (b - r) / safe_d + 2.0,
        ],
        default=(r - g) / safe_d + 4.0,
    ) / 6.0

    h = np.where(chromatic, h, 0.0)
    s = np.where(chromatic, s, 0.0)

    return np.stack([h, s, l], axis=-1)


def rgb_to_hsl(r: int, g: int, b: int) -> tuple[float, float, float]:
    """
    Convert a single RGB triple to (h, s, l), each in [0, 1].

    Convenience wrapper around rgb_to_hsl_array.
    """
    hsl = rgb_to_hsl_array(np.array([r, g, b]))
    return float(hsl[0]), float(hsl[1]), float(hsl[2])


# =============================================================================
# Encodings
# =============================================================================

_HEX_RE = re.compile(r"^#?([0-9a-fA-F]{6}|[0-9a-fA-F]{3})$")


def rgb_to_hex(r: int, g: int, b: int) -> str:
    """Encode as a zero-padded lowercase hex string like "#0a0b0c"."""
    return f"#{int(r):02x}{int(g):02x}{int(b):02x}"


def hex_to_rgb(hex_color: str) -> tuple[int, int, int]:
    """
    Decode a hex colour string.

    Accepts "#rrggbb", "rrggbb" and the 3-digit shorthand "#rgb",
    case-insensitive.

    Raises:
        ValueError: If the string is not a hex colour.
    """
    m = _HEX_RE.match(hex_color.strip())
    if not m:
        raise ValueError(f"Invalid hex colour: {hex_color!r}")

    digits = m.group(1)
    if len(digits) == 3:
        digits = "".join(ch * 2 for ch in digits)

    return int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16)


def rgb_to_decimal(r: int, g: int, b: int) -> int:
    """Encode as a 24-bit integer in [0, 16777215]."""
    return (int(r) << 16) + (int(g) << 8) + int(b)


def decimal_to_rgb(value: int) -> tuple[int, int, int]:
    """Inverse of rgb_to_decimal."""
    if not 0 <= value <= 0xFFFFFF:
        raise ValueError(f"Decimal colour must be 0-16777215, got {value}")
    return (value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF


def pack_rgb(rgb: NDArray) -> NDArray[np.int64]:
    """
    Vectorized rgb_to_decimal.

    Args:
        rgb: Array of shape (..., 3) with RGB values [0, 255]

    Returns:
        Array of shape (...) with 24-bit colour keys
    """
    rgb = np.asarray(rgb).astype(np.int64)
    return (rgb[..., 0] << 16) | (rgb[..., 1] << 8) | rgb[..., 2]


def unpack_rgb(keys: NDArray) -> NDArray[np.int64]:
    """Inverse of pack_rgb: (...) keys → (..., 3) RGB."""
    keys = np.asarray(keys, dtype=np.int64)
    return np.stack([(keys >> 16) & 0xFF, (keys >> 8) & 0xFF, keys & 0xFF], axis=-1)


# =============================================================================
# Distance
# =============================================================================


def distance_sq(rgb1: tuple[int, int, int], rgb2: tuple[int, int, int]) -> int:
    """
    Squared Euclidean distance in RGB space.

    Compared against threshold² so no square root is ever taken.
    """
    dr = int(rgb1[0]) - int(rgb2[0])
    dg = int(rgb1[1]) - int(rgb2[1])
    db = int(rgb1[2]) - int(rgb2[2])
    return dr * dr + dg * dg + db * db
