# Copyright (c) 2026 Huebin
# SPDX-License-Identifier: MIT

"""
Colour category classifier.

Maps every RGB triple to exactly one of the twenty classifier categories
using HSL thresholds. The rule set, in order:

1. Lightness below 0.10 → Black, above 0.95 → White.
2. Saturation below 0.10 → Grey.
3. Brown: dark, moderately saturated orange-ish or red-ish hues.
4. Hue bucket (half-open degree ranges, 340-360 wrapping into Red). Light,
   soft colours (l > 0.70 and s < 0.65) take the "Pastel" label of their
   bucket; the pastel form of Red is "Pastel Pink".

classify_array is the only implementation of these rules; classify is a
single-pixel wrapper around it.
"""

from __future__ import annotations

from typing import Union

import numpy as np
from numpy.typing import NDArray

from huebin.schema import COLOR_CATEGORIES, Category, resolve_categories
from huebin.measure.colorspace import rgb_to_hsl_array

__all__ = [
    "classify",
    "classify_array",
    "CATEGORY_SWATCHES",
    "swatch_for",
    "resolve_categories",
]


# =============================================================================
# Thresholds
# =============================================================================

BLACK_MAX_LIGHTNESS = 0.10
WHITE_MIN_LIGHTNESS = 0.95
GREY_MAX_SATURATION = 0.10

PASTEL_MIN_LIGHTNESS = 0.70
PASTEL_MAX_SATURATION = 0.65

# (upper hue bound in degrees, base category, pastel category)
# Each bucket covers [previous bound, bound); hue >= 340 wraps into Red.
_HUE_BUCKETS: tuple[tuple[float, Category, Category], ...] = (
    (18.0, Category.RED, Category.PASTEL_PINK),
    (45.0, Category.ORANGE, Category.PASTEL_ORANGE),
    (70.0, Category.YELLOW, Category.PASTEL_YELLOW),
    (160.0, Category.GREEN, Category.PASTEL_GREEN),
    (200.0, Category.CYAN, Category.PASTEL_CYAN),
    (260.0, Category.BLUE, Category.PASTEL_BLUE),
    (300.0, Category.PURPLE, Category.PASTEL_PURPLE),
    (340.0, Category.MAGENTA, Category.PASTEL_MAGENTA),
)
_RED_WRAP_START = 340.0

_INDEX: dict[Category, int] = {c: i for i, c in enumerate(COLOR_CATEGORIES)}


# =============================================================================
# Classification
# =============================================================================


def classify_array(rgb: NDArray) -> NDArray[np.intp]:
    """
    Classify many colours at once.

    Args:
        rgb: Array of shape (..., 3) with RGB values [0, 255]

    Returns:
        Array of shape (...) with indices into COLOR_CATEGORIES
    """
    hsl = rgb_to_hsl_array(rgb)
    h = hsl[..., 0]
    s = hsl[..., 1]
    l = hsl[..., 2]
    hue = h * 360.0

    pastel = (l > PASTEL_MIN_LIGHTNESS) & (s < PASTEL_MAX_SATURATION)

    # Brown is checked before hue bucketing and takes over part of the
    # Orange and Red hue ranges.
    brown = (
        ((l < 0.6) & (s < 0.7) & (hue >= 15) & (hue < 45))
        | ((l < 0.4) & (s < 0.7) & ((hue < 25) | (hue >= 340)))
    )

    conditions = []
    choices = []
    for i, (upper, base, pastel_cat) in enumerate(_HUE_BUCKETS):
        in_bucket = hue < upper
        if i == 0:
            in_bucket = in_bucket | (hue >= _RED_WRAP_START)
        conditions.append(in_bucket)
        choices.append(np.where(pastel, _INDEX[pastel_cat], _INDEX[base]))

    by_hue = np.select(conditions, choices, default=_INDEX[Category.RED])

    return np.select(
        [
            l < BLACK_MAX_LIGHTNESS,
            l > WHITE_MIN_LIGHTNESS,
            s < GREY_MAX_SATURATION,
            brown,
        ],
        [
            _INDEX[Category.BLACK],
            _INDEX[Category.WHITE],
            _INDEX[Category.GREY],
            _INDEX[Category.BROWN],
        ],
        default=by_hue,
    ).astype(np.intp)


def classify(r: int, g: int, b: int) -> Category:
    """Classify a single RGB triple."""
    index = classify_array(np.array([r, g, b]))
    return COLOR_CATEGORIES[int(index)]


# =============================================================================
# Swatches
# =============================================================================

# Representative colour per category, for hosts drawing legends.
CATEGORY_SWATCHES: dict[Category, str] = {
    Category.BLACK: "#000000",
    Category.WHITE: "#ffffff",
    Category.GREY: "#808080",
    Category.RED: "#ff0000",
    Category.ORANGE: "#ffa500",
    Category.YELLOW: "#ffff00",
    Category.GREEN: "#008000",
    Category.CYAN: "#00ffff",
    Category.BLUE: "#0000ff",
    Category.PURPLE: "#800080",
    Category.MAGENTA: "#ff00ff",
    Category.PASTEL_PINK: "#ffd1dc",
    Category.PASTEL_ORANGE: "#ffd8b1",
    Category.PASTEL_YELLOW: "#fffacd",
    Category.PASTEL_GREEN: "#98fb98",
    Category.PASTEL_CYAN: "#afeeee",
    Category.PASTEL_BLUE: "#add8e6",
    Category.PASTEL_PURPLE: "#d8bfd8",
    Category.PASTEL_MAGENTA: "#ffb6c1",
    Category.BROWN: "#a52a2a",
}

_FALLBACK_SWATCH = "#cccccc"


def swatch_for(category: Union[str, Category]) -> str:
    """Representative hex for a category; unknown labels get a neutral grey."""
    try:
        return CATEGORY_SWATCHES.get(Category(category), _FALLBACK_SWATCH)
    except ValueError:
        return _FALLBACK_SWATCH
