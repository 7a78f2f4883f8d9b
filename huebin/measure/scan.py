# Copyright (c) 2026 Huebin
# SPDX-License-Identifier: MIT

"""
Pixel scanning: RGBA buffer → raw colour frequencies.

One pass over the buffer, in two modes:

- Analysis (no category filter): every surviving pixel is counted in the raw
  table and in its category total.
- Extraction (category filter): only pixels whose category is selected enter
  the raw table; category totals are not kept.

In both modes every surviving pixel counts toward total_pixel_count.
"""

from __future__ import annotations

import math
from collections.abc import Callable
from dataclasses import dataclass, field
from numbers import Integral
from typing import Optional, Union

import numpy as np
from numpy.typing import NDArray

from huebin.errors import InvalidInputError
from huebin.schema import COLOR_CATEGORIES, Category, ColorRecord, resolve_categories
from huebin.schema.results import CategorySelection
from huebin.measure.colorspace import pack_rgb, unpack_rgb
from huebin.measure.categories import classify_array


# Pixels with alpha below this are transparent and ignored
ALPHA_CUTOFF = 128

# With background removal, pixels with every channel above this are dropped
BACKGROUND_CUTOFF = 240

# Pixel budget for the analysis preview
PREVIEW_MAX_PIXELS = 200 * 200

PixelBuffer = Union[bytes, bytearray, memoryview, NDArray[np.uint8]]
ProgressCallback = Callable[[float], None]


# =============================================================================
# Buffer Validation
# =============================================================================


def _check_dimension(name: str, value) -> int:
    if isinstance(value, bool) or not isinstance(value, Integral) or value <= 0:
        raise InvalidInputError(f"{name} must be a positive integer, got {value!r}")
    return int(value)


def as_pixel_array(
    buffer: Optional[PixelBuffer],
    width: int,
    height: int,
) -> NDArray[np.uint8]:
    """
    Validate a pixel buffer and view it as an (H, W, 4) uint8 array.

    Accepts flat RGBA bytes, a flat uint8 array, an (H, W, 4) uint8 array, or
    a sequence of integers in [0, 255]. The returned array is a read-only
    view: for ndarray or bytearray input it shares the caller's memory, so
    later writes by the caller are visible through it. Copy it when it must
    outlive such writes.

    Raises:
        InvalidInputError: Missing or empty buffer, non-positive dimensions,
            or a buffer whose size is not width * height * 4.
    """
    if buffer is None:
        raise InvalidInputError("Pixel buffer is missing")

    width = _check_dimension("width", width)
    height = _check_dimension("height", height)

    if isinstance(buffer, np.ndarray):
        arr = buffer
        if arr.dtype != np.uint8:
            raise InvalidInputError(f"Expected uint8 pixel array, got {arr.dtype}")
    elif isinstance(buffer, (bytes, bytearray, memoryview)):
        arr = np.frombuffer(buffer, dtype=np.uint8)
    else:
        arr = np.asarray(buffer)
        if arr.size and (
            not np.issubdtype(arr.dtype, np.integer)
            or arr.min() < 0
            or arr.max() > 255
        ):
            raise InvalidInputError("Pixel values must be integers in 0-255")
        arr = arr.astype(np.uint8)

    if arr.size == 0:
        raise InvalidInputError("Pixel buffer is empty")

    expected = width * height * 4
    if arr.size != expected:
        raise InvalidInputError(
            f"Pixel buffer has {arr.size} bytes, expected {expected} "
            f"for {width}x{height} RGBA"
        )
    if arr.ndim == 3 and arr.shape != (height, width, 4):
        raise InvalidInputError(
            f"Expected ({height}, {width}, 4) array, got shape {arr.shape}"
        )

    view = arr.reshape(height, width, 4).view()
    view.flags.writeable = False
    return view


# =============================================================================
# Scan Result
# =============================================================================


@dataclass(frozen=True, eq=False)
class ScanResult:
    """
    Raw colour frequencies from one scan.

    Attributes:
        keys: Distinct colour keys (24-bit decimal RGB), first-seen order
        counts: Occurrences per key, aligned with keys
        total_pixel_count: Every pixel that survived alpha/background filtering
        category_counts: Pixels per category (analysis mode only; empty when
            a category filter was applied)
    """
    keys: NDArray[np.int64]
    counts: NDArray[np.int64]
    total_pixel_count: int
    category_counts: dict[Category, int] = field(default_factory=dict)

    @property
    def raw_color_count(self) -> int:
        return int(len(self.keys))

    @property
    def raw_color_counts(self) -> dict[int, int]:
        """Colour key → count mapping."""
        return {int(k): int(c) for k, c in zip(self.keys, self.counts)}

    @property
    def rgb(self) -> NDArray[np.int64]:
        """(N, 3) RGB values aligned with keys."""
        return unpack_rgb(self.keys)

    def sorted_records(self) -> list[ColorRecord]:
        """
        Raw colours as records, most frequent first.

        Ties keep first-seen order (stable sort).
        """
        order = np.argsort(-self.counts, kind="stable")
        rgb = self.rgb
        return [
            ColorRecord(
                rgb=(int(rgb[i, 0]), int(rgb[i, 1]), int(rgb[i, 2])),
                count=int(self.counts[i]),
            )
            for i in order
        ]


# =============================================================================
# Scanning
# =============================================================================


def scan(
    buffer: PixelBuffer,
    width: int,
    height: int,
    remove_background: bool = False,
    category_filter: CategorySelection = None,
    *,
    progress: Optional[ProgressCallback] = None,
    chunk_rows: int = 256,
) -> ScanResult:
    """
    Count pixel colours in an RGBA buffer.

    Args:
        buffer: RGBA8 pixel data (see as_pixel_array for accepted forms)
        width: Image width in pixels
        height: Image height in pixels
        remove_background: Drop near-white pixels (all channels > 240)
        category_filter: When given, only colours in these categories enter
            the raw table (extraction mode). None means analysis mode.
        progress: Optional callback receiving a completion percentage after
            each chunk of rows
        chunk_rows: Rows processed per chunk

    Returns:
        ScanResult with raw counts, total and (analysis mode) category counts

    Raises:
        InvalidInputError: If the buffer or dimensions are malformed.
    """
    pixels = as_pixel_array(buffer, width, height)
    chunk_rows = max(1, int(chunk_rows))

    filter_idx: Optional[NDArray[np.intp]] = None
    if category_filter is not None:
        selected = resolve_categories(category_filter)
        filter_idx = np.array(
            [COLOR_CATEGORIES.index(c) for c in selected], dtype=np.intp
        )

    chunk_keys: list[NDArray[np.int64]] = []
    chunk_first: list[NDArray[np.int64]] = []
    chunk_counts: list[NDArray[np.int64]] = []
    total = 0

    for y0 in range(0, height, chunk_rows):
        y1 = min(height, y0 + chunk_rows)
        flat = pixels[y0:y1].reshape(-1, 4)

        keep = flat[:, 3] >= ALPHA_CUTOFF
        if remove_background:
            keep &= ~(
                (flat[:, 0] > BACKGROUND_CUTOFF)
                & (flat[:, 1] > BACKGROUND_CUTOFF)
                & (flat[:, 2] > BACKGROUND_CUTOFF)
            )

        kept = flat[keep]
        if len(kept):
            keys = pack_rgb(kept[:, :3])
            uniq, first, counts = np.unique(keys, return_index=True, return_counts=True)
            chunk_keys.append(uniq)
            chunk_first.append(first.astype(np.int64) + total)
            chunk_counts.append(counts.astype(np.int64))
            total += len(kept)

        if progress is not None:
            progress(100.0 * y1 / height)

    keys, counts = _merge_chunks(chunk_keys, chunk_first, chunk_counts)

    category_counts: dict[Category, int] = {}
    if len(keys):
        categories = classify_array(unpack_rgb(keys))
        if filter_idx is not None:
            mask = np.isin(categories, filter_idx)
            keys, counts = keys[mask], counts[mask]
        else:
            per_category = np.zeros(len(COLOR_CATEGORIES), dtype=np.int64)
            np.add.at(per_category, categories, counts)
            category_counts = {
                COLOR_CATEGORIES[i]: int(n)
                for i, n in enumerate(per_category)
                if n > 0
            }

    return ScanResult(
        keys=keys,
        counts=counts,
        total_pixel_count=total,
        category_counts=category_counts,
    )


def _merge_chunks(
    chunk_keys: list[NDArray[np.int64]],
    chunk_first: list[NDArray[np.int64]],
    chunk_counts: list[NDArray[np.int64]],
) -> tuple[NDArray[np.int64], NDArray[np.int64]]:
    """Combine per-chunk unique keys into global keys/counts in first-seen order."""
    if not chunk_keys:
        empty = np.empty(0, dtype=np.int64)
        return empty, empty.copy()

    all_keys = np.concatenate(chunk_keys)
    all_first = np.concatenate(chunk_first)
    all_counts = np.concatenate(chunk_counts)

    keys, inverse = np.unique(all_keys, return_inverse=True)
    inverse = inverse.reshape(-1)

    counts = np.zeros(len(keys), dtype=np.int64)
    np.add.at(counts, inverse, all_counts)

    first = np.full(len(keys), np.iinfo(np.int64).max, dtype=np.int64)
    np.minimum.at(first, inverse, all_first)

    order = np.argsort(first, kind="stable")
    return keys[order].astype(np.int64), counts[order]


# =============================================================================
# Preview Downsampling
# =============================================================================


def preview_size(
    width: int,
    height: int,
    max_pixels: int = PREVIEW_MAX_PIXELS,
) -> tuple[int, int]:
    """
    Dimensions for a preview that fits within max_pixels.

    Scales both sides by sqrt(max_pixels / (width * height)), rounding down
    and never going below 1. Images already within budget are unchanged.
    """
    if width * height > max_pixels:
        scale = math.sqrt(max_pixels / (width * height))
        width = max(1, math.floor(width * scale))
        height = max(1, math.floor(height * scale))
    return width, height


def downsample(
    pixels: NDArray[np.uint8],
    new_width: int,
    new_height: int,
) -> NDArray[np.uint8]:
    """Resample an (H, W, 4) RGBA array with PIL (Lanczos)."""
    from PIL import Image

    img = Image.fromarray(np.ascontiguousarray(pixels))
    img = img.resize((new_width, new_height), Image.Resampling.LANCZOS)
    return np.array(img, dtype=np.uint8)
