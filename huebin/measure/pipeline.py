# Copyright (c) 2026 Huebin
# SPDX-License-Identifier: MIT

"""
Main analysis and extraction API.

Two entry points over the same scanning core:

- analyze(): cheap preview. Pixel totals, raw colour count, a sampled
  estimate of the deduplicated count and per-category pixel counts.
- extract(): full pass. Deduplicated colours ranked per selected category,
  plus optional gradient participants.

Both are pure functions of (buffer, options). Where they run (inline, on a
thread, in another process) is up to the caller; see huebin.runtime.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from typing import Optional, Union

import numpy as np

from huebin.errors import ComputationFault, HuebinError
from huebin.schema import AnalysisResult, Category, ExtractionResult, RunOptions
from huebin.measure.consolidation import aggregate
from huebin.measure.estimate import estimate_unique_count
from huebin.measure.gradients import detect_gradients
from huebin.measure.palette import rank_and_limit
from huebin.measure.scan import (
    PixelBuffer,
    ProgressCallback,
    as_pixel_array,
    downsample,
    preview_size,
    scan,
)

logger = logging.getLogger(__name__)

OptionsInput = Union[RunOptions, Mapping, None]


@contextmanager
def _fault_barrier(operation: str) -> Iterator[None]:
    """Let Huebin errors through; report anything else as a ComputationFault."""
    try:
        yield
    except HuebinError:
        raise
    except Exception as e:
        raise ComputationFault(f"Unexpected failure during {operation}: {e}") from e


def analyze(
    buffer: PixelBuffer,
    width: int,
    height: int,
    options: OptionsInput = None,
    *,
    max_pixels: int = 0,
    seed: Optional[int] = None,
    rng: Optional[np.random.Generator] = None,
    progress: Optional[ProgressCallback] = None,
) -> AnalysisResult:
    """
    Preview the colours of an image.

    Uses threshold and remove_background from options; category selection,
    per-category limits and the gradient flag only matter for extract().

    Args:
        buffer: RGBA8 pixel data, width * height * 4 bytes
        width: Image width in pixels
        height: Image height in pixels
        options: RunOptions, a host mapping (camelCase keys) or None for defaults
        max_pixels: When > 0 and the image is larger, scan a downsampled
            preview of at most this many pixels instead. 0 = full resolution.
        seed: Seed for the estimator's sample (None for random)
        rng: Explicit generator for the estimator; takes precedence over seed
        progress: Optional callback receiving scan completion percentages

    Returns:
        AnalysisResult. estimated_unique_count is a statistical estimate.

    Raises:
        InvalidInputError: Malformed buffer, dimensions or options.
        ComputationFault: Any unexpected internal failure.

    Example:
        >>> import numpy as np
        >>> from huebin import analyze
        >>> pixels = np.array([[[255, 0, 0, 255], [0, 255, 0, 255]]], dtype=np.uint8)
        >>> analyze(pixels, 2, 1).category_counts
        {<Category.RED: 'Red'>: 1, <Category.GREEN: 'Green'>: 1}
    """
    opts = RunOptions.coerce(options)

    with _fault_barrier("analysis"):
        pixels = as_pixel_array(buffer, width, height)

        if max_pixels > 0 and width * height > max_pixels:
            new_width, new_height = preview_size(width, height, max_pixels)
            pixels = downsample(pixels, new_width, new_height)
            logger.debug(
                "Downsampled %dx%d to %dx%d for preview",
                width, height, new_width, new_height,
            )
            width, height = new_width, new_height

        scanned = scan(
            pixels,
            width,
            height,
            remove_background=opts.remove_background,
            progress=progress,
        )
        estimated = estimate_unique_count(
            scanned.rgb, opts.threshold, seed=seed, rng=rng
        )

        logger.debug(
            "Analysis: %d pixels, %d raw colours, ~%d after deduplication",
            scanned.total_pixel_count, scanned.raw_color_count, estimated,
        )

        return AnalysisResult(
            total_pixel_count=scanned.total_pixel_count,
            raw_color_count=scanned.raw_color_count,
            estimated_unique_count=estimated,
            category_counts=scanned.category_counts,
            width=width,
            height=height,
        )


def extract(
    buffer: PixelBuffer,
    width: int,
    height: int,
    options: OptionsInput = None,
    *,
    progress: Optional[ProgressCallback] = None,
) -> ExtractionResult:
    """
    Extract deduplicated colours per category.

    Pipeline:
    1. Scan, keeping only colours in the selected categories
    2. Sort raw colours by count (descending, stable)
    3. Merge colours closer than options.threshold
    4. Assign to categories, keep at most max_colors_per_category each
    5. Optionally add up to 2 * max_colors_per_category gradient
       participants under Category.GRADIENTS

    Args:
        buffer: RGBA8 pixel data, width * height * 4 bytes
        width: Image width in pixels
        height: Image height in pixels
        options: RunOptions, a host mapping (camelCase keys) or None for defaults
        progress: Optional callback receiving scan completion percentages

    Returns:
        ExtractionResult; deterministic for identical input.

    Raises:
        InvalidInputError: Malformed buffer, dimensions or options.
        ComputationFault: Any unexpected internal failure.
    """
    opts = RunOptions.coerce(options)
    selected = opts.categories

    with _fault_barrier("extraction"):
        scanned = scan(
            buffer,
            width,
            height,
            remove_background=opts.remove_background,
            category_filter=selected,
            progress=progress,
        )

        deduplicated = aggregate(scanned.sorted_records(), opts.threshold)
        categorized = rank_and_limit(
            deduplicated,
            selected,
            opts.max_colors_per_category,
            scanned.total_pixel_count,
        )

        if opts.extract_gradients:
            gradients = detect_gradients(buffer, width, height, opts.threshold)
            if gradients:
                categorized[Category.GRADIENTS] = gradients[:opts.max_gradients]

        final_unique_count = sum(len(records) for records in categorized.values())

        logger.debug(
            "Extraction: %d raw colours merged into %d, %d reported",
            scanned.raw_color_count, len(deduplicated), final_unique_count,
        )

        return ExtractionResult(
            categorized_results=categorized,
            final_unique_count=final_unique_count,
            total_pixel_count=scanned.total_pixel_count,
        )
