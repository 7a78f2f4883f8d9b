# Copyright (c) 2026 Huebin
# SPDX-License-Identifier: MIT

"""
Huebin -- Dominant colour extraction and categorization for raster images.

Counts pixel colours in an RGBA buffer, merges near-identical colours,
sorts them into named categories ("Red", "Pastel Blue", "Brown", "Grey", ...)
and optionally reports colours on either side of sharp transitions.

Quick start::

    from huebin import analyze, extract, RunOptions

    preview = analyze(pixels, width, height)
    preview.category_counts        # {Category.RED: 1200, ...}

    result = extract(pixels, width, height, RunOptions(threshold=12))
    result.colors("Red")           # most frequent reds first
    result.to_json()
"""

from __future__ import annotations

__version__ = "1.0.0"

from huebin.errors import (
    ComputationFault,
    HuebinError,
    InvalidInputError,
    JobInProgressError,
)
from huebin.measure import analyze, extract
from huebin.measure.categories import classify
from huebin.schema import (
    COLOR_CATEGORIES,
    AnalysisResult,
    Category,
    ColorRecord,
    ExtractionResult,
    RunOptions,
)

__all__ = [
    # Core API
    "analyze",
    "extract",
    "classify",
    # Types (commonly needed)
    "RunOptions",
    "AnalysisResult",
    "ExtractionResult",
    "ColorRecord",
    "Category",
    "COLOR_CATEGORIES",
    # Errors
    "HuebinError",
    "InvalidInputError",
    "ComputationFault",
    "JobInProgressError",
    # Version
    "__version__",
]
