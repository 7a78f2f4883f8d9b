# Copyright (c) 2026 Huebin
# SPDX-License-Identifier: MIT

"""
Schema definitions for colour analysis and extraction.

All types in this module are immutable (frozen dataclasses) and are built
fresh for every call.
"""

from huebin.schema.results import (
    ALL_CATEGORIES,
    COLOR_CATEGORIES,
    NOT_APPLICABLE,
    AnalysisResult,
    Category,
    ColorRecord,
    ExtractionResult,
    RunOptions,
    resolve_categories,
)

__all__ = [
    # Categories
    "Category",
    "COLOR_CATEGORIES",
    "ALL_CATEGORIES",
    "resolve_categories",
    # Records
    "ColorRecord",
    "NOT_APPLICABLE",
    # Per-run configuration
    "RunOptions",
    # Results
    "AnalysisResult",
    "ExtractionResult",
]
