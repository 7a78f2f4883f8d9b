# Copyright (c) 2026 Huebin
# SPDX-License-Identifier: MIT

"""
Category ranking and limiting.

Turns a deduplicated colour list into the per-category palette the host
displays: each colour goes to its classifier category, categories are capped
at a maximum length, and kept colours get their share of the image.
"""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np

from huebin.schema import COLOR_CATEGORIES, Category, ColorRecord, resolve_categories
from huebin.schema.results import CategorySelection
from huebin.measure.categories import classify_array


def format_percentage(count: int, total: int) -> str:
    """Share of total as a 2-decimal string, e.g. "12.50"."""
    if total <= 0:
        return "0.00"
    return f"{count / total * 100:.2f}"


def rank_and_limit(
    deduplicated: Sequence[ColorRecord],
    selected_categories: CategorySelection,
    max_per_category: int,
    total_pixel_count: int,
) -> dict[Category, tuple[ColorRecord, ...]]:
    """
    Assign colours to categories, keeping the most frequent per category.

    Colours are visited in the given order, which must already be descending
    by count. A colour is kept if its category is selected and that category
    has fewer than max_per_category colours so far. Everything else is
    dropped from the result (it still counts in total_pixel_count).

    Args:
        deduplicated: Output of aggregate(), descending by count
        selected_categories: "all" or the categories to report
        max_per_category: Maximum colours per category (>= 1)
        total_pixel_count: Denominator for percentages

    Returns:
        Mapping with an entry for every selected category, in canonical
        category order, each a tuple of records carrying a percentage.
    """
    selected = resolve_categories(selected_categories)
    results: dict[Category, list[ColorRecord]] = {c: [] for c in selected}

    if deduplicated and selected:
        rgb = np.array([r.rgb for r in deduplicated], dtype=np.int64)
        categories = classify_array(rgb)

        for record, index in zip(deduplicated, categories):
            bucket = results.get(COLOR_CATEGORIES[int(index)])
            if bucket is None or len(bucket) >= max_per_category:
                continue
            bucket.append(record.with_percentage(
                format_percentage(record.count, total_pixel_count)
            ))

    return {c: tuple(records) for c, records in results.items()}
