# Copyright (c) 2026 Huebin
# SPDX-License-Identifier: MIT

"""
Sampled estimate of the deduplicated colour count.

Full aggregation is O(n * k); for an interactive preview we only need a
ballpark figure, so the greedy merge runs on a random sample and the
distinct ratio is extrapolated to the whole set. The result is approximate
and must not be treated as authoritative.
"""

from __future__ import annotations

import math
from typing import Optional

import numpy as np
from numpy.typing import NDArray

from huebin.errors import InvalidInputError

DEFAULT_SAMPLE_SIZE = 500


def estimate_unique_count(
    colors: NDArray,
    threshold: float,
    *,
    sample_size: int = DEFAULT_SAMPLE_SIZE,
    seed: Optional[int] = None,
    rng: Optional[np.random.Generator] = None,
) -> int:
    """
    Estimate how many colours would survive deduplication.

    Args:
        colors: Array-like of shape (N, 3) with distinct raw RGB values
        threshold: RGB-space distance used for merging
        sample_size: Maximum number of colours to sample
        seed: Random seed for reproducibility (None for random)
        rng: Explicit generator; takes precedence over seed

    Returns:
        0 when there are no colours, otherwise
        max(1, N * distinct_in_sample / sample_len rounded half up). When N does not
        exceed sample_size the whole set is used and the result is exact.
    """
    if threshold <= 0:
        raise InvalidInputError(f"threshold must be positive, got {threshold!r}")

    colors = np.asarray(colors, dtype=np.int64).reshape(-1, 3)
    n = len(colors)
    if n == 0:
        return 0

    if n <= sample_size:
        sample = colors
    else:
        if rng is None:
            rng = np.random.default_rng(seed)
        idx = rng.choice(n, size=sample_size, replace=False)
        sample = colors[idx]

    distinct = _count_representatives(sample, float(threshold) ** 2)
    # Round half up
    estimate = math.floor(n * distinct / len(sample) + 0.5)

    return max(1, estimate)


def _count_representatives(sample: NDArray[np.int64], threshold_sq: float) -> int:
    """Greedy nearest-representative pass; counts colours that start a cluster."""
    kept = np.empty_like(sample)
    n_kept = 0
    for color in sample:
        if n_kept:
            d2 = np.sum((kept[:n_kept] - color) ** 2, axis=1)
            if np.any(d2 < threshold_sq):
                continue
        kept[n_kept] = color
        n_kept += 1
    return n_kept
