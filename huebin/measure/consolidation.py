# Copyright (c) 2026 Huebin
# SPDX-License-Identifier: MIT

"""
Colour consolidation layer.

Merges near-identical colours into representatives and sums their counts.
Runs AFTER scanning, BEFORE category ranking. It does not change what was
counted, only how it is summarized: the total count is preserved exactly.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Union

import numpy as np

from huebin.errors import InvalidInputError
from huebin.schema import ColorRecord

ColorInput = Union[ColorRecord, tuple[tuple[int, int, int], int]]


def _as_record(color: ColorInput) -> ColorRecord:
    if isinstance(color, ColorRecord):
        return color
    rgb, count = color
    return ColorRecord(rgb=(int(rgb[0]), int(rgb[1]), int(rgb[2])), count=int(count))


def aggregate(
    colors: Iterable[ColorInput],
    threshold: float,
) -> tuple[ColorRecord, ...]:
    """
    Collapse colours closer than threshold into representatives.

    Greedy, first match wins: colours are visited in input order and each is
    merged into the FIRST accepted representative whose squared RGB distance
    is below threshold². A colour with no such representative becomes a new
    one. Representatives keep their own RGB; only counts are summed.

    Input must already be sorted by descending count so the most frequent
    colours become representatives and absorb the long tail. Cost is
    O(n * k) for n colours and k representatives.

    Consequences:
    - Sum of output counts == sum of input counts.
    - No two representatives are within threshold of each other.

    Args:
        colors: ColorRecords or (rgb, count) pairs, descending by count
        threshold: RGB-space distance, must be > 0

    Returns:
        Representatives as ColorRecords, descending by aggregated count.
        Ties keep the order in which representatives were accepted.
    """
    if threshold <= 0:
        raise InvalidInputError(f"threshold must be positive, got {threshold!r}")

    records = [_as_record(c) for c in colors]
    if not records:
        return ()

    threshold_sq = float(threshold) * float(threshold)

    # Preallocated; only the first n_reps rows are live
    reps_rgb = np.empty((len(records), 3), dtype=np.int64)
    reps: list[ColorRecord] = []
    rep_counts: list[int] = []

    for record in records:
        n_reps = len(reps)
        if n_reps:
            d2 = np.sum((reps_rgb[:n_reps] - record.rgb) ** 2, axis=1)
            hits = np.flatnonzero(d2 < threshold_sq)
            if hits.size:
                rep_counts[hits[0]] += record.count
                continue

        reps_rgb[n_reps] = record.rgb
        reps.append(record)
        rep_counts.append(record.count)

    merged = [rep.with_count(count) for rep, count in zip(reps, rep_counts)]

    # Sort by count descending (stable)
    merged.sort(key=lambda r: r.count, reverse=True)

    return tuple(merged)
