# Copyright (c) 2026 Huebin
# SPDX-License-Identifier: MIT

"""
Gradient participant detection (optional pass).

Looks for sharp colour jumps between horizontally adjacent pixels. Both
colours of every qualifying pair are "gradient participants"; the result
ranks participants by how many qualifying pairs they took part in.

Only horizontal neighbours are compared. Pairs where either pixel is
transparent (alpha < 128) are ignored.
"""

from __future__ import annotations

import numpy as np

from huebin.errors import InvalidInputError
from huebin.schema import NOT_APPLICABLE, ColorRecord
from huebin.measure.colorspace import pack_rgb, unpack_rgb
from huebin.measure.scan import ALPHA_CUTOFF, PixelBuffer, as_pixel_array


def detect_gradients(
    buffer: PixelBuffer,
    width: int,
    height: int,
    threshold: float,
) -> tuple[ColorRecord, ...]:
    """
    Rank colours that sit on either side of a sharp horizontal transition.

    A pair (x, x+1) in the same row qualifies when both pixels are opaque
    and their squared RGB distance exceeds threshold². Each qualifying pair
    adds one to the count of each of its two colours.

    Args:
        buffer: RGBA8 pixel data
        width: Image width in pixels
        height: Image height in pixels
        threshold: RGB-space distance, must be > 0

    Returns:
        Participant records, descending by count; ties keep the order in
        which colours first took part. Percentages are "N/A".
    """
    if threshold <= 0:
        raise InvalidInputError(f"threshold must be positive, got {threshold!r}")

    pixels = as_pixel_array(buffer, width, height)
    if width < 2:
        return ()

    left = pixels[:, :-1].reshape(-1, 4).astype(np.int64)
    right = pixels[:, 1:].reshape(-1, 4).astype(np.int64)

    opaque = (left[:, 3] >= ALPHA_CUTOFF) & (right[:, 3] >= ALPHA_CUTOFF)
    d2 = np.sum((left[:, :3] - right[:, :3]) ** 2, axis=1)
    jump = opaque & (d2 > float(threshold) ** 2)

    if not np.any(jump):
        return ()

    # Interleave so participation order is left, right, left, right, ...
    participants = np.stack(
        [pack_rgb(left[jump, :3]), pack_rgb(right[jump, :3])], axis=1
    ).reshape(-1)

    keys, first, counts = np.unique(participants, return_index=True, return_counts=True)
    first_seen = np.argsort(first, kind="stable")
    keys, counts = keys[first_seen], counts[first_seen]

    ranked = np.argsort(-counts, kind="stable")
    rgb = unpack_rgb(keys)

    return tuple(
        ColorRecord(
            rgb=(int(rgb[i, 0]), int(rgb[i, 1]), int(rgb[i, 2])),
            count=int(counts[i]),
            percentage=NOT_APPLICABLE,
        )
        for i in ranked
    )
