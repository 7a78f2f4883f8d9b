# Copyright (c) 2026 Huebin
# SPDX-License-Identifier: MIT

"""
Colour analysis core for Huebin.

Deterministic, pixel-based counting, classification and deduplication.
The only randomness is the estimator's sample, which accepts a seed.
"""

from huebin.measure.pipeline import analyze, extract

__all__ = ["analyze", "extract"]
