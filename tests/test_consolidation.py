# Copyright (c) 2026 Huebin
# SPDX-License-Identifier: MIT

"""Tests for colour consolidation (greedy threshold merge)."""

import numpy as np
import pytest

from huebin.errors import InvalidInputError
from huebin.measure.colorspace import distance_sq
from huebin.measure.consolidation import aggregate
from huebin.schema import ColorRecord


class TestAggregate:

    def test_near_colours_merge(self):
        colors = [
            ((100, 100, 100), 5),
            ((103, 100, 100), 3),
            ((200, 0, 0), 2),
        ]
        result = aggregate(colors, 10)
        assert [(r.rgb, r.count) for r in result] == [
            ((100, 100, 100), 8),
            ((200, 0, 0), 2),
        ]

    def test_distinct_colours_preserved(self):
        colors = [((255, 0, 0), 3), ((0, 255, 0), 2), ((0, 0, 255), 1)]
        result = aggregate(colors, 10)
        assert len(result) == 3

    def test_first_match_wins(self):
        """A colour within range of two representatives joins the earlier one."""
        colors = [
            ((0, 0, 0), 10),
            ((12, 0, 0), 5),   # 12 away from black: its own representative
            ((6, 0, 0), 1),    # 6 away from both
        ]
        result = aggregate(colors, 10)
        assert [(r.rgb, r.count) for r in result] == [
            ((0, 0, 0), 11),
            ((12, 0, 0), 5),
        ]

    def test_distance_equal_to_threshold_does_not_merge(self):
        result = aggregate([((0, 0, 0), 1), ((10, 0, 0), 1)], 10)
        assert len(result) == 2

    def test_representative_keeps_its_own_rgb(self):
        result = aggregate([((50, 50, 50), 1), ((52, 52, 52), 100)], 10)
        assert result[0].rgb == (50, 50, 50)
        assert result[0].count == 101

    def test_resorted_after_merge(self):
        colors = [
            ((0, 0, 0), 5),
            ((100, 0, 0), 4),
            ((103, 0, 0), 4),
        ]
        result = aggregate(colors, 10)
        assert [r.rgb for r in result] == [(100, 0, 0), (0, 0, 0)]
        assert [r.count for r in result] == [8, 5]

    def test_ties_keep_acceptance_order(self):
        colors = [((0, 0, 0), 3), ((255, 0, 0), 3), ((0, 0, 255), 3)]
        result = aggregate(colors, 10)
        assert [r.rgb for r in result] == [(0, 0, 0), (255, 0, 0), (0, 0, 255)]

    def test_accepts_records(self):
        records = [ColorRecord(rgb=(10, 10, 10), count=2), ColorRecord(rgb=(11, 10, 10), count=1)]
        result = aggregate(records, 5)
        assert result == (ColorRecord(rgb=(10, 10, 10), count=3),)

    def test_empty(self):
        assert aggregate([], 10) == ()

    @pytest.mark.parametrize("threshold", [0, -1, -0.5])
    def test_non_positive_threshold(self, threshold):
        with pytest.raises(InvalidInputError, match="threshold"):
            aggregate([((0, 0, 0), 1)], threshold)


class TestAggregateInvariants:

    @pytest.fixture
    def random_colors(self):
        rng = np.random.default_rng(42)
        rgb = rng.integers(0, 256, size=(400, 3))
        counts = rng.integers(1, 50, size=400)
        order = np.argsort(-counts, kind="stable")
        return [(tuple(int(c) for c in rgb[i]), int(counts[i])) for i in order]

    def test_total_count_preserved(self, random_colors):
        result = aggregate(random_colors, 30)
        assert sum(r.count for r in result) == sum(c for _, c in random_colors)

    def test_representatives_are_separated(self, random_colors):
        threshold = 30
        result = aggregate(random_colors, threshold)
        for i, a in enumerate(result):
            for b in result[i + 1:]:
                assert distance_sq(a.rgb, b.rgb) >= threshold ** 2

    def test_output_descending(self, random_colors):
        counts = [r.count for r in aggregate(random_colors, 30)]
        assert counts == sorted(counts, reverse=True)

    def test_representatives_come_from_input(self, random_colors):
        inputs = {rgb for rgb, _ in random_colors}
        assert all(r.rgb in inputs for r in aggregate(random_colors, 30))
