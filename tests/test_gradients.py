# Copyright (c) 2026 Huebin
# SPDX-License-Identifier: MIT

"""Tests for gradient participant detection."""

import numpy as np
import pytest

from huebin.errors import InvalidInputError
from huebin.measure.gradients import detect_gradients
from huebin.schema import NOT_APPLICABLE

BLACK = (0, 0, 0, 255)
WHITE = (255, 255, 255, 255)
RED = (255, 0, 0, 255)


def _image(*rows):
    return np.array(rows, dtype=np.uint8)


class TestDetectGradients:

    def test_black_white_black(self):
        result = detect_gradients(_image([BLACK, WHITE, BLACK]), 3, 1, 10)
        assert [(r.rgb, r.count) for r in result] == [
            ((0, 0, 0), 2),
            ((255, 255, 255), 2),
        ]
        assert all(r.percentage == NOT_APPLICABLE for r in result)

    def test_ranked_by_participation(self):
        # Pairs: R|K, K|K (no jump), K|W
        result = detect_gradients(_image([RED, BLACK, BLACK, WHITE]), 4, 1, 10)
        assert [(r.rgb, r.count) for r in result] == [
            ((0, 0, 0), 2),
            ((255, 0, 0), 1),
            ((255, 255, 255), 1),
        ]

    def test_only_horizontal_pairs(self):
        # Sharp vertical edge between rows, uniform within each row
        result = detect_gradients(_image([BLACK, BLACK], [WHITE, WHITE]), 2, 2, 10)
        assert result == ()

    def test_transparent_pairs_skipped(self):
        clear_white = (255, 255, 255, 127)
        result = detect_gradients(_image([BLACK, clear_white, BLACK]), 3, 1, 10)
        assert result == ()

    def test_alpha_at_cutoff_counts(self):
        result = detect_gradients(_image([BLACK, (255, 255, 255, 128)]), 2, 1, 10)
        assert len(result) == 2

    def test_below_threshold(self):
        result = detect_gradients(_image([(100, 100, 100, 255), (105, 100, 100, 255)]), 2, 1, 10)
        assert result == ()

    def test_distance_equal_to_threshold_not_a_jump(self):
        result = detect_gradients(_image([(0, 0, 0, 255), (10, 0, 0, 255)]), 2, 1, 10)
        assert result == ()

    def test_single_column(self):
        assert detect_gradients(_image([BLACK], [WHITE]), 1, 2, 10) == ()

    def test_counts_each_pair_per_row(self):
        result = detect_gradients(_image([BLACK, WHITE], [BLACK, WHITE], [WHITE, BLACK]), 2, 3, 10)
        assert {r.rgb: r.count for r in result} == {(0, 0, 0): 3, (255, 255, 255): 3}
        # Black took part first
        assert result[0].rgb == (0, 0, 0)

    def test_invalid_threshold(self):
        with pytest.raises(InvalidInputError):
            detect_gradients(_image([BLACK, WHITE]), 2, 1, 0)

    def test_invalid_buffer(self):
        with pytest.raises(InvalidInputError):
            detect_gradients(bytes(4), 2, 1, 10)
