# Copyright (c) 2026 Huebin
# SPDX-License-Identifier: MIT

"""Tests for category ranking, limiting and percentage formatting."""

import pytest

from huebin.errors import InvalidInputError
from huebin.measure.categories import classify
from huebin.measure.palette import format_percentage, rank_and_limit
from huebin.schema import COLOR_CATEGORIES, Category, ColorRecord


def _rec(rgb, count):
    return ColorRecord(rgb=rgb, count=count)


class TestFormatPercentage:

    @pytest.mark.parametrize("count, total, expected", [
        (1, 4, "25.00"),
        (1, 3, "33.33"),
        (2, 3, "66.67"),
        (5, 5, "100.00"),
        (0, 7, "0.00"),
    ])
    def test_two_decimals(self, count, total, expected):
        assert format_percentage(count, total) == expected

    def test_zero_total(self):
        assert format_percentage(0, 0) == "0.00"


class TestRankAndLimit:

    def test_every_selected_category_present(self):
        result = rank_and_limit([], ["Blue", "Red"], 5, 0)
        assert result == {Category.RED: (), Category.BLUE: ()}

    def test_canonical_order(self):
        result = rank_and_limit([], ["Brown", "Black", "Pastel Blue"], 5, 0)
        assert list(result) == [Category.BLACK, Category.PASTEL_BLUE, Category.BROWN]

    def test_all_selects_twenty(self):
        result = rank_and_limit([], "all", 5, 0)
        assert tuple(result) == COLOR_CATEGORIES

    def test_limit_keeps_most_frequent(self):
        reds = [_rec((255, i, i), 10 - i) for i in range(5)]
        result = rank_and_limit(reds, "all", 2, 100)
        assert [r.rgb for r in result[Category.RED]] == [(255, 0, 0), (255, 1, 1)]

    def test_limit_is_per_category(self):
        colors = [
            _rec((255, 0, 0), 4),
            _rec((0, 0, 255), 3),
            _rec((250, 0, 0), 2),
            _rec((0, 0, 250), 1),
        ]
        result = rank_and_limit(colors, ["Red", "Blue"], 1, 10)
        assert result[Category.RED] == (ColorRecord((255, 0, 0), 4, "40.00"),)
        assert result[Category.BLUE] == (ColorRecord((0, 0, 255), 3, "30.00"),)

    def test_percentage_of_total(self):
        result = rank_and_limit([_rec((255, 0, 0), 1)], ["Red"], 20, 4)
        assert result[Category.RED][0].percentage == "25.00"

    def test_unselected_colours_dropped(self):
        colors = [_rec((0, 255, 0), 9), _rec((255, 0, 0), 1)]
        result = rank_and_limit(colors, ["Red"], 20, 10)
        assert list(result) == [Category.RED]
        assert [r.rgb for r in result[Category.RED]] == [(255, 0, 0)]

    def test_empty_selection(self):
        assert rank_and_limit([_rec((255, 0, 0), 1)], [], 20, 1) == {}

    def test_records_land_in_their_classifier_bucket(self):
        colors = [
            _rec((150, 100, 50), 6),
            _rec((230, 200, 200), 5),
            _rec((128, 128, 128), 4),
            _rec((255, 255, 0), 3),
        ]
        result = rank_and_limit(colors, "all", 20, 18)
        for category, records in result.items():
            for record in records:
                assert classify(*record.rgb) is category

    def test_gradients_not_selectable(self):
        with pytest.raises(InvalidInputError, match="Gradients"):
            rank_and_limit([], ["Gradients"], 20, 0)
