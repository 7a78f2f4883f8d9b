# Copyright (c) 2026 Huebin
# SPDX-License-Identifier: MIT

"""Tests for the colour category classifier."""

import numpy as np
import pytest

from huebin.measure.categories import (
    CATEGORY_SWATCHES,
    classify,
    classify_array,
    swatch_for,
)
from huebin.measure.colorspace import rgb_to_hsl
from huebin.schema import COLOR_CATEGORIES, Category


def _reference_category(r, g, b):
    """Straight-line rendition of the classification rules, one pixel at a time."""
    h, s, l = rgb_to_hsl(r, g, b)
    if l < 0.10:
        return Category.BLACK
    if l > 0.95:
        return Category.WHITE
    if s < 0.10:
        return Category.GREY
    hue = h * 360
    pastel = l > 0.70 and s < 0.65
    if l < 0.6 and s < 0.7 and 15 <= hue < 45:
        return Category.BROWN
    if l < 0.4 and s < 0.7 and (hue < 25 or hue >= 340):
        return Category.BROWN
    if hue < 18 or hue >= 340:
        return Category.PASTEL_PINK if pastel else Category.RED
    if hue < 45:
        return Category.PASTEL_ORANGE if pastel else Category.ORANGE
    if hue < 70:
        return Category.PASTEL_YELLOW if pastel else Category.YELLOW
    if hue < 160:
        return Category.PASTEL_GREEN if pastel else Category.GREEN
    if hue < 200:
        return Category.PASTEL_CYAN if pastel else Category.CYAN
    if hue < 260:
        return Category.PASTEL_BLUE if pastel else Category.BLUE
    if hue < 300:
        return Category.PASTEL_PURPLE if pastel else Category.PURPLE
    if hue < 340:
        return Category.PASTEL_MAGENTA if pastel else Category.MAGENTA
    return Category.RED


class TestClassifyKnownColors:

    @pytest.mark.parametrize("rgb, expected", [
        ((0, 0, 0), Category.BLACK),
        ((20, 20, 20), Category.BLACK),
        ((255, 255, 255), Category.WHITE),
        ((128, 128, 128), Category.GREY),
        ((255, 0, 0), Category.RED),
        ((255, 128, 0), Category.ORANGE),
        ((255, 255, 0), Category.YELLOW),
        ((0, 255, 0), Category.GREEN),
        ((0, 255, 255), Category.CYAN),
        ((0, 0, 255), Category.BLUE),
        ((128, 0, 255), Category.PURPLE),
        ((255, 0, 255), Category.MAGENTA),
        ((150, 100, 50), Category.BROWN),
        ((100, 30, 30), Category.BROWN),
        ((230, 200, 200), Category.PASTEL_PINK),
        ((200, 210, 230), Category.PASTEL_BLUE),
    ])
    def test_classify(self, rgb, expected):
        assert classify(*rgb) is expected

    def test_saturated_light_colour_is_not_pastel(self):
        # l > 0.70 but s == 1.0
        assert classify(255, 182, 193) is Category.RED

    def test_brown_steals_dark_orange(self):
        assert classify(150, 100, 50) is Category.BROWN
        assert classify(255, 170, 85) is not Category.BROWN

    def test_gradients_never_produced(self):
        axis = np.arange(0, 256, 17)
        grid = np.stack(np.meshgrid(axis, axis, axis, indexing="ij"), axis=-1).reshape(-1, 3)
        labels = {COLOR_CATEGORIES[i] for i in classify_array(grid)}
        assert Category.GRADIENTS not in labels


class TestClassifierTotality:

    def test_grid_sweep_total(self):
        """Every colour on a coarse RGB grid lands in exactly one category."""
        axis = np.arange(0, 256, 15)
        grid = np.stack(np.meshgrid(axis, axis, axis, indexing="ij"), axis=-1).reshape(-1, 3)
        indices = classify_array(grid)
        assert indices.shape == (len(grid),)
        assert indices.min() >= 0
        assert indices.max() < len(COLOR_CATEGORIES)

    def test_all_twenty_categories_reachable(self):
        axis = np.arange(0, 256, 5)
        grid = np.stack(np.meshgrid(axis, axis, axis, indexing="ij"), axis=-1).reshape(-1, 3)
        seen = set(classify_array(grid).tolist())
        assert seen == set(range(len(COLOR_CATEGORIES)))

    def test_batch_matches_reference_rules(self):
        rgb = np.random.default_rng(11).integers(0, 256, size=(3000, 3))
        indices = classify_array(rgb)
        for (r, g, b), i in zip(rgb, indices):
            assert COLOR_CATEGORIES[i] is _reference_category(r, g, b)

    def test_scalar_matches_batch(self):
        rgb = np.random.default_rng(5).integers(0, 256, size=(200, 3))
        indices = classify_array(rgb)
        for (r, g, b), i in zip(rgb, indices):
            assert classify(r, g, b) is COLOR_CATEGORIES[i]

    def test_batch_preserves_shape(self):
        img = np.zeros((4, 5, 3), dtype=np.uint8)
        assert classify_array(img).shape == (4, 5)


class TestSwatches:

    def test_every_category_has_swatch(self):
        assert set(CATEGORY_SWATCHES) == set(COLOR_CATEGORIES)

    def test_lookup_by_label(self):
        assert swatch_for("Red") == "#ff0000"
        assert swatch_for(Category.PASTEL_BLUE) == "#add8e6"

    def test_fallback(self):
        assert swatch_for("Gradients") == "#cccccc"
        assert swatch_for("Chartreuse") == "#cccccc"
