# Copyright (c) 2026 Huebin
# SPDX-License-Identifier: MIT

"""
Result and option types for colour analysis and extraction.

Design principles:
- Immutable: records, options and results are frozen dataclasses
- Fresh per call: nothing here is shared between runs or images
- Host-ready: to_dict() emits the camelCase keys the host layer consumes

Categories:
    Twenty labels are produced by the classifier (achromatic, eight hue
    families with a pastel variant each, and Brown). "Gradients" is a
    synthetic bucket holding gradient participants, never a classifier result.
"""

from __future__ import annotations

import json
import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace
from enum import Enum
from numbers import Real
from typing import Optional, Union

from huebin.errors import InvalidInputError


# =============================================================================
# Categories
# =============================================================================


class Category(str, Enum):
    """Named colour buckets. Definition order is the canonical display order."""

    BLACK = "Black"
    WHITE = "White"
    GREY = "Grey"
    RED = "Red"
    ORANGE = "Orange"
    YELLOW = "Yellow"
    GREEN = "Green"
    CYAN = "Cyan"
    BLUE = "Blue"
    PURPLE = "Purple"
    MAGENTA = "Magenta"
    PASTEL_PINK = "Pastel Pink"
    PASTEL_ORANGE = "Pastel Orange"
    PASTEL_YELLOW = "Pastel Yellow"
    PASTEL_GREEN = "Pastel Green"
    PASTEL_CYAN = "Pastel Cyan"
    PASTEL_BLUE = "Pastel Blue"
    PASTEL_PURPLE = "Pastel Purple"
    PASTEL_MAGENTA = "Pastel Magenta"
    BROWN = "Brown"
    GRADIENTS = "Gradients"

    def __str__(self) -> str:
        return self.value


# Everything the classifier can return, in canonical order.
COLOR_CATEGORIES: tuple[Category, ...] = tuple(
    c for c in Category if c is not Category.GRADIENTS
)

ALL_CATEGORIES = "all"

# Placeholder percentage for records that have no share of the image
NOT_APPLICABLE = "N/A"

CategorySelection = Union[str, Category, Iterable[Union[str, Category]], None]


def resolve_categories(selection: CategorySelection) -> tuple[Category, ...]:
    """
    Normalize a category selection into a tuple of classifier categories.

    Args:
        selection: "all" (or None) for every category, a single label, or an
            iterable of labels / Category members.

    Returns:
        De-duplicated categories in canonical order.

    Raises:
        InvalidInputError: For unknown labels or the synthetic Gradients bucket.
    """
    if selection is None or selection == ALL_CATEGORIES:
        return COLOR_CATEGORIES
    if isinstance(selection, str):
        selection = [selection]

    chosen: set[Category] = set()
    for item in selection:
        try:
            category = Category(item)
        except ValueError:
            raise InvalidInputError(f"Unknown colour category: {item!r}") from None
        if category is Category.GRADIENTS:
            raise InvalidInputError(
                "'Gradients' is not a selectable category; "
                "use extract_gradients instead"
            )
        chosen.add(category)

    return tuple(c for c in COLOR_CATEGORIES if c in chosen)


# =============================================================================
# Colour Record
# =============================================================================


@dataclass(frozen=True, slots=True)
class ColorRecord:
    """
    One colour with its occurrence count.

    Attributes:
        rgb: (r, g, b) with each channel in [0, 255]
        count: Number of pixels (or pixel pairs, for gradients) represented
        percentage: None until ranked; then a 2-decimal string such as "12.50",
            or "N/A" for gradient participants
    """
    rgb: tuple[int, int, int]
    count: int
    percentage: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate channel ranges and count."""
        if len(self.rgb) != 3:
            raise ValueError(f"rgb must have 3 channels, got {self.rgb!r}")
        if any(not 0 <= ch <= 255 for ch in self.rgb):
            raise ValueError(f"RGB channels must be 0-255, got {self.rgb!r}")
        if self.count < 0:
            raise ValueError(f"Count must be >= 0, got {self.count}")

    @property
    def hex(self) -> str:
        """Lowercase hex string like "#ff8800"."""
        from huebin.measure.colorspace import rgb_to_hex
        return rgb_to_hex(*self.rgb)

    @property
    def decimal(self) -> int:
        """24-bit integer encoding r*65536 + g*256 + b."""
        from huebin.measure.colorspace import rgb_to_decimal
        return rgb_to_decimal(*self.rgb)

    def with_count(self, count: int) -> ColorRecord:
        return replace(self, count=count)

    def with_percentage(self, percentage: Optional[str]) -> ColorRecord:
        return replace(self, percentage=percentage)

    def to_dict(self) -> dict:
        """Serialize to dictionary (percentage omitted when unset)."""
        d = {
            "rgb": list(self.rgb),
            "hex": self.hex,
            "decimal": self.decimal,
            "count": self.count,
        }
        if self.percentage is not None:
            d["percentage"] = self.percentage
        return d

    @classmethod
    def from_dict(cls, data: dict) -> ColorRecord:
        """Deserialize from dictionary. The rgb field wins over hex/decimal."""
        if "rgb" in data:
            rgb = tuple(int(ch) for ch in data["rgb"])
        elif "hex" in data:
            from huebin.measure.colorspace import hex_to_rgb
            rgb = hex_to_rgb(data["hex"])
        else:
            from huebin.measure.colorspace import decimal_to_rgb
            rgb = decimal_to_rgb(int(data["decimal"]))
        return cls(
            rgb=rgb,
            count=int(data.get("count", 0)),
            percentage=data.get("percentage"),
        )


# =============================================================================
# Run Options
# =============================================================================


@dataclass(frozen=True, slots=True)
class RunOptions:
    """
    Per-run configuration, immutable for the duration of one call.

    Attributes:
        threshold: RGB-space distance below which two colours count as the same
        remove_background: Drop near-white pixels (all channels > 240)
        selected_categories: "all" or the categories to extract
        max_colors_per_category: Cap on colours reported per category
        extract_gradients: Run the horizontal gradient pass during extraction
    """
    threshold: float = 10.0
    remove_background: bool = False
    selected_categories: Union[str, tuple[Category, ...]] = ALL_CATEGORIES
    max_colors_per_category: int = 20
    extract_gradients: bool = False

    def __post_init__(self) -> None:
        """Validate values and normalize the category selection."""
        t = self.threshold
        if isinstance(t, bool) or not isinstance(t, Real) or not math.isfinite(t) or t <= 0:
            raise InvalidInputError(
                f"threshold must be a finite positive number, got {t!r}"
            )
        m = self.max_colors_per_category
        if isinstance(m, bool) or not isinstance(m, int) or m < 1:
            raise InvalidInputError(
                f"max_colors_per_category must be an integer >= 1, got {m!r}"
            )
        for name in ("remove_background", "extract_gradients"):
            flag = getattr(self, name)
            if not isinstance(flag, bool):
                raise InvalidInputError(f"{name} must be true or false, got {flag!r}")
        if self.selected_categories != ALL_CATEGORIES:
            object.__setattr__(
                self,
                "selected_categories",
                resolve_categories(self.selected_categories),
            )

    @property
    def categories(self) -> tuple[Category, ...]:
        """The selection resolved to concrete categories."""
        return resolve_categories(self.selected_categories)

    @property
    def max_gradients(self) -> int:
        """Gradient participants are capped at twice the per-category limit."""
        return self.max_colors_per_category * 2

    def to_dict(self) -> dict:
        selected = self.selected_categories
        return {
            "threshold": self.threshold,
            "removeBackground": self.remove_background,
            "selectedCategories": (
                selected if selected == ALL_CATEGORIES else [c.value for c in selected]
            ),
            "maxColorsPerCategory": self.max_colors_per_category,
            "extractGradients": self.extract_gradients,
        }

    @classmethod
    def coerce(cls, options: Union[RunOptions, Mapping, None]) -> RunOptions:
        """Accept RunOptions, a host mapping, or None (defaults)."""
        if options is None:
            return cls()
        if isinstance(options, cls):
            return options
        if isinstance(options, Mapping):
            return cls.from_dict(options)
        raise InvalidInputError(
            f"Expected RunOptions or a mapping, got {type(options).__name__}"
        )

    @classmethod
    def from_dict(cls, data: Mapping) -> RunOptions:
        """
        Build options from a host mapping.

        Accepts camelCase host keys (``removeBg`` and ``removeBackground`` are
        both understood) as well as snake_case field names. Missing keys take
        the defaults.
        """
        def pick(*keys, default):
            for key in keys:
                if key in data:
                    return data[key]
            return default

        defaults = cls()
        return cls(
            threshold=pick("threshold", default=defaults.threshold),
            remove_background=pick(
                "removeBackground", "removeBg", "remove_background",
                default=defaults.remove_background,
            ),
            selected_categories=pick(
                "selectedCategories", "selected_categories",
                default=ALL_CATEGORIES,
            ),
            max_colors_per_category=pick(
                "maxColorsPerCategory", "max_colors_per_category",
                default=defaults.max_colors_per_category,
            ),
            extract_gradients=pick(
                "extractGradients", "extract_gradients",
                default=defaults.extract_gradients,
            ),
        )


# =============================================================================
# Results
# =============================================================================


@dataclass(frozen=True)
class AnalysisResult:
    """
    Lightweight preview of an image's colours.

    Attributes:
        total_pixel_count: Opaque pixels that survived filtering
        raw_color_count: Distinct exact RGB values among them
        estimated_unique_count: Sampled estimate of the deduplicated count
            (approximate, not authoritative)
        category_counts: Pixels per category; only categories that occurred
        width, height: Dimensions of the scanned (possibly downsampled) image
    """
    total_pixel_count: int
    raw_color_count: int
    estimated_unique_count: int
    category_counts: dict[Category, int] = field(default_factory=dict)
    width: int = 0
    height: int = 0

    def category_share(self, category: Union[str, Category]) -> float:
        """Percentage of counted pixels in a category (0.0 when empty)."""
        if self.total_pixel_count == 0:
            return 0.0
        count = self.category_counts.get(Category(category), 0)
        return count / self.total_pixel_count * 100

    def to_dict(self) -> dict:
        return {
            "totalPixelCount": self.total_pixel_count,
            "rawColorCount": self.raw_color_count,
            "estimatedUniqueCount": self.estimated_unique_count,
            "categoryCounts": {
                c.value: n for c, n in self.category_counts.items()
            },
            "width": self.width,
            "height": self.height,
        }

    def to_json(self, indent: Optional[int] = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: dict) -> AnalysisResult:
        return cls(
            total_pixel_count=data["totalPixelCount"],
            raw_color_count=data["rawColorCount"],
            estimated_unique_count=data["estimatedUniqueCount"],
            category_counts={
                Category(label): n
                for label, n in data.get("categoryCounts", {}).items()
            },
            width=data.get("width", 0),
            height=data.get("height", 0),
        )


@dataclass(frozen=True)
class ExtractionResult:
    """
    Categorized colours for an image.

    Attributes:
        categorized_results: Category -> colours, most frequent first. Every
            selected category is present, possibly empty. Gradients appear
            only when the gradient pass found participants.
        final_unique_count: Total number of reported colours across categories
        total_pixel_count: Opaque pixels that survived filtering
    """
    categorized_results: dict[Category, tuple[ColorRecord, ...]]
    final_unique_count: int
    total_pixel_count: int = 0

    def __post_init__(self) -> None:
        """The unique count must agree with the reported lists."""
        listed = sum(len(v) for v in self.categorized_results.values())
        if listed != self.final_unique_count:
            raise ValueError(
                f"final_unique_count {self.final_unique_count} does not match "
                f"{listed} reported colours"
            )

    def colors(self, category: Union[str, Category]) -> tuple[ColorRecord, ...]:
        """Colours reported for a category (empty tuple if absent)."""
        return self.categorized_results.get(Category(category), ())

    @property
    def gradients(self) -> tuple[ColorRecord, ...]:
        return self.categorized_results.get(Category.GRADIENTS, ())

    def to_dict(self) -> dict:
        return {
            "categorizedResults": {
                c.value: [r.to_dict() for r in records]
                for c, records in self.categorized_results.items()
            },
            "finalUniqueCount": self.final_unique_count,
            "totalPixelCount": self.total_pixel_count,
        }

    def to_json(self, indent: Optional[int] = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: dict) -> ExtractionResult:
        results = {
            Category(label): tuple(ColorRecord.from_dict(r) for r in records)
            for label, records in data.get("categorizedResults", {}).items()
        }
        return cls(
            categorized_results=results,
            final_unique_count=data.get(
                "finalUniqueCount", sum(len(v) for v in results.values())
            ),
            total_pixel_count=data.get("totalPixelCount", 0),
        )
