"""Tests for marker colour and size rules."""

import pytest

from scrapmap.domain.policies.marker_style import (
    DEFAULT_SIZE_PX,
    FOCUSED_SIZE_PX,
    icon_url,
    marker_color,
    marker_size,
)


@pytest.mark.parametrize(
    "category,color",
    [
        ("Metal", "red"),
        ("plastic", "green"),
        ("PAPER", "yellow"),
        ("Glass", "purple"),
        ("Electronics", "orange"),
        ("Textile", "pink"),
        ("Organic", "brown"),
    ],
)
def test_known_categories(category, color):
    assert marker_color(category) == color


@pytest.mark.parametrize("category", [None, "", "Other", "rubber"])
def test_unknown_category_is_default(category):
    assert marker_color(category) == "blue"


def test_focused_listing_is_larger():
    assert marker_size("a", focused_listing_id="a") == FOCUSED_SIZE_PX
    assert marker_size("b", focused_listing_id="a") == DEFAULT_SIZE_PX
    assert marker_size("b", focused_listing_id=None) == DEFAULT_SIZE_PX


def test_icon_url():
    assert icon_url("red") == "https://maps.google.com/mapfiles/ms/icons/red-dot.png"
