"""Pattern library tests."""

from __future__ import annotations

from poi_extractor.domain import patterns
from poi_extractor.domain.enums import CategoryTag


def test_detect_country_from_destination():
    assert patterns.detect_country("Hanoi, Vietnam") == "Vietnam"
    assert patterns.detect_country("Tokyo, Japan") == "Japan"
    assert patterns.detect_country("Paris, France") == "France"
    assert patterns.detect_country("Atlantis") is None
    assert patterns.detect_country(None) is None


def test_resolve_hint_accepts_tags_and_aliases():
    assert patterns.resolve_hint("Cultural") == CategoryTag.CULTURAL
    assert patterns.resolve_hint("entertainment") == CategoryTag.LEISURE
    assert patterns.resolve_hint("dining") == CategoryTag.FOOD
    assert patterns.resolve_hint("bogus") is None
    assert patterns.resolve_hint(None) is None


def test_market_is_shopping_but_night_market_is_food():
    assert "market" in patterns.CATEGORY_KEYWORDS[CategoryTag.SHOPPING]
    assert "market" not in patterns.CATEGORY_KEYWORDS[CategoryTag.FOOD]
    assert "night market" in patterns.CATEGORY_KEYWORDS[CategoryTag.FOOD]


def test_pattern_counts_cover_every_concrete_category():
    counts = patterns.pattern_counts()
    assert set(counts) == {"cultural", "nature", "food", "shopping", "accommodation", "leisure"}
    assert all(value > 0 for value in counts.values())
    keyword_counts = patterns.keyword_counts()
    assert counts["food"] == keyword_counts["food"] + len(patterns.triggers_for(CategoryTag.FOOD))
    assert patterns.trigger_count() >= len(patterns.GENERIC_TRIGGERS)
