"""Deduplicator tests."""

from __future__ import annotations

from poi_extractor.domain.dedup import MergeKey, dedupe
from poi_extractor.domain.enums import CategoryTag, MatchStrength
from poi_extractor.domain.models import POICandidate
from poi_extractor.domain.normalizer import normalize


def _row(name, *, confidence, index=0, position=0, category=CategoryTag.CULTURAL, city="Paris", country="France"):
    normalized = normalize(name)
    return POICandidate(
        raw_mention=name,
        normalized_name=normalized,
        category=category,
        source_activity_index=index,
        match_strength=MatchStrength.EXPLICIT,
        confidence=confidence,
        position=position,
        city=city,
        country=country,
        token_count=len(normalized.split()),
    )


def test_repeated_mentions_collapse_to_one_poi():
    pois = dedupe(
        [
            _row("Eiffel Tower", confidence=0.95, index=0, position=0),
            _row("Eiffel Tower", confidence=0.8, index=1, position=1),
            _row("eiffel tower", confidence=0.6, index=2, position=2),
        ]
    )
    assert len(pois) == 1
    assert pois[0].name == "Eiffel Tower"
    assert pois[0].confidence == 0.95


def test_different_city_context_is_not_merged():
    pois = dedupe(
        [
            _row("Eiffel Tower", confidence=0.9, position=0),
            _row("Eiffel Tower", confidence=0.9, index=1, position=1, city="Las Vegas", country="United States"),
        ]
    )
    assert len(pois) == 2
    assert {poi.city for poi in pois} == {"Paris", "Las Vegas"}


def test_short_name_does_not_bridge_sibling_places():
    pois = dedupe(
        [
            _row("Notre Dame Cathedral", confidence=0.9, position=0),
            _row("Notre Dame Basilica", confidence=0.85, index=1, position=1),
            _row("Notre Dame", confidence=0.7, index=2, position=2),
        ]
    )
    assert [poi.name for poi in pois] == ["Notre Dame Cathedral", "Notre Dame Basilica"]


def test_most_specific_name_wins():
    pois = dedupe(
        [
            _row("Louvre", confidence=0.6, position=0),
            _row("Louvre Museum", confidence=0.95, index=1, position=1),
        ]
    )
    assert len(pois) == 1
    assert pois[0].name == "Louvre Museum"


def test_majority_category_wins():
    pois = dedupe(
        [
            _row("Ben Thanh Market", confidence=0.7, category=CategoryTag.OTHER, position=0),
            _row("Ben Thanh Market", confidence=0.8, category=CategoryTag.SHOPPING, position=1),
            _row("Ben Thanh Market", confidence=0.6, category=CategoryTag.FOOD, position=2),
            _row("Ben Thanh Market", confidence=0.5, category=CategoryTag.SHOPPING, position=3),
        ]
    )
    assert pois[0].category == CategoryTag.SHOPPING


def test_other_counts_like_any_category():
    pois = dedupe(
        [
            _row("Ben Thanh Market", confidence=0.6, category=CategoryTag.OTHER, position=0),
            _row("Ben Thanh Market", confidence=0.5, category=CategoryTag.OTHER, position=1),
            _row("Ben Thanh Market", confidence=0.9, category=CategoryTag.SHOPPING, position=2),
        ]
    )
    assert pois[0].category == CategoryTag.OTHER
    assert pois[0].confidence == 0.9


def test_category_tie_goes_to_most_confident_member():
    pois = dedupe(
        [
            _row("Temple Cafe", confidence=0.7, category=CategoryTag.CULTURAL, position=0),
            _row("Temple Cafe", confidence=0.9, category=CategoryTag.FOOD, position=1),
        ]
    )
    assert pois[0].category == CategoryTag.FOOD


def test_output_order_is_confidence_then_first_seen():
    pois = dedupe(
        [
            _row("Musee d'Orsay", confidence=0.8, index=0, position=0),
            _row("Louvre Museum", confidence=0.95, index=1, position=1),
            _row("Sainte Chapelle", confidence=0.8, index=2, position=2),
        ]
    )
    assert [poi.name for poi in pois] == ["Louvre Museum", "Musee d'Orsay", "Sainte Chapelle"]


def test_merge_key_requires_same_context():
    paris = MergeKey(context=("paris", "france"), tokens=("eiffel", "tower"))
    vegas = MergeKey(context=("las vegas", "united states"), tokens=("eiffel", "tower"))
    assert paris.matches(MergeKey(context=("paris", "france"), tokens=("eiffel", "tower", "summit")))
    assert not paris.matches(vegas)


def test_empty_input():
    assert dedupe([]) == []
