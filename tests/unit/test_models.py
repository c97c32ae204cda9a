"""Domain model tests."""

from __future__ import annotations

from poi_extractor.domain.enums import CategoryTag
from poi_extractor.domain.models import POI, Activity, ActivityLocation, TripContext, validate_poi


def test_activity_from_raw_coerces_bad_fields():
    activity = Activity.from_raw({"title": "  Visit Hue ", "description": 5, "category": ["x"], "location": "Hue"})
    assert activity.title == "Visit Hue"
    assert activity.description is None
    assert activity.category is None
    assert activity.location is None


def test_activity_from_raw_handles_non_mappings():
    assert Activity.from_raw(None).is_empty
    assert Activity.from_raw("Visit Hue").is_empty
    assert not Activity.from_raw({"location": {"name": "Louvre", "extra": 1}}).is_empty


def test_trip_context_resolution_order():
    trip = TripContext.from_raw({"destination": "Tokyo, Japan"})
    place = trip.resolve()
    assert (place.city, place.country) == ("Tokyo, Japan", "Japan")

    place = trip.resolve(ActivityLocation(city="Kyoto"))
    assert (place.city, place.country) == ("Kyoto", "Japan")

    place = TripContext.from_raw({"city": "Paris", "country": "France", "destination": "Europe"}).resolve()
    assert (place.city, place.country) == ("Paris", "France")

    place = TripContext.from_raw(None).resolve()
    assert (place.city, place.country) == ("Unknown", "Unknown")


def test_validate_poi():
    poi = POI(name="Louvre Museum", category=CategoryTag.CULTURAL, confidence=0.9, city="Paris", country="France")
    assert validate_poi(poi)
    assert validate_poi(poi.model_dump(mode="json"))
    assert not validate_poi({"name": "Lo", "category": "cultural", "confidence": 0.9, "city": "x", "country": "y"})
    assert not validate_poi({"name": "Louvre", "category": "museum", "confidence": 0.9, "city": "x", "country": "y"})
    assert not validate_poi({"name": "Louvre", "category": "cultural", "confidence": True, "city": "x", "country": "y"})
    assert not validate_poi({"name": "Louvre", "category": "cultural", "confidence": 1.2, "city": "x", "country": "y"})
    assert not validate_poi("Louvre")
