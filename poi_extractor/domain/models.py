"""Pydantic domain models."""

from __future__ import annotations

from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from poi_extractor.domain.enums import CategoryTag, MatchStrength
from poi_extractor.domain.patterns import detect_country

UNKNOWN_PLACE = "Unknown"


def _text_or_none(value: Any) -> Optional[str]:
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped or None


class ActivityLocation(BaseModel):
    name: Optional[str] = None
    city: Optional[str] = None
    country: Optional[str] = None

    @field_validator("name", "city", "country", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> Optional[str]:
        return _text_or_none(value)


class Activity(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    location: Optional[ActivityLocation] = None

    @field_validator("title", "description", "category", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> Optional[str]:
        return _text_or_none(value)

    @field_validator("location", mode="before")
    @classmethod
    def _coerce_location(cls, value: Any) -> Any:
        if isinstance(value, ActivityLocation):
            return value
        if isinstance(value, Mapping):
            return {key: value.get(key) for key in ("name", "city", "country")}
        return None

    @classmethod
    def from_raw(cls, raw: Any) -> "Activity":
        """Build an activity from caller data; anything unusable becomes an empty activity."""
        if isinstance(raw, Activity):
            return raw
        if not isinstance(raw, Mapping):
            return cls()
        return cls.model_validate(
            {key: raw.get(key) for key in ("title", "description", "category", "location")}
        )

    @property
    def is_empty(self) -> bool:
        return not (self.title or self.description or (self.location and self.location.name))


class PlaceContext(BaseModel):
    model_config = ConfigDict(frozen=True)

    city: str = UNKNOWN_PLACE
    country: str = UNKNOWN_PLACE


class TripContext(BaseModel):
    destination: Optional[str] = None
    city: Optional[str] = None
    country: Optional[str] = None

    @field_validator("destination", "city", "country", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> Optional[str]:
        return _text_or_none(value)

    @classmethod
    def from_raw(cls, raw: Any) -> "TripContext":
        if isinstance(raw, TripContext):
            return raw
        if not isinstance(raw, Mapping):
            return cls()
        return cls.model_validate({key: raw.get(key) for key in ("destination", "city", "country")})

    def resolve(self, location: Optional[ActivityLocation] = None) -> PlaceContext:
        """Resolve city/country, letting a per-activity location override the trip."""
        city = (location.city if location else None) or self.city or self.destination
        country = (
            (location.country if location else None)
            or self.country
            or detect_country(self.destination)
        )
        return PlaceContext(city=city or UNKNOWN_PLACE, country=country or UNKNOWN_PLACE)


class POICandidate(BaseModel):
    raw_mention: str
    normalized_name: str
    category: CategoryTag = CategoryTag.OTHER
    source_activity_index: int = 0
    match_strength: MatchStrength = MatchStrength.WEAK
    confidence: float = Field(default=0.0, ge=0.0, le=1.0)
    position: int = 0
    extracted_from: str = "text"
    city: str = UNKNOWN_PLACE
    country: str = UNKNOWN_PLACE
    token_count: int = 1
    proper_tokens: int = 0
    keyword_anchor: bool = False
    trigger_anchor: bool = False
    hint_match: bool = False
    locale_term: bool = False
    common_single: bool = False

    @property
    def context_key(self) -> tuple[str, str]:
        return (self.city.casefold(), self.country.casefold())


class POI(BaseModel):
    name: str
    category: CategoryTag
    confidence: float = Field(ge=0.0, le=1.0)
    city: str = UNKNOWN_PLACE
    country: str = UNKNOWN_PLACE


class ServiceStats(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    patterns: dict[str, int] = Field(default_factory=dict)
    category_keywords: dict[str, int] = Field(default_factory=dict, alias="categoryKeywords")
    confidence_threshold: float = Field(default=0.5, alias="confidenceThreshold")
    location_indicators: int = Field(default=0, alias="locationIndicators")
    exclude_words: int = Field(default=0, alias="excludeWords")


class ErrorResponse(BaseModel):
    error: bool = True
    code: str = "UNKNOWN"
    message: str = ""
    details: list[str] = Field(default_factory=list)


def validate_poi(poi: Any) -> bool:
    """Structural check for POI-like payloads handed over by collaborators."""
    payload = poi.model_dump() if isinstance(poi, BaseModel) else poi
    if not isinstance(payload, Mapping):
        return False
    name = payload.get("name")
    confidence = payload.get("confidence")
    category = payload.get("category")
    if isinstance(category, CategoryTag):
        category = category.value
    return (
        isinstance(name, str)
        and len(name.strip()) >= 3
        and all(isinstance(payload.get(key), str) and payload.get(key) for key in ("city", "country"))
        and category in {tag.value for tag in CategoryTag}
        and isinstance(confidence, (int, float))
        and not isinstance(confidence, bool)
        and 0.0 <= float(confidence) <= 1.0
    )
