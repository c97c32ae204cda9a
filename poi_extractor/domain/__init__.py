"""Domain package exports."""

from poi_extractor.domain.dedup import MergeKey, dedupe
from poi_extractor.domain.enums import CategoryTag, MatchStrength
from poi_extractor.domain.exceptions import ConfigValidationError, DomainError
from poi_extractor.domain.models import (
    POI,
    UNKNOWN_PLACE,
    Activity,
    ActivityLocation,
    ErrorResponse,
    PlaceContext,
    POICandidate,
    ServiceStats,
    TripContext,
    validate_poi,
)
from poi_extractor.domain.normalizer import names_match, normalize

__all__ = [
    "Activity",
    "ActivityLocation",
    "CategoryTag",
    "ConfigValidationError",
    "DomainError",
    "ErrorResponse",
    "MatchStrength",
    "MergeKey",
    "PlaceContext",
    "POI",
    "POICandidate",
    "ServiceStats",
    "TripContext",
    "UNKNOWN_PLACE",
    "dedupe",
    "names_match",
    "normalize",
    "validate_poi",
]
