"""Service layer public exports."""

from poi_extractor.services.extractor_service import (
    POIExtractorService,
    extract_pois_from_itinerary,
    get_extractor_service,
    get_service_stats,
    reset_extractor_service,
    update_config,
)

__all__ = [
    "POIExtractorService",
    "extract_pois_from_itinerary",
    "get_extractor_service",
    "get_service_stats",
    "reset_extractor_service",
    "update_config",
]
