"""API request/response models."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from poi_extractor.domain.models import POI


class ExtractRequest(BaseModel):
    # Entries stay loosely typed; malformed activities are skipped, not rejected.
    activities: list[Any] = Field(default_factory=list, max_length=1000, description="Itinerary activities")
    trip_context: Optional[dict[str, Any]] = Field(
        default=None,
        alias="tripContext",
        description="destination / city / country of the trip",
    )

    model_config = ConfigDict(populate_by_name=True)


class ExtractResponse(BaseModel):
    pois: list[POI] = Field(default_factory=list)
    count: int = 0
    confidence_threshold: float = Field(default=0.5)


class ConfigResponse(BaseModel):
    confidence_threshold: float
    exclude_words: list[str] = Field(default_factory=list)


class HealthResponse(BaseModel):
    status: str = "ok"
