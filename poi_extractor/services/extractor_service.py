"""Application service for POI extraction use-cases."""

from __future__ import annotations

import threading
import time
from collections import Counter
from typing import Any, Iterable, Mapping, Optional

from poi_extractor.config.settings import ConfigStore, ExtractorConfig
from poi_extractor.domain import patterns
from poi_extractor.domain.dedup import dedupe
from poi_extractor.domain.models import POI, Activity, POICandidate, ServiceStats, TripContext
from poi_extractor.infrastructure.logging import StructuredLogger, get_logger
from poi_extractor.observability.extraction_metrics import ExtractionMetrics, get_extraction_metrics
from poi_extractor.parsing.candidate_matcher import get_matcher
from poi_extractor.trust.confidence import apply_score


def _iter_activities(activities: Any) -> Iterable[Any]:
    if activities is None or isinstance(activities, (str, bytes, Mapping)):
        return ()
    try:
        return list(activities)
    except TypeError:
        return ()


class POIExtractorService:
    """Matcher -> scorer -> threshold filter -> dedup, over one config snapshot per call."""

    def __init__(
        self,
        config: Optional[ExtractorConfig] = None,
        *,
        logger: Optional[StructuredLogger] = None,
        metrics: Optional[ExtractionMetrics] = None,
    ):
        self._store = ConfigStore(config)
        self._logger = logger
        self._metrics = metrics

    @property
    def logger(self) -> StructuredLogger:
        return self._logger or get_logger()

    @property
    def metrics(self) -> ExtractionMetrics:
        return self._metrics or get_extraction_metrics()

    @property
    def config(self) -> ExtractorConfig:
        return self._store.snapshot()

    def extract_candidates(self, activities: Any, trip_context: Any = None) -> list[POICandidate]:
        """Scored candidates before thresholding; useful for inspection and debugging."""
        config = self._store.snapshot()
        return self._scored_candidates(config, activities, trip_context)[0]

    def extract_pois(self, activities: Any, trip_context: Any = None) -> list[POI]:
        config = self._store.snapshot()
        started = time.perf_counter()
        self.logger.stage_start("extract_pois", threshold=config.confidence_threshold)

        candidates, total, skipped = self._scored_candidates(config, activities, trip_context)
        kept = [row for row in candidates if row.confidence >= config.confidence_threshold]
        pois = dedupe(kept)

        latency_ms = (time.perf_counter() - started) * 1000
        self.metrics.record(
            activities=total,
            skipped=skipped,
            candidates=len(candidates),
            kept=len(kept),
            pois=len(pois),
            latency_ms=latency_ms,
            strength_counts=dict(Counter(row.match_strength.value for row in candidates)),
            category_counts=dict(Counter(poi.category.value for poi in pois)),
        )
        self.logger.stage_end(
            "extract_pois",
            duration_ms=latency_ms,
            activities=total,
            skipped=skipped,
            candidates=len(candidates),
            kept=len(kept),
            pois=len(pois),
        )
        return pois

    async def extract_pois_from_itinerary(self, activities: Any, trip_context: Any = None) -> list[POI]:
        return self.extract_pois(activities, trip_context)

    def _scored_candidates(
        self,
        config: ExtractorConfig,
        activities: Any,
        trip_context: Any,
    ) -> tuple[list[POICandidate], int, int]:
        matcher = get_matcher(config.exclude_words)
        trip = TripContext.from_raw(trip_context)
        candidates: list[POICandidate] = []
        total = 0
        skipped = 0
        for index, raw in enumerate(_iter_activities(activities)):
            total += 1
            activity = Activity.from_raw(raw)
            if activity.is_empty:
                skipped += 1
                continue
            found = matcher.match(activity, index=index, trip=trip, position=len(candidates))
            candidates.extend(apply_score(row) for row in found)
        if skipped:
            self.logger.warning("extract_pois", "skipped activities without usable text", skipped=skipped)
        return candidates, total, skipped

    def update_config(self, partial: Mapping[str, Any]) -> ExtractorConfig:
        return self._store.update(partial)

    def reset_config(self, config: Optional[ExtractorConfig] = None) -> ExtractorConfig:
        return self._store.reset(config)

    def get_service_stats(self) -> ServiceStats:
        config = self._store.snapshot()
        return ServiceStats(
            patterns=patterns.pattern_counts(),
            category_keywords=patterns.keyword_counts(),
            confidence_threshold=config.confidence_threshold,
            location_indicators=patterns.trigger_count(),
            exclude_words=len(set(patterns.EXCLUDE_WORDS) | set(config.exclude_words)),
        )


_service_lock = threading.Lock()
_service: Optional[POIExtractorService] = None


def get_extractor_service() -> POIExtractorService:
    global _service
    with _service_lock:
        if _service is None:
            _service = POIExtractorService()
        return _service


def reset_extractor_service() -> None:
    global _service
    with _service_lock:
        _service = None


async def extract_pois_from_itinerary(activities: Any, trip_context: Any = None) -> list[POI]:
    return await get_extractor_service().extract_pois_from_itinerary(activities, trip_context)


def update_config(partial: Mapping[str, Any]) -> ExtractorConfig:
    return get_extractor_service().update_config(partial)


def get_service_stats() -> ServiceStats:
    return get_extractor_service().get_service_stats()


__all__ = [
    "POIExtractorService",
    "extract_pois_from_itinerary",
    "get_extractor_service",
    "get_service_stats",
    "reset_extractor_service",
    "update_config",
]
