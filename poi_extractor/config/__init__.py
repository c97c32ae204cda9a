"""Runtime configuration helpers."""

from poi_extractor.config.settings import (
    DEFAULT_CONFIDENCE_THRESHOLD,
    ConfigStore,
    ExtractorConfig,
    resolve_default_threshold,
)

__all__ = [
    "ConfigStore",
    "DEFAULT_CONFIDENCE_THRESHOLD",
    "ExtractorConfig",
    "resolve_default_threshold",
]
