"""Infrastructure services and cross-cutting utilities."""

from poi_extractor.infrastructure.logging import StructuredLogger, get_logger

__all__ = ["StructuredLogger", "get_logger"]
