"""Observability utilities."""

from poi_extractor.observability.extraction_metrics import ExtractionMetrics, get_extraction_metrics

__all__ = ["ExtractionMetrics", "get_extraction_metrics"]
