"""pytest fixtures: isolate env and process-wide singletons per test."""

import pytest


@pytest.fixture(autouse=True)
def isolated_service(monkeypatch):
    monkeypatch.delenv("POI_CONFIDENCE_THRESHOLD", raising=False)
    monkeypatch.delenv("ENABLE_DOCS", raising=False)
    from poi_extractor.observability.extraction_metrics import get_extraction_metrics
    from poi_extractor.services.extractor_service import reset_extractor_service

    reset_extractor_service()
    get_extraction_metrics().reset()
    yield
    reset_extractor_service()
    get_extraction_metrics().reset()
