"""FastAPI adapter over the POI extraction service."""

from __future__ import annotations

import logging
import os
from typing import Any

from dotenv import load_dotenv
from fastapi import Body, FastAPI, Request
from fastapi.responses import JSONResponse

from poi_extractor.api.schemas import ConfigResponse, ExtractRequest, ExtractResponse, HealthResponse
from poi_extractor.domain.exceptions import ConfigValidationError
from poi_extractor.domain.models import ErrorResponse, ServiceStats
from poi_extractor.observability.extraction_metrics import get_extraction_metrics
from poi_extractor.services.extractor_service import get_extractor_service

_api_logger = logging.getLogger("poi-extractor.api")

load_dotenv()

app = FastAPI(
    title="poi-extractor",
    version="1.0.0",
    docs_url="/docs" if os.getenv("ENABLE_DOCS", "false").lower() == "true" else None,
    redoc_url=None,
)


@app.exception_handler(ConfigValidationError)
async def _config_error_handler(request: Request, exc: ConfigValidationError) -> JSONResponse:
    _api_logger.warning("rejected config update on %s: %s", request.url.path, exc)
    payload = ErrorResponse(code="INVALID_CONFIG", message=str(exc), details=[exc.key])
    return JSONResponse(status_code=422, content=payload.model_dump())


@app.get("/health", response_model=HealthResponse)
def health():
    return HealthResponse(status="ok")


@app.post("/pois/extract", response_model=ExtractResponse)
async def extract(req: ExtractRequest):
    service = get_extractor_service()
    pois = await service.extract_pois_from_itinerary(req.activities, req.trip_context)
    return ExtractResponse(
        pois=pois,
        count=len(pois),
        confidence_threshold=service.config.confidence_threshold,
    )


@app.get("/pois/stats")
def stats():
    result: ServiceStats = get_extractor_service().get_service_stats()
    return result.model_dump(by_alias=True)


@app.patch("/pois/config", response_model=ConfigResponse)
def patch_config(partial: dict[str, Any] = Body(...)):
    config = get_extractor_service().update_config(partial)
    return ConfigResponse(
        confidence_threshold=config.confidence_threshold,
        exclude_words=list(config.exclude_words),
    )


@app.get("/metrics")
def metrics():
    return get_extraction_metrics().snapshot()
