"""Extractor configuration and the process-wide config store."""

from __future__ import annotations

import logging
import os
import threading
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from poi_extractor.domain.exceptions import ConfigValidationError

_logger = logging.getLogger("poi-extractor.config")

DEFAULT_CONFIDENCE_THRESHOLD = 0.5

# Accepted update keys -> field name. camelCase keys are what JSON callers send.
_KEY_ALIASES = {
    "confidence_threshold": "confidence_threshold",
    "confidenceThreshold": "confidence_threshold",
    "exclude_words": "exclude_words",
    "excludeWords": "exclude_words",
}


def resolve_default_threshold() -> float:
    raw = str(os.getenv("POI_CONFIDENCE_THRESHOLD") or "").strip()
    if not raw:
        return DEFAULT_CONFIDENCE_THRESHOLD
    try:
        value = float(raw)
    except ValueError:
        _logger.warning("ignoring invalid POI_CONFIDENCE_THRESHOLD=%r", raw)
        return DEFAULT_CONFIDENCE_THRESHOLD
    if not 0.0 <= value <= 1.0:
        _logger.warning("ignoring out-of-range POI_CONFIDENCE_THRESHOLD=%r", raw)
        return DEFAULT_CONFIDENCE_THRESHOLD
    return value


class ExtractorConfig(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    confidence_threshold: float = Field(
        default_factory=resolve_default_threshold, ge=0.0, le=1.0, allow_inf_nan=False
    )
    exclude_words: tuple[str, ...] = Field(default_factory=tuple)

    @field_validator("confidence_threshold", mode="before")
    @classmethod
    def _reject_non_numbers(cls, value: Any) -> Any:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValueError("confidence threshold must be a number between 0 and 1")
        return value

    @field_validator("exclude_words", mode="before")
    @classmethod
    def _normalize_words(cls, value: Any) -> tuple[str, ...]:
        if isinstance(value, str):
            value = [value]
        if not isinstance(value, (list, tuple)):
            raise ValueError("exclude words must be a list of strings")
        words: list[str] = []
        for item in value:
            if not isinstance(item, str):
                raise ValueError("exclude words must be a list of strings")
            word = item.strip().lower()
            if word and word not in words:
                words.append(word)
        return tuple(words)


class ConfigStore:
    """Holds the current ExtractorConfig; updates swap in a new immutable snapshot."""

    def __init__(self, config: ExtractorConfig | None = None):
        self._lock = threading.Lock()
        self._config = config or ExtractorConfig()

    def snapshot(self) -> ExtractorConfig:
        with self._lock:
            return self._config

    def update(self, partial: Mapping[str, Any]) -> ExtractorConfig:
        if not isinstance(partial, Mapping):
            raise ConfigValidationError("config", "expected a mapping of settings")

        changes: dict[str, tuple[str, Any]] = {}
        for key, value in partial.items():
            field_name = _KEY_ALIASES.get(key) if isinstance(key, str) else None
            if field_name is None:
                raise ConfigValidationError(str(key), "unknown configuration key")
            changes[field_name] = (key, value)

        with self._lock:
            current = self._config
            data: dict[str, Any] = current.model_dump()
            for field_name, (key, value) in changes.items():
                if field_name == "exclude_words":
                    if isinstance(value, str):
                        value = [value]
                    if not isinstance(value, (list, tuple)):
                        raise ConfigValidationError(key, "exclude words must be a list of strings")
                    value = [*current.exclude_words, *value]
                data[field_name] = value
            try:
                updated = ExtractorConfig.model_validate(data)
            except ValidationError as exc:
                first = exc.errors()[0]
                field_name = str(first["loc"][0]) if first.get("loc") else "config"
                key = changes.get(field_name, (field_name, None))[0]
                raise ConfigValidationError(key, first.get("msg", "invalid value")) from exc
            self._config = updated

        _logger.info(
            "config updated: threshold=%.3f exclude_words=%d",
            updated.confidence_threshold,
            len(updated.exclude_words),
        )
        return updated

    def reset(self, config: ExtractorConfig | None = None) -> ExtractorConfig:
        with self._lock:
            self._config = config or ExtractorConfig()
            return self._config


__all__ = [
    "ConfigStore",
    "DEFAULT_CONFIDENCE_THRESHOLD",
    "ExtractorConfig",
    "resolve_default_threshold",
]
