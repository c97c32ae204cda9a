"""In-process metrics for POI extraction calls."""

from __future__ import annotations

import math
import threading
from collections import deque

# recent call latencies kept for the p95
_LATENCY_WINDOW = 5000


def _p95(samples) -> float:
    if not samples:
        return 0.0
    rows = sorted(samples)
    return rows[max(0, math.ceil(len(rows) * 0.95) - 1)]


class ExtractionMetrics:
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._reset_locked()

    def _reset_locked(self) -> None:
        self._total_calls = 0
        self._activities = 0
        self._skipped_activities = 0
        self._candidates = 0
        self._kept_candidates = 0
        self._pois = 0
        self._strength_counts: dict[str, int] = {}
        self._category_counts: dict[str, int] = {}
        self._latency_total_ms = 0.0
        self._latency_max_ms = 0.0
        self._latency_samples: deque[float] = deque(maxlen=_LATENCY_WINDOW)

    def record(
        self,
        *,
        activities: int,
        skipped: int,
        candidates: int,
        kept: int,
        pois: int,
        latency_ms: float,
        strength_counts: dict[str, int] | None = None,
        category_counts: dict[str, int] | None = None,
    ) -> None:
        with self._lock:
            self._total_calls += 1
            self._activities += max(0, int(activities))
            self._skipped_activities += max(0, int(skipped))
            self._candidates += max(0, int(candidates))
            self._kept_candidates += max(0, int(kept))
            self._pois += max(0, int(pois))
            for key, count in (strength_counts or {}).items():
                self._strength_counts[key] = self._strength_counts.get(key, 0) + int(count)
            for key, count in (category_counts or {}).items():
                self._category_counts[key] = self._category_counts.get(key, 0) + int(count)
            latency = max(0.0, float(latency_ms))
            self._latency_total_ms += latency
            self._latency_max_ms = max(self._latency_max_ms, latency)
            self._latency_samples.append(latency)

    def snapshot(self) -> dict[str, object]:
        with self._lock:
            keep_rate = self._kept_candidates / self._candidates if self._candidates else 0.0
            avg_ms = self._latency_total_ms / self._total_calls if self._total_calls else 0.0
            return {
                "total_calls": self._total_calls,
                "activities": self._activities,
                "skipped_activities": self._skipped_activities,
                "candidates": self._candidates,
                "kept_candidates": self._kept_candidates,
                "pois": self._pois,
                "keep_rate": round(keep_rate, 4),
                "match_strength_counts": dict(self._strength_counts),
                "category_counts": dict(self._category_counts),
                "latency_ms": {
                    "avg": round(avg_ms, 2),
                    "max": round(self._latency_max_ms, 2),
                    "p95": round(_p95(self._latency_samples), 2),
                },
            }

    def reset(self) -> None:
        with self._lock:
            self._reset_locked()


_metrics_lock = threading.Lock()
_metrics: ExtractionMetrics | None = None


def get_extraction_metrics() -> ExtractionMetrics:
    global _metrics
    with _metrics_lock:
        if _metrics is None:
            _metrics = ExtractionMetrics()
        return _metrics


__all__ = ["ExtractionMetrics", "get_extraction_metrics"]
