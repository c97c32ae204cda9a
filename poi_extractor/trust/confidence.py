"""Trust-layer confidence computation for POI candidates."""

from __future__ import annotations

from typing import Any

from poi_extractor.domain.enums import MatchStrength
from poi_extractor.domain.models import POICandidate

_BASE_BY_STRENGTH = {
    MatchStrength.EXPLICIT: 0.75,
    MatchStrength.CONTEXTUAL: 0.60,
    MatchStrength.WEAK: 0.45,
}
_MULTI_WORD_BONUS = 0.10
_KEYWORD_BONUS = 0.10
_HINT_BONUS = 0.05
_LOCALE_BONUS = 0.05
_COMMON_SINGLE_PENALTY = 0.20
_NO_ANCHOR_PENALTY = 0.15


def _clamp_unit(value: Any, default: float = 0.0) -> float:
    try:
        parsed = float(value)
    except (TypeError, ValueError):
        return default
    if parsed < 0:
        return 0.0
    if parsed > 1:
        return 1.0
    return parsed


def score_breakdown(candidate: POICandidate) -> dict[str, Any]:
    """Compute candidate confidence with an explainable breakdown."""
    base = _BASE_BY_STRENGTH.get(candidate.match_strength, _BASE_BY_STRENGTH[MatchStrength.WEAK])
    bonuses = {
        "multi_word": _MULTI_WORD_BONUS if candidate.proper_tokens >= 2 else 0.0,
        "keyword": _KEYWORD_BONUS if candidate.keyword_anchor else 0.0,
        "hint": _HINT_BONUS if candidate.hint_match else 0.0,
        "locale": _LOCALE_BONUS if candidate.locale_term else 0.0,
    }
    penalties = {
        "common_single": _COMMON_SINGLE_PENALTY if candidate.common_single else 0.0,
        "no_anchor": (
            _NO_ANCHOR_PENALTY
            if not (candidate.keyword_anchor or candidate.trigger_anchor)
            else 0.0
        ),
    }
    raw_score = base + sum(bonuses.values()) - sum(penalties.values())
    confidence = round(_clamp_unit(raw_score), 3)

    return {
        "confidence": confidence,
        "breakdown": {
            "match_strength": candidate.match_strength.value,
            "base": base,
            "bonuses": {key: round(value, 4) for key, value in bonuses.items()},
            "penalties": {key: round(value, 4) for key, value in penalties.items()},
            "raw_score": round(raw_score, 4),
        },
    }


def score(candidate: POICandidate) -> float:
    return score_breakdown(candidate)["confidence"]


def apply_score(candidate: POICandidate) -> POICandidate:
    return candidate.model_copy(update={"confidence": score(candidate)})


__all__ = ["apply_score", "score", "score_breakdown"]
