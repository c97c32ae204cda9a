"""Deterministic parsing helpers."""

from poi_extractor.parsing.candidate_matcher import CandidateMatcher, get_matcher

__all__ = ["CandidateMatcher", "get_matcher"]
