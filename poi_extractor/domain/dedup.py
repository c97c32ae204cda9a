"""Collapse scored candidates into one POI per place and trip context."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Iterable

from poi_extractor.domain.enums import CategoryTag
from poi_extractor.domain.models import POI, POICandidate
from poi_extractor.domain.normalizer import name_tokens, tokens_match


@dataclass(frozen=True)
class MergeKey:
    """Context-tagged name key; keys in different contexts never match."""

    context: tuple[str, str]
    tokens: tuple[str, ...]

    @classmethod
    def of(cls, candidate: POICandidate) -> "MergeKey":
        return cls(context=candidate.context_key, tokens=name_tokens(candidate.normalized_name))

    def matches(self, other: "MergeKey") -> bool:
        return self.context == other.context and tokens_match(self.tokens, other.tokens)


@dataclass
class _Cluster:
    keys: list[MergeKey] = field(default_factory=list)
    members: list[POICandidate] = field(default_factory=list)

    def accepts(self, key: MergeKey) -> bool:
        # Every member must match; a short name cannot bridge two longer ones.
        return all(key.matches(existing) for existing in self.keys)

    def add(self, key: MergeKey, candidate: POICandidate) -> None:
        self.keys.append(key)
        self.members.append(candidate)

    @property
    def first(self) -> POICandidate:
        return self.members[0]

    def display_name(self) -> str:
        best = min(
            enumerate(self.members),
            key=lambda row: (-row[1].token_count, -len(row[1].raw_mention.strip()), row[0]),
        )
        return best[1].raw_mention.strip()

    def confidence(self) -> float:
        return max(member.confidence for member in self.members)

    def category(self) -> CategoryTag:
        counts = Counter(member.category for member in self.members)
        top = max(counts.values())
        tied = {category for category, count in counts.items() if count == top}
        if len(tied) == 1:
            return next(iter(tied))
        ranked = [
            (-member.confidence, order, member.category)
            for order, member in enumerate(self.members)
            if member.category in tied
        ]
        return min(ranked)[2]

    def to_poi(self) -> POI:
        first = self.first
        return POI(
            name=self.display_name(),
            category=self.category(),
            confidence=self.confidence(),
            city=first.city,
            country=first.country,
        )


def dedupe(candidates: Iterable[POICandidate]) -> list[POI]:
    """Group matching candidates and emit POIs ordered by confidence."""
    ordered = sorted(candidates, key=lambda row: (row.position, row.source_activity_index))
    by_context: dict[tuple[str, str], list[_Cluster]] = {}
    clusters: list[_Cluster] = []
    for candidate in ordered:
        key = MergeKey.of(candidate)
        if not key.tokens:
            continue
        bucket = by_context.setdefault(key.context, [])
        target = next((cluster for cluster in bucket if cluster.accepts(key)), None)
        if target is None:
            target = _Cluster()
            bucket.append(target)
            clusters.append(target)
        target.add(key, candidate)

    clusters.sort(
        key=lambda cluster: (
            -cluster.confidence(),
            min(member.source_activity_index for member in cluster.members),
            cluster.first.position,
        )
    )
    return [cluster.to_poi() for cluster in clusters]


__all__ = ["MergeKey", "dedupe"]
