"""Rule-based POI candidate matching over itinerary activity text.

Three passes run over each title/description:

1. trigger phrases ("visit", "lunch at", "boat trip in") followed by a
   capitalized span -> ``explicit`` candidates;
2. category keywords ("museum", "cave", "chùa") grown over adjacent capitalized
   tokens -> ``contextual`` candidates;
3. leftover capitalized runs -> ``weak`` candidates in category ``other``.

Tokens carry a folded form, so keywords/triggers match with or without
diacritics. All lookups go through first-token indexes built once per matcher.
"""

from __future__ import annotations

import re
import unicodedata
from collections import Counter
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Iterable, Optional, Sequence

from poi_extractor.domain import patterns
from poi_extractor.domain.enums import CategoryTag, MatchStrength
from poi_extractor.domain.models import Activity, PlaceContext, POICandidate, TripContext, UNKNOWN_PLACE
from poi_extractor.domain.normalizer import contains_phrase, fold, name_tokens, normalize

_TOKEN_RE = re.compile(r"[^\W_]+(?:['’\-][^\W_]+)*")
_SENTENCE_BREAK_RE = re.compile(r"[.!?;:|\n–—]|(?:^|\s)-(?:\s|$)")
_ABBREVIATION_GAP_RE = re.compile(r"^\.\s*$")
_ELIDED_RE = re.compile(
    r"^(?:%s)['’]" % "|".join(re.escape(prefix) for prefix in patterns.ELIDED_CONNECTORS),
    re.IGNORECASE,
)
_MAX_SPAN_TOKENS = 8
_MIN_NAME_CHARS = 3
_SHORT_NAME_CHARS = 4
_CATEGORY_ORDER = tuple(patterns.CATEGORY_KEYWORDS)


@dataclass(frozen=True)
class _Token:
    text: str
    folded: str
    start: int
    end: int
    gap_before: str
    sentence_start: bool
    after_abbreviation: bool = False

    @property
    def capitalized(self) -> bool:
        if self.text[:1].isupper():
            return True
        # d'Orsay, l'Arc, dell'Accademia
        elided = _ELIDED_RE.match(self.text)
        return bool(elided) and self.text[elided.end() : elided.end() + 1].isupper()

    @property
    def numeric(self) -> bool:
        return self.text.isdigit()

    @property
    def joined(self) -> bool:
        """Separated from the previous token by whitespace, or by an abbreviation dot."""
        if self.after_abbreviation:
            return True
        return bool(self.gap_before) and self.gap_before.isspace()


@dataclass(frozen=True)
class _Phrase:
    tokens: tuple[str, ...]
    category: Optional[CategoryTag]


@dataclass(frozen=True)
class _KeywordHit:
    start: int
    size: int
    categories: tuple[CategoryTag, ...]

    @property
    def end(self) -> int:
        return self.start + self.size


@dataclass
class _Found:
    start: int
    end: int
    raw: str
    strength: MatchStrength
    votes: Counter = field(default_factory=Counter)
    trigger_category: Optional[CategoryTag] = None
    proper_tokens: int = 0


def _phrase_tokens(phrase: str) -> tuple[str, ...]:
    return tuple(match.group() for match in _TOKEN_RE.finditer(fold(phrase)))


def _is_abbreviation(token: _Token) -> bool:
    """St, Mt, or a single capital letter as in U.S."""
    if not token.text[:1].isupper():
        return False
    return len(token.text) == 1 or token.folded in patterns.ABBREVIATIONS


def _tokenize(text: str) -> list[_Token]:
    tokens: list[_Token] = []
    previous_end = 0
    for match in _TOKEN_RE.finditer(text):
        gap = text[previous_end : match.start()]
        abbreviated = bool(tokens) and _is_abbreviation(tokens[-1]) and bool(_ABBREVIATION_GAP_RE.match(gap))
        tokens.append(
            _Token(
                text=match.group(),
                folded=fold(match.group()),
                start=match.start(),
                end=match.end(),
                gap_before=gap if tokens else "",
                sentence_start=not tokens or (not abbreviated and bool(_SENTENCE_BREAK_RE.search(gap))),
                after_abbreviation=abbreviated,
            )
        )
        previous_end = match.end()
    return tokens


class _PhraseIndex:
    """Phrases bucketed by first folded token, longest first."""

    def __init__(self, phrases: Iterable[_Phrase]):
        by_head: dict[str, list[_Phrase]] = {}
        for phrase in phrases:
            if phrase.tokens:
                by_head.setdefault(phrase.tokens[0], []).append(phrase)
        for rows in by_head.values():
            rows.sort(key=lambda row: -len(row.tokens))
        self._by_head = by_head

    def longest_at(self, tokens: Sequence[_Token], index: int) -> list[_Phrase]:
        rows = self._by_head.get(tokens[index].folded)
        if not rows:
            return []
        best: list[_Phrase] = []
        for phrase in rows:
            size = len(phrase.tokens)
            if best and size < len(best[0].tokens):
                break
            if index + size > len(tokens):
                continue
            if all(
                tokens[index + k].folded == phrase.tokens[k] and (k == 0 or tokens[index + k].joined)
                for k in range(size)
            ):
                best.append(phrase)
        return best


class CandidateMatcher:
    def __init__(self, exclude_words: Iterable[str] = ()):
        self._keywords = _PhraseIndex(
            _Phrase(_phrase_tokens(keyword), category)
            for category, keywords in patterns.CATEGORY_KEYWORDS.items()
            for keyword in keywords
        )
        triggers = [_Phrase(_phrase_tokens(phrase), None) for phrase in patterns.GENERIC_TRIGGERS]
        for category in CategoryTag:
            triggers.extend(_Phrase(_phrase_tokens(phrase), category) for phrase in patterns.triggers_for(category))
        self._triggers = _PhraseIndex(triggers)
        self._articles = frozenset(patterns.ARTICLES)
        self._connectors = frozenset(patterns.NAME_CONNECTORS)
        self._common = frozenset(patterns.COMMON_WORDS)
        self._descriptors = frozenset(patterns.DESCRIPTOR_WORDS)
        self._exclude = frozenset(fold(word) for word in (*patterns.EXCLUDE_WORDS, *exclude_words) if word)
        self._generic = frozenset(normalize(phrase) for phrase in patterns.GENERIC_PHRASES)

    # ── public ────────────────────────────

    def match(
        self,
        activity: Activity,
        *,
        index: int,
        trip: Optional[TripContext] = None,
        position: int = 0,
    ) -> list[POICandidate]:
        """Extract raw candidates from one activity; ``position`` numbers them call-wide."""
        place = (trip or TripContext()).resolve(activity.location)
        hint = patterns.resolve_hint(activity.category)
        locale_term = self._mentions_place(activity, place)

        found: list[_Found] = []
        for text in (activity.title, activity.description):
            if not text or normalize(text) in self._generic:
                continue
            found.extend(self._match_text(text))
        location_found = self._match_location(activity)
        if location_found is not None:
            found.append(location_found)

        candidates: list[POICandidate] = []
        for offset, row in enumerate(found):
            candidates.append(
                self._build_candidate(
                    row,
                    index=index,
                    position=position + offset,
                    place=place,
                    hint=hint,
                    locale_term=locale_term,
                    extracted_from="location" if row is location_found else "text",
                )
            )
        return candidates

    # ── text passes ────────────────────────────

    def _match_text(self, raw_text: str) -> list[_Found]:
        text = unicodedata.normalize("NFC", raw_text)
        tokens = _tokenize(text)
        if not tokens:
            return []
        triggers = {}
        for i in range(len(tokens)):
            phrases = self._triggers.longest_at(tokens, i)
            if phrases:
                triggers[i] = phrases
        keyword_hits = self._keyword_hits(tokens)
        covered = [False] * len(tokens)
        found: list[_Found] = []

        i = 0
        while i < len(tokens):
            phrases = triggers.get(i)
            if not phrases:
                i += 1
                continue
            size = len(phrases[0].tokens)
            bounds = self._forward_span(text, tokens, i + size, triggers, keyword_hits)
            if bounds is None:
                i += size
                continue
            start, end, alias = bounds
            trigger_category = next((row.category for row in phrases if row.category), None)
            row = self._refine(
                text, tokens, start, end, keyword_hits, triggers,
                strength=MatchStrength.EXPLICIT, alias=alias, trigger_category=trigger_category,
            )
            if row is not None:
                found.append(row)
                for k in range(i, end):
                    covered[k] = True
            i = end

        for hit in keyword_hits:
            if any(covered[hit.start : hit.end]):
                continue
            start, end = self._grow_around(tokens, hit, covered, triggers)
            row = self._refine(
                text, tokens, start, end, keyword_hits, triggers, strength=MatchStrength.CONTEXTUAL,
            )
            if row is not None:
                found.append(row)
                for k in range(row.start, row.end):
                    covered[k] = True

        i = 0
        while i < len(tokens):
            token = tokens[i]
            if covered[i] or i in triggers or not token.capitalized:
                i += 1
                continue
            end = self._extend_run(tokens, i + 1, covered, triggers)
            row = self._refine(text, tokens, i, end, keyword_hits, triggers, strength=MatchStrength.WEAK)
            if row is not None:
                found.append(row)
            i = end

        found.sort(key=lambda row: row.start)
        return found

    def _keyword_hits(self, tokens: Sequence[_Token]) -> list[_KeywordHit]:
        hits: list[_KeywordHit] = []
        i = 0
        while i < len(tokens):
            phrases = self._keywords.longest_at(tokens, i)
            if not phrases:
                i += 1
                continue
            categories = tuple(dict.fromkeys(row.category for row in phrases if row.category))
            hits.append(_KeywordHit(start=i, size=len(phrases[0].tokens), categories=categories))
            i += len(phrases[0].tokens)
        return hits

    def _forward_span(
        self,
        text: str,
        tokens: Sequence[_Token],
        start: int,
        triggers: dict,
        keyword_hits: Sequence[_KeywordHit],
    ) -> Optional[tuple[int, int, bool]]:
        if start >= len(tokens) or not tokens[start].joined:
            return None
        while start < len(tokens) and tokens[start].folded in self._articles and tokens[start].joined:
            start += 1
        if start >= len(tokens) or not tokens[start].joined or not tokens[start].capitalized:
            return None
        if start in triggers:
            return None

        end = self._extend_run(tokens, start + 1, None, triggers, limit=start + _MAX_SPAN_TOKENS)

        alias_end = self._alias_end(text, tokens, end)
        if alias_end is not None:
            return start, alias_end, True

        if end < len(tokens) and tokens[end].joined and not tokens[end].capitalized:
            for hit in keyword_hits:
                if hit.start == end:
                    end = hit.end
                    break
        return start, end, False

    def _extend_run(
        self,
        tokens: Sequence[_Token],
        end: int,
        covered: Optional[list[bool]],
        triggers: dict,
        limit: Optional[int] = None,
    ) -> int:
        limit = len(tokens) if limit is None else min(limit, len(tokens))
        while end < limit:
            token = tokens[end]
            if not token.joined or end in triggers or (covered and covered[end]):
                break
            if token.capitalized or token.numeric:
                end += 1
                continue
            following = end + 1
            if (
                token.folded in self._connectors
                and following < limit
                and tokens[following].joined
                and tokens[following].capitalized
                and not (covered and covered[following])
            ):
                end += 2
                continue
            break
        return end

    @staticmethod
    def _alias_end(text: str, tokens: Sequence[_Token], end: int) -> Optional[int]:
        """End index of a capitalized parenthetical alias right after the span."""
        if end >= len(tokens) or tokens[end].gap_before.strip() != "(" or not tokens[end].capitalized:
            return None
        close = text.find(")", tokens[end].start)
        if close == -1:
            return None
        k = end
        while k < len(tokens) and tokens[k].end <= close:
            if not tokens[k].capitalized and not tokens[k].numeric:
                return None
            if k > end and not tokens[k].joined:
                return None
            k += 1
        if text[tokens[k - 1].end : close].strip():
            return None
        return k

    def _grow_around(
        self,
        tokens: Sequence[_Token],
        hit: _KeywordHit,
        covered: list[bool],
        triggers: dict,
    ) -> tuple[int, int]:
        start = hit.start
        while start > 0 and hit.end - start < _MAX_SPAN_TOKENS and tokens[start].joined:
            previous = tokens[start - 1]
            if covered[start - 1] or (start - 1) in triggers or previous.folded in self._common:
                break
            if previous.folded in self._articles and (previous.folded == "the" or not previous.capitalized):
                break
            if previous.capitalized or previous.numeric:
                start -= 1
                continue
            if (
                previous.folded in self._connectors
                and start >= 2
                and previous.joined
                and tokens[start - 2].capitalized
                and not covered[start - 2]
                and (start - 2) not in triggers
            ):
                start -= 2
                continue
            break

        end = hit.end
        while (
            end < len(tokens)
            and end - start < _MAX_SPAN_TOKENS
            and tokens[end].joined
            and not covered[end]
            and end not in triggers
            and (tokens[end].capitalized or tokens[end].numeric)
            and tokens[end].folded not in self._common
        ):
            end += 1
        return start, end

    def _refine(
        self,
        text: str,
        tokens: Sequence[_Token],
        start: int,
        end: int,
        keyword_hits: Sequence[_KeywordHit],
        triggers: dict,
        *,
        strength: MatchStrength,
        alias: bool = False,
        trigger_category: Optional[CategoryTag] = None,
    ) -> Optional[_Found]:
        untrimmed_end = end
        while start < end and (
            tokens[start].folded in self._common
            or tokens[start].folded == "the"
            or (tokens[start].folded in self._articles and not tokens[start].capitalized)
            or start in triggers
        ):
            start += 1
        while end > start and (
            tokens[end - 1].folded in self._common or tokens[end - 1].folded in self._connectors
        ):
            end -= 1
        if start >= end:
            return None
        span = tokens[start:end]
        if any(token.folded in self._exclude for token in span):
            return None

        votes: Counter = Counter()
        keyword_positions: set[int] = set()
        for hit in keyword_hits:
            if hit.start >= start and hit.end <= end:
                keyword_positions.update(range(hit.start, hit.end))
                votes.update(hit.categories)
        if strength == MatchStrength.WEAK and votes:
            strength = MatchStrength.CONTEXTUAL

        capitalized = sum(1 for token in span if token.capitalized)
        explicit = strength == MatchStrength.EXPLICIT
        evidence = False
        for k in range(start, end):
            token = tokens[k]
            if k in keyword_positions or not token.capitalized or token.folded in self._common:
                continue
            if explicit:
                evidence = True
                break
            if token.folded in self._descriptors:
                continue
            if token.sentence_start and capitalized < 2:
                continue
            evidence = True
            break
        if not evidence:
            return None

        raw = text[tokens[start].start : tokens[end - 1].end]
        if alias and end == untrimmed_end:
            raw += ")"
        if len(raw.strip()) < _MIN_NAME_CHARS:
            return None
        return _Found(
            start=start,
            end=end,
            raw=raw,
            strength=strength,
            votes=votes,
            trigger_category=trigger_category,
            proper_tokens=capitalized,
        )

    # ── location object ────────────────────────────

    def _match_location(self, activity: Activity) -> Optional[_Found]:
        location = activity.location
        if location is None or not location.name:
            return None
        name = unicodedata.normalize("NFC", location.name).strip(" \t\"'()[]{}.,;:")
        if name.lower().startswith("the "):
            name = name[4:].strip()
        tokens = _tokenize(name)
        if len(name) < _MIN_NAME_CHARS or not tokens or normalize(name) in self._generic:
            return None
        if any(token.folded in self._exclude for token in tokens):
            return None
        votes: Counter = Counter()
        for hit in self._keyword_hits(tokens):
            votes.update(hit.categories)
        return _Found(
            start=0,
            end=len(tokens),
            raw=name,
            strength=MatchStrength.EXPLICIT,
            votes=votes,
            proper_tokens=sum(1 for token in tokens if token.capitalized),
        )

    # ── candidate assembly ────────────────────────────

    @staticmethod
    def _mentions_place(activity: Activity, place: PlaceContext) -> bool:
        text_tokens = name_tokens(" ".join(filter(None, (activity.title, activity.description))))
        for term in (place.city, place.country):
            if term and term != UNKNOWN_PLACE and contains_phrase(text_tokens, name_tokens(term)):
                return True
        return False

    @staticmethod
    def resolve_category(
        votes: Counter,
        hint: Optional[CategoryTag],
        trigger_category: Optional[CategoryTag] = None,
    ) -> CategoryTag:
        """Content-derived category; the caller hint only breaks ties."""
        tally = Counter(votes)
        if trigger_category is not None:
            tally[trigger_category] += 1
        tally.pop(CategoryTag.OTHER, None)
        if not tally:
            return hint if hint is not None else CategoryTag.OTHER
        top = max(tally.values())
        tied = [category for category in _CATEGORY_ORDER if tally.get(category) == top]
        if len(tied) == 1:
            return tied[0]
        if hint in tied:
            return hint
        if trigger_category in tied:
            return trigger_category
        return tied[0]

    def _build_candidate(
        self,
        row: _Found,
        *,
        index: int,
        position: int,
        place: PlaceContext,
        hint: Optional[CategoryTag],
        locale_term: bool,
        extracted_from: str,
    ) -> POICandidate:
        normalized = normalize(row.raw)
        if row.strength == MatchStrength.WEAK:
            category = CategoryTag.OTHER
        else:
            category = self.resolve_category(row.votes, hint, row.trigger_category)
        token_count = max(1, len(normalized.split()))
        return POICandidate(
            raw_mention=row.raw,
            normalized_name=normalized,
            category=category,
            source_activity_index=index,
            match_strength=row.strength,
            position=position,
            extracted_from=extracted_from,
            city=place.city,
            country=place.country,
            token_count=token_count,
            proper_tokens=row.proper_tokens,
            keyword_anchor=bool(row.votes),
            trigger_anchor=row.strength == MatchStrength.EXPLICIT,
            hint_match=hint is not None and hint != CategoryTag.OTHER and category == hint,
            locale_term=locale_term,
            common_single=token_count == 1
            and (len(normalized) < _SHORT_NAME_CHARS or normalized in self._common),
        )


@lru_cache(maxsize=16)
def get_matcher(exclude_words: tuple[str, ...] = ()) -> CandidateMatcher:
    return CandidateMatcher(exclude_words)


__all__ = ["CandidateMatcher", "get_matcher"]
