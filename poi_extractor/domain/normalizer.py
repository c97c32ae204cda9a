"""Comparison-only name folding.

Display names are never rewritten here; these helpers produce keys used to
decide whether two mentions refer to the same place.
"""

from __future__ import annotations

import re
import unicodedata
from typing import Sequence

# Letters that carry no combining mark under NFKD.
_STANDALONE_LETTERS = str.maketrans(
    {
        "đ": "d",
        "Đ": "D",
        "ø": "o",
        "Ø": "O",
        "ł": "l",
        "Ł": "L",
        "æ": "ae",
        "Æ": "AE",
        "œ": "oe",
        "Œ": "OE",
        "ı": "i",
    }
)
_NON_WORD_RE = re.compile(r"[^\w\s]|_")


def strip_diacritics(text: str) -> str:
    decomposed = unicodedata.normalize("NFKD", str(text or "").translate(_STANDALONE_LETTERS))
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def fold(text: str) -> str:
    """Casefold and strip diacritics, keeping punctuation."""
    return strip_diacritics(text).casefold()


def normalize(name: str) -> str:
    """Fold a name and collapse punctuation/whitespace for comparison."""
    folded = _NON_WORD_RE.sub(" ", fold(name))
    return " ".join(folded.split())


def name_tokens(name: str) -> tuple[str, ...]:
    return tuple(normalize(name).split())


def contains_phrase(haystack: Sequence[str], needle: Sequence[str]) -> bool:
    """True when ``needle`` appears in ``haystack`` as a run of whole tokens."""
    size = len(needle)
    if size == 0 or size > len(haystack):
        return False
    needle = tuple(needle)
    return any(tuple(haystack[i : i + size]) == needle for i in range(len(haystack) - size + 1))


def tokens_match(left: Sequence[str], right: Sequence[str]) -> bool:
    if not left or not right:
        return False
    if tuple(left) == tuple(right):
        return True
    if len(left) >= len(right):
        return contains_phrase(left, right)
    return contains_phrase(right, left)


def names_match(left: str, right: str) -> bool:
    """Two names are equal for dedup when one contains the other word-for-word."""
    return tokens_match(name_tokens(left), name_tokens(right))


__all__ = [
    "contains_phrase",
    "fold",
    "name_tokens",
    "names_match",
    "normalize",
    "strip_diacritics",
    "tokens_match",
]
