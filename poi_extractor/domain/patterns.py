"""Static pattern tables for POI recognition.

Keywords and trigger phrases are stored in their display spelling (diacritics
kept); the matcher folds them once when it builds its lookup index. Categories
are listed in tie-break order.
"""

from __future__ import annotations

import re
from typing import Optional

from poi_extractor.domain.enums import CategoryTag

# ── Category keywords ────────────────────────────

CATEGORY_KEYWORDS: dict[CategoryTag, tuple[str, ...]] = {
    CategoryTag.CULTURAL: (
        "temple",
        "shrine",
        "pagoda",
        "cathedral",
        "church",
        "mosque",
        "monastery",
        "basilica",
        "abbey",
        "synagogue",
        "museum",
        "gallery",
        "heritage site",
        "palace",
        "castle",
        "fort",
        "fortress",
        "citadel",
        "imperial city",
        "imperial",
        "memorial",
        "monument",
        "mausoleum",
        "statue",
        "tomb",
        "ruins",
        "opera house",
        "tower",
        "old town",
        "old quarter",
        "post office",
        "bảo tàng",
        "chùa",
        "đình",
        "nhà thờ",
        "musée",
        "église",
        "cathédrale",
        "château",
        "museo",
        "iglesia",
        "catedral",
        "palacio",
    ),
    CategoryTag.NATURE: (
        "national park",
        "park",
        "garden",
        "gardens",
        "botanical garden",
        "zoo",
        "safari",
        "beach",
        "lake",
        "river",
        "waterfall",
        "falls",
        "hot spring",
        "bay",
        "island",
        "mountain",
        "mount",
        "mt",
        "hill",
        "volcano",
        "cave",
        "canyon",
        "forest",
        "jungle",
        "valley",
        "nature reserve",
        "rice terraces",
        "núi",
        "vịnh",
        "thác",
        "suối",
        "parc",
        "parque",
        "playa",
    ),
    CategoryTag.FOOD: (
        "restaurant",
        "cafe",
        "café",
        "coffee shop",
        "coffee house",
        "bistro",
        "brasserie",
        "eatery",
        "diner",
        "food court",
        "street food",
        "night market",
        "food market",
        "bakery",
        "bar",
        "pub",
        "brewery",
        "winery",
        "izakaya",
        "trattoria",
        "ristorante",
        "teahouse",
        "tea house",
        "cooking class",
        "food tour",
        "nhà hàng",
        "quán",
        "cà phê",
    ),
    CategoryTag.SHOPPING: (
        "market",
        "bazaar",
        "mall",
        "shopping center",
        "shopping centre",
        "shopping mall",
        "department store",
        "boutique",
        "store",
        "outlet",
        "souvenir shop",
        "arcade",
        "chợ",
        "marché",
        "mercado",
    ),
    CategoryTag.ACCOMMODATION: (
        "hotel",
        "resort",
        "hostel",
        "guesthouse",
        "guest house",
        "lodge",
        "inn",
        "motel",
        "homestay",
        "villa",
        "ryokan",
        "khách sạn",
    ),
    CategoryTag.LEISURE: (
        "theater",
        "theatre",
        "cinema",
        "amusement park",
        "theme park",
        "water park",
        "stadium",
        "arena",
        "spa",
        "nightclub",
        "night club",
        "karaoke",
        "walking street",
        "golf course",
        "casino",
        "aquarium",
        "observation deck",
        "cabaret",
    ),
}

# ── Trigger phrases ────────────────────────────
# Category-less triggers anchor a name but leave classification to keywords/hints.

GENERIC_TRIGGERS: tuple[str, ...] = (
    "visit",
    "visit to",
    "visiting",
    "tour",
    "tour of",
    "touring",
    "explore",
    "exploring",
    "see",
    "go to",
    "head to",
    "walk to",
    "stop at",
    "stroll through",
    "discover",
    "tham quan",
    "ghé thăm",
)

CATEGORY_TRIGGERS: dict[CategoryTag, tuple[str, ...]] = {
    CategoryTag.CULTURAL: (),
    CategoryTag.NATURE: (
        "hike",
        "hike to",
        "hike up",
        "hiking in",
        "hiking at",
        "hiking to",
        "trek to",
        "trekking in",
        "climb",
        "boat trip in",
        "boat trip to",
        "boat trip on",
        "cruise on",
        "cruise in",
        "kayaking in",
        "swim at",
        "swimming at",
        "picnic at",
        "picnic in",
    ),
    CategoryTag.FOOD: (
        "lunch at",
        "dinner at",
        "breakfast at",
        "brunch at",
        "coffee at",
        "drinks at",
        "eat at",
        "dine at",
        "dining at",
        "sushi at",
        "ramen at",
        "pho at",
        "tea at",
        "meal at",
        "ăn trưa tại",
        "ăn tối tại",
        "ăn sáng tại",
    ),
    CategoryTag.SHOPPING: (
        "shopping at",
        "shopping in",
        "shop at",
        "browse",
    ),
    CategoryTag.ACCOMMODATION: (
        "stay at",
        "check in at",
        "check-in at",
        "overnight at",
        "sleep at",
    ),
    CategoryTag.LEISURE: (
        "relax at",
        "massage at",
        "show at",
        "concert at",
        "performance at",
    ),
    CategoryTag.OTHER: (),
}

# ── Proper-noun heuristics ────────────────────────────

ARTICLES = ("the", "a", "an")

NAME_CONNECTORS = ("of", "de", "du", "des", "del", "della", "di", "da", "la", "le", "les", "el", "y")

# Elided connectors glued to the next word: d'Orsay, l'Arc, dell'Accademia.
ELIDED_CONNECTORS = ("d", "l", "dell", "dall", "all", "nell", "sull")

# Capitalized abbreviations whose trailing dot does not end a sentence.
ABBREVIATIONS = ("st", "ste", "mt", "ft", "dr", "mr", "mrs", "jr")

# Capitalized words that are not place names; stripped from span edges.
COMMON_WORDS = (
    "morning",
    "afternoon",
    "evening",
    "night",
    "day",
    "today",
    "tonight",
    "time",
    "start",
    "then",
    "return",
    "experience",
    "enjoy",
    "traditional",
    "famous",
    "popular",
    "best",
    "great",
    "beautiful",
    "historic",
    "historical",
    "ancient",
    "modern",
    "authentic",
    "recommended",
    "suggested",
    "optional",
    "food",
    "meal",
    "activity",
    "description",
    "photos",
    "photo",
    "free",
    "personal",
    "walk",
    "stroll",
    "relax",
    "rest",
)

# Adjectives that may open a real name but are not evidence of one on their own.
DESCRIPTOR_WORDS = (
    "upscale",
    "luxury",
    "cozy",
    "charming",
    "scenic",
    "iconic",
    "world",
    "buddhist",
    "hindu",
    "catholic",
    "gothic",
    "baroque",
    "chinese",
    "vietnamese",
    "japanese",
    "korean",
    "thai",
    "french",
    "italian",
    "spanish",
    "indian",
    "mexican",
    "american",
    "european",
    "asian",
    "underground",
)

# Names containing any of these are too vague to be a POI.
EXCLUDE_WORDS = (
    "local",
    "area",
    "vicinity",
    "nearby",
    "around",
    "general",
    "various",
    "different",
    "region",
    "district",
    "surroundings",
    "somewhere",
)

GENERIC_PHRASES = (
    "rest and relax",
    "rest",
    "relax",
    "free time",
    "free day",
    "day at leisure",
    "at leisure",
    "leisure time",
    "general exploration",
    "personal exploration",
    "walk around",
    "take it easy",
    "take it easy today",
    "explore on your own",
)

# Caller-supplied activity categories that are not CategoryTag values.
HINT_ALIASES: dict[str, CategoryTag] = {
    "entertainment": CategoryTag.LEISURE,
    "relaxation": CategoryTag.LEISURE,
    "nightlife": CategoryTag.LEISURE,
    "dining": CategoryTag.FOOD,
    "restaurant": CategoryTag.FOOD,
    "sightseeing": CategoryTag.CULTURAL,
    "history": CategoryTag.CULTURAL,
    "outdoor": CategoryTag.NATURE,
    "adventure": CategoryTag.NATURE,
    "hotel": CategoryTag.ACCOMMODATION,
    "lodging": CategoryTag.ACCOMMODATION,
}

# ── Country detection ────────────────────────────

COUNTRY_PATTERNS: dict[str, str] = {
    "Vietnam": r"\bviet\s?nam\b",
    "Japan": r"\b(?:japan|nippon)\b",
    "Thailand": r"\bthailand\b",
    "China": r"\bchina\b",
    "Korea": r"\bkorea\b",
    "Singapore": r"\bsingapore\b",
    "Malaysia": r"\bmalaysia\b",
    "Indonesia": r"\bindonesia\b",
    "Philippines": r"\bphilippines\b",
    "Cambodia": r"\bcambodia\b",
    "France": r"\bfrance\b",
    "Italy": r"\bitaly\b",
    "Spain": r"\bspain\b",
    "Germany": r"\bgermany\b",
    "United Kingdom": r"\b(?:uk|united kingdom|britain|england)\b",
    "United States": r"\b(?:usa|united states|america)\b",
}

_COMPILED_COUNTRIES = tuple(
    (country, re.compile(pattern, re.IGNORECASE)) for country, pattern in COUNTRY_PATTERNS.items()
)


def detect_country(destination: Optional[str]) -> Optional[str]:
    """Guess the country named in a free-text destination."""
    if not destination or not isinstance(destination, str):
        return None
    for country, pattern in _COMPILED_COUNTRIES:
        if pattern.search(destination):
            return country
    return None


def resolve_hint(category: Optional[str]) -> Optional[CategoryTag]:
    key = str(category or "").strip().lower()
    if not key:
        return None
    try:
        return CategoryTag(key)
    except ValueError:
        return HINT_ALIASES.get(key)


def triggers_for(category: CategoryTag) -> tuple[str, ...]:
    return CATEGORY_TRIGGERS.get(category, ())


def pattern_counts() -> dict[str, int]:
    return {
        category.value: len(CATEGORY_KEYWORDS[category]) + len(triggers_for(category))
        for category in CATEGORY_KEYWORDS
    }


def keyword_counts() -> dict[str, int]:
    return {category.value: len(keywords) for category, keywords in CATEGORY_KEYWORDS.items()}


def trigger_count() -> int:
    return len(GENERIC_TRIGGERS) + sum(len(rows) for rows in CATEGORY_TRIGGERS.values())


__all__ = [
    "ABBREVIATIONS",
    "ARTICLES",
    "CATEGORY_KEYWORDS",
    "CATEGORY_TRIGGERS",
    "COMMON_WORDS",
    "COUNTRY_PATTERNS",
    "DESCRIPTOR_WORDS",
    "ELIDED_CONNECTORS",
    "EXCLUDE_WORDS",
    "GENERIC_PHRASES",
    "GENERIC_TRIGGERS",
    "HINT_ALIASES",
    "NAME_CONNECTORS",
    "detect_country",
    "keyword_counts",
    "pattern_counts",
    "resolve_hint",
    "trigger_count",
    "triggers_for",
]
