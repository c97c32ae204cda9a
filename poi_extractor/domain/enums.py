"""Domain enums."""

from enum import Enum


class CategoryTag(str, Enum):
    CULTURAL = "cultural"
    FOOD = "food"
    NATURE = "nature"
    SHOPPING = "shopping"
    ACCOMMODATION = "accommodation"
    LEISURE = "leisure"
    OTHER = "other"


class MatchStrength(str, Enum):
    EXPLICIT = "explicit"
    CONTEXTUAL = "contextual"
    WEAK = "weak"
