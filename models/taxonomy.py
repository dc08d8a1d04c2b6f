"""Canonical taxonomy definitions for garments.

This module centralises the closed category set, colour normalisation and the
occasion vocabulary. Helper functions keep validation logic consistent across
the engine, the stores and the data models.
"""

from typing import Dict, FrozenSet, Optional

TOPS = "Tops"
BOTTOMS = "Bottoms"
OUTERWEAR = "Outerwear"
DRESSES = "Dresses"
FOOTWEAR = "Footwear"
ACCESSORIES = "Accessories"

CATEGORIES = (TOPS, BOTTOMS, OUTERWEAR, DRESSES, FOOTWEAR, ACCESSORIES)

_CATEGORY_ALIASES: Dict[str, str] = {
    "top": TOPS,
    "bottom": BOTTOMS,
    "shoes": FOOTWEAR,
    "shoe": FOOTWEAR,
    "dress": DRESSES,
    "accessory": ACCESSORIES,
}

# Values emitted by the attribute extraction service when it could not decide.
PLACEHOLDER_VALUES: FrozenSet[str] = frozenset({"", "unknown", "n/a", "na", "none", "null"})

COLOR_MAP = {
    "navy blue": "navy",
    "dark blue": "navy",
    "light blue": "blue",
    "sky blue": "blue",
    "off white": "white",
    "off-white": "white",
    "ivory": "white",
    "cream": "beige",
    "tan": "beige",
    "khaki": "beige",
    "gray": "grey",
    "charcoal": "grey",
    "olive": "green",
    "burgundy": "red",
    "maroon": "red",
}

DEFAULT_OCCASION = "casual"

OCCASION_STYLES: Dict[str, FrozenSet[str]] = {
    "casual": frozenset({"casual", "streetwear", "sporty", "bohemian", "minimalist"}),
    "formal": frozenset({"formal", "elegant", "classic", "business"}),
    "party": frozenset({"party", "trendy", "edgy", "glamorous", "streetwear"}),
    "work": frozenset({"business", "smart casual", "classic", "formal", "minimalist"}),
    "date": frozenset({"elegant", "smart casual", "romantic", "chic", "classic"}),
    "sport": frozenset({"sporty", "athletic", "athleisure", "casual"}),
}


def _normalize_key(value: str) -> str:
    return value.strip().lower()


def validate_category(value: str) -> str:
    """Validate and normalise a category value.

    Accepts the canonical labels case-insensitively together with a few
    singular aliases. Raises a :class:`ValueError` for anything outside the
    closed category set.
    """

    key = _normalize_key(str(value))
    for category in CATEGORIES:
        if key == category.lower():
            return category
    if key in _CATEGORY_ALIASES:
        return _CATEGORY_ALIASES[key]
    raise ValueError(f"Unsupported category '{value}'. Allowed: {list(CATEGORIES)}")


def is_placeholder(value: object) -> bool:
    """Return True when a raw attribute value carries no information."""

    if value is None:
        return True
    return _normalize_key(str(value)) in PLACEHOLDER_VALUES


def normalize_attribute(value: object) -> Optional[str]:
    """Lower-case and strip a raw attribute value, ``None`` for placeholders."""

    if is_placeholder(value):
        return None
    return " ".join(_normalize_key(str(value)).split())


def normalize_color_name(raw_string: str) -> str:
    """Map a raw color string to a canonical color name."""

    key = " ".join(_normalize_key(raw_string).split())
    return COLOR_MAP.get(key, key)


def styles_for_occasion(occasion: Optional[str]) -> FrozenSet[str]:
    """Return the style values acceptable for an occasion, defaulting to casual."""

    key = _normalize_key(occasion or "")
    return OCCASION_STYLES.get(key, OCCASION_STYLES[DEFAULT_OCCASION])


__all__ = [
    "TOPS",
    "BOTTOMS",
    "OUTERWEAR",
    "DRESSES",
    "FOOTWEAR",
    "ACCESSORIES",
    "CATEGORIES",
    "COLOR_MAP",
    "DEFAULT_OCCASION",
    "OCCASION_STYLES",
    "PLACEHOLDER_VALUES",
    "is_placeholder",
    "normalize_attribute",
    "normalize_color_name",
    "styles_for_occasion",
    "validate_category",
]
