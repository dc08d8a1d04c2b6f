"""Static affinity tables consulted by the pairwise compatibility evaluator."""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field, replace
from pathlib import Path
from types import MappingProxyType
from typing import Dict, FrozenSet, Iterable, Mapping

logger = logging.getLogger(__name__)

WILDCARD = "*"

AffinityTable = Mapping[str, FrozenSet[str]]


def freeze_table(table: Mapping[str, Iterable[str]]) -> AffinityTable:
    """Return a read-only copy of ``table`` with lower-cased keys and values."""

    frozen: Dict[str, FrozenSet[str]] = {}
    for key, values in table.items():
        frozen[str(key).strip().lower()] = frozenset(str(value).strip().lower() for value in values)
    return MappingProxyType(frozen)


_STYLE_AFFINITY = {
    "casual": ["casual", "streetwear", "sporty", "smart casual", "bohemian", "minimalist", "vintage"],
    "formal": ["formal", "elegant", "classic", "business"],
    "business": ["business", "formal", "classic", "smart casual"],
    "smart casual": ["smart casual", "casual", "business", "classic", "preppy"],
    "sporty": ["sporty", "athletic", "athleisure", "casual", "streetwear"],
    "athletic": ["athletic", "sporty", "athleisure"],
    "athleisure": ["athleisure", "sporty", "athletic", "casual", "streetwear"],
    "elegant": ["elegant", "formal", "classic", "chic", "romantic"],
    "classic": ["classic", "formal", "business", "elegant", "smart casual", "preppy"],
    "preppy": ["preppy", "classic", "smart casual"],
    "vintage": ["vintage", "bohemian", "classic", "casual"],
    "bohemian": ["bohemian", "vintage", "casual", "romantic"],
    "romantic": ["romantic", "elegant", "bohemian", "chic"],
    "modern": ["modern", "minimalist", "chic", "streetwear"],
    "minimalist": ["minimalist", "modern", "classic", "casual"],
    "chic": ["chic", "elegant", "modern", "minimalist", "trendy"],
    "streetwear": ["streetwear", "casual", "sporty", "edgy", "trendy"],
    "edgy": ["edgy", "streetwear", "party", "trendy"],
    "trendy": ["trendy", "party", "streetwear", "modern", "chic"],
    "party": ["party", "trendy", "glamorous", "edgy", "elegant"],
    "glamorous": ["glamorous", "party", "elegant"],
}

_FIT_AFFINITY = {
    "slim": ["slim", "regular", "tailored", "relaxed", "oversized"],
    "skinny": ["skinny", "oversized", "relaxed", "loose"],
    "regular": ["regular", "slim", "relaxed", "straight"],
    "straight": ["straight", "regular", "fitted"],
    "relaxed": ["relaxed", "regular", "slim", "fitted"],
    "loose": ["loose", "fitted", "slim", "skinny"],
    "oversized": ["oversized", "slim", "skinny", "fitted"],
    "fitted": ["fitted", "loose", "oversized", "regular", "straight", "wide-leg"],
    "tailored": ["tailored", "slim", "regular"],
    "cropped": ["cropped", "high-waisted", "wide-leg", "regular"],
    "wide-leg": ["wide-leg", "fitted", "cropped"],
}

_COLOR_AFFINITY = {
    "white": [WILDCARD],
    "black": [WILDCARD],
    "grey": [WILDCARD],
    "denim": [WILDCARD],
    "beige": ["brown", "white", "navy", "blue", "green", "black", "burgundy"],
    "navy": ["white", "beige", "grey", "red", "pink", "blue", "yellow"],
    "blue": ["white", "grey", "beige", "brown", "navy", "orange", "yellow"],
    "red": ["white", "black", "grey", "navy", "beige"],
    "green": ["beige", "brown", "white", "navy", "black"],
    "brown": ["beige", "white", "blue", "green", "orange"],
    "pink": ["grey", "navy", "white", "beige"],
    "yellow": ["blue", "grey", "navy", "white"],
    "orange": ["blue", "navy", "brown", "white"],
    "purple": ["grey", "white", "black", "beige", "yellow"],
}

_MATERIAL_HARMONY = {
    "cotton": ["cotton", "denim", "linen", "wool", "leather", "jersey", "polyester"],
    "denim": ["cotton", "leather", "wool", "jersey", "linen"],
    "linen": ["linen", "cotton", "silk"],
    "wool": ["wool", "cotton", "cashmere", "leather", "denim", "tweed"],
    "cashmere": ["cashmere", "wool", "silk"],
    "silk": ["silk", "linen", "wool", "cashmere", "satin"],
    "satin": ["satin", "silk"],
    "leather": ["denim", "cotton", "wool", "leather", "suede"],
    "suede": ["suede", "denim", "leather", "cotton"],
    "polyester": ["polyester", "cotton", "spandex", "nylon", "jersey"],
    "nylon": ["nylon", "polyester", "spandex", "cotton"],
    "spandex": ["spandex", "polyester", "nylon"],
    "jersey": ["jersey", "cotton", "denim", "polyester"],
    "tweed": ["tweed", "wool"],
}

# Keyed by outfit style; values are the footwear styles that complete it.
_FOOTWEAR_STYLE_AFFINITY = {
    "casual": ["casual", "sporty", "streetwear", "minimalist", "classic"],
    "formal": ["formal", "elegant", "classic", "business"],
    "business": ["business", "formal", "classic", "smart casual"],
    "smart casual": ["smart casual", "classic", "casual", "minimalist", "business"],
    "sporty": ["sporty", "athletic", "athleisure", "casual"],
    "athletic": ["athletic", "sporty"],
    "athleisure": ["athleisure", "sporty", "athletic", "casual", "streetwear"],
    "elegant": ["elegant", "formal", "classic", "glamorous"],
    "classic": ["classic", "formal", "business", "smart casual", "casual"],
    "preppy": ["preppy", "classic", "smart casual"],
    "vintage": ["vintage", "classic", "casual", "bohemian"],
    "bohemian": ["bohemian", "vintage", "casual"],
    "romantic": ["romantic", "elegant", "chic"],
    "modern": ["modern", "minimalist", "streetwear", "chic"],
    "minimalist": ["minimalist", "modern", "casual", "classic"],
    "chic": ["chic", "elegant", "modern", "minimalist"],
    "streetwear": ["streetwear", "sporty", "casual", "edgy"],
    "edgy": ["edgy", "streetwear", "party"],
    "trendy": ["trendy", "streetwear", "party", "chic"],
    "party": ["party", "elegant", "glamorous", "trendy"],
    "glamorous": ["glamorous", "elegant", "party"],
}

NEUTRAL_COLORS: FrozenSet[str] = frozenset({"white", "black", "beige", "grey", "navy"})
PLAIN_PATTERNS: FrozenSet[str] = frozenset({"solid", "plain", "block color", "monochrome"})


@dataclass(frozen=True)
class CompatibilityRules:
    """Immutable bundle of affinity tables shared by reference."""

    style_affinity: AffinityTable
    fit_affinity: AffinityTable
    color_affinity: AffinityTable
    material_harmony: AffinityTable
    footwear_style_affinity: AffinityTable
    neutral_colors: FrozenSet[str] = NEUTRAL_COLORS
    plain_patterns: FrozenSet[str] = PLAIN_PATTERNS
    wildcard: str = field(default=WILDCARD)


DEFAULT_RULES = CompatibilityRules(
    style_affinity=freeze_table(_STYLE_AFFINITY),
    fit_affinity=freeze_table(_FIT_AFFINITY),
    color_affinity=freeze_table(_COLOR_AFFINITY),
    material_harmony=freeze_table(_MATERIAL_HARMONY),
    footwear_style_affinity=freeze_table(_FOOTWEAR_STYLE_AFFINITY),
)

_TABLE_FIELDS = (
    "style_affinity",
    "fit_affinity",
    "color_affinity",
    "material_harmony",
    "footwear_style_affinity",
)
_SET_FIELDS = ("neutral_colors", "plain_patterns")


def load_compatibility_rules(path: str | Path | None = None) -> CompatibilityRules:
    """Return the default rules, optionally overridden by a JSON file.

    The file holds an object whose keys are table names (``style_affinity``,
    ``color_affinity`` ...) or set names (``neutral_colors``,
    ``plain_patterns``). Tables present in the file replace the default table
    wholesale. Unknown keys raise :class:`ValueError`.
    """

    if path is None:
        return DEFAULT_RULES

    rules_path = Path(path)
    payload = json.loads(rules_path.read_text())
    if not isinstance(payload, dict):
        raise ValueError(f"Compatibility rules file {rules_path} must contain a JSON object")

    unknown = sorted(set(payload) - set(_TABLE_FIELDS) - set(_SET_FIELDS))
    if unknown:
        raise ValueError(f"Unknown compatibility rule tables in {rules_path}: {unknown}")

    overrides: Dict[str, object] = {}
    for name in _TABLE_FIELDS:
        if name in payload:
            overrides[name] = freeze_table(payload[name])
    for name in _SET_FIELDS:
        if name in payload:
            overrides[name] = frozenset(str(value).strip().lower() for value in payload[name])
    logger.info("Loaded compatibility rule overrides %s from %s", sorted(overrides), rules_path)
    return replace(DEFAULT_RULES, **overrides)


__all__ = [
    "WILDCARD",
    "NEUTRAL_COLORS",
    "PLAIN_PATTERNS",
    "AffinityTable",
    "CompatibilityRules",
    "DEFAULT_RULES",
    "freeze_table",
    "load_compatibility_rules",
]
