"""Pairwise garment compatibility predicates and weighted scoring."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Sequence, Tuple

from models.compatibility_rules import DEFAULT_RULES, AffinityTable, CompatibilityRules
from models.garment import Garment

logger = logging.getLogger(__name__)

WEIGHTS: Dict[str, float] = {
    "target_audience": 2.0,
    "style": 2.0,
    "color": 1.5,
    "pattern": 1.0,
    "fit": 1.0,
    "material": 0.5,
}
MAX_SCORE = 10.0


def _cross_affinity(table: AffinityTable, values_a: Sequence[str], values_b: Sequence[str]) -> bool:
    """True when any value of one side is listed in the table entry of any value of the other."""

    for value_a in values_a:
        for value_b in values_b:
            if value_a in table.get(value_b, ()) or value_b in table.get(value_a, ()):
                return True
    return False


@dataclass(frozen=True)
class CompatibilityBreakdown:
    """Per-dimension outcome of a pairwise evaluation."""

    dimensions: Dict[str, bool]
    earned: float
    possible: float

    @property
    def score(self) -> float:
        if not self.possible:
            return 0.0
        return self.earned / self.possible * MAX_SCORE

    @property
    def failed(self) -> Tuple[str, ...]:
        return tuple(name for name, passed in self.dimensions.items() if not passed)


class CompatibilityEvaluator:
    """Answers per-dimension compatibility questions for two garments.

    Every predicate treats an attribute that is unset on either side as a
    pass, and every table lookup is made in both directions so that
    ``score(a, b) == score(b, a)`` even though the affinity tables are not
    symmetric.
    """

    def __init__(self, rules: CompatibilityRules = DEFAULT_RULES) -> None:
        self.rules = rules
        self._predicates: Tuple[Tuple[str, Callable[[Garment, Garment], bool]], ...] = (
            ("target_audience", self.target_audience_match),
            ("style", self.style_compatible),
            ("color", self.color_compatible),
            ("pattern", self.pattern_compatible),
            ("fit", self.fit_compatible),
            ("material", self.material_compatible),
        )

    def target_audience_match(self, a: Garment, b: Garment) -> bool:
        if not a.target_audience or not b.target_audience:
            return True
        return a.target_audience == b.target_audience

    def style_compatible(self, a: Garment, b: Garment) -> bool:
        if not a.styles or not b.styles:
            return True
        return _cross_affinity(self.rules.style_affinity, a.styles, b.styles)

    def color_compatible(self, a: Garment, b: Garment) -> bool:
        if not a.colors or not b.colors:
            return True
        table = self.rules.color_affinity
        wildcard = self.rules.wildcard
        for color_a in a.colors:
            affinity_a = table.get(color_a, frozenset())
            for color_b in b.colors:
                affinity_b = table.get(color_b, frozenset())
                if color_b in affinity_a or color_a in affinity_b:
                    return True
                if wildcard in affinity_a or wildcard in affinity_b:
                    return True
                if color_a == color_b and color_a in self.rules.neutral_colors:
                    return True
        return False

    def pattern_compatible(self, a: Garment, b: Garment) -> bool:
        if not a.patterns or not b.patterns:
            return True
        a_plain, a_other = self._classify_patterns(a.patterns)
        b_plain, b_other = self._classify_patterns(b.patterns)
        if a_plain and b_other:
            return True
        if b_plain and a_other:
            return True
        return a_plain and b_plain and not a_other and not b_other

    def fit_compatible(self, a: Garment, b: Garment) -> bool:
        if not a.fit or not b.fit:
            return True
        if a.fit == b.fit:
            return True
        table = self.rules.fit_affinity
        return b.fit in table.get(a.fit, ()) or a.fit in table.get(b.fit, ())

    def material_compatible(self, a: Garment, b: Garment) -> bool:
        if not a.materials or not b.materials:
            return True
        return _cross_affinity(self.rules.material_harmony, a.materials, b.materials)

    def footwear_style_compatible(self, footwear: Garment, outfit: Iterable[Garment]) -> bool:
        """Gate a footwear candidate against the combined styles of an outfit."""

        outfit_styles = [style for item in outfit for style in item.styles]
        if not footwear.styles or not outfit_styles:
            return True
        table = self.rules.footwear_style_affinity
        return any(
            shoe_style in table.get(outfit_style, ())
            for outfit_style in outfit_styles
            for shoe_style in footwear.styles
        )

    def _classify_patterns(self, patterns: Sequence[str]) -> Tuple[bool, bool]:
        plain = any(pattern in self.rules.plain_patterns for pattern in patterns)
        other = any(pattern not in self.rules.plain_patterns for pattern in patterns)
        return plain, other

    def evaluate(self, a: Garment, b: Garment) -> CompatibilityBreakdown:
        """Run every predicate and accumulate the weighted score."""

        dimensions: Dict[str, bool] = {}
        earned = 0.0
        possible = 0.0
        for name, predicate in self._predicates:
            passed = predicate(a, b)
            dimensions[name] = passed
            possible += WEIGHTS[name]
            if passed:
                earned += WEIGHTS[name]
        breakdown = CompatibilityBreakdown(dimensions=dimensions, earned=earned, possible=possible)
        logger.debug(
            "compatibility %s x %s -> %.3f failed=%s", a.item_id, b.item_id, breakdown.score, breakdown.failed
        )
        return breakdown

    def score(self, a: Garment, b: Garment) -> float:
        """Return the weighted compatibility score in ``[0, 10]``."""

        return self.evaluate(a, b).score


__all__ = ["WEIGHTS", "MAX_SCORE", "CompatibilityBreakdown", "CompatibilityEvaluator"]
