"""Footwear selection for an accepted top and bottom pair."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

from logic.compatibility import CompatibilityEvaluator
from models.garment import Garment

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FootwearSelection:
    footwear: Optional[Garment]
    combined_score: Optional[float]
    diagnostics: Dict[str, object]


def select_footwear(
    top: Garment,
    bottom: Garment,
    candidates: Iterable[Garment],
    evaluator: CompatibilityEvaluator,
) -> FootwearSelection:
    """Pick the footwear with the highest combined score against top and bottom.

    Candidates failing the footwear style gate are never chosen. Ties keep the
    first candidate in iteration order; when nothing passes the gate the
    outfit stays a two-piece and ``footwear`` is ``None``.
    """

    best: Optional[Garment] = None
    best_score: Optional[float] = None
    considered = 0
    rejected: List[str] = []
    for shoe in candidates:
        considered += 1
        if not evaluator.footwear_style_compatible(shoe, (top, bottom)):
            rejected.append(shoe.item_id)
            continue
        combined = evaluator.score(top, shoe) + evaluator.score(bottom, shoe)
        if best_score is None or combined > best_score:
            best = shoe
            best_score = combined

    diagnostics: Dict[str, object] = {
        "considered": considered,
        "rejected_by_style": rejected,
        "chosen_id": best.item_id if best else None,
    }
    if best is None:
        logger.debug("No footwear passed the style gate for %s + %s", top.item_id, bottom.item_id)
    else:
        logger.debug(
            "Selected footwear %s for %s + %s (combined %.3f)", best.item_id, top.item_id, bottom.item_id, best_score
        )
    return FootwearSelection(footwear=best, combined_score=best_score, diagnostics=diagnostics)


__all__ = ["FootwearSelection", "select_footwear"]
