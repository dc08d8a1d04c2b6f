"""Outfit recommendation generation over a user's wardrobe."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Mapping, Optional

from logic.compatibility import CompatibilityEvaluator
from logic.footwear import select_footwear
from logic.reasoning import generate_reasoning
from models.garment import Garment, from_raw_metadata
from models.recommendation import OutfitRecommendation
from models.taxonomy import BOTTOMS, FOOTWEAR, TOPS, styles_for_occasion
from tools.wardrobe_store import WardrobeStore
from wardrobe_app.logging_config import get_logger, log_event, operation_context

logger = get_logger(__name__)

# Fixed policy: pairs below this score are never recommended.
ACCEPTANCE_THRESHOLD = 6.0
MAX_RECOMMENDATIONS = 10
MIN_WARDROBE_SIZE = 2

STATUS_OK = "ok"
STATUS_INSUFFICIENT_INVENTORY = "insufficient_inventory"


@dataclass(frozen=True)
class RecommendationRun:
    recommendations: List[OutfitRecommendation]
    diagnostics: Dict[str, object]


def coerce_garments(raw_items: Iterable[Garment | Mapping[str, object]]) -> List[Garment]:
    """Normalise inventory records once, skipping records that cannot be adapted."""

    garments: List[Garment] = []
    for raw in raw_items:
        if isinstance(raw, Garment):
            garments.append(raw)
            continue
        try:
            garments.append(from_raw_metadata(raw))
        except ValueError as exc:
            logger.warning("Skipping wardrobe entry due to validation error: %s", exc)
    return garments


def partition_by_category(garments: Iterable[Garment]) -> Dict[str, List[Garment]]:
    grouped: Dict[str, List[Garment]] = {TOPS: [], BOTTOMS: [], FOOTWEAR: []}
    for garment in garments:
        if garment.category in grouped:
            grouped[garment.category].append(garment)
    return grouped


class RecommendationEngine:
    """Enumerates top/bottom pairs, scores them and attaches footwear."""

    def __init__(self, inventory: WardrobeStore, evaluator: Optional[CompatibilityEvaluator] = None) -> None:
        self.inventory = inventory
        self.evaluator = evaluator or CompatibilityEvaluator()

    def generate_recommendations(self, user_id: str) -> List[OutfitRecommendation]:
        """Return up to ten recommendations sorted by descending score."""

        return self.generate_with_diagnostics(user_id).recommendations

    def generate_recommendations_for_occasion(self, user_id: str, occasion: str) -> List[OutfitRecommendation]:
        """Recommendations whose top and bottom styles suit the occasion.

        Unrecognised occasions fall back to the casual style set.
        """

        accepted_styles = styles_for_occasion(occasion)
        recommendations = self.generate_recommendations(user_id)
        filtered = [rec for rec in recommendations if accepted_styles.intersection(rec.styles)]
        logger.info(
            "Filtered %s recommendations to %s for occasion %r", len(recommendations), len(filtered), occasion
        )
        return filtered

    def generate_with_diagnostics(self, user_id: str) -> RecommendationRun:
        """Run generation and report why the result looks the way it does."""

        with operation_context("engine.generate_recommendations", user_id=user_id) as correlation_id:
            try:
                raw_items = self.inventory.list_items_for_user(user_id)
            except Exception:
                log_event(
                    logger,
                    logging.ERROR,
                    "inventory_fetch_failed",
                    correlation_id=correlation_id,
                    user_id=user_id,
                    exc_info=True,
                )
                raise

            garments = coerce_garments(raw_items)
            diagnostics: Dict[str, object] = {
                "status": STATUS_OK,
                "wardrobe_size": len(garments),
                "pairs_considered": 0,
                "rejected_by_audience": 0,
                "below_threshold": 0,
                "with_footwear": 0,
            }
            if len(garments) < MIN_WARDROBE_SIZE:
                diagnostics["status"] = STATUS_INSUFFICIENT_INVENTORY
                log_event(
                    logger,
                    logging.INFO,
                    "recommendations_skipped",
                    correlation_id=correlation_id,
                    user_id=user_id,
                    reason=STATUS_INSUFFICIENT_INVENTORY,
                    wardrobe_size=len(garments),
                )
                return RecommendationRun(recommendations=[], diagnostics=diagnostics)

            grouped = partition_by_category(garments)
            candidates: List[OutfitRecommendation] = []
            for top in grouped[TOPS]:
                for bottom in grouped[BOTTOMS]:
                    diagnostics["pairs_considered"] += 1
                    if not self.evaluator.target_audience_match(top, bottom):
                        diagnostics["rejected_by_audience"] += 1
                        continue
                    score = self.evaluator.score(top, bottom)
                    if score < ACCEPTANCE_THRESHOLD:
                        diagnostics["below_threshold"] += 1
                        continue
                    selection = select_footwear(top, bottom, grouped[FOOTWEAR], self.evaluator)
                    if selection.footwear is not None:
                        diagnostics["with_footwear"] += 1
                    candidates.append(
                        OutfitRecommendation(
                            top=top,
                            bottom=bottom,
                            footwear=selection.footwear,
                            compatibility_score=score,
                            reasoning=generate_reasoning(top, bottom, selection.footwear),
                        )
                    )

            # list.sort is stable, so equal scores keep enumeration order.
            candidates.sort(key=lambda rec: rec.compatibility_score, reverse=True)
            selected = candidates[:MAX_RECOMMENDATIONS]
            diagnostics["accepted"] = len(candidates)
            diagnostics["returned"] = len(selected)
            log_event(
                logger,
                logging.INFO,
                "recommendations_generated",
                correlation_id=correlation_id,
                user_id=user_id,
                **diagnostics,
            )
            return RecommendationRun(recommendations=selected, diagnostics=diagnostics)


__all__ = [
    "ACCEPTANCE_THRESHOLD",
    "MAX_RECOMMENDATIONS",
    "MIN_WARDROBE_SIZE",
    "STATUS_OK",
    "STATUS_INSUFFICIENT_INVENTORY",
    "RecommendationEngine",
    "RecommendationRun",
    "coerce_garments",
    "partition_by_category",
]
