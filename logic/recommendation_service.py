"""Persisting, serving and refreshing outfit recommendations."""
from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional, Set

from logic.recommendation_engine import RecommendationEngine
from logic.validation import FeedbackRequest, OccasionRequest, RecommendationRequest
from models.garment import to_raw_metadata
from models.recommendation import OutfitRecommendation, Recommendation, RecommendationKey
from tools.observability import instrument_tool
from tools.recommendation_store import RecommendationNotFound, RecommendationStore
from tools.wardrobe_store import WardrobeStore
from wardrobe_app.config import DEFAULT_PERSIST_LIMIT
from wardrobe_app.logging_config import get_logger, log_event

logger = get_logger(__name__)


def existing_keys(records: Iterable[Recommendation]) -> Set[RecommendationKey]:
    return {record.key for record in records}


def filter_new_outfits(
    prior: Iterable[Recommendation], outfits: Iterable[OutfitRecommendation]
) -> List[OutfitRecommendation]:
    """Drop outfits whose item set is already recorded or repeated earlier in ``outfits``."""

    seen = existing_keys(prior)
    fresh: List[OutfitRecommendation] = []
    for outfit in outfits:
        if outfit.key in seen:
            continue
        seen.add(outfit.key)
        fresh.append(outfit)
    return fresh


class RecommendationService:
    """Caller-side workflow around the recommendation engine.

    Turns transient engine output into stored records, serves stored records
    while they are fresh and records user feedback.
    """

    def __init__(
        self,
        engine: RecommendationEngine,
        store: RecommendationStore,
        wardrobe: WardrobeStore,
        persist_limit: int = DEFAULT_PERSIST_LIMIT,
    ) -> None:
        self.engine = engine
        self.store = store
        self.wardrobe = wardrobe
        self.persist_limit = persist_limit

    @instrument_tool("get_recommendations", input_model=RecommendationRequest)
    def get_recommendations(self, user_id: str, force_refresh: bool = False) -> List[Dict[str, object]]:
        """Return saved recommendations when fresh, otherwise regenerate them."""

        if self.store.recommendations_available(user_id) and not force_refresh:
            saved = sorted(self.store.get_recommendations(user_id), key=lambda rec: rec.rating or 0, reverse=True)
            logger.info("Serving %s saved recommendations for user=%s", len(saved), user_id)
            return [self._saved_view(record) for record in saved[: self.persist_limit]]

        # Stored records are replaced only after generation succeeds.
        outfits = self.engine.generate_recommendations(user_id)
        removed = self.store.delete_recommendations(user_id)
        log_event(logger, logging.INFO, "recommendations_refresh", user_id=user_id, removed=removed)
        views = []
        for outfit in filter_new_outfits([], outfits)[: self.persist_limit]:
            record = self.store.create_recommendation(outfit.to_record(user_id))
            views.append(self._generated_view(record, outfit))
        self.store.set_recommendations_available(user_id, True)
        return views

    @instrument_tool("extend_recommendations")
    def extend_recommendations(self, user_id: str, limit: Optional[int] = None) -> List[Recommendation]:
        """Persist newly generated combinations that are not stored yet.

        Prior records are fetched once; duplicates are detected by set
        membership on canonical item-id keys.
        """

        prior = self.store.get_recommendations(user_id)
        outfits = filter_new_outfits(prior, self.engine.generate_recommendations(user_id))
        if limit is not None:
            outfits = outfits[:limit]
        created = [self.store.create_recommendation(outfit.to_record(user_id)) for outfit in outfits]
        if created:
            self.store.set_recommendations_available(user_id, True)
        log_event(
            logger,
            logging.INFO,
            "recommendations_extended",
            user_id=user_id,
            prior=len(prior),
            created_count=len(created),
        )
        return created

    @instrument_tool("recommend_for_occasion", input_model=OccasionRequest)
    def recommend_for_occasion(self, user_id: str, occasion: str) -> List[Dict[str, object]]:
        outfits = self.engine.generate_recommendations_for_occasion(user_id, occasion)
        return [self._outfit_view(outfit) for outfit in outfits]

    @instrument_tool("record_feedback", input_model=FeedbackRequest)
    def record_feedback(self, recommendation_id: int, feedback: str) -> Recommendation:
        updated = self.store.update_feedback(recommendation_id, feedback)
        if updated is None:
            raise RecommendationNotFound(f"Recommendation {recommendation_id} not found")
        return updated

    @staticmethod
    def _outfit_view(outfit: OutfitRecommendation) -> Dict[str, object]:
        return {
            "item_ids": outfit.item_ids,
            "items": [to_raw_metadata(item) for item in outfit.items],
            "compatibility_score": outfit.compatibility_score,
            "reasoning": outfit.reasoning,
        }

    @staticmethod
    def _record_fields(record: Recommendation) -> Dict[str, object]:
        return {
            "id": record.recommendation_id,
            "user_id": record.user_id,
            "item_ids": list(record.item_ids),
            "created_at": record.created_at.isoformat(),
            "feedback": record.feedback,
            "rating": record.rating,
        }

    def _generated_view(self, record: Recommendation, outfit: OutfitRecommendation) -> Dict[str, object]:
        return {
            **self._record_fields(record),
            "items": [to_raw_metadata(item) for item in outfit.items],
            "reasoning": outfit.reasoning,
        }

    def _saved_view(self, record: Recommendation) -> Dict[str, object]:
        items = self.wardrobe.get_items_by_ids(record.user_id, record.item_ids)
        return {
            **self._record_fields(record),
            "items": [to_raw_metadata(item) for item in items],
            "reasoning": None,
        }


__all__ = ["RecommendationService", "existing_keys", "filter_new_outfits"]
