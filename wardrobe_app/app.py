"""Application bootstrap wiring stores, rules, engine and service."""

import logging
from typing import Dict, List

from wardrobe_app.config import AppConfig
from wardrobe_app.logging_config import configure_logging, get_logger, log_event
from logic.compatibility import CompatibilityEvaluator
from logic.recommendation_engine import RecommendationEngine
from logic.recommendation_service import RecommendationService
from models.compatibility_rules import load_compatibility_rules
from tools.recommendation_store import SQLiteRecommendationStore
from tools.wardrobe_store import SQLiteWardrobeStore
from tools.wardrobe_tools import WardrobeTools


LOGGER = get_logger(__name__)


class WardrobeApp:
    """Wires together storage, the compatibility rules and the engine."""

    def __init__(self, config: AppConfig | None = None) -> None:
        self.config = config or AppConfig.from_env()
        configure_logging(self.config.log_level)

        # Loaded once and shared by reference.
        self.rules = load_compatibility_rules(self.config.rules_path)
        self.evaluator = CompatibilityEvaluator(self.rules)

        self.wardrobe_store = SQLiteWardrobeStore(self.config.wardrobe_db_path)
        self.recommendation_store = SQLiteRecommendationStore(self.config.recommendation_db_path)
        self.wardrobe_tools = WardrobeTools(self.wardrobe_store, self.recommendation_store)
        self.engine = RecommendationEngine(self.wardrobe_store, self.evaluator)
        self.recommendations = RecommendationService(
            engine=self.engine,
            store=self.recommendation_store,
            wardrobe=self.wardrobe_store,
            persist_limit=self.config.persist_limit,
        )
        log_event(
            LOGGER,
            logging.INFO,
            "app_initialised",
            environment=self.config.environment or "local",
            rules_path=self.config.rules_path,
        )

    def recommend(self, user_id: str, occasion: str | None = None) -> List[Dict[str, object]]:
        """Generate fresh recommendations without persisting them."""

        if occasion:
            return self.recommendations.recommend_for_occasion(user_id=user_id, occasion=occasion)
        return [
            {
                "item_ids": outfit.item_ids,
                "compatibility_score": outfit.compatibility_score,
                "reasoning": outfit.reasoning,
            }
            for outfit in self.engine.generate_recommendations(user_id)
        ]


__all__ = ["WardrobeApp"]
