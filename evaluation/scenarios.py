"""Evaluation scenarios exercising scoring, gating and footwear selection."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List


@dataclass
class EvaluationScenario:
    name: str
    description: str
    wardrobe_items: List[Dict[str, object]]
    expectations: Dict[str, object]


SCENARIOS: List[EvaluationScenario] = [
    EvaluationScenario(
        name="perfect_casual_pair",
        description="White casual top with navy casual bottom scores the maximum.",
        wardrobe_items=[
            {"id": "tee", "name": "White tee", "category": "Tops", "style": ["casual"], "color": ["white"], "fit": "regular"},
            {"id": "chinos", "name": "Navy chinos", "category": "Bottoms", "style": ["casual"], "color": ["navy"], "fit": "regular"},
        ],
        expectations={"min_recommendations": 1, "top_score": 10.0, "top_item_ids": ["tee", "chinos"]},
    ),
    EvaluationScenario(
        name="audience_mismatch",
        description="Men's top and women's bottom never pair, whatever else matches.",
        wardrobe_items=[
            {"id": "shirt", "category": "Tops", "style": "formal", "color": "red", "targetAudience": "men"},
            {"id": "skirt", "category": "Bottoms", "style": "party", "color": "green", "targetAudience": "women"},
        ],
        expectations={"min_recommendations": 0, "max_recommendations": 0},
    ),
    EvaluationScenario(
        name="new_user",
        description="A single garment is not enough to recommend anything.",
        wardrobe_items=[
            {"id": "solo", "category": "Tops", "style": "casual"},
        ],
        expectations={"min_recommendations": 0, "max_recommendations": 0, "status": "insufficient_inventory"},
    ),
    EvaluationScenario(
        name="tops_only",
        description="Without bottoms there is no pair to score.",
        wardrobe_items=[
            {"id": "tee-1", "category": "Tops", "style": "casual"},
            {"id": "tee-2", "category": "Tops", "style": "sporty"},
        ],
        expectations={"min_recommendations": 0, "max_recommendations": 0, "status": "ok"},
    ),
    EvaluationScenario(
        name="formal_footwear",
        description="Only the formal shoe passes the style gate for a formal outfit.",
        wardrobe_items=[
            {"id": "shirt", "name": "Oxford shirt", "category": "Tops", "style": ["formal"], "color": ["white"], "material": "cotton"},
            {"id": "trousers", "name": "Wool trousers", "category": "Bottoms", "style": ["business"], "color": ["grey"], "material": "wool"},
            {"id": "runners", "name": "Running shoes", "category": "Footwear", "style": ["athletic"], "color": ["white"]},
            {"id": "oxfords", "name": "Black oxfords", "category": "Footwear", "style": ["formal"], "color": ["red"], "material": "leather"},
        ],
        expectations={"min_recommendations": 1, "footwear": {"shirt+trousers": "oxfords"}},
    ),
]


__all__ = ["EvaluationScenario", "SCENARIOS"]
