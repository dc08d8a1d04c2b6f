"""Model package exports."""

from models.taxonomy import *  # noqa: F401,F403
from models.garment import Garment, from_raw_metadata, to_raw_metadata
from models.recommendation import OutfitRecommendation, Recommendation, recommendation_key

__all__ = [
    "Garment",
    "OutfitRecommendation",
    "Recommendation",
    "from_raw_metadata",
    "recommendation_key",
    "to_raw_metadata",
]
