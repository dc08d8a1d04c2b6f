"""Pydantic schemas for validating recommender payloads."""

from __future__ import annotations

from typing import Any, List, Optional

from pydantic import AliasChoices, BaseModel, Field, field_validator

from models.taxonomy import validate_category


class RecommendationRequest(BaseModel):
    """Input contract for recommendation retrieval."""

    user_id: str = Field(min_length=1)
    force_refresh: bool = False


class OccasionRequest(BaseModel):
    """Input contract for occasion-filtered generation."""

    user_id: str = Field(min_length=1)
    occasion: str = Field(min_length=1)

    @field_validator("occasion")
    @classmethod
    def _normalise_occasion(cls, occasion: str) -> str:
        return occasion.strip().lower()


class FeedbackRequest(BaseModel):
    """Input contract for recording user feedback on a recommendation."""

    recommendation_id: int = Field(ge=1)
    feedback: str = Field(min_length=1, max_length=2000)


class GarmentPayload(BaseModel):
    """Loose garment record as produced by the wardrobe upload flow.

    Accepts the same key spellings as ``models.garment.from_raw_metadata``
    (snake_case or camelCase, singular or plural) so no attribute is dropped
    on the way to the store.
    """

    item_id: str = Field(min_length=1, validation_alias=AliasChoices("item_id", "itemId", "id"))
    category: str
    name: str = ""
    style: Optional[str | List[str]] = Field(default=None, validation_alias=AliasChoices("style", "styles"))
    color: Optional[str | List[str]] = Field(default=None, validation_alias=AliasChoices("color", "colors"))
    material: Optional[str | List[str]] = Field(
        default=None, validation_alias=AliasChoices("material", "materials")
    )
    pattern: Optional[str | List[str]] = Field(default=None, validation_alias=AliasChoices("pattern", "patterns"))
    fit: Optional[str] = None
    target_audience: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("target_audience", "targetAudience")
    )
    rating: Optional[float] = Field(default=None, ge=0, le=10)

    @field_validator("item_id", mode="before")
    @classmethod
    def _stringify_item_id(cls, item_id: Any) -> Any:
        return str(item_id) if isinstance(item_id, int) else item_id

    @field_validator("category")
    @classmethod
    def _validate_category(cls, category: str) -> str:
        return validate_category(category)


__all__ = [
    "FeedbackRequest",
    "GarmentPayload",
    "OccasionRequest",
    "RecommendationRequest",
]
