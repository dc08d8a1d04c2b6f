"""Recommendation schemas: persisted records and transient engine output."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Iterable, List, Optional, Tuple

from models.garment import Garment

RecommendationKey = Tuple[str, ...]


def recommendation_key(item_ids: Iterable[object]) -> RecommendationKey:
    """Canonical form of an unordered item-id set: sorted, stringified ids."""

    return tuple(sorted(str(item_id) for item_id in item_ids))


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Recommendation:
    """A recommendation record owned by the recommendation store."""

    user_id: str
    item_ids: List[str]
    rating: Optional[int] = None
    feedback: Optional[str] = None
    recommendation_id: Optional[int] = None
    created_at: datetime = field(default_factory=_utcnow)

    def __post_init__(self) -> None:
        self.user_id = str(self.user_id)
        self.item_ids = [str(item_id) for item_id in self.item_ids]
        if not self.item_ids:
            raise ValueError("A recommendation must reference at least one item")
        if self.rating is not None:
            self.rating = int(self.rating)

    @property
    def key(self) -> RecommendationKey:
        return recommendation_key(self.item_ids)


@dataclass(frozen=True)
class OutfitRecommendation:
    """A scored top/bottom(/footwear) combination produced by the engine."""

    top: Garment
    bottom: Garment
    compatibility_score: float
    reasoning: str
    footwear: Optional[Garment] = None

    @property
    def items(self) -> List[Garment]:
        items = [self.top, self.bottom]
        if self.footwear is not None:
            items.append(self.footwear)
        return items

    @property
    def item_ids(self) -> List[str]:
        return [item.item_id for item in self.items]

    @property
    def key(self) -> RecommendationKey:
        return recommendation_key(self.item_ids)

    @property
    def styles(self) -> Tuple[str, ...]:
        return self.top.styles + self.bottom.styles

    def to_record(self, user_id: str) -> Recommendation:
        """Translate into a persistable record with an integer rating."""

        return Recommendation(
            user_id=user_id,
            item_ids=self.item_ids,
            rating=math.floor(self.compatibility_score + 0.5),
            feedback=None,
        )


__all__ = [
    "OutfitRecommendation",
    "Recommendation",
    "RecommendationKey",
    "recommendation_key",
]
