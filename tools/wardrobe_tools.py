"""Instrumented wrappers around wardrobe storage."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from logic.validation import GarmentPayload
from models.garment import from_raw_metadata, to_raw_metadata
from tools.observability import instrument_tool
from tools.recommendation_store import RecommendationStore
from tools.wardrobe_store import SQLiteWardrobeStore, WardrobeStore


def _default_store() -> SQLiteWardrobeStore:
    return SQLiteWardrobeStore()


class WardrobeTools:
    """Thin wrapper exposing WardrobeStore operations to callers.

    Any change to a user's wardrobe marks their saved recommendations stale
    so the next retrieval regenerates them.
    """

    def __init__(
        self,
        store: Optional[WardrobeStore] = None,
        recommendation_store: Optional[RecommendationStore] = None,
    ) -> None:
        self.store = store or _default_store()
        self.recommendation_store = recommendation_store

    def _invalidate(self, user_id: str) -> None:
        if self.recommendation_store is not None:
            self.recommendation_store.set_recommendations_available(user_id, False)

    @instrument_tool("add_wardrobe_item")
    def add_wardrobe_item(self, user_id: str, item_data: Dict[str, Any]) -> Dict[str, Any]:
        payload = GarmentPayload.model_validate(item_data)
        item = from_raw_metadata({**payload.model_dump(), "user_id": user_id})
        stored = self.store.create_item(item)
        self._invalidate(user_id)
        return to_raw_metadata(stored)

    @instrument_tool("get_wardrobe_item")
    def get_wardrobe_item(self, user_id: str, item_id: str) -> Optional[Dict[str, Any]]:
        item = self.store.get_item(user_id, item_id)
        return to_raw_metadata(item) if item else None

    @instrument_tool("list_wardrobe_items")
    def list_wardrobe_items(self, user_id: str) -> List[Dict[str, Any]]:
        return [to_raw_metadata(item) for item in self.store.list_items_for_user(user_id)]

    @instrument_tool("delete_wardrobe_item")
    def delete_wardrobe_item(self, user_id: str, item_id: str) -> bool:
        deleted = self.store.delete_item(user_id, item_id)
        if deleted:
            self._invalidate(user_id)
        return deleted


__all__ = ["WardrobeTools"]
