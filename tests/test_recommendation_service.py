"""Persisted recommendations: freshness, de-duplication and feedback."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Dict

import pytest
from pydantic import ValidationError

sys.path.append(str(Path(__file__).resolve().parents[1]))

from logic.recommendation_engine import RecommendationEngine
from logic.recommendation_service import RecommendationService, filter_new_outfits
from models.garment import Garment
from models.recommendation import OutfitRecommendation, Recommendation, recommendation_key
from tools.recommendation_store import RecommendationNotFound, SQLiteRecommendationStore
from tools.wardrobe_store import SQLiteWardrobeStore
from tools.wardrobe_tools import WardrobeTools
from wardrobe_app.logging_config import configure_logging

USER = "user-1"


def _wardrobe_items() -> list[Dict[str, object]]:
    return [
        {"item_id": "tee", "category": "Tops", "style": ["casual"], "color": ["white"], "fit": "regular"},
        {"item_id": "polo", "category": "Tops", "style": ["casual"], "color": ["red"]},
        {"item_id": "chinos", "category": "Bottoms", "style": ["casual"], "color": ["navy"], "fit": "regular"},
        {"item_id": "jeans", "category": "Bottoms", "style": ["streetwear"], "color": ["green"]},
        {"item_id": "sneakers", "category": "Footwear", "style": ["sporty"], "color": ["white"]},
    ]


@pytest.fixture()
def stores(tmp_path: Path):
    wardrobe = SQLiteWardrobeStore(tmp_path / "wardrobe.db")
    recommendations = SQLiteRecommendationStore(tmp_path / "recommendations.db")
    tools = WardrobeTools(wardrobe, recommendations)
    for item in _wardrobe_items():
        tools.add_wardrobe_item(user_id=USER, item_data=item)
    return wardrobe, recommendations, tools


@pytest.fixture()
def service(stores) -> RecommendationService:
    wardrobe, recommendations, _ = stores
    return RecommendationService(RecommendationEngine(wardrobe), recommendations, wardrobe, persist_limit=3)


def _outfit(top_id: str, bottom_id: str, score: float = 8.0) -> OutfitRecommendation:
    return OutfitRecommendation(
        top=Garment(item_id=top_id, category="Tops"),
        bottom=Garment(item_id=bottom_id, category="Bottoms"),
        compatibility_score=score,
        reasoning="",
    )


def test_recommendation_key_ignores_order_and_type() -> None:
    assert recommendation_key([3, "1", 2]) == recommendation_key(["2", "3", 1]) == ("1", "2", "3")


def test_filter_new_outfits_drops_known_and_repeated_sets() -> None:
    prior = [Recommendation(user_id=USER, item_ids=["b", "a"])]
    outfits = [_outfit("a", "b"), _outfit("c", "d"), _outfit("c", "d"), _outfit("e", "f")]

    fresh = filter_new_outfits(prior, outfits)

    assert [outfit.item_ids for outfit in fresh] == [["c", "d"], ["e", "f"]]


def test_to_record_rounds_half_up() -> None:
    assert _outfit("a", "b", 9.375).to_record(USER).rating == 9
    assert _outfit("a", "b", 8.5).to_record(USER).rating == 9
    assert _outfit("a", "b", 7.5).to_record(USER).rating == 8


def test_first_retrieval_generates_and_persists(service, stores) -> None:
    _, recommendations, _ = stores
    assert recommendations.recommendations_available(USER) is False

    views = service.get_recommendations(USER)

    assert len(views) == 3
    assert views[0]["item_ids"] == ["polo", "chinos", "sneakers"]
    assert views[0]["rating"] == 10
    assert views[0]["reasoning"]
    assert [item["item_id"] for item in views[0]["items"]] == ["polo", "chinos", "sneakers"]
    assert recommendations.recommendations_available(USER) is True
    assert len(recommendations.get_recommendations(USER)) == 3


def test_fresh_recommendations_are_served_from_storage(service, stores) -> None:
    _, recommendations, _ = stores
    generated = service.get_recommendations(USER)

    served = service.get_recommendations(USER)

    assert sorted(view["id"] for view in served) == sorted(view["id"] for view in generated)
    assert all(view["reasoning"] is None for view in served)
    assert served[0]["rating"] >= served[-1]["rating"]
    assert len(recommendations.get_recommendations(USER)) == 3


def test_force_refresh_replaces_saved_records(service, stores) -> None:
    _, recommendations, _ = stores
    first_ids = {view["id"] for view in service.get_recommendations(USER)}

    refreshed_ids = {view["id"] for view in service.get_recommendations(USER, force_refresh=True)}

    assert first_ids.isdisjoint(refreshed_ids)
    assert {record.recommendation_id for record in recommendations.get_recommendations(USER)} == refreshed_ids


def test_wardrobe_change_marks_recommendations_stale(service, stores) -> None:
    _, recommendations, tools = stores
    service.get_recommendations(USER)

    tools.add_wardrobe_item(
        user_id=USER,
        item_data={"item_id": "shirt", "category": "Tops", "style": "casual", "color": "white"},
    )

    assert recommendations.recommendations_available(USER) is False
    views = service.get_recommendations(USER)
    assert recommendations.recommendations_available(USER) is True
    assert len(views) == 3


def test_extend_never_stores_the_same_item_set_twice(service, stores) -> None:
    _, recommendations, _ = stores
    service.get_recommendations(USER)

    created = service.extend_recommendations(USER)
    again = service.extend_recommendations(USER)

    stored = recommendations.get_recommendations(USER)
    keys = [record.key for record in stored]
    assert len(keys) == len(set(keys))
    assert len(stored) == 3 + len(created)
    assert again == []


def test_extend_respects_limit(service, stores) -> None:
    _, recommendations, _ = stores

    created = service.extend_recommendations(USER, limit=1)

    assert len(created) == 1
    assert created[0].recommendation_id is not None
    assert recommendations.recommendations_available(USER) is True


def test_recommend_for_occasion_returns_views(service) -> None:
    views = service.recommend_for_occasion(user_id=USER, occasion=" Casual ")

    assert views
    assert views[0]["compatibility_score"] == pytest.approx(10.0)
    assert "reasoning" in views[0]


def test_record_feedback(service) -> None:
    views = service.get_recommendations(USER)

    updated = service.record_feedback(views[0]["id"], "Loved this one")

    assert updated.feedback == "Loved this one"
    assert updated.recommendation_id == views[0]["id"]


def test_feedback_for_unknown_recommendation(service) -> None:
    with pytest.raises(RecommendationNotFound):
        service.record_feedback(9999, "Where did it go?")


@pytest.mark.parametrize("recommendation_id, feedback", [(0, "ok"), (1, "")])
def test_feedback_payload_is_validated(service, recommendation_id, feedback) -> None:
    with pytest.raises(ValidationError):
        service.record_feedback(recommendation_id, feedback)


def test_upstream_failure_propagates(stores) -> None:
    wardrobe, recommendations, _ = stores

    class BrokenEngine(RecommendationEngine):
        def generate_recommendations(self, user_id: str):
            raise RuntimeError("engine down")

    service = RecommendationService(BrokenEngine(wardrobe), recommendations, wardrobe)

    with pytest.raises(RuntimeError, match="engine down"):
        service.get_recommendations(USER)
    assert recommendations.recommendations_available(USER) is False


def test_failed_forced_refresh_keeps_saved_recommendations(service, stores) -> None:
    """A refresh that fails leaves the previous records servable."""

    wardrobe, recommendations, _ = stores
    saved_ids = sorted(view["id"] for view in service.get_recommendations(USER))
    working_engine = service.engine

    class BrokenEngine(RecommendationEngine):
        def generate_recommendations(self, user_id: str):
            raise RuntimeError("engine down")

    service.engine = BrokenEngine(wardrobe)
    with pytest.raises(RuntimeError, match="engine down"):
        service.get_recommendations(USER, force_refresh=True)

    service.engine = working_engine
    served = service.get_recommendations(USER)
    assert sorted(view["id"] for view in served) == saved_ids
    assert len(recommendations.get_recommendations(USER)) == 3


def test_extend_with_info_logging_enabled(service, stores) -> None:
    """Extending logs its counts at INFO without clashing with LogRecord fields."""

    _, recommendations, _ = stores
    configure_logging("INFO")

    created = service.extend_recommendations(USER, limit=2)

    assert len(created) == 2
    assert len(recommendations.get_recommendations(USER)) == 2


def test_saved_view_hydrates_only_the_owners_items(service, stores) -> None:
    wardrobe, _, _ = stores
    wardrobe.create_item(Garment(item_id="polo", category="Tops", user_id="someone-else", name="Other polo"))
    service.get_recommendations(USER)

    served = service.get_recommendations(USER)

    for view in served:
        assert {item["user_id"] for item in view["items"]} == {USER}
        assert [item["item_id"] for item in view["items"]] == view["item_ids"]
