"""Footwear selection and reasoning text for accepted pairs."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from logic.compatibility import CompatibilityEvaluator
from logic.footwear import select_footwear
from logic.reasoning import generate_reasoning
from models.garment import Garment


@pytest.fixture()
def evaluator() -> CompatibilityEvaluator:
    return CompatibilityEvaluator()


@pytest.fixture()
def casual_pair() -> tuple[Garment, Garment]:
    top = Garment(
        item_id="tee", category="Tops", name="White tee", styles=["casual"], colors=["white"], fit="regular",
        target_audience="men",
    )
    bottom = Garment(
        item_id="chinos", category="Bottoms", name="Navy chinos", styles=["casual"], colors=["navy"], fit="regular",
        target_audience="men",
    )
    return top, bottom


def _shoe(item_id: str, **attrs) -> Garment:
    return Garment(item_id=item_id, category="Footwear", **attrs)


def test_gate_failing_candidate_never_wins(evaluator, casual_pair) -> None:
    """A better scoring shoe is ignored when its style does not suit the outfit."""

    top, bottom = casual_pair
    formal = _shoe("oxfords", styles=["formal"], colors=["white"], target_audience="men")
    sneakers = _shoe("sneakers", styles=["sporty"], colors=["purple"], target_audience="women")
    assert evaluator.score(top, formal) + evaluator.score(bottom, formal) > evaluator.score(
        top, sneakers
    ) + evaluator.score(bottom, sneakers)

    selection = select_footwear(top, bottom, [formal, sneakers], evaluator)

    assert selection.footwear is sneakers
    assert selection.diagnostics["considered"] == 2
    assert selection.diagnostics["rejected_by_style"] == ["oxfords"]
    assert selection.diagnostics["chosen_id"] == "sneakers"


def test_highest_combined_score_wins(evaluator, casual_pair) -> None:
    top, bottom = casual_pair
    purple = _shoe("purple", styles=["sporty"], colors=["purple"])
    white = _shoe("white", styles=["sporty"], colors=["white"])

    selection = select_footwear(top, bottom, [purple, white], evaluator)

    assert selection.footwear is white
    assert selection.combined_score == pytest.approx(20.0)


def test_ties_keep_the_first_candidate(evaluator, casual_pair) -> None:
    top, bottom = casual_pair
    first = _shoe("first", styles=["casual"], colors=["white"])
    second = _shoe("second", styles=["casual"], colors=["white"])

    assert select_footwear(top, bottom, [first, second], evaluator).footwear is first
    assert select_footwear(top, bottom, [second, first], evaluator).footwear is second


def test_no_passing_candidate_leaves_a_two_piece(evaluator, casual_pair) -> None:
    top, bottom = casual_pair
    heels = _shoe("heels", styles=["glamorous"])

    selection = select_footwear(top, bottom, [heels], evaluator)

    assert selection.footwear is None
    assert selection.combined_score is None
    assert selection.diagnostics["rejected_by_style"] == ["heels"]
    assert select_footwear(top, bottom, [], evaluator).footwear is None


def test_unstyled_shoes_and_outfits_pass_the_gate(evaluator, casual_pair) -> None:
    top, bottom = casual_pair
    plain_shoe = _shoe("plain")
    assert evaluator.footwear_style_compatible(plain_shoe, casual_pair) is True

    unstyled_top = Garment(item_id="t", category="Tops")
    unstyled_bottom = Garment(item_id="b", category="Bottoms")
    heels = _shoe("heels", styles=["glamorous"])
    assert evaluator.footwear_style_compatible(heels, (unstyled_top, unstyled_bottom)) is True


def test_gate_uses_combined_outfit_styles(evaluator) -> None:
    top = Garment(item_id="t", category="Tops", styles=["casual"])
    bottom = Garment(item_id="b", category="Bottoms", styles=["formal"])
    oxfords = _shoe("oxfords", styles=["formal"])
    assert evaluator.footwear_style_compatible(oxfords, (top, bottom)) is True


def test_reasoning_for_full_outfit(casual_pair) -> None:
    top, bottom = casual_pair
    sneakers = _shoe("sneakers", name="White sneakers", styles=["casual"])

    text = generate_reasoning(top, bottom, sneakers)

    assert text == (
        "Matched style: casual. Good color contrast. Regular top paired with regular bottom. "
        "Completes the look with White sneakers."
    )
    assert generate_reasoning(top, bottom, sneakers) == text


def test_reasoning_reports_shared_colors_and_materials() -> None:
    top = Garment(item_id="t", category="Tops", colors=["black", "white"], materials=["cotton", "wool"])
    bottom = Garment(item_id="b", category="Bottoms", colors=["black"], materials=["wool", "cotton"])

    assert generate_reasoning(top, bottom) == "Color harmony: black. Material harmony: cotton, wool."


def test_reasoning_skips_styles_without_overlap() -> None:
    top = Garment(item_id="t", category="Tops", styles=["casual"], fit="slim")
    bottom = Garment(item_id="b", category="Bottoms", styles=["sporty"], fit="relaxed")

    assert generate_reasoning(top, bottom) == "Slim top paired with relaxed bottom."


def test_reasoning_falls_back_to_item_names() -> None:
    named = generate_reasoning(
        Garment(item_id="t", category="Tops", name="Linen shirt"),
        Garment(item_id="b", category="Bottoms", name="Shorts"),
    )
    unnamed = generate_reasoning(Garment(item_id="t1", category="Tops"), Garment(item_id="b1", category="Bottoms"))

    assert named == "A balanced combination of Linen shirt and Shorts."
    assert unnamed == "A balanced combination of tops t1 and bottoms b1."
