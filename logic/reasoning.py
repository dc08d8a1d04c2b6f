"""Human-readable explanations for recommended combinations."""

from __future__ import annotations

from typing import List, Optional, Sequence

from models.garment import Garment


def _shared(values_a: Sequence[str], values_b: Sequence[str]) -> List[str]:
    """Values present on both sides, in first-side order without repeats."""

    other = set(values_b)
    shared: List[str] = []
    for value in values_a:
        if value in other and value not in shared:
            shared.append(value)
    return shared


def _sentence(text: str) -> str:
    return text[:1].upper() + text[1:]


def generate_reasoning(top: Garment, bottom: Garment, footwear: Optional[Garment] = None) -> str:
    """Explain why a combination was chosen.

    Display only; nothing here feeds back into scoring or selection.
    """

    parts: List[str] = []
    if top.styles and bottom.styles:
        styles = _shared(top.styles, bottom.styles)
        if styles:
            parts.append(f"Matched style: {', '.join(styles)}")
    if top.colors and bottom.colors:
        colors = _shared(top.colors, bottom.colors)
        parts.append(f"Color harmony: {', '.join(colors)}" if colors else "Good color contrast")
    if top.fit and bottom.fit:
        parts.append(_sentence(f"{top.fit} top paired with {bottom.fit} bottom"))
    if top.materials and bottom.materials:
        materials = _shared(top.materials, bottom.materials)
        if materials:
            parts.append(f"Material harmony: {', '.join(materials)}")
    if footwear is not None:
        parts.append(f"Completes the look with {footwear.display_name}")

    if not parts:
        parts.append(f"A balanced combination of {top.display_name} and {bottom.display_name}")
    return ". ".join(parts) + "."


__all__ = ["generate_reasoning"]
