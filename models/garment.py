"""Garment data model and the adapter from loose wardrobe records."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from models.taxonomy import normalize_attribute, normalize_color_name, validate_category


def _ensure_list(value: Any) -> List[Any]:
    """Coerce a scalar or iterable into a list."""

    if value is None:
        return []
    if isinstance(value, (list, tuple, set, frozenset)):
        return list(value)
    return [value]


def _normalise_values(values: Iterable[Any]) -> Tuple[str, ...]:
    normalised = []
    for value in values:
        key = normalize_attribute(value)
        if key:
            normalised.append(key)
    return tuple(normalised)


def _normalise_colors(values: Iterable[Any]) -> Tuple[str, ...]:
    """Normalise color names using the canonical taxonomy mapping."""

    return tuple(normalize_color_name(value) for value in _normalise_values(values))


def _first_present(metadata: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if metadata.get(key) is not None:
            return metadata[key]
    return None


@dataclass(frozen=True)
class Garment:
    """A wardrobe item in the normalised form the engine works on.

    Multi-valued attributes are always tuples, empty when the attribute is
    absent, so compatibility predicates never branch on shape.
    """

    item_id: str
    category: str
    name: str = ""
    user_id: Optional[str] = None
    styles: Tuple[str, ...] = ()
    colors: Tuple[str, ...] = ()
    materials: Tuple[str, ...] = ()
    patterns: Tuple[str, ...] = ()
    fit: Optional[str] = None
    target_audience: Optional[str] = None
    rating: Optional[float] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "item_id", str(self.item_id))
        object.__setattr__(self, "category", validate_category(self.category))
        object.__setattr__(self, "name", str(self.name or "").strip())
        object.__setattr__(self, "styles", _normalise_values(_ensure_list(self.styles)))
        object.__setattr__(self, "colors", _normalise_colors(_ensure_list(self.colors)))
        object.__setattr__(self, "materials", _normalise_values(_ensure_list(self.materials)))
        object.__setattr__(self, "patterns", _normalise_values(_ensure_list(self.patterns)))
        object.__setattr__(self, "fit", normalize_attribute(self.fit))
        object.__setattr__(self, "target_audience", normalize_attribute(self.target_audience))
        if self.rating is not None:
            object.__setattr__(self, "rating", float(self.rating))

    @property
    def display_name(self) -> str:
        return self.name or f"{self.category.lower()} {self.item_id}"


def from_raw_metadata(metadata: Mapping[str, Any]) -> Garment:
    """Factory to build a :class:`Garment` from loose wardrobe metadata.

    Accepts both snake_case and camelCase keys as well as singular or plural
    attribute names; every attribute may be a single value or a list.
    Raises :class:`ValueError` when the id or category is missing.
    """

    item_id = _first_present(metadata, "item_id", "id")
    category = _first_present(metadata, "category")
    missing = [name for name, value in (("item_id", item_id), ("category", category)) if value in (None, "")]
    if missing:
        raise ValueError(f"Missing required fields for Garment: {missing}")

    return Garment(
        item_id=str(item_id),
        category=str(category),
        name=_first_present(metadata, "name") or "",
        user_id=_first_present(metadata, "user_id", "userId"),
        styles=_ensure_list(_first_present(metadata, "styles", "style")),
        colors=_ensure_list(_first_present(metadata, "colors", "color")),
        materials=_ensure_list(_first_present(metadata, "materials", "material")),
        patterns=_ensure_list(_first_present(metadata, "patterns", "pattern")),
        fit=_first_present(metadata, "fit"),
        target_audience=_first_present(metadata, "target_audience", "targetAudience"),
        rating=_first_present(metadata, "rating"),
    )


def to_raw_metadata(garment: Garment) -> Dict[str, Any]:
    """Serialise a garment into the loose record shape accepted by the factory."""

    return {
        "item_id": garment.item_id,
        "user_id": garment.user_id,
        "name": garment.name,
        "category": garment.category,
        "styles": list(garment.styles),
        "colors": list(garment.colors),
        "materials": list(garment.materials),
        "patterns": list(garment.patterns),
        "fit": garment.fit,
        "target_audience": garment.target_audience,
        "rating": garment.rating,
    }


__all__ = ["Garment", "from_raw_metadata", "to_raw_metadata"]
