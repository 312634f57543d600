"""Radar metadata: quadrants, rings, title and description."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

VERSION = "0.2.0"


@dataclass(frozen=True)
class Quadrant:
    """A quadrant of the radar."""

    name: str
    alias: str = ""


@dataclass(frozen=True)
class Ring:
    """A ring of the radar."""

    name: str
    alias: str = ""


DEFAULT_RINGS: tuple[Ring, ...] = (
    Ring("Adopt", "adopt"),
    Ring("Trial", "trial"),
    Ring("Assess", "assess"),
    Ring("Hold", "hold"),
)

DEFAULT_QUADRANTS: tuple[Quadrant, ...] = (
    Quadrant("Languages", "languages"),
    Quadrant("Frameworks", "frameworks"),
    Quadrant("Platforms", "platforms"),
    Quadrant("Techniques", "techniques"),
)

DEFAULT_TITLE = "My Radar"
DEFAULT_DESCRIPTION = "Technology Radar"


@dataclass
class Meta:
    """Radar metadata with lookup sets of valid ring and quadrant names."""

    title: str = DEFAULT_TITLE
    description: str = DEFAULT_DESCRIPTION
    quadrants: list[Quadrant] = field(default_factory=lambda: list(DEFAULT_QUADRANTS))
    rings: list[Ring] = field(default_factory=lambda: list(DEFAULT_RINGS))
    _ring_set: set[str] = field(default_factory=set, init=False, repr=False, compare=False)
    _quadrant_set: set[str] = field(
        default_factory=set, init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        self.quadrants = list(self.quadrants)
        self.rings = list(self.rings)
        self.populate_sets()

    def populate_sets(self) -> None:
        """Rebuild the lookup sets from the current rings and quadrants."""
        self._ring_set = {n for r in self.rings for n in (r.name, r.alias)}
        self._quadrant_set = {n for q in self.quadrants for n in (q.name, q.alias)}

    def is_valid_ring(self, ring: str) -> bool:
        """Return True if ``ring`` is the name or alias of a known ring."""
        return ring in self._ring_set

    def is_valid_quadrant(self, quadrant: str) -> bool:
        """Return True if ``quadrant`` is the name or alias of a known quadrant."""
        return quadrant in self._quadrant_set


def new_meta(
    title: str = "",
    description: str = "",
    quadrants: Iterable[Quadrant] | None = None,
    rings: Iterable[Ring] | None = None,
) -> Meta:
    """Build a Meta, falling back to defaults for empty or missing values."""
    return Meta(
        title=title or DEFAULT_TITLE,
        description=description or DEFAULT_DESCRIPTION,
        quadrants=list(DEFAULT_QUADRANTS) if quadrants is None else list(quadrants),
        rings=list(DEFAULT_RINGS) if rings is None else list(rings),
    )


def _scalar(value: Any, key: str) -> str:
    if value is None:
        return ""
    if isinstance(value, (Mapping, list, tuple)):
        raise ValueError(f"field '{key}' must be a scalar value")
    return str(value)


def _named_items(value: Any, key: str) -> list[tuple[str, str]] | None:
    if value is None:
        return None
    if not isinstance(value, list):
        raise ValueError(f"field '{key}' must be a list")
    items = []
    for item in value:
        if item is None:
            items.append(("", ""))
            continue
        if not isinstance(item, Mapping):
            raise ValueError(f"entries of '{key}' must be mappings")
        items.append((_scalar(item.get("name"), "name"), _scalar(item.get("alias"), "alias")))
    return items


def meta_from_mapping(data: Mapping[str, Any] | None) -> Meta:
    """Build a Meta from a parsed meta document; raise ValueError if malformed."""
    if data is None:
        return default_meta()
    if not isinstance(data, Mapping):
        raise ValueError("meta document must be a mapping")
    quadrants = _named_items(data.get("quadrants"), "quadrants")
    rings = _named_items(data.get("rings"), "rings")
    return new_meta(
        _scalar(data.get("title"), "title"),
        _scalar(data.get("description"), "description"),
        None if quadrants is None else [Quadrant(n, a) for n, a in quadrants],
        None if rings is None else [Ring(n, a) for n, a in rings],
    )


def default_meta() -> Meta:
    """Return the default radar metadata."""
    return new_meta()