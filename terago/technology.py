"""Technology entries and per-date technology files."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from terago.meta import Meta


class ValidationError(ValueError):
    """Raised when a technology uses an unknown ring or quadrant."""


def _text(data: Mapping[str, Any], key: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if isinstance(value, (Mapping, list, tuple)):
        raise ValueError(f"field '{key}' must be a scalar value")
    return str(value)


@dataclass
class Technology:
    """A single technology entry of the radar."""

    name: str = ""
    ring: str = ""
    quadrant: str = ""
    description: str = ""
    info: str = ""
    is_new: bool = False
    is_moved: bool = False
    previous_ring: str = ""

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> Technology:
        """Build a Technology from a parsed document entry."""
        if data is None:
            return cls()
        if not isinstance(data, Mapping):
            raise ValueError("technology entry must be a mapping")
        return cls(
            name=_text(data, "name"),
            ring=_text(data, "ring"),
            quadrant=_text(data, "quadrant"),
            description=_text(data, "description"),
            info=_text(data, "info"),
        )


@dataclass
class TechnologiesFile:
    """The technologies of the radar at one date."""

    date: str = ""
    technologies: list[Technology] = field(default_factory=list)

    def validate_rings_and_quadrants(self, meta: Meta) -> None:
        """Raise ValidationError at the first technology with an unknown ring or quadrant."""
        for tech in self.technologies:
            if not meta.is_valid_ring(tech.ring):
                raise ValidationError(
                    f"invalid ring '{tech.ring}' in technology '{tech.name}'"
                )
            if not meta.is_valid_quadrant(tech.quadrant):
                raise ValidationError(
                    f"invalid quadrant '{tech.quadrant}' in technology '{tech.name}'"
                )