"""Data passed to the radar page template."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

from terago.meta import Quadrant, Ring

RING_COLORS = ("#93c47d", "#93d2c2", "#fbdb84", "#efafa9")
FALLBACK_RING_COLOR = "#ddd"

_JSON_ESCAPES = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


def _to_json(value: Any) -> str:
    """Compact JSON, safe to embed in an HTML page."""
    text = json.dumps(value, separators=(",", ":"), ensure_ascii=False)
    return "".join(_JSON_ESCAPES.get(ch, ch) for ch in text)


@dataclass
class RadarEntry:
    """One blip on the radar visualisation."""

    quadrant: int
    ring: int
    moved: int
    label: str
    link: str = ""
    active: bool = False
    description: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Return the entry in the shape the visualisation script expects."""
        return {
            "quadrant": self.quadrant,
            "ring": self.ring,
            "moved": self.moved,
            "label": self.label,
            "link": self.link,
            "active": self.active,
            "description": self.description,
        }


@dataclass
class RadarData:
    """Everything the page template renders for one radar date."""

    title: str = ""
    date: str = ""
    version: str = ""
    generated_at: str = ""
    entries: list[RadarEntry] = field(default_factory=list)
    quadrants: list[Quadrant] = field(default_factory=list)
    rings: list[Ring] = field(default_factory=list)
    entries_json: str = ""
    quadrants_json: str = ""
    rings_json: str = ""
    description_js: str = ""
    changes_table: str = ""

    def update_json(self) -> None:
        """Recompute the JSON representations of entries, quadrants and rings."""
        self.entries_json = _to_json([e.to_dict() for e in self.entries])
        self.quadrants_json = _to_json(
            [{"name": q.name, "id": f"q{i}"} for i, q in enumerate(self.quadrants, start=1)]
        )
        self.rings_json = _to_json(
            [
                {
                    "name": r.name.upper(),
                    "color": RING_COLORS[i] if i < len(RING_COLORS) else FALLBACK_RING_COLOR,
                    "id": r.alias,
                }
                for i, r in enumerate(self.rings)
            ]
        )