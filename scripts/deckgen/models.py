"""Canonical slide deck model shared by the normalizer, layout and history."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List

DEFAULT_DECK_TITLE = "Untitled Presentation"


@dataclass
class CanonicalSlide:
    heading: str
    bullets: List[str] = field(default_factory=list)
    descriptions: List[str] = field(default_factory=list)
    notes: str = ""

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        if not self.notes:
            data.pop("notes")
        return data


@dataclass
class CanonicalDeck:
    title: str
    slides: List[CanonicalSlide]

    def to_dict(self) -> Dict[str, Any]:
        """Plain JSON-safe form; feeding it back to ``normalize`` yields an equal deck."""
        return {"title": self.title, "slides": [s.to_dict() for s in self.slides]}
