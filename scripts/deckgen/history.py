"""Prompt history persisted as a small JSON key-value file."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from .models import CanonicalDeck
from .normalizer import normalize

logger = logging.getLogger(__name__)

HISTORY_KEY = "pastPrompts"


def _is_entry(value: Any) -> bool:
    return isinstance(value, dict) and isinstance(value.get("prompt"), str)


class PromptHistory:
    """Ordered ``{prompt, slideData}`` entries stored under :data:`HISTORY_KEY`.

    The file is read once on construction and rewritten in full on every
    change. Missing or unreadable files start an empty history.
    """

    def __init__(self, path: Path):
        self.path = Path(path)
        # Every stored entry, including ones this version cannot read; rewritten as-is.
        self._stored: List[Any] = self._load()

    @property
    def entries(self) -> List[Dict[str, Any]]:
        return [e for e in self._stored if _is_entry(e)]

    def _load(self) -> List[Any]:
        if not self.path.exists():
            return []
        try:
            store = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning("Ignoring unreadable history file %s (%s)", self.path, exc)
            return []
        entries = store.get(HISTORY_KEY) if isinstance(store, dict) else None
        if not isinstance(entries, list):
            return []
        skipped = sum(1 for e in entries if not _is_entry(e))
        if skipped:
            logger.warning("Skipping %s malformed history entries in %s", skipped, self.path)
        return entries

    def _write(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        store: Dict[str, Any] = {}
        if self.path.exists():
            try:
                existing = json.loads(self.path.read_text(encoding="utf-8"))
            except (OSError, json.JSONDecodeError):
                existing = None
            if isinstance(existing, dict):
                store = existing
        store[HISTORY_KEY] = self._stored
        self.path.write_text(json.dumps(store, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")

    def append(self, prompt: str) -> int:
        """Record a new prompt with no deck yet; returns its index."""
        self._stored.append({"prompt": prompt, "slideData": None})
        self._write()
        return len(self.entries) - 1

    def attach_deck(self, deck: CanonicalDeck, index: int = -1) -> None:
        self.entries[index]["slideData"] = deck.to_dict()
        self._write()

    def deck_at(self, index: int) -> Optional[CanonicalDeck]:
        slide_data = self.entries[index].get("slideData")
        if not isinstance(slide_data, dict):
            return None
        return normalize(slide_data)

    def __len__(self) -> int:
        return len(self.entries)
