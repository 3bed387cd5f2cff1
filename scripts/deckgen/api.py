"""Public API helpers for programmatic deck generation."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional

from .layout import ProgressCallback
from .models import CanonicalDeck
from .normalizer import normalize
from .parsing import parse_model_output
from .synthesizer import synthesize
from .writer import RenderedDeck

# Shape the content endpoint is asked to produce; other shapes are still accepted.
EXPECTED_JSON_SCHEMA: Dict[str, Any] = {
    "title": "Presentation Title",
    "slides": [
        {
            "title": "Slide Title",
            "content": [
                {"type": "subtitle", "text": "Optional subtitle"},
                {"type": "bullet_points", "points": ["Point 1", "Point 2"]},
                {"type": "description", "text": "Optional footer text"},
            ],
        }
    ],
}


def build_deck(raw_text: str) -> CanonicalDeck:
    """Parse model text and normalize it (raises ParseError / NormalizationError)."""
    return normalize(parse_model_output(raw_text))


async def render_deck(deck: CanonicalDeck, on_progress: Optional[ProgressCallback] = None) -> RenderedDeck:
    return await synthesize(deck, on_progress)


async def generate_from_text(
    raw_text: str,
    output_path: Optional[Path] = None,
    on_progress: Optional[ProgressCallback] = None,
) -> RenderedDeck:
    """Parse, normalize and render model text; optionally save the PPTX."""
    deck = build_deck(raw_text)
    rendered = await render_deck(deck, on_progress)
    if output_path is not None:
        write_deck(rendered, output_path)
    return rendered


def write_deck(rendered: RenderedDeck, path: Path) -> Path:
    """Write the PPTX bytes to disk and return the path."""
    return rendered.save(path)
