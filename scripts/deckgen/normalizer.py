"""Normalize loosely-shaped model JSON into a :class:`CanonicalDeck`."""

from __future__ import annotations

from typing import Any, Dict, List

from .content import coerce_text, extract, first_str
from .errors import NormalizationError
from .models import DEFAULT_DECK_TITLE, CanonicalDeck, CanonicalSlide

_LEGACY_DESCRIPTION_FIELDS = ("subtitle", "description", "footer")
_LEGACY_BULLET_FIELDS = ("bullets", "points", "items")


def _slide_from_content(heading: str, content: List[Any], notes: str) -> CanonicalSlide:
    bullets: List[str] = []
    descriptions: List[str] = []
    for item in content:
        item_bullets, item_descriptions = extract(item)
        bullets.extend(item_bullets)
        descriptions.extend(item_descriptions)
    return CanonicalSlide(heading=heading, bullets=bullets, descriptions=descriptions, notes=notes)


def _slide_from_legacy_fields(heading: str, slide: Dict[str, Any], notes: str) -> CanonicalSlide:
    descriptions: List[str] = []
    for key in _LEGACY_DESCRIPTION_FIELDS:
        value = slide.get(key)
        if isinstance(value, str) and value:
            descriptions.append(value)
    extra = slide.get("descriptions")
    if isinstance(extra, list):
        descriptions.extend(coerce_text(d) for d in extra)

    bullets: List[str] = []
    for key in _LEGACY_BULLET_FIELDS:
        value = slide.get(key)
        if isinstance(value, list):
            bullets.extend(coerce_text(b) for b in value)

    return CanonicalSlide(heading=heading, bullets=bullets, descriptions=descriptions, notes=notes)


def normalize_slide(slide: Any, index: int) -> CanonicalSlide:
    """Build one canonical slide; ``index`` is 1-based and only used for the default heading."""
    if not isinstance(slide, dict):
        slide = {}

    heading = first_str(slide.get("title"), slide.get("heading")) or f"Slide {index}"
    notes = first_str(slide.get("notes"), slide.get("speaker_notes"))

    content = slide.get("content")
    if isinstance(content, list) and content:
        return _slide_from_content(heading, content, notes)
    return _slide_from_legacy_fields(heading, slide, notes)


def normalize(raw: Any) -> CanonicalDeck:
    """Normalize parsed model output.

    Raises:
        NormalizationError: the root is not an object, or ``slides`` is missing,
            not a list, or empty. Every other defect degrades to empty
            bullets/descriptions on the affected slide.
    """
    if not isinstance(raw, dict):
        raise NormalizationError("Invalid JSON: Expected an object")

    slides = raw.get("slides")
    if not isinstance(slides, list):
        raise NormalizationError("Invalid JSON: Missing 'slides' array")
    if not slides:
        raise NormalizationError("Invalid JSON: No slides provided")

    normalized = [normalize_slide(slide, idx) for idx, slide in enumerate(slides, start=1)]

    first = slides[0] if isinstance(slides[0], dict) else {}
    title = first_str(raw.get("title"), first.get("title")) or DEFAULT_DECK_TITLE

    return CanonicalDeck(title=title, slides=normalized)
