"""Content item kinds recognized inside a slide's ``content`` list.

Model output tags each content item with a ``type`` discriminant. The set of
understood values is closed; anything else (including a missing ``type``) is
treated as :attr:`ContentKind.FALLBACK` and contributes its ``text`` /
``content`` as a description. Items whose shape does not match their kind
contribute nothing and raise nothing.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Optional, Tuple


class ContentKind(Enum):
    DESCRIPTION = "description"
    BULLETS = "bullets"
    NUMBERED = "numbered"
    SECTIONS = "sections"
    POINT = "point"
    FALLBACK = "fallback"


_KIND_BY_TYPE = {
    "subtitle": ContentKind.DESCRIPTION,
    "description": ContentKind.DESCRIPTION,
    "footer": ContentKind.DESCRIPTION,
    "paragraph": ContentKind.DESCRIPTION,
    "bullet_points": ContentKind.BULLETS,
    "bullets": ContentKind.BULLETS,
    "list": ContentKind.BULLETS,
    "unordered_list": ContentKind.BULLETS,
    "numbered_list": ContentKind.NUMBERED,
    "ordered_list": ContentKind.NUMBERED,
    "list_with_headers": ContentKind.SECTIONS,
    "section_list": ContentKind.SECTIONS,
    "sections": ContentKind.SECTIONS,
    "point": ContentKind.POINT,
    "bullet": ContentKind.POINT,
}


def classify(item: Dict[str, Any]) -> ContentKind:
    type_ = item.get("type")
    if not isinstance(type_, str):
        return ContentKind.FALLBACK
    return _KIND_BY_TYPE.get(type_, ContentKind.FALLBACK)


def coerce_text(value: Any) -> str:
    """Return a string entry, or the ``text``/``content`` of an object entry, else ``""``."""
    if isinstance(value, str):
        return value
    if isinstance(value, dict):
        for key in ("text", "content"):
            candidate = value.get(key)
            if isinstance(candidate, str) and candidate:
                return candidate
    return ""


def _item_text(item: Dict[str, Any]) -> Optional[str]:
    for key in ("text", "content"):
        value = item.get(key)
        if isinstance(value, str) and value:
            return value
    return None


def _entries(item: Dict[str, Any], *keys: str) -> List[str]:
    for key in keys:
        value = item.get(key)
        if isinstance(value, list):
            return [coerce_text(v) for v in value]
    return []


def _section_lines(sections: Any) -> List[str]:
    if not isinstance(sections, list):
        return []
    lines: List[str] = []
    for section in sections:
        if not isinstance(section, dict):
            continue
        header = first_str(section.get("header"), section.get("title"))
        if header:
            lines.append(f"• {header}")
        for key in ("points", "items"):
            value = section.get(key)
            if isinstance(value, list):
                lines.extend(f"  - {coerce_text(v)}" for v in value)
    return lines


def first_str(*values: Any) -> str:
    for value in values:
        if isinstance(value, str) and value:
            return value
    return ""


def extract(item: Any) -> Tuple[List[str], List[str]]:
    """Map one content item to ``(bullets, descriptions)`` additions."""
    if not isinstance(item, dict):
        return [], []

    kind = classify(item)

    if kind is ContentKind.BULLETS:
        return _entries(item, "points", "items"), []

    if kind is ContentKind.NUMBERED:
        entries = _entries(item, "items", "points")
        return [f"{i}. {entry}" for i, entry in enumerate(entries, start=1)], []

    if kind is ContentKind.SECTIONS:
        return _section_lines(item.get("sections")), []

    if kind is ContentKind.POINT:
        text = _item_text(item)
        return ([text] if text else []), []

    # DESCRIPTION and FALLBACK share the same extraction rule.
    text = _item_text(item)
    return [], ([text] if text else [])
