"""Turn raw model text into parsed JSON."""

from __future__ import annotations

import json
import re
from typing import Any

from .errors import ParseError

_LEADING_JSON_FENCE = re.compile(r"^```json\s*", re.IGNORECASE)
_LEADING_FENCE = re.compile(r"^```\s*")
_TRAILING_FENCE = re.compile(r"```\s*$")


def strip_code_fences(text: str) -> str:
    cleaned = _LEADING_JSON_FENCE.sub("", text.strip())
    cleaned = _LEADING_FENCE.sub("", cleaned)
    cleaned = _TRAILING_FENCE.sub("", cleaned)
    return cleaned.strip()


def parse_model_output(text: str) -> Any:
    """Strip markdown fences and decode JSON.

    Raises:
        ParseError: the remaining text is empty or not valid JSON.
    """
    if not isinstance(text, str):
        raise ParseError("Model output must be text")

    cleaned = strip_code_fences(text)
    if not cleaned:
        raise ParseError("Model output is empty")

    try:
        return json.loads(cleaned)
    except json.JSONDecodeError as exc:
        raise ParseError(f"Invalid JSON at line {exc.lineno}, column {exc.colno}: {exc.msg}") from exc
