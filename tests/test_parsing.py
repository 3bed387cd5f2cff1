from __future__ import annotations

import sys
from pathlib import Path

import pytest

SCRIPT_DIR = Path(__file__).resolve().parents[1] / "scripts"
if str(SCRIPT_DIR) not in sys.path:
    sys.path.insert(0, str(SCRIPT_DIR))

from deckgen import NormalizationError, ParseError, build_deck, parse_model_output, strip_code_fences  # noqa: E402


@pytest.mark.parametrize(
    "text",
    [
        '{"slides": []}',
        '```json\n{"slides": []}\n```',
        '```JSON {"slides": []}```',
        '```\n{"slides": []}\n```\n',
        '  \n```json\n{"slides": []}\n```  ',
    ],
)
def test_fences_are_stripped(text) -> None:
    assert strip_code_fences(text) == '{"slides": []}'


def test_parse_model_output_decodes_fenced_json() -> None:
    assert parse_model_output('```json\n{"title": "T", "slides": [1]}\n```') == {"title": "T", "slides": [1]}


def test_invalid_json_raises_parse_error_with_position() -> None:
    with pytest.raises(ParseError) as exc:
        parse_model_output('```json\n{"slides": [}\n```')
    assert "Invalid JSON at line 1" in str(exc.value)
    assert exc.value.__cause__ is not None


def test_empty_output_is_a_parse_error() -> None:
    with pytest.raises(ParseError):
        parse_model_output("```json\n```")


def test_parse_and_normalization_failures_are_distinct() -> None:
    with pytest.raises(ParseError):
        build_deck("Sure! Here is your deck:")
    with pytest.raises(NormalizationError):
        build_deck('{"slides": []}')


def test_build_deck_from_fenced_text() -> None:
    deck = build_deck('```json\n{"slides": [{"title": "Intro", "content": [{"type": "bullets", "items": ["A"]}]}]}\n```')

    assert deck.title == "Intro"
    assert deck.slides[0].bullets == ["A"]
