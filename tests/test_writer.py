from __future__ import annotations

import asyncio
import base64
import io
import sys
import zipfile
from pathlib import Path

import pytest
from pptx import Presentation
from pptx.util import Inches, Pt

SCRIPT_DIR = Path(__file__).resolve().parents[1] / "scripts"
if str(SCRIPT_DIR) not in sys.path:
    sys.path.insert(0, str(SCRIPT_DIR))

from deckgen import CanonicalDeck, CanonicalSlide, LayoutError, generate_from_text, normalize, synthesize  # noqa: E402
from deckgen.writer import PptxDocumentWriter, RenderedDeck  # noqa: E402


def _texts(slide) -> list[str]:
    return [shape.text_frame.text for shape in slide.shapes if shape.has_text_frame]


def _render(deck: CanonicalDeck, **kwargs) -> RenderedDeck:
    return asyncio.run(synthesize(deck, **kwargs))


def test_synthesize_writes_widescreen_pptx() -> None:
    deck = normalize(
        {
            "title": "Launch plan",
            "slides": [
                {
                    "title": "Intro",
                    "notes": "Welcome everyone",
                    "content": [
                        {"type": "subtitle", "text": "Why now"},
                        {"type": "bullet_points", "points": ["A", "B"]},
                    ],
                },
                {"content": [{"type": "sections", "sections": [{"header": "H", "points": ["p1"]}]}]},
            ],
        }
    )

    rendered = _render(deck)
    prs = Presentation(io.BytesIO(rendered.content))

    assert prs.slide_width == Inches(10)
    assert prs.slide_height == Inches(5.625)
    assert prs.core_properties.title == "Launch plan"
    assert prs.core_properties.author == "AI PowerPoint Generator"
    assert len(prs.slides) == 2

    first, second = prs.slides
    texts = _texts(first)
    assert texts[0] == "Intro"
    assert "Why now" in texts
    assert "• A\n• B" in texts
    assert texts[-1] == "1 / 2"
    assert first.notes_slide.notes_text_frame.text == "Welcome everyone"

    assert _texts(second)[0] == "Slide 2"
    bullet_box = [s for s in second.shapes if s.has_text_frame and s.text_frame.text.startswith("• H")][0]
    paragraphs = bullet_box.text_frame.paragraphs
    assert [p.text for p in paragraphs] == ["• H", "- p1"]
    assert [p.level for p in paragraphs] == [0, 1]
    assert _texts(second)[-1] == "2 / 2"


def test_bullet_font_follows_density_tier() -> None:
    deck = CanonicalDeck(title="T", slides=[CanonicalSlide(heading="Dense", bullets=[f"b{i}" for i in range(10)])])

    prs = Presentation(io.BytesIO(_render(deck).content))

    slide = prs.slides[0]
    assert len([s for s in slide.shapes if s.has_text_frame]) == 3
    bullet_box = [s for s in slide.shapes if s.has_text_frame and s.text_frame.text.startswith("• b0")][0]
    assert all(p.font.size == Pt(14) for p in bullet_box.text_frame.paragraphs)


def test_base64_matches_bytes() -> None:
    deck = CanonicalDeck(title="T", slides=[CanonicalSlide(heading="One")])

    rendered = _render(deck)

    assert base64.b64decode(rendered.base64) == rendered.content
    assert rendered.content[:2] == b"PK"


def test_progress_reported_before_serialization() -> None:
    calls: list[tuple[int, int]] = []
    deck = CanonicalDeck(title="T", slides=[CanonicalSlide(heading="A"), CanonicalSlide(heading="B")])

    _render(deck, on_progress=lambda i, total: calls.append((i, total)))

    assert calls == [(1, 2), (2, 2)]


class _BrokenWriter(PptxDocumentWriter):
    async def serialize(self) -> RenderedDeck:
        raise OSError("disk full")


def test_writer_failure_is_wrapped() -> None:
    deck = CanonicalDeck(title="T", slides=[CanonicalSlide(heading="A")])

    with pytest.raises(LayoutError) as exc:
        _render(deck, writer_factory=_BrokenWriter)

    assert "disk full" in str(exc.value)
    assert isinstance(exc.value.__cause__, OSError)


def test_rendered_deck_save_creates_parents(tmp_path: Path) -> None:
    rendered = RenderedDeck.from_bytes(b"PKdata")

    saved = rendered.save(tmp_path / "nested" / "deck.pptx")

    assert saved.read_bytes() == b"PKdata"


def test_generate_from_text_saves_output(tmp_path: Path) -> None:
    out = tmp_path / "deck.pptx"
    rendered = asyncio.run(generate_from_text('{"slides": [{"title": "Only"}]}', output_path=out))

    assert out.read_bytes() == rendered.content


def test_overflowing_slide_keeps_shape_extents_non_negative() -> None:
    deck = normalize(
        {
            "slides": [
                {
                    "title": "Long read",
                    "content": [{"type": "paragraph", "text": "w" * 300} for _ in range(5)]
                    + [{"type": "bullets", "points": ["a", "b"]}],
                }
            ]
        }
    )

    rendered = _render(deck)

    with zipfile.ZipFile(io.BytesIO(rendered.content)) as archive:
        slide_xml = archive.read("ppt/slides/slide1.xml").decode("utf-8")
    assert 'cy="-' not in slide_xml
    bullet_box = [s for s in Presentation(io.BytesIO(rendered.content)).slides[0].shapes if s.text_frame.text == "• a\n• b"][0]
    assert bullet_box.height == 0
