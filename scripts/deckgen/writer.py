"""python-pptx document writer for laid-out slides."""

from __future__ import annotations

import asyncio
import base64
import io
import logging
from dataclasses import dataclass
from pathlib import Path

from pptx import Presentation
from pptx.dml.color import RGBColor
from pptx.enum.text import MSO_ANCHOR, PP_ALIGN
from pptx.util import Inches, Pt

from .layout import SLIDE_HEIGHT, SLIDE_WIDTH, LayoutRegion, RegionKind, SlideLayout

logger = logging.getLogger(__name__)

PPTX_CONTENT_TYPE = "application/vnd.openxmlformats-officedocument.presentationml.presentation"


@dataclass(frozen=True)
class RenderedDeck:
    content: bytes
    base64: str
    content_type: str = PPTX_CONTENT_TYPE

    @classmethod
    def from_bytes(cls, content: bytes) -> "RenderedDeck":
        return cls(content=content, base64=base64.b64encode(content).decode("ascii"))

    def save(self, output_path: str | Path) -> Path:
        output = Path(output_path)
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_bytes(self.content)
        return output


class PptxDocumentWriter:
    """Write :class:`SlideLayout` regions into a blank widescreen presentation."""

    AUTHOR = "AI PowerPoint Generator"
    SUBJECT = "Generated via AI"

    COLORS = {
        "bg": RGBColor(0xFF, 0xFF, 0xFF),
        RegionKind.HEADING: RGBColor(0x1F, 0x29, 0x37),  # gray-800
        RegionKind.DESCRIPTION: RGBColor(0x6B, 0x72, 0x80),  # gray-500
        RegionKind.BULLETS: RGBColor(0x37, 0x41, 0x51),  # gray-700
        RegionKind.PAGE_NUMBER: RGBColor(0x9C, 0xA3, 0xAF),  # gray-400
    }

    BULLET_GLYPH = "•"

    def __init__(self, title: str):
        self.prs = Presentation()
        self.prs.slide_width = Inches(SLIDE_WIDTH)
        self.prs.slide_height = Inches(SLIDE_HEIGHT)
        props = self.prs.core_properties
        props.author = self.AUTHOR
        props.title = title
        props.subject = self.SUBJECT

    def _get_blank_layout(self):
        try:
            return self.prs.slide_layouts[6]
        except IndexError:
            return self.prs.slide_layouts[-1]

    def _set_slide_background(self, slide) -> None:
        fill = slide.background.fill
        fill.solid()
        fill.fore_color.rgb = self.COLORS["bg"]

    def _add_textbox(self, slide, region: LayoutRegion):
        # Overflowing slides can leave a negative height; shape extents must be >= 0.
        height = max(region.h, 0.0)
        box = slide.shapes.add_textbox(Inches(region.x), Inches(region.y), Inches(region.w), Inches(height))
        text_frame = box.text_frame
        text_frame.clear()
        text_frame.word_wrap = True
        text_frame.vertical_anchor = MSO_ANCHOR.TOP
        return text_frame

    def _add_text_region(self, slide, region: LayoutRegion) -> None:
        text_frame = self._add_textbox(slide, region)
        paragraph = text_frame.paragraphs[0]
        paragraph.text = region.text
        paragraph.font.size = Pt(region.font_size)
        paragraph.font.bold = region.kind is RegionKind.HEADING
        paragraph.font.color.rgb = self.COLORS[region.kind]
        paragraph.alignment = PP_ALIGN.LEFT

    def _add_bullet_region(self, slide, region: LayoutRegion) -> None:
        text_frame = self._add_textbox(slide, region)
        for i, line in enumerate(region.lines):
            paragraph = text_frame.paragraphs[0] if i == 0 else text_frame.add_paragraph()
            # Section children arrive pre-indented as "  - item".
            if line.startswith("  - "):
                paragraph.text = line.strip()
                paragraph.level = 1
            else:
                paragraph.text = line if line.lstrip().startswith(self.BULLET_GLYPH) else f"{self.BULLET_GLYPH} {line}"
                paragraph.level = 0
            paragraph.font.size = Pt(region.font_size)
            paragraph.font.color.rgb = self.COLORS[RegionKind.BULLETS]
            if region.line_spacing:
                paragraph.line_spacing = Pt(region.line_spacing)
            paragraph.alignment = PP_ALIGN.LEFT

    def _add_page_number(self, slide, region: LayoutRegion) -> None:
        text_frame = self._add_textbox(slide, region)
        text_frame.word_wrap = False
        text_frame.vertical_anchor = MSO_ANCHOR.BOTTOM
        paragraph = text_frame.paragraphs[0]
        paragraph.text = region.text
        paragraph.font.size = Pt(region.font_size)
        paragraph.font.color.rgb = self.COLORS[RegionKind.PAGE_NUMBER]
        paragraph.alignment = PP_ALIGN.RIGHT

    def add_slide(self, layout: SlideLayout) -> None:
        slide = self.prs.slides.add_slide(self._get_blank_layout())
        self._set_slide_background(slide)

        handlers = {
            RegionKind.HEADING: self._add_text_region,
            RegionKind.DESCRIPTION: self._add_text_region,
            RegionKind.BULLETS: self._add_bullet_region,
            RegionKind.PAGE_NUMBER: self._add_page_number,
        }
        for region in layout.regions:
            handlers[region.kind](slide, region)

        if layout.notes:
            slide.notes_slide.notes_text_frame.text = layout.notes

    def _save_bytes(self) -> bytes:
        buffer = io.BytesIO()
        self.prs.save(buffer)
        return buffer.getvalue()

    async def serialize(self) -> RenderedDeck:
        content = await asyncio.to_thread(self._save_bytes)
        logger.debug("Serialized presentation (%s bytes, %s slides)", len(content), len(self.prs.slides))
        return RenderedDeck.from_bytes(content)
