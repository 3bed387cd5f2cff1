"""Adaptive slide layout on a fixed widescreen canvas.

Placement is a single greedy top-down pass per slide: a cursor starts at the
top margin and advances past each region plus a fixed gap. Text size is
estimated from character and item counts only; nothing is measured, so very
long bullet lists may still overflow the bottom margin.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Optional, Tuple

from .models import CanonicalDeck, CanonicalSlide

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int], None]

SLIDE_WIDTH = 10.0
SLIDE_HEIGHT = 5.625
MARGIN = 0.5
CONTENT_WIDTH = SLIDE_WIDTH - 2 * MARGIN

HEADING_HEIGHT = 0.7
HEADING_GAP = 0.2
HEADING_FONT_SIZE = 32

DESCRIPTION_MIN_HEIGHT = 0.4
DESCRIPTION_CHARS_PER_LINE = 100
DESCRIPTION_LINE_HEIGHT = 0.3
DESCRIPTION_GAP = 0.15
DESCRIPTION_BLOCK_GAP = 0.1
DESCRIPTION_FONT_SIZE = 16

BULLET_BOTTOM_PADDING = 0.2
DENSE_BULLET_COUNT = 8
# (font size pt, spacing in) from roomiest to densest.
BULLET_TIERS = ((18, 0.35), (16, 0.3), (14, 0.25))

PAGE_NUMBER_BOX = (9.0, 5.3, 0.8, 0.25)
PAGE_NUMBER_FONT_SIZE = 10

POINTS_PER_INCH = 72


class RegionKind(Enum):
    HEADING = "heading"
    DESCRIPTION = "description"
    BULLETS = "bullets"
    PAGE_NUMBER = "page_number"


@dataclass(frozen=True)
class LayoutRegion:
    kind: RegionKind
    x: float
    y: float
    w: float
    h: float
    font_size: int
    lines: Tuple[str, ...]
    line_spacing: Optional[float] = None  # points

    @property
    def origin(self) -> Tuple[float, float]:
        return (self.x, self.y)

    @property
    def size(self) -> Tuple[float, float]:
        return (self.w, self.h)

    @property
    def text(self) -> str:
        return "\n".join(self.lines)


@dataclass
class SlideLayout:
    index: int
    total: int
    regions: List[LayoutRegion] = field(default_factory=list)
    notes: str = ""

    def regions_of(self, kind: RegionKind) -> List[LayoutRegion]:
        return [r for r in self.regions if r.kind is kind]


def estimate_description_height(text: str) -> float:
    lines = math.ceil(len(text) / DESCRIPTION_CHARS_PER_LINE)
    return max(DESCRIPTION_MIN_HEIGHT, lines * DESCRIPTION_LINE_HEIGHT)


def choose_bullet_tier(bullet_count: int, available_height: float) -> Tuple[int, float]:
    """Pick ``(font_size, spacing)`` for a bullet block.

    The dense-list tier always wins over the overflow tier, even when the
    estimated height would fit.
    """
    font_size, spacing = BULLET_TIERS[0]
    estimated = bullet_count * BULLET_TIERS[0][1]
    if estimated > available_height:
        font_size, spacing = BULLET_TIERS[1]
    if bullet_count > DENSE_BULLET_COUNT:
        font_size, spacing = BULLET_TIERS[2]
    return font_size, spacing


def _place_heading(slide: CanonicalSlide, current_y: float, regions: List[LayoutRegion]) -> float:
    if not slide.heading:
        return current_y
    regions.append(
        LayoutRegion(
            kind=RegionKind.HEADING,
            x=MARGIN,
            y=current_y,
            w=CONTENT_WIDTH,
            h=HEADING_HEIGHT,
            font_size=HEADING_FONT_SIZE,
            lines=(slide.heading,),
        )
    )
    return current_y + HEADING_HEIGHT + HEADING_GAP


def _place_descriptions(slide: CanonicalSlide, current_y: float, regions: List[LayoutRegion]) -> float:
    if not slide.descriptions:
        return current_y
    for desc in slide.descriptions:
        height = estimate_description_height(desc)
        regions.append(
            LayoutRegion(
                kind=RegionKind.DESCRIPTION,
                x=MARGIN,
                y=current_y,
                w=CONTENT_WIDTH,
                h=height,
                font_size=DESCRIPTION_FONT_SIZE,
                lines=(desc,),
            )
        )
        current_y += height + DESCRIPTION_GAP
    return current_y + DESCRIPTION_BLOCK_GAP


def _place_bullets(slide: CanonicalSlide, current_y: float, regions: List[LayoutRegion]) -> float:
    if not slide.bullets:
        return current_y
    available = SLIDE_HEIGHT - current_y - MARGIN
    font_size, spacing = choose_bullet_tier(len(slide.bullets), available)
    height = available - BULLET_BOTTOM_PADDING
    regions.append(
        LayoutRegion(
            kind=RegionKind.BULLETS,
            x=MARGIN,
            y=current_y,
            w=CONTENT_WIDTH,
            h=height,
            font_size=font_size,
            lines=tuple(slide.bullets),
            line_spacing=spacing * POINTS_PER_INCH,
        )
    )
    return current_y + height


def _page_number_region(index: int, total: int) -> LayoutRegion:
    x, y, w, h = PAGE_NUMBER_BOX
    return LayoutRegion(
        kind=RegionKind.PAGE_NUMBER,
        x=x,
        y=y,
        w=w,
        h=h,
        font_size=PAGE_NUMBER_FONT_SIZE,
        lines=(f"{index} / {total}",),
    )


def layout_slide(slide: CanonicalSlide, index: int, total: int) -> SlideLayout:
    """Lay out one slide; ``index`` is 1-based."""
    regions: List[LayoutRegion] = []
    current_y = MARGIN
    current_y = _place_heading(slide, current_y, regions)
    current_y = _place_descriptions(slide, current_y, regions)
    _place_bullets(slide, current_y, regions)
    regions.append(_page_number_region(index, total))
    return SlideLayout(index=index, total=total, regions=regions, notes=slide.notes)


def layout_deck(deck: CanonicalDeck, on_progress: Optional[ProgressCallback] = None) -> List[SlideLayout]:
    total = len(deck.slides)
    layouts: List[SlideLayout] = []
    for index, slide in enumerate(deck.slides, start=1):
        layouts.append(layout_slide(slide, index, total))
        logger.debug("Laid out slide %s/%s (%s regions)", index, total, len(layouts[-1].regions))
        if on_progress is not None:
            on_progress(index, total)
    return layouts
