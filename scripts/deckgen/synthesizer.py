"""Lay out a canonical deck and serialize it through a document writer."""

from __future__ import annotations

import logging
from typing import Callable, Optional

from .errors import LayoutError
from .layout import ProgressCallback, layout_deck
from .models import CanonicalDeck
from .writer import PptxDocumentWriter, RenderedDeck

logger = logging.getLogger(__name__)

WriterFactory = Callable[[str], PptxDocumentWriter]


async def synthesize(
    deck: CanonicalDeck,
    on_progress: Optional[ProgressCallback] = None,
    *,
    writer_factory: WriterFactory = PptxDocumentWriter,
) -> RenderedDeck:
    """Lay out every slide, write them, and return the serialized document.

    Progress callbacks run after each slide is laid out and before anything
    is written. Any failure inside the writer surfaces as :class:`LayoutError`
    with the original exception chained; no partial document is returned.
    """
    layouts = layout_deck(deck, on_progress)

    try:
        writer = writer_factory(deck.title)
        for layout in layouts:
            writer.add_slide(layout)
        rendered = await writer.serialize()
    except LayoutError:
        raise
    except Exception as exc:
        logger.error("Document writer failed: %s", exc)
        raise LayoutError(str(exc) or exc.__class__.__name__) from exc

    logger.info("Rendered %s slides (%s bytes)", len(layouts), len(rendered.content))
    return rendered
