"""Turn free-form slide JSON from a generative model into PPTX decks."""

from .api import EXPECTED_JSON_SCHEMA, build_deck, generate_from_text, render_deck, write_deck
from .cli import run_cli
from .errors import DeckGenError, GenerationRequestError, LayoutError, NormalizationError, ParseError
from .layout import LayoutRegion, RegionKind, SlideLayout, layout_deck
from .models import CanonicalDeck, CanonicalSlide
from .normalizer import normalize
from .parsing import parse_model_output, strip_code_fences
from .synthesizer import synthesize
from .writer import PptxDocumentWriter, RenderedDeck

__all__ = [
    "CanonicalDeck",
    "CanonicalSlide",
    "DeckGenError",
    "EXPECTED_JSON_SCHEMA",
    "GenerationRequestError",
    "LayoutError",
    "LayoutRegion",
    "NormalizationError",
    "ParseError",
    "PptxDocumentWriter",
    "RegionKind",
    "RenderedDeck",
    "SlideLayout",
    "build_deck",
    "generate_from_text",
    "layout_deck",
    "normalize",
    "parse_model_output",
    "render_deck",
    "run_cli",
    "strip_code_fences",
    "synthesize",
    "write_deck",
]
