"""CLI orchestration for the deck generator."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
import traceback
from pathlib import Path
from typing import Any, Dict, Optional

from .api import EXPECTED_JSON_SCHEMA, build_deck, render_deck, write_deck
from .client import GenerationClient
from .config import Settings, load_default_env_files
from .errors import DeckGenError
from .history import PromptHistory
from .logging_utils import setup_logging
from .models import CanonicalDeck

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Generate PPTX presentations from free-form slide JSON")
    source = parser.add_mutually_exclusive_group()
    source.add_argument("--input", default=None, help="Path to raw model output (JSON, optionally fenced); '-' for stdin")
    source.add_argument("--prompt", default=None, help="Request slide content for this prompt from the endpoint")
    source.add_argument("--from-history", type=int, default=None, help="Re-render the deck stored at this history index")
    source.add_argument("--list-history", action="store_true", help="Print stored prompts and exit")
    source.add_argument("--print-schema", action="store_true", help="Print the expected slide JSON shape and exit")
    parser.add_argument("--context", default=None, help="Optional JSON file sent as context with --prompt")
    parser.add_argument("--output", default=None, help="Output PPTX file path")
    parser.add_argument("--base64-out", default=None, help="Also write the base64-encoded PPTX to this path")
    parser.add_argument("--endpoint", default=None, help="Content endpoint URL (default: $DECKGEN_ENDPOINT)")
    parser.add_argument("--history", default=None, help="History file path (default: $DECKGEN_HISTORY_PATH)")
    parser.add_argument("--no-history", action="store_true", help="Do not read or write prompt history")
    parser.add_argument("--env-file", default=None, help="Extra .env file to load")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--log-file", default=None, help="Also write log output to this file")
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Show full traceback for unexpected errors",
    )
    return parser


def _read_text(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8")


def _read_context(path: Optional[str]) -> Optional[Dict[str, Any]]:
    if not path:
        return None
    data = json.loads(_read_text(path))
    if not isinstance(data, dict):
        raise SystemExit("--context must contain a JSON object")
    return data


def _log_progress(slide_index: int, total: int) -> None:
    logger.info("Laid out slide %s/%s", slide_index, total)


def _print_history(history: PromptHistory) -> None:
    if not len(history):
        print("No prompt history.")
        return
    for i, entry in enumerate(history.entries):
        slide_data = entry.get("slideData")
        if isinstance(slide_data, dict) and isinstance(slide_data.get("slides"), list):
            status = f"{len(slide_data['slides'])} slides"
        else:
            status = "no deck"
        print(f"{i}\t{status}\t{entry['prompt']}")


def _resolve_deck(args: argparse.Namespace, settings: Settings, history: Optional[PromptHistory]) -> CanonicalDeck:
    if args.from_history is not None:
        if history is None:
            raise SystemExit("--from-history cannot be combined with --no-history")
        if not 0 <= args.from_history < len(history):
            raise SystemExit(f"No history entry at index {args.from_history} ({len(history)} stored)")
        deck = history.deck_at(args.from_history)
        if deck is None:
            raise SystemExit(f"History entry {args.from_history} has no slide data")
        return deck

    if args.input is not None:
        return build_deck(_read_text(args.input))

    context = _read_context(args.context)
    client = GenerationClient(settings.endpoint, timeout=settings.timeout)
    index = history.append(args.prompt) if history is not None else None
    deck = build_deck(client.generate(args.prompt, context))
    if history is not None and index is not None:
        history.attach_deck(deck, index)
    return deck


def run_cli(argv: Optional[list[str]] = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)
    setup_logging(verbose=args.verbose, log_path=Path(args.log_file) if args.log_file else None)

    if args.print_schema:
        print(json.dumps(EXPECTED_JSON_SCHEMA, indent=2))
        return

    try:
        load_default_env_files(explicit_env_file=args.env_file)
        settings = Settings.from_env()
        if args.endpoint:
            settings = Settings(endpoint=args.endpoint, timeout=settings.timeout, history_path=settings.history_path)
        history_path = Path(args.history).expanduser() if args.history else settings.history_path
        history = None if args.no_history else PromptHistory(history_path)

        if args.list_history:
            if history is None:
                raise SystemExit("--list-history cannot be combined with --no-history")
            _print_history(history)
            return

        if args.input is None and args.prompt is None and args.from_history is None:
            parser.error("one of --input, --prompt, --from-history is required")
        if not args.output:
            parser.error("--output is required")

        deck = _resolve_deck(args, settings, history)
        logger.info("Normalized deck '%s' with %s slides", deck.title, len(deck.slides))

        rendered = asyncio.run(render_deck(deck, on_progress=_log_progress))
        saved = write_deck(rendered, Path(args.output).resolve())
        if args.base64_out:
            b64_path = Path(args.base64_out).resolve()
            b64_path.parent.mkdir(parents=True, exist_ok=True)
            b64_path.write_text(rendered.base64, encoding="utf-8")
        print(f"✅ PPTX saved to {saved}")
    except DeckGenError as e:
        raise SystemExit(str(e)) from e
    except SystemExit:
        raise
    except Exception as e:
        if args.debug:
            traceback.print_exc()
        raise SystemExit(f"Deck generation failed: {e}") from e


def main() -> None:
    run_cli()
