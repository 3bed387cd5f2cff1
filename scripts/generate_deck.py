"""Deck generator - creates PPTX presentations from model-produced slide JSON.

Accepts loosely-shaped JSON (directly, from a file, or fetched from the content
endpoint for a prompt), normalizes it into headings, descriptions and bullets,
and lays each slide out on a 10 x 5.625 in canvas.
"""

from __future__ import annotations

from deckgen import run_cli


def main() -> None:
    run_cli()


if __name__ == "__main__":
    main()
