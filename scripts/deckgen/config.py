"""Environment-driven settings.

``.env`` files are loaded from:
  1) the project root (two levels above this package)
  2) the current working directory
  3) an explicit ``--env-file`` when given
Keys already present in the process environment are never overwritten.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional, Tuple

logger = logging.getLogger(__name__)

DEFAULT_ENDPOINT = "http://localhost:3000/api/ai/generate"
DEFAULT_TIMEOUT_SECONDS = 120.0
DEFAULT_HISTORY_PATH = Path("~/.deckgen/history.json")


def _project_root() -> Path:
    return Path(__file__).resolve().parents[2]


def _strip_quotes(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
        return value[1:-1]
    return value


def _parse_env_line(line: str) -> Optional[Tuple[str, str]]:
    """Parse one ``KEY=value`` line; blank lines and comments give ``None``."""
    text = line.strip()
    if text.startswith("export "):
        text = text[len("export ") :].lstrip()
    if not text or text.startswith("#"):
        return None

    key, sep, value = text.partition("=")
    key, value = key.strip(), value.strip()
    if not sep or not key:
        return None

    # Unquoted values may carry a trailing comment.
    if value[:1] not in ("'", '"'):
        value = value.partition("#")[0].rstrip()
    return key, _strip_quotes(value)


def read_env_file(env_path: Path) -> Dict[str, str]:
    if not env_path.is_file():
        return {}
    try:
        lines = env_path.read_text(encoding="utf-8").splitlines()
    except OSError as exc:
        logger.warning("Skipping unreadable env file %s (%s)", env_path, exc)
        return {}
    return dict(pair for pair in map(_parse_env_line, lines) if pair)


def load_default_env_files(*, explicit_env_file: Optional[str] = None) -> None:
    sources = [_project_root() / ".env", Path.cwd() / ".env"]
    if explicit_env_file:
        sources.append(Path(explicit_env_file).expanduser().resolve())

    # Values already in the process environment win over every file.
    preset = set(os.environ)
    for source in sources:
        for key, value in read_env_file(source).items():
            if key not in preset:
                os.environ[key] = value


def _coerce_float(value: Optional[str], default: float) -> float:
    if value is None:
        return default
    try:
        parsed = float(value.strip())
    except ValueError:
        return default
    return parsed if parsed > 0 else default


@dataclass(frozen=True)
class Settings:
    endpoint: str = DEFAULT_ENDPOINT
    timeout: float = DEFAULT_TIMEOUT_SECONDS
    history_path: Path = DEFAULT_HISTORY_PATH.expanduser()

    @classmethod
    def from_env(cls) -> "Settings":
        history = os.environ.get("DECKGEN_HISTORY_PATH", "").strip()
        return cls(
            endpoint=os.environ.get("DECKGEN_ENDPOINT", "").strip() or DEFAULT_ENDPOINT,
            timeout=_coerce_float(os.environ.get("DECKGEN_TIMEOUT"), DEFAULT_TIMEOUT_SECONDS),
            history_path=Path(history or DEFAULT_HISTORY_PATH).expanduser(),
        )
