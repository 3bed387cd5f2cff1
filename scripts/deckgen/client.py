"""HTTP client for the slide-content generation endpoint."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import requests

from .errors import GenerationRequestError

logger = logging.getLogger(__name__)

USER_AGENT = "deckgen/0.1"


def _requests_session() -> requests.Session:
    session = requests.Session()
    session.headers.update({"User-Agent": USER_AGENT, "Content-Type": "application/json"})
    return session


class GenerationClient:
    """POST ``{prompt, context?}`` and return the model's raw ``result`` text."""

    def __init__(self, endpoint: str, *, timeout: float = 120.0, session: Optional[requests.Session] = None):
        self.endpoint = endpoint
        self.timeout = timeout
        self.session = session or _requests_session()

    def generate(self, prompt: str, context: Optional[Dict[str, Any]] = None) -> str:
        payload: Dict[str, Any] = {"prompt": prompt}
        if context:
            payload["context"] = context

        logger.info("Requesting slide content from %s", self.endpoint)
        try:
            resp = self.session.post(self.endpoint, json=payload, timeout=self.timeout)
        except requests.RequestException as exc:
            raise GenerationRequestError(f"Could not reach {self.endpoint}: {exc}") from exc

        try:
            data = resp.json() if resp.text else {}
        except ValueError:
            data = {}

        if resp.status_code != 200:
            message = data.get("error") if isinstance(data, dict) else None
            raise GenerationRequestError(
                f"HTTP {resp.status_code}: {message or resp.text[:500] or 'empty response'}"
            )

        result = data.get("result") if isinstance(data, dict) else None
        if not isinstance(result, str):
            raise GenerationRequestError("Response is missing a 'result' string")
        return result
