"""Custom exceptions for deck parsing, normalization and rendering."""

from __future__ import annotations


class DeckGenError(ValueError):
    """Base class for errors that end a deck generation attempt."""

    headline = "Deck generation failed:"

    def __init__(self, issues: list[str] | str):
        if isinstance(issues, str):
            issues = [issues]
        self.issues = [str(i).strip() for i in issues if str(i).strip()]
        if not self.issues:
            self.issues = ["Unknown error"]
        super().__init__(self._format())

    def _format(self) -> str:
        if len(self.issues) == 1:
            return f"{self.headline} {self.issues[0]}"
        lines = [self.headline]
        for issue in self.issues:
            lines.append(f"- {issue}")
        return "\n".join(lines)


class ParseError(DeckGenError):
    """Raised when model output is not valid JSON after fence stripping."""

    headline = "Could not parse model output:"


class NormalizationError(DeckGenError):
    """Raised when parsed JSON has no usable slide list."""

    headline = "Normalization failed:"


class LayoutError(DeckGenError):
    """Raised when the document writer fails to build or serialize the deck."""

    headline = "PPTX generation failed:"


class GenerationRequestError(DeckGenError):
    """Raised when the content endpoint cannot be reached or returns an error."""

    headline = "Content request failed:"
