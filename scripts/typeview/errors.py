"""Custom exceptions for slide construction, deck config and runtime errors."""

from __future__ import annotations


class ConfigValidationError(ValueError):
    """Raised when a deck file or presentation options are invalid."""

    def __init__(self, issues: list[str]):
        self.issues = [str(i).strip() for i in issues if str(i).strip()]
        if not self.issues:
            self.issues = ["Invalid configuration"]
        super().__init__(self._format())

    def _format(self) -> str:
        lines = ["Configuration validation failed:"]
        for issue in self.issues:
            lines.append(f"- {issue}")
        return "\n".join(lines)


class SlideError(ValueError):
    """Raised when a slide or one of its stages cannot be constructed."""


class NoSlidesError(RuntimeError):
    """Raised when a presentation is started without any slides."""

    def __init__(self, message: str = "No slides to present. Add at least one slide before running."):
        super().__init__(message)


class PresentationStateError(RuntimeError):
    """Raised when the deck is modified while a presentation is running."""
