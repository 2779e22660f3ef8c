"""Line normalization for slide and stage content."""

from __future__ import annotations

import re
from typing import Iterable, Optional, Union

Content = Union[str, Iterable[str]]

_LINE_BREAK = re.compile(r"\r?\n")


def split_lines(text: str) -> list[str]:
    """Split a text block on line breaks, keeping empty and trailing entries."""
    return _LINE_BREAK.split(text)


def normalize_to_lines(value: Optional[Content]) -> list[str]:
    """Turn a text block or an ordered sequence of blocks into individual lines."""
    if not value:
        return []
    if isinstance(value, str):
        return split_lines(value)
    lines: list[str] = []
    for block in value:
        lines.extend(split_lines(block))
    return lines


def join_content(value: Optional[Content]) -> str:
    """Join raw content for display; text is returned verbatim."""
    if not value:
        return ""
    if isinstance(value, str):
        return value
    return "\n".join(value)
