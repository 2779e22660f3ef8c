"""Read slides out of an existing PowerPoint deck."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from pptx import Presentation
from pptx.exc import PackageNotFoundError

from .errors import ConfigValidationError
from .slide import Slide
from .stage import Stage

logger = logging.getLogger(__name__)


def _title_of(slide, number: int) -> str:
    title_shape = slide.shapes.title
    if title_shape is not None and title_shape.has_text_frame:
        text = title_shape.text_frame.text.strip()
        if text:
            return text.splitlines()[0]
    return f"Slide {number}"


def _body_paragraphs(slide) -> list[tuple[int, str]]:
    title_shape = slide.shapes.title
    title_id = title_shape.shape_id if title_shape is not None else None
    out: list[tuple[int, str]] = []
    for shape in slide.shapes:
        if shape.shape_id == title_id or not shape.has_text_frame:
            continue
        for paragraph in shape.text_frame.paragraphs:
            text = paragraph.text.strip()
            if text:
                out.append((paragraph.level, text))
    return out


def _notes_of(slide) -> Optional[str]:
    if not slide.has_notes_slide:
        return None
    text = slide.notes_slide.notes_text_frame.text.strip()
    return text or None


def _group_stages(paragraphs: list[tuple[int, str]]) -> list[Stage]:
    # nested paragraphs are revealed together with their top-level parent
    groups: list[list[str]] = []
    for level, text in paragraphs:
        line = "  " * level + f"- {text}"
        if level == 0 or not groups:
            groups.append([line])
        else:
            groups[-1].append(line)
    return [Stage(content=lines) for lines in groups]


def load_pptx_slides(pptx_path: Path, *, staged: bool = True) -> list[Slide]:
    """Build slides from a ``.pptx`` file.

    Each body paragraph becomes a ``- `` bullet line. With ``staged`` every
    top-level bullet is revealed as its own accumulate stage; speaker notes,
    when present, are used as the slide footer.
    """
    try:
        prs = Presentation(str(pptx_path))
    except PackageNotFoundError as exc:
        raise ConfigValidationError([f"PowerPoint file not found or unreadable: {pptx_path}"]) from exc

    slides: list[Slide] = []
    for number, pptx_slide in enumerate(prs.slides, start=1):
        title = _title_of(pptx_slide, number)
        paragraphs = _body_paragraphs(pptx_slide)
        footer = _notes_of(pptx_slide)
        if staged and paragraphs:
            slide = Slide(title, footer=footer, stages=_group_stages(paragraphs))
        else:
            lines = ["  " * level + f"- {text}" for level, text in paragraphs]
            slide = Slide(title, footer=footer, content=lines)
        slides.append(slide)

    if not slides:
        raise ConfigValidationError([f"PowerPoint file has no slides: {pptx_path}"])
    logger.debug("Loaded %d slide(s) from %s", len(slides), pptx_path)
    return slides
