"""Public API helpers for running presentations programmatically."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any, Iterable, Mapping, Optional, Union

from .config import PresenterOptions
from .deck import load_deck
from .presenter import TypeView
from .slide import Slide
from .terminal import Terminal


def present_slides(
    slides: Iterable[Union[Slide, Mapping[str, Any]]],
    *,
    options: Union[PresenterOptions, Mapping[str, Any], None] = None,
    terminal: Optional[Terminal] = None,
    **overrides: Any,
) -> TypeView:
    """Build a presenter for ``slides`` and run it to completion."""
    overrides = {k: v for k, v in overrides.items() if v is not None}
    view = TypeView(options, terminal=terminal, **overrides)
    view.add_slides(slides)
    asyncio.run(view.run())
    return view


def present_deck_file(
    deck_path: Path,
    *,
    terminal: Optional[Terminal] = None,
    **overrides: Any,
) -> TypeView:
    """Load a JSON deck file and present it; keyword overrides win over the file."""
    options, slides = load_deck(deck_path)
    return present_slides(slides, options=options, terminal=terminal, **overrides)
