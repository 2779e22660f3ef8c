"""ANSI styling helpers and the region theme used by the presenter."""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import Any, Callable, Mapping, Optional

from .errors import ConfigValidationError

StyleFn = Callable[[str], str]


class ANSI:
    RESET = "\x1b[0m"
    BOLD = "\x1b[1m"
    DIM = "\x1b[2m"

    BLACK = "\x1b[30m"
    RED = "\x1b[31m"
    GREEN = "\x1b[32m"
    YELLOW = "\x1b[33m"
    BLUE = "\x1b[34m"
    MAGENTA = "\x1b[35m"
    CYAN = "\x1b[36m"
    WHITE = "\x1b[37m"
    GRAY = "\x1b[90m"


def style(*codes: str) -> StyleFn:
    prefix = "".join(codes)

    def _apply(text: str) -> str:
        return f"{prefix}{text}{ANSI.RESET}"

    return _apply


def named_style(spec: str) -> StyleFn:
    """Build a styler from space-separated ANSI names, e.g. ``"bold cyan"``."""
    codes = []
    for word in spec.split():
        code = getattr(ANSI, word.upper(), None)
        if not isinstance(code, str) or word.upper() == "RESET":
            raise ValueError(f"unknown style name '{word}'")
        codes.append(code)
    if not codes:
        return _plain
    return style(*codes)


def _plain(text: str) -> str:
    return text


@dataclass(frozen=True)
class Theme:
    """Styling function per printed region; every function must be pure."""

    header: StyleFn
    title: StyleFn
    footer: StyleFn
    controls: StyleFn
    slide_indicator: StyleFn
    body: StyleFn
    notice: StyleFn


# camelCase aliases accepted in deck files and option mappings
_REGION_ALIASES = {"slideIndicator": "slide_indicator"}


def build_default_theme() -> Theme:
    return Theme(
        header=style(ANSI.DIM, ANSI.GREEN),
        title=style(ANSI.BOLD, ANSI.CYAN),
        footer=style(ANSI.DIM, ANSI.GRAY),
        controls=style(ANSI.DIM, ANSI.GRAY),
        slide_indicator=style(ANSI.YELLOW),
        body=style(ANSI.WHITE),
        notice=style(ANSI.MAGENTA),
    )


def plain_theme() -> Theme:
    return Theme(**{f.name: _plain for f in fields(Theme)})


def merge_theme(overrides: Optional[Mapping[str, Any]], base: Optional[Theme] = None) -> Theme:
    """Merge a partial mapping of region stylers over ``base`` (default theme)."""
    theme = base or build_default_theme()
    if not overrides:
        return theme
    if isinstance(overrides, Theme):
        return overrides

    regions = {f.name for f in fields(Theme)}
    issues: list[str] = []
    changes: dict[str, StyleFn] = {}
    for key, fn in overrides.items():
        name = _REGION_ALIASES.get(key, key)
        if name not in regions:
            allowed = ", ".join(sorted(regions))
            issues.append(f"theme.{key} is not a themable region (supported: {allowed})")
            continue
        if isinstance(fn, str):
            try:
                fn = named_style(fn)
            except ValueError as exc:
                issues.append(f"theme.{key}: {exc}")
                continue
        if not callable(fn):
            issues.append(f"theme.{key} must be callable or a style name string")
            continue
        changes[name] = fn

    if issues:
        raise ConfigValidationError(issues)
    return replace(theme, **changes)
