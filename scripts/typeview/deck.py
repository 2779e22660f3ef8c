"""Deck files: JSON validation and loading into options + slides."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Tuple

from .config import PresenterOptions
from .errors import ConfigValidationError, SlideError
from .slide import Slide
from .stage import StageMode

_SLIDE_FIELDS = {"title", "header", "footer", "content", "stages"}
_STAGE_MODES = {m.value for m in StageMode}


def _is_non_empty_str(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


def _is_content(value: Any) -> bool:
    if isinstance(value, str):
        return True
    return isinstance(value, list) and all(isinstance(item, str) for item in value)


def _check_stage(stage: Any, prefix: str, issues: list[str]) -> None:
    if _is_content(stage):
        return
    if not isinstance(stage, dict):
        issues.append(f"{prefix} must be a string, a list of strings or an object")
        return
    unknown = set(stage) - {"content", "mode"}
    if unknown:
        issues.append(f"{prefix} has unsupported field(s): {', '.join(sorted(unknown))}")
    if "content" in stage and not _is_content(stage["content"]):
        issues.append(f"{prefix}.content must be a string or a list of strings")
    mode = stage.get("mode")
    if mode is not None and mode not in _STAGE_MODES:
        allowed = ", ".join(sorted(_STAGE_MODES))
        issues.append(f"{prefix}.mode '{mode}' is unsupported (supported: {allowed})")


def _check_slide(slide: Dict[str, Any], prefix: str, issues: list[str]) -> None:
    if not _is_non_empty_str(slide.get("title")):
        issues.append(f"{prefix}.title is required and must be a non-empty string")

    unknown = set(slide) - _SLIDE_FIELDS
    if unknown:
        issues.append(f"{prefix} has unsupported field(s): {', '.join(sorted(unknown))}")

    for field in ("header", "footer"):
        if field in slide and not isinstance(slide.get(field), str):
            issues.append(f"{prefix}.{field} must be a string when provided")

    if "content" in slide and not _is_content(slide.get("content")):
        issues.append(f"{prefix}.content must be a string or a list of strings")

    stages = slide.get("stages")
    if stages is None:
        return
    if not isinstance(stages, list):
        issues.append(f"{prefix}.stages must be a list when provided")
        return
    for s_idx, stage in enumerate(stages):
        _check_stage(stage, f"{prefix}.stages[{s_idx}]", issues)


def _check_presentation(presentation: Dict[str, Any], issues: list[str], prefix: str) -> None:
    options = {k: v for k, v in presentation.items() if k != "slides"}
    try:
        PresenterOptions.from_mapping(options, prefix=prefix)
    except ConfigValidationError as exc:
        issues.extend(exc.issues)

    slides = presentation.get("slides")
    if not isinstance(slides, list):
        issues.append(f"{prefix}.slides is required and must be a list")
        return
    if not slides:
        issues.append(f"{prefix}.slides must contain at least one slide")
        return

    for idx, slide in enumerate(slides):
        if not isinstance(slide, dict):
            issues.append(f"{prefix}.slides[{idx}] must be an object")
            continue
        _check_slide(slide, f"{prefix}.slides[{idx}]", issues)


def validate_deck(config: Dict[str, Any]) -> tuple[Dict[str, Any], bool]:
    """Validate a deck dict and return (config, wrapped)."""
    if not isinstance(config, dict):
        raise ConfigValidationError(["Root JSON value must be an object"])

    wrapped = "presentation" in config
    presentation = config.get("presentation") if wrapped else config

    if not isinstance(presentation, dict):
        raise ConfigValidationError(["'presentation' must be an object"])

    issues: list[str] = []
    _check_presentation(presentation, issues, "presentation" if wrapped else "root")

    if issues:
        raise ConfigValidationError(issues)

    return config, wrapped


def validate_deck_file(deck_path: Path) -> tuple[Dict[str, Any], bool]:
    """Load and validate a JSON deck file."""
    try:
        raw = deck_path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise ConfigValidationError([f"Deck file not found: {deck_path}"]) from exc

    try:
        data: Dict[str, Any] = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ConfigValidationError([f"Invalid JSON at line {exc.lineno}, column {exc.colno}: {exc.msg}"]) from exc

    return validate_deck(data)


def build_deck(config: Dict[str, Any]) -> Tuple[PresenterOptions, list[Slide]]:
    """Turn a validated deck dict into presenter options and slides."""
    config, wrapped = validate_deck(config)
    presentation = config["presentation"] if wrapped else config
    prefix = "presentation" if wrapped else "root"

    options = PresenterOptions.from_mapping(
        {k: v for k, v in presentation.items() if k != "slides"}, prefix=prefix
    )
    slides: list[Slide] = []
    for idx, raw in enumerate(presentation["slides"]):
        try:
            slides.append(Slide.from_mapping(raw))
        except SlideError as exc:
            raise ConfigValidationError([f"{prefix}.slides[{idx}]: {exc}"]) from exc
    return options, slides


def load_deck(deck_path: Path) -> Tuple[PresenterOptions, list[Slide]]:
    config, _ = validate_deck_file(deck_path)
    return build_deck(config)


def write_deck(config: Dict[str, Any], path: Path) -> Path:
    """Write a JSON deck to disk and return the path."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(config, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
    return path
