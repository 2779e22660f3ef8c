from __future__ import annotations

import asyncio
import json
import sys
from pathlib import Path

import pytest

SCRIPT_DIR = Path(__file__).resolve().parents[1] / "scripts"
if str(SCRIPT_DIR) not in sys.path:
    sys.path.insert(0, str(SCRIPT_DIR))

from typeview import (  # noqa: E402
    ConfigValidationError,
    build_deck,
    load_deck,
    validate_deck,
    validate_deck_file,
    write_deck,
)

SAMPLE_DECK = Path(__file__).resolve().parents[1] / "assets" / "sample_deck.json"


def test_validate_deck_accepts_sample_deck() -> None:
    payload = json.loads(SAMPLE_DECK.read_text(encoding="utf-8"))
    validated, wrapped = validate_deck(payload)
    assert wrapped is True
    assert isinstance(validated, dict)


def test_load_deck_builds_options_and_slides() -> None:
    options, slides = load_deck(SAMPLE_DECK)
    assert options.title == "TypeView Demo"
    assert options.non_interactive_stages == "all"
    assert [s.title for s in slides] == ["Hello", "Agenda", "Focus", "Thanks"]
    assert slides[1].stage_count == 3
    assert asyncio.run(slides[1].render_stage(2)) == "Topics:\n- One\n- Two\n- Three\n  (with a note)"
    assert asyncio.run(slides[2].render_stage(1)) == "Current point:\n- Themes"


def test_unwrapped_deck_is_accepted() -> None:
    options, slides = build_deck({"exitOnLastSlide": True, "slides": [{"title": "Only"}]})
    assert options.exit_on_last_slide is True
    assert len(slides) == 1


def test_validate_deck_rejects_non_list_slides() -> None:
    with pytest.raises(ConfigValidationError) as exc:
        validate_deck({"presentation": {"slides": "not-a-list"}})
    assert "slides is required and must be a list" in str(exc.value)


def test_validate_deck_rejects_empty_slides() -> None:
    with pytest.raises(ConfigValidationError) as exc:
        validate_deck({"presentation": {"slides": []}})
    assert "must contain at least one slide" in str(exc.value)


def test_validate_deck_collects_every_issue() -> None:
    bad = {
        "presentation": {
            "clearOnRender": "yes",
            "nonInteractiveStages": "some",
            "slides": [
                {"content": "no title"},
                {"title": "T", "stages": [{"content": "x", "mode": "fade"}, 3]},
                "oops",
            ],
        }
    }
    with pytest.raises(ConfigValidationError) as exc:
        validate_deck(bad)
    issues = exc.value.issues
    assert any("clear_on_render must be a boolean" in i for i in issues)
    assert any("non_interactive_stages 'some' is unsupported" in i for i in issues)
    assert any("slides[0].title is required" in i for i in issues)
    assert any("slides[1].stages[0].mode 'fade' is unsupported" in i for i in issues)
    assert any("slides[1].stages[1] must be" in i for i in issues)
    assert any("slides[2] must be an object" in i for i in issues)
    assert str(exc.value).startswith("Configuration validation failed:")


def test_validate_deck_rejects_unknown_theme_region() -> None:
    with pytest.raises(ConfigValidationError) as exc:
        validate_deck({"theme": {"sidebar": "red"}, "slides": [{"title": "T"}]})
    assert "theme.sidebar is not a themable region" in str(exc.value)


def test_validate_deck_file_reports_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ConfigValidationError) as exc:
        validate_deck_file(tmp_path / "missing.json")
    assert "Deck file not found" in str(exc.value)


def test_validate_deck_file_reports_bad_json(tmp_path: Path) -> None:
    path = tmp_path / "bad.json"
    path.write_text('{"slides": [', encoding="utf-8")
    with pytest.raises(ConfigValidationError) as exc:
        validate_deck_file(path)
    assert "Invalid JSON at line 1" in str(exc.value)


def test_write_deck_round_trips_through_loader(tmp_path: Path) -> None:
    deck = {"presentation": {"title": "Saved", "slides": [{"title": "A", "stages": ["1", "2"]}]}}
    path = write_deck(deck, tmp_path / "nested" / "deck.json")
    options, slides = load_deck(path)
    assert options.title == "Saved"
    assert slides[0].stage_count == 2
