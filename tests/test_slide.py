from __future__ import annotations

import asyncio
import sys
from pathlib import Path

import pytest

SCRIPT_DIR = Path(__file__).resolve().parents[1] / "scripts"
if str(SCRIPT_DIR) not in sys.path:
    sys.path.insert(0, str(SCRIPT_DIR))

from typeview import Slide, SlideError, Stage, StageContext, StageMode  # noqa: E402


def render(slide: Slide, stage: int) -> str:
    return asyncio.run(slide.render_stage(stage))


def test_slide_requires_title() -> None:
    with pytest.raises(SlideError):
        Slide("")
    with pytest.raises(SlideError):
        Slide(None)  # type: ignore[arg-type]


def test_slide_without_stages_has_one_stage() -> None:
    slide = Slide("Intro", content="Welcome")
    assert slide.stage_count == 1
    assert slide.has_stages() is False
    assert render(slide, 0) == "Welcome"


def test_content_list_is_joined_and_text_is_verbatim() -> None:
    assert render(Slide("A", content=["one", "two"]), 0) == "one\ntwo"
    assert render(Slide("B", content="x\r\ny\n"), 0) == "x\r\ny\n"
    assert render(Slide("C"), 0) == ""


def test_accumulate_is_the_default_mode() -> None:
    slide = Slide("Agenda", content="Topics:", stages=[{"content": "- One"}, {"content": "- Two"}])
    assert slide.stage_count == 2
    assert slide.has_stages() is True
    assert render(slide, 0) == "Topics:\n- One"
    assert render(slide, 1) == "Topics:\n- One\n- Two"


def test_replace_keeps_base_content() -> None:
    slide = Slide("Focus", content="Base", stages=[{"content": "- X", "mode": "replace"}])
    assert render(slide, 0) == "Base\n- X"


def test_replace_and_append_show_only_current_stage() -> None:
    for mode in ("replace", "append"):
        slide = Slide(
            "Focus",
            content="Base",
            stages=[Stage(content="- A"), Stage(content="- B", mode=mode)],
        )
        assert render(slide, 1) == "Base\n- B"


def test_mode_of_resolved_stage_decides_combination() -> None:
    slide = Slide(
        "Mixed",
        stages=[Stage(content="a", mode="replace"), Stage(content="b"), Stage(content="c", mode="append")],
    )
    assert render(slide, 1) == "a\nb"
    assert render(slide, 2) == "c"


def test_stage_index_is_clamped() -> None:
    slide = Slide("Agenda", content="Topics:", stages=["- One", "- Two"])
    assert render(slide, 5) == render(slide, 1)
    assert render(slide, -1) == render(slide, 0)


def test_stage_renderers_see_resolved_stage() -> None:
    seen: list[tuple[int, int]] = []

    def make(label: str):
        def _render(ctx: StageContext) -> str:
            seen.append((ctx.stage, ctx.total_stages))
            assert ctx.slide.title == "Dynamic"
            return f"{label}@{ctx.stage}"

        return _render

    slide = Slide("Dynamic", stages=[{"render": make("a")}, {"render": make("b")}, {"render": make("c")}])
    assert render(slide, 2) == "a@2\nb@2\nc@2"
    assert seen == [(2, 3), (2, 3), (2, 3)]


def test_async_stage_renderer_is_awaited() -> None:
    async def _render(ctx: StageContext) -> list[str]:
        await asyncio.sleep(0)
        return ["line 1", "line 2"]

    slide = Slide("Async", content="Base", stages=[Stage(render=_render)])
    assert render(slide, 0) == "Base\nline 1\nline 2"


def test_renderer_takes_precedence_over_content() -> None:
    slide = Slide("P", stages=[Stage(content="static", render=lambda ctx: "dynamic")])
    assert render(slide, 0) == "dynamic"


def test_stage_renderers_run_on_every_call() -> None:
    calls = {"n": 0}

    def _render(ctx: StageContext) -> str:
        calls["n"] += 1
        return str(calls["n"])

    slide = Slide("Counter", stages=[Stage(render=_render)])
    assert render(slide, 0) == "1"
    assert render(slide, 0) == "2"


def test_legacy_render_used_without_stages() -> None:
    async def _render() -> str:
        return "from render"

    assert render(Slide("L", content="ignored", render=_render), 0) == "from render"
    assert render(Slide("L", render=lambda: 42), 0) == ""  # type: ignore[arg-type, return-value]


def test_stages_make_legacy_render_inert() -> None:
    def _render() -> str:
        raise AssertionError("legacy renderer must not run")

    slide = Slide("S", content="Base", stages=["- one"], render=_render)
    assert render(slide, 0) == "Base\n- one"


def test_renderer_errors_propagate() -> None:
    def _render(ctx: StageContext) -> str:
        raise RuntimeError("boom")

    slide = Slide("Broken", stages=[Stage(render=_render)])
    with pytest.raises(RuntimeError, match="boom"):
        render(slide, 0)


def test_unknown_stage_mode_is_rejected() -> None:
    with pytest.raises(SlideError, match="Unsupported stage mode"):
        Slide("Bad", stages=[{"content": "x", "mode": "fade"}])
    assert StageMode.parse("REPLACE") is StageMode.REPLACE


def test_from_mapping_rejects_unknown_fields() -> None:
    with pytest.raises(SlideError, match="Unknown slide field"):
        Slide.from_mapping({"title": "T", "bullets": ["a"]})


def test_slide_is_immutable() -> None:
    slide = Slide("Frozen")
    with pytest.raises(AttributeError):
        slide.title = "Changed"  # type: ignore[misc]


def test_single_string_stages_are_rejected() -> None:
    with pytest.raises(SlideError, match="not a single string"):
        Slide("T", stages="abc")  # type: ignore[arg-type]
