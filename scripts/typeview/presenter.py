"""Presentation driver: paints slides and routes keys to the navigator."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Iterable, Mapping, Optional, Union

from .config import PresenterOptions
from .navigator import Navigator, RenderTarget
from .slide import Slide
from .terminal import ConsoleTerminal, Terminal, action_for_key

logger = logging.getLogger(__name__)

CONTROLS_TEXT = "←/→ or space to navigate · q to quit"
LAST_SLIDE_NOTICE = "(Last slide)"
FIRST_SLIDE_NOTICE = "(First slide)"


class TypeView:
    """Terminal slide presenter.

    Slides are added up front, then :meth:`run` either drives an interactive
    keyboard loop or, when no interactive terminal is available (or keyboard
    navigation is disabled), auto-plays the deck once from start to end.
    """

    def __init__(
        self,
        options: Union[PresenterOptions, Mapping[str, Any], None] = None,
        *,
        terminal: Optional[Terminal] = None,
        **overrides: Any,
    ):
        if isinstance(options, PresenterOptions):
            base = options
        else:
            base = PresenterOptions.from_mapping(options)
        self.options = base.merged(overrides) if overrides else base
        self.terminal: Terminal = terminal if terminal is not None else ConsoleTerminal()
        self.navigator = Navigator()
        self._interactive = False
        self._notice: Optional[str] = None
        self._paints = 0

    @property
    def slides(self) -> tuple[Slide, ...]:
        return self.navigator.slides

    def add_slide(self, slide: Union[Slide, Mapping[str, Any], None] = None, **fields: Any) -> Slide:
        """Add a slide, built from a mapping or keyword fields when needed."""
        if slide is None:
            slide = Slide.from_mapping(fields)
        elif not isinstance(slide, Slide):
            slide = Slide.from_mapping({**slide, **fields})
        return self.navigator.add_slide(slide)

    def add_slides(self, slides: Iterable[Union[Slide, Mapping[str, Any]]]) -> None:
        for slide in slides:
            self.add_slide(slide)

    def compose(self, target: RenderTarget, body: str) -> list[str]:
        """Lines of one paint, already themed."""
        opts = self.options
        theme = opts.theme
        slide = target.slide
        lines: list[str] = []

        header = slide.header if slide.header is not None else opts.header
        if header:
            lines.append(theme.header(header))

        status: list[str] = []
        if opts.title:
            status.append(theme.title(opts.title))
        indicator: list[str] = []
        if opts.show_slide_indicator:
            indicator.append(f"[{target.slide_index + 1}/{self.navigator.slide_count}]")
        if opts.show_stage_indicator and slide.has_stages():
            indicator.append(f"(stage {target.stage_index + 1}/{slide.stage_count})")
        if indicator:
            status.append(theme.slide_indicator(" ".join(indicator)))
        if status:
            lines.append("  ".join(status))
            lines.append("")

        lines.append(theme.title(slide.title))
        lines.append("")
        if body:
            lines.append(theme.body(body))

        footer = slide.footer if slide.footer is not None else opts.footer
        if footer:
            lines.append("")
            lines.append(theme.footer(footer))
        if self._interactive and opts.show_controls:
            lines.append("")
            lines.append(theme.controls(CONTROLS_TEXT))
        if self._notice:
            lines.append(theme.notice(self._notice))
        return lines

    async def render(self, target: Optional[RenderTarget] = None) -> None:
        target = target or self.navigator.current_render_target()
        body = await target.slide.render_stage(target.stage_index)
        # auto-play output is a transcript, so the screen is only cleared interactively
        if self._interactive and self.options.clear_on_render:
            self.terminal.clear_screen()
        elif self._paints:
            self.terminal.write_line("")
        self._paints += 1
        for line in self.compose(target, body):
            self.terminal.write_line(line)
        logger.debug("Painted slide %d stage %d", target.slide_index + 1, target.stage_index + 1)

    async def run(self) -> None:
        if self.navigator.running:
            return
        self.navigator.start()
        self._interactive = self.options.keyboard_navigation and self.terminal.is_interactive()
        self._paints = 0
        try:
            if self._interactive:
                await self._run_interactive()
            else:
                await self._run_autoplay()
        finally:
            self.navigator.stop()

    def present(self) -> None:
        """Blocking helper around :meth:`run`."""
        asyncio.run(self.run())

    async def _run_autoplay(self) -> None:
        for target in self.navigator.autoplay(self.options.non_interactive_stages):
            await self.render(target)

    async def _run_interactive(self) -> None:
        self.terminal.set_raw_mode(True)
        try:
            await self.render()
            while self.navigator.running:
                key = await asyncio.to_thread(self.terminal.read_key)
                await self.handle_key(key)
        finally:
            self.terminal.set_raw_mode(False)

    async def handle_key(self, key: str) -> None:
        action = action_for_key(key)
        if action is None or not self.navigator.running:
            return
        nav = self.navigator

        if action == "quit":
            nav.stop()
        elif action == "next":
            if nav.advance():
                await self.render()
            elif self.options.exit_on_last_slide:
                nav.stop()
            else:
                await self._flash(LAST_SLIDE_NOTICE)
        elif action == "previous":
            if nav.retreat():
                await self.render()
            else:
                await self._flash(FIRST_SLIDE_NOTICE)
        elif action == "first":
            if nav.go_to(0):
                await self.render()
        elif action == "last":
            if nav.go_to(nav.slide_count - 1):
                await self.render()

    async def _flash(self, notice: str) -> None:
        self._notice = notice
        try:
            await self.render()
        finally:
            self._notice = None
