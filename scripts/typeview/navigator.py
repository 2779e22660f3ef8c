"""Navigation state machine over (slide index, per-slide stage index)."""

from __future__ import annotations

import logging
from typing import Iterator, Literal, NamedTuple

from .errors import NoSlidesError, PresentationStateError
from .slide import Slide

logger = logging.getLogger(__name__)

StagePolicy = Literal["all", "final"]


class RenderTarget(NamedTuple):
    slide_index: int
    stage_index: int
    slide: Slide


class Navigator:
    """Tracks the current slide and, for every slide, its current stage.

    Each slide remembers the stage it was last left at, so stepping back into
    a slide resumes where the audience saw it last. ``advance`` and
    ``retreat`` never raise; they report whether the position changed.
    """

    def __init__(self) -> None:
        self._slides: list[Slide] = []
        self._stage_index: dict[int, int] = {}
        self._current = 0
        self.running = False

    @property
    def slides(self) -> tuple[Slide, ...]:
        return tuple(self._slides)

    @property
    def slide_count(self) -> int:
        return len(self._slides)

    @property
    def slide_index(self) -> int:
        return self._current

    def stage_index(self, slide_index: int) -> int:
        return self._stage_index[slide_index]

    def add_slide(self, slide: Slide) -> Slide:
        if self.running:
            raise PresentationStateError("Cannot add slides while the presentation is running")
        self._slides.append(slide)
        self._stage_index[len(self._slides) - 1] = 0
        return slide

    def start(self) -> None:
        if not self._slides:
            raise NoSlidesError()
        if self.running:
            return
        self.running = True
        logger.debug("Presentation started with %d slide(s)", len(self._slides))

    def stop(self) -> None:
        if self.running:
            logger.debug("Presentation stopped at slide %d", self._current + 1)
        self.running = False

    def current_render_target(self) -> RenderTarget:
        idx = self._current
        return RenderTarget(idx, self._stage_index[idx], self._slides[idx])

    def _set_stage(self, slide_index: int, stage: int) -> None:
        last = self._slides[slide_index].stage_count - 1
        self._stage_index[slide_index] = max(0, min(stage, last))

    def advance(self) -> bool:
        if not self._slides:
            return False
        cur = self._stage_index[self._current]
        last = self._slides[self._current].stage_count - 1
        if cur < last:
            self._set_stage(self._current, cur + 1)
        elif self._current < len(self._slides) - 1:
            self._current += 1
        else:
            return False
        logger.debug("Advanced to slide %d stage %d", self._current + 1, self._stage_index[self._current] + 1)
        return True

    def retreat(self) -> bool:
        if not self._slides:
            return False
        cur = self._stage_index[self._current]
        if cur > 0:
            self._set_stage(self._current, cur - 1)
        elif self._current > 0:
            self._current -= 1
        else:
            return False
        logger.debug("Retreated to slide %d stage %d", self._current + 1, self._stage_index[self._current] + 1)
        return True

    def go_to(self, slide_index: int) -> bool:
        """Jump to a slide, keeping its remembered stage; out-of-range is clamped."""
        if not self._slides:
            return False
        target = max(0, min(slide_index, len(self._slides) - 1))
        if target == self._current:
            return False
        self._current = target
        return True

    def autoplay(self, policy: StagePolicy = "all") -> Iterator[RenderTarget]:
        """Yield every paint of a non-interactive run, in order.

        With ``"all"`` a staged slide is painted once per stage; otherwise each
        slide is painted once at its final stage.
        """
        for idx, slide in enumerate(self._slides):
            self._current = idx
            last = slide.stage_count - 1
            stages = range(last + 1) if slide.has_stages() and policy == "all" else [last]
            for stage in stages:
                self._set_stage(idx, stage)
                yield RenderTarget(idx, stage, slide)
