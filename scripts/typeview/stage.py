"""Stage model: one incremental reveal step within a slide body."""

from __future__ import annotations

import inspect
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Awaitable, Callable, Mapping, Optional, Union

from .errors import SlideError
from .lines import Content, normalize_to_lines

if TYPE_CHECKING:
    from .slide import Slide


class StageMode(str, Enum):
    """How a stage combines with the slide's base content and earlier stages.

    Base content is always shown when a slide has stages.

    - ``replace``: base + only the current stage
    - ``append``: base + only the current stage (no carry-over)
    - ``accumulate``: base + every stage from 0 through the current one
    """

    REPLACE = "replace"
    APPEND = "append"
    ACCUMULATE = "accumulate"

    @classmethod
    def parse(cls, value: Union["StageMode", str, None]) -> "StageMode":
        if value is None:
            return cls.ACCUMULATE
        if isinstance(value, cls):
            return value
        normalized = str(value).strip().lower()
        for mode in cls:
            if mode.value == normalized:
                return mode
        allowed = ", ".join(m.value for m in cls)
        raise SlideError(f"Unsupported stage mode '{value}' (supported: {allowed})")


@dataclass(frozen=True)
class StageContext:
    """Arguments handed to a stage renderer."""

    stage: int
    total_stages: int
    slide: "Slide"


RenderResult = Optional[Content]
StageRender = Callable[[StageContext], Union[RenderResult, Awaitable[RenderResult]]]


async def resolve(value: Any) -> Any:
    """Await ``value`` when a renderer handed back an awaitable."""
    if inspect.isawaitable(value):
        return await value
    return value


@dataclass(frozen=True)
class Stage:
    content: Optional[Content] = None
    render: Optional[StageRender] = None
    mode: StageMode = StageMode.ACCUMULATE

    def __post_init__(self) -> None:
        object.__setattr__(self, "mode", StageMode.parse(self.mode))
        if isinstance(self.content, list):
            object.__setattr__(self, "content", tuple(self.content))
        if self.render is not None and not callable(self.render):
            raise SlideError("Stage render must be callable")

    @classmethod
    def from_value(cls, value: Any) -> "Stage":
        """Build a stage from a Stage, a mapping, or bare content."""
        if isinstance(value, Stage):
            return value
        if isinstance(value, str) or isinstance(value, (list, tuple)):
            return cls(content=value)
        if isinstance(value, Mapping):
            unknown = set(value) - {"content", "render", "mode"}
            if unknown:
                raise SlideError(f"Unknown stage field(s): {', '.join(sorted(unknown))}")
            return cls(content=value.get("content"), render=value.get("render"), mode=value.get("mode"))
        raise SlideError(f"Cannot build a stage from {type(value).__name__}")

    async def contribution(self, ctx: StageContext) -> list[str]:
        """Lines this stage adds; a renderer takes precedence over static content."""
        if self.render is not None:
            out = await resolve(self.render(ctx))
            return normalize_to_lines(out)
        return normalize_to_lines(self.content)
