"""Slide entity and the stage resolver that builds its body text."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Iterable, Mapping, Optional, Union

from .errors import SlideError
from .lines import Content, join_content, normalize_to_lines
from .stage import Stage, StageContext, StageMode, resolve

SlideRender = Callable[[], Union[Optional[str], Awaitable[Optional[str]]]]

_SLIDE_FIELDS = {"title", "header", "footer", "content", "stages", "render"}


@dataclass(frozen=True)
class Unstaged:
    """Body comes from a legacy renderer, or from the base content when there is none."""

    render: Optional[SlideRender] = None


@dataclass(frozen=True)
class Staged:
    """Body comes from base content plus an ordered list of stages."""

    stages: tuple[Stage, ...]


class Slide:
    """One titled unit of presentation content, optionally split into stages.

    Slides are immutable once built. When stages are given they always
    control rendering and any ``render`` callable is ignored.
    """

    __slots__ = ("title", "header", "footer", "_content", "_source")

    def __init__(
        self,
        title: str,
        *,
        header: Optional[str] = None,
        footer: Optional[str] = None,
        content: Optional[Content] = None,
        stages: Optional[Iterable[Any]] = None,
        render: Optional[SlideRender] = None,
    ):
        if not isinstance(title, str) or not title:
            raise SlideError("Slide requires a title.")
        if render is not None and not callable(render):
            raise SlideError("Slide render must be callable")

        if isinstance(stages, str):
            raise SlideError("Slide stages must be a list of stages, not a single string")
        built = tuple(Stage.from_value(s) for s in stages) if stages else ()
        set_ = object.__setattr__
        set_(self, "title", title)
        set_(self, "header", header)
        set_(self, "footer", footer)
        set_(self, "_content", tuple(content) if isinstance(content, list) else content)
        set_(self, "_source", Staged(built) if built else Unstaged(render))

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"Slide is immutable; cannot set '{name}'")

    def __repr__(self) -> str:
        return f"Slide(title={self.title!r}, stages={len(self.stages)})"

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "Slide":
        if not isinstance(data, Mapping):
            raise SlideError("Slide definition must be a mapping")
        unknown = set(data) - _SLIDE_FIELDS
        if unknown:
            raise SlideError(f"Unknown slide field(s): {', '.join(sorted(unknown))}")
        return cls(
            data.get("title"),  # type: ignore[arg-type]
            header=data.get("header"),
            footer=data.get("footer"),
            content=data.get("content"),
            stages=data.get("stages"),
            render=data.get("render"),
        )

    @property
    def content(self) -> Optional[Content]:
        return self._content

    @property
    def stages(self) -> tuple[Stage, ...]:
        if isinstance(self._source, Staged):
            return self._source.stages
        return ()

    @property
    def stage_count(self) -> int:
        return max(1, len(self.stages))

    def has_stages(self) -> bool:
        return isinstance(self._source, Staged)

    async def render_stage(self, stage: int) -> str:
        """Compute the full body text for ``stage`` (clamped into range)."""
        source = self._source
        if isinstance(source, Unstaged):
            if source.render is None:
                return join_content(self._content)
            body = await resolve(source.render())
            return body if isinstance(body, str) else ""

        stages = source.stages
        index = max(0, min(stage, len(stages) - 1))
        ctx = StageContext(stage=index, total_stages=len(stages), slide=self)
        lines = normalize_to_lines(self._content)

        if stages[index].mode is StageMode.ACCUMULATE:
            for st in stages[: index + 1]:
                lines.extend(await st.contribution(ctx))
        else:
            # replace and append both show base + the current stage only
            lines.extend(await stages[index].contribution(ctx))
        return "\n".join(lines)
