"""Presentation runtime options and their validation."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, Dict, Mapping, Optional

from .errors import ConfigValidationError
from .theme import Theme, build_default_theme, merge_theme

_STAGE_POLICIES = {"all", "final"}

_CAMEL_CASE = {
    "clearOnRender": "clear_on_render",
    "showControls": "show_controls",
    "showSlideIndicator": "show_slide_indicator",
    "showStageIndicator": "show_stage_indicator",
    "keyboardNavigation": "keyboard_navigation",
    "exitOnLastSlide": "exit_on_last_slide",
    "nonInteractiveStages": "non_interactive_stages",
}

_STR_FIELDS = ("title", "header", "footer")
_BOOL_FIELDS = (
    "clear_on_render",
    "show_controls",
    "show_slide_indicator",
    "show_stage_indicator",
    "keyboard_navigation",
    "exit_on_last_slide",
)


@dataclass
class PresenterOptions:
    """Options recognised by :class:`typeview.TypeView`.

    ``header`` and ``footer`` are defaults; a slide's own header/footer wins.
    ``non_interactive_stages`` picks whether auto-play paints every stage of a
    staged slide (``"all"``) or only its last one (``"final"``).
    """

    title: Optional[str] = None
    header: Optional[str] = None
    footer: Optional[str] = None
    clear_on_render: bool = True
    show_controls: bool = True
    show_slide_indicator: bool = True
    show_stage_indicator: bool = True
    keyboard_navigation: bool = True
    exit_on_last_slide: bool = False
    non_interactive_stages: str = "all"
    theme: Theme = field(default_factory=build_default_theme)

    @classmethod
    def from_mapping(cls, data: Optional[Mapping[str, Any]], *, prefix: str = "options") -> "PresenterOptions":
        """Validate a plain mapping (snake_case or camelCase keys) into options."""
        if data is None:
            return cls()
        if not isinstance(data, Mapping):
            raise ConfigValidationError([f"{prefix} must be an object"])

        known = {f.name for f in fields(cls)}
        values: Dict[str, Any] = {}
        issues: list[str] = []
        for key, value in data.items():
            name = _CAMEL_CASE.get(key, key)
            if name not in known:
                issues.append(f"{prefix}.{key} is not a recognised option")
                continue
            values[name] = value

        for name in _STR_FIELDS:
            value = values.get(name)
            if value is not None and not isinstance(value, str):
                issues.append(f"{prefix}.{name} must be a string when provided")

        for name in _BOOL_FIELDS:
            if name in values and not isinstance(values[name], bool):
                issues.append(f"{prefix}.{name} must be a boolean when provided")

        policy = values.get("non_interactive_stages", "all")
        if policy not in _STAGE_POLICIES:
            allowed = ", ".join(sorted(_STAGE_POLICIES))
            issues.append(f"{prefix}.non_interactive_stages '{policy}' is unsupported (supported: {allowed})")

        if "theme" in values:
            try:
                values["theme"] = merge_theme(values["theme"])
            except ConfigValidationError as exc:
                issues.extend(f"{prefix}.{issue}" for issue in exc.issues)

        if issues:
            raise ConfigValidationError(issues)
        return cls(**values)

    def merged(self, overrides: Mapping[str, Any]) -> "PresenterOptions":
        """Return a copy with the non-``None`` entries of ``overrides`` applied."""
        current = {f.name: getattr(self, f.name) for f in fields(self)}
        for key, value in overrides.items():
            if value is None:
                continue
            name = _CAMEL_CASE.get(key, key)
            if name == "theme" and isinstance(value, Mapping):
                value = merge_theme(value, base=self.theme)
            current[name] = value
        return PresenterOptions.from_mapping(current)
