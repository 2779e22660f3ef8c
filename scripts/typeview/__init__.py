"""Terminal slide presenter with incremental stage reveal."""

from .api import present_deck_file, present_slides
from .cli import run_cli
from .config import PresenterOptions
from .deck import build_deck, load_deck, validate_deck, validate_deck_file, write_deck
from .errors import ConfigValidationError, NoSlidesError, PresentationStateError, SlideError
from .lines import normalize_to_lines, split_lines
from .navigator import Navigator, RenderTarget
from .pptx_source import load_pptx_slides
from .presenter import TypeView
from .slide import Slide
from .stage import Stage, StageContext, StageMode
from .terminal import ConsoleTerminal, Terminal
from .theme import ANSI, Theme, build_default_theme, merge_theme, plain_theme, style

__version__ = "0.1.0"

__all__ = [
    "ANSI",
    "ConfigValidationError",
    "ConsoleTerminal",
    "Navigator",
    "NoSlidesError",
    "PresentationStateError",
    "PresenterOptions",
    "RenderTarget",
    "Slide",
    "SlideError",
    "Stage",
    "StageContext",
    "StageMode",
    "Terminal",
    "Theme",
    "TypeView",
    "build_deck",
    "build_default_theme",
    "load_deck",
    "load_pptx_slides",
    "merge_theme",
    "normalize_to_lines",
    "plain_theme",
    "present_deck_file",
    "present_slides",
    "run_cli",
    "split_lines",
    "style",
    "validate_deck",
    "validate_deck_file",
    "write_deck",
]
