"""CLI orchestration for the terminal presenter."""

from __future__ import annotations

import argparse
import logging
import traceback
from pathlib import Path
from typing import Optional, Sequence

from .api import present_slides
from .deck import load_deck
from .errors import ConfigValidationError
from .pptx_source import load_pptx_slides
from .theme import plain_theme


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Present slides in the terminal from a JSON deck or a PPTX file")
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--deck", help="Path to JSON deck file")
    source.add_argument("--pptx", help="Path to a .pptx file to present as text")
    parser.add_argument("--title", default=None, help="Presentation title shown next to the slide indicator")
    parser.add_argument("--header", default=None, help="Default header for every slide")
    parser.add_argument("--footer", default=None, help="Default footer for every slide")
    parser.add_argument("--no-clear", action="store_true", help="Do not clear the screen before each slide")
    parser.add_argument("--no-controls", action="store_true", help="Hide the navigation controls line")
    parser.add_argument("--no-indicators", action="store_true", help="Hide slide and stage indicators")
    parser.add_argument(
        "--no-keyboard",
        action="store_true",
        help="Disable keyboard navigation and auto-play the deck even on a terminal",
    )
    parser.add_argument("--exit-on-last", action="store_true", help="Exit when pressing next on the last slide")
    parser.add_argument(
        "--stages",
        default=None,
        choices=["all", "final"],
        help='Non-interactive mode: print every stage or only the final one (default: "all")',
    )
    parser.add_argument("--no-color", action="store_true", help="Print without ANSI styling")
    parser.add_argument("--flat", action="store_true", help="PPTX: show all bullets at once instead of staging them")
    parser.add_argument("--verbose", action="store_true", help="Log navigation details to stderr")
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Show full traceback for unexpected errors",
    )
    return parser


def run_cli(argv: Optional[Sequence[str]] = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    try:
        if args.deck:
            options, slides = load_deck(Path(args.deck).resolve())
        else:
            options, slides = None, load_pptx_slides(Path(args.pptx).resolve(), staged=not args.flat)

        overrides = {
            "title": args.title,
            "header": args.header,
            "footer": args.footer,
            "non_interactive_stages": args.stages,
            "clear_on_render": False if args.no_clear else None,
            "show_controls": False if args.no_controls else None,
            "show_slide_indicator": False if args.no_indicators else None,
            "show_stage_indicator": False if args.no_indicators else None,
            "keyboard_navigation": False if args.no_keyboard else None,
            "exit_on_last_slide": True if args.exit_on_last else None,
            "theme": plain_theme() if args.no_color else None,
        }
        present_slides(slides, options=options, **overrides)
    except ConfigValidationError as e:
        raise SystemExit(str(e)) from e
    except Exception as e:
        if args.debug:
            traceback.print_exc()
        raise SystemExit(f"Presentation failed: {e}") from e
