"""Present a JSON deck or a PPTX file as slides in the terminal.

Usage:
    python scripts/present.py --deck assets/sample_deck.json
    python scripts/present.py --pptx path/to/deck.pptx --stages final
"""

from __future__ import annotations

from typeview import run_cli

if __name__ == "__main__":
    run_cli()
