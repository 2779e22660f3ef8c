"""Console I/O for the presenter: raw-mode key reads and line output."""

from __future__ import annotations

import os
import select
import sys
from typing import Optional, Protocol, TextIO

try:
    import termios
    import tty
except ImportError:  # pragma: no cover - non-POSIX platforms
    termios = None
    tty = None

CLEAR_SCREEN = "\x1b[2J\x1b[H"

_ESCAPE_SEQUENCES = {
    "\x1b[A": "up",
    "\x1b[B": "down",
    "\x1b[C": "right",
    "\x1b[D": "left",
    "\x1b[H": "home",
    "\x1b[F": "end",
    "\x1bOH": "home",
    "\x1bOF": "end",
    "\x1b[1~": "home",
    "\x1b[4~": "end",
    "\x1b[5~": "pageup",
    "\x1b[6~": "pagedown",
}

_SINGLE_KEYS = {
    " ": "space",
    "\r": "enter",
    "\n": "enter",
    "\x1b": "escape",
    "\x03": "ctrl-c",
    "\x04": "eof",
}

KEY_ACTIONS = {
    "q": "quit",
    "escape": "quit",
    "ctrl-c": "quit",
    "eof": "quit",
    "space": "next",
    "right": "next",
    "enter": "next",
    "pagedown": "next",
    "l": "next",
    "n": "next",
    "left": "previous",
    "pageup": "previous",
    "h": "previous",
    "p": "previous",
    "home": "first",
    "end": "last",
}


def decode_key(raw: str) -> str:
    """Map a raw chunk read from the terminal to a key name."""
    if raw == "":
        return "eof"
    if raw in _ESCAPE_SEQUENCES:
        return _ESCAPE_SEQUENCES[raw]
    if raw in _SINGLE_KEYS:
        return _SINGLE_KEYS[raw]
    if len(raw) == 1:
        return raw.lower()
    return raw


def action_for_key(key: str) -> Optional[str]:
    """Navigation action bound to ``key`` (``None`` when unbound)."""
    return KEY_ACTIONS.get(key)


class Terminal(Protocol):
    def is_interactive(self) -> bool: ...

    def clear_screen(self) -> None: ...

    def write_line(self, text: str) -> None: ...

    def set_raw_mode(self, enabled: bool) -> None: ...

    def read_key(self) -> str: ...


class ConsoleTerminal:
    """Terminal backed by the process stdin/stdout."""

    def __init__(self, stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None):
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout
        self._saved_mode = None

    def is_interactive(self) -> bool:
        if termios is None:
            return False
        try:
            return self.stdin.isatty() and self.stdout.isatty()
        except (AttributeError, ValueError):
            return False

    def clear_screen(self) -> None:
        self.stdout.write(CLEAR_SCREEN)
        self.stdout.flush()

    def write_line(self, text: str) -> None:
        # raw mode disables output post-processing, so newlines need a carriage return
        ending = "\r\n" if self._saved_mode is not None else "\n"
        self.stdout.write(text.replace("\n", ending) + ending)
        self.stdout.flush()

    def set_raw_mode(self, enabled: bool) -> None:
        if termios is None:
            return
        fd = self.stdin.fileno()
        if enabled and self._saved_mode is None:
            self._saved_mode = termios.tcgetattr(fd)
            tty.setraw(fd)
        elif not enabled and self._saved_mode is not None:
            termios.tcsetattr(fd, termios.TCSADRAIN, self._saved_mode)
            self._saved_mode = None

    def read_key(self) -> str:
        """Block until a key arrives; escape sequences are read as one key."""
        fd = self.stdin.fileno()
        data = os.read(fd, 1)
        if data == b"\x1b":
            while len(data) < 8:
                ready, _, _ = select.select([fd], [], [], 0.05)
                if not ready:
                    break
                data += os.read(fd, 1)
                if len(data) >= 3 and (data[-1:].isalpha() or data[-1:] == b"~"):
                    break
        return decode_key(data.decode("utf-8", errors="replace"))
