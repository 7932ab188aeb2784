"""OSC-8 hyperlink utilities for the TALLY CLI."""

import os
import sys
from typing import TextIO

OSC8_TERMINALS = {"apple_terminal", "vscode", "iterm.app", "wezterm", "kitty"}


def supports_osc8(stream: TextIO | None = None) -> bool:
    """Heuristically detect whether the target stream supports OSC-8 hyperlinks.

    Returns False when the stream is not a TTY. Otherwise checks a conservative
    allowlist of terminal identifiers.
    """
    stream = stream or sys.stdout
    if not getattr(stream, "isatty", lambda: False)():
        return False
    return bool(
        (os.getenv("TERM_PROGRAM") or "").lower() in OSC8_TERMINALS
        or os.getenv("WT_SESSION")  # Windows Terminal
        or os.getenv("VTE_VERSION")  # GNOME Terminal, Tilix, etc.
        or os.getenv("TERM", "").startswith(("alacritty", "konsole"))
    )


def hyperlink(url: str, label: str | None = None) -> str:
    """Render `url` as a clickable link, or as plain text when unsupported."""
    if not supports_osc8():
        return url if label is None else f"{label} ({url})"
    return f"\x1b]8;;{url}\x07{label or url}\x1b]8;;\x07"
