"""Inline ANSI styling for text written to plain streams.

Output that bypasses the logger (the banner on stdout) still needs
colour.  Rich renders the style into escape codes in memory; when Rich
is unavailable the text is returned unstyled.
"""

from __future__ import annotations

import io


def ansi(text: str, style: str) -> str:
    """Return *text* wrapped in the ANSI escape codes for *style*.

    *style* is any Rich style string, e.g. ``"blue italic"``.
    """
    try:
        from rich.console import Console
        from rich.text import Text
    except ModuleNotFoundError:
        return text

    console = Console(
        file=io.StringIO(),
        force_terminal=True,
        color_system="standard",
        width=max(len(text), 1),
        legacy_windows=False,
    )
    with console.capture() as capture:
        console.print(Text(text, style=style), end="", soft_wrap=True)
    return capture.get()
