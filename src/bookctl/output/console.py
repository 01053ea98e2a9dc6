"""Rich Console factory and theme for bookctl output.

Consoles render to a StringIO buffer so renderers stay ``-> str``.
In non-TTY environments (tests, pipes) Rich disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

BOOK_THEME = Theme(
    {
        "book.ok": "bold green",
        "book.error": "bold red",
        "book.warning": "bold yellow",
        "book.op": "bold cyan",
        "book.key": "dim",
        "book.path": "dim",
        "book.rebuilt": "green",
        "book.current": "dim",
        "book.kind.diagram": "magenta",
        "book.kind.fragment": "blue",
        "book.kind.document": "bold",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer."""
    return Console(
        file=StringIO(),
        theme=BOOK_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()
