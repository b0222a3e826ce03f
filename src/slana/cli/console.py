"""Rich consoles shared by the CLI layer.

Consoles are created on each call rather than at import time so that
tests capturing ``sys.stderr`` / ``sys.stdout`` see the output.
"""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape

from slana.exceptions import SlanaError


def err_console() -> Console:
    """Console writing to stderr, used for errors and diagnostics."""
    return Console(stderr=True, highlight=False)


def render_error(error: BaseException) -> None:
    """Write the error banner for *error* to stderr::

        Error:
          ✗ <message>
    """
    console = err_console()
    console.print()
    console.print("[red]Error:[/red]")
    console.print(f"  [red]✗[/red] [bold]{escape(str(error))}[/bold]")
    hint = error.hint if isinstance(error, SlanaError) else None
    if hint:
        console.print(f"  [yellow]Hint:[/yellow] {escape(hint)}")
    console.print()
