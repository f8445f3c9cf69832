"""
Logging and error reporting for the CLI
"""

import logging
import traceback
from typing import List

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from ..core.errors import ComponentError, PurgeError

console = Console(stderr=True)

_DEBUG_MODE = False


def setup_logging(debug: bool = False):
    """Route all logging through rich on stderr; DEBUG level with --debug"""
    global _DEBUG_MODE
    _DEBUG_MODE = debug

    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[
            RichHandler(
                console=console,
                rich_tracebacks=True,
                tracebacks_show_locals=debug,
                show_time=debug,
                show_path=debug
            )
        ],
        force=True
    )

    logging.getLogger("docker").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)


def error_chain(e: BaseException) -> List[str]:
    """One line per link of an error and its causes, outermost first"""
    lines = []
    current = e
    while current is not None:
        if isinstance(current, ComponentError):
            lines.append(current.message)
        else:
            lines.append(f"{type(current).__name__}: {current}")
        current = current.__cause__
    return lines


def log_exception(e: Exception, context: str = ""):
    """Report a failed operation, with its cause chain"""
    if context:
        console.print(f"[red]❌ {context}[/red]")

    if isinstance(e, PurgeError):
        console.print(f"[yellow]Purge stopped at stage: {e.stage}[/yellow]")

    for depth, line in enumerate(error_chain(e)):
        prefix = "Error: " if depth == 0 else "  " * depth + "caused by: "
        console.print(f"[red]{prefix}{escape(line)}[/red]", highlight=False)

    if _DEBUG_MODE:
        console.print("[dim]Stack trace:[/dim]")
        console.print("".join(traceback.format_exception(type(e), e, e.__traceback__)), markup=False)
    else:
        console.print("[yellow]💡 Tip: Run with --debug flag for detailed stack trace[/yellow]")


def debug_print(message: str):
    """Print debug message only in debug mode"""
    if _DEBUG_MODE:
        console.print(f"[dim cyan]DEBUG: {message}[/dim cyan]")
