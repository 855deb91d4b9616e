"""Shared CLI utilities — Rich console, logging and error handling."""

from __future__ import annotations

import functools
import logging
import traceback
from typing import Any, Callable

from rich.console import Console
from rich.logging import RichHandler

console = Console()

# Set by the --verbose flag on the top-level CLI group.
verbose: bool = False


def configure_logging(level: int = logging.DEBUG) -> None:
    """Route package logging through Rich."""
    handler = RichHandler(console=console, show_path=False)
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    package_logger = logging.getLogger("pappascan")
    package_logger.handlers[:] = [handler]
    package_logger.setLevel(level)


def error_handler(func: Callable[..., Any]) -> Callable[..., Any]:
    """Decorator wrapping CLI commands with standard error handling.

    Catches PappascanError (exit 1) and unexpected exceptions (exit 2).
    With --verbose, unexpected errors include the full traceback.
    """

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        from pappascan.core.exceptions import PappascanError

        try:
            return func(*args, **kwargs)
        except SystemExit:
            raise
        except PappascanError as e:
            console.print(f"[red]Error:[/red] {e}")
            raise SystemExit(1)
        except Exception as e:
            if verbose:
                console.print(f"[red]Internal error:[/red] {e}")
                console.print(traceback.format_exc())
            else:
                console.print(
                    f"[red]Internal error:[/red] {type(e).__name__}: {e}\n"
                    "[dim]Use --verbose for the full traceback.[/dim]"
                )
            raise SystemExit(2)

    return wrapper


RATING_STYLES = {
    "Excellent": "bold green",
    "Average": "yellow",
    "Flat": "red",
}
