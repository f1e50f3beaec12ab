"""CLI console and logging helpers with optional Rich support.

This module avoids module-level imports of Rich so bootstrap paths
(``--help``, ``--version``) remain functional even when Rich is not
installed.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

from srcpm.exceptions import EnvironmentError, SrcpmError

LOGGER_NAME: str = "srcpm"


def _load_rich_console_class() -> type[Any]:
    """Return ``rich.console.Console`` class or raise ``EnvironmentError``."""
    try:
        from rich.console import Console
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "rich is not installed. Install with: pip install rich",
        ) from exc
    return Console


def get_rich_console() -> Any:
    """Create a Rich console instance targeting stderr."""
    console_class = _load_rich_console_class()
    return console_class(stderr=True)


class _ConsoleProxy:
    """Minimal ``print``-compatible proxy with Rich fallback."""

    def print(self, *objects: object) -> None:
        """Render with Rich when available, else plain stderr print."""
        try:
            rich_console = get_rich_console()
        except EnvironmentError:
            print(*objects, file=sys.stderr)
            return
        rich_console.print(*objects)


console = _ConsoleProxy()


def report_error(exc: SrcpmError) -> None:
    """Render a known error and its hint."""
    console.print(f"[bold red]Error:[/bold red] {exc}")
    if exc.hint:
        console.print(f"[yellow]Hint:[/yellow] {exc.hint}")


def _build_handler() -> logging.Handler:
    try:
        from rich.logging import RichHandler

        return RichHandler(
            console=get_rich_console(),
            show_time=False,
            show_path=False,
            markup=False,
        )
    except (ModuleNotFoundError, EnvironmentError):
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
        return handler


def configure_logging(verbosity: int = 0) -> logging.Logger:
    """Attach a single handler to the ``srcpm`` logger.

    *verbosity* below zero shows warnings only; zero shows progress
    (INFO); above zero adds DEBUG output.
    """
    if verbosity < 0:
        level = logging.WARNING
    elif verbosity == 0:
        level = logging.INFO
    else:
        level = logging.DEBUG

    logger = logging.getLogger(LOGGER_NAME)
    for existing in list(logger.handlers):
        logger.removeHandler(existing)
    logger.addHandler(_build_handler())
    logger.setLevel(level)
    logger.propagate = False
    return logger
