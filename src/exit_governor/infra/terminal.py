"""Styled stderr output with optional Rich support.

This module intentionally avoids module-level imports of Rich so the
governor keeps working (with plain text) when Rich is not installed.
"""

from __future__ import annotations

import sys
import traceback
from typing import Any

from exit_governor.exceptions import MissingDependencyError


def _load_rich_console_class() -> type[Any]:
    """Return a ``rich.console.Console`` subclass or raise ``MissingDependencyError``.

    Rich's default reaction to a closed pipe is ``SystemExit(1)``; the
    subclass hands the :class:`BrokenPipeError` back to the caller.
    """
    try:
        from rich.console import Console
    except ModuleNotFoundError as exc:
        raise MissingDependencyError(
            "rich is not installed. Install with: pip install rich",
        ) from exc

    class StderrConsole(Console):
        def on_broken_pipe(self) -> None:
            self.quiet = True
            raise  # the active BrokenPipeError

    return StderrConsole


def get_rich_console() -> Any:
    """Create a Rich console instance targeting stderr."""
    console_class = _load_rich_console_class()
    return console_class(stderr=True)


class RichTerminalOutput:
    """:class:`~exit_governor.core.protocols.TerminalOutput` backed by Rich.

    A fresh stderr console is created per call unless one is injected, so
    a replaced ``sys.stderr`` (pytest's ``capsys``) is always honoured.
    Write failures such as :class:`BrokenPipeError` propagate to the
    caller.
    """

    def __init__(self, console: Any | None = None) -> None:
        self._console = console

    def _get_console(self) -> Any | None:
        if self._console is not None:
            return self._console
        try:
            return get_rich_console()
        except MissingDependencyError:
            return None

    def print_error(self, message: str, *, hint: str | None = None) -> None:
        """Render *message* in red, with an optional yellow hint line."""
        console = self._get_console()
        if console is None:
            print(message, file=sys.stderr)
            if hint:
                print(f"Hint: {hint}", file=sys.stderr)
            return

        from rich.markup import escape

        console.print(f"[red]{escape(message)}[/red]")
        if hint:
            console.print(f"[yellow]Hint:[/yellow] {escape(hint)}")

    def print_exception(self, error: BaseException) -> None:
        """Render *error* with its traceback, as the interpreter would."""
        console = self._get_console()
        if console is None:
            traceback.print_exception(
                type(error), error, error.__traceback__, file=sys.stderr,
            )
            return

        from rich.traceback import Traceback

        console.print(
            Traceback.from_exception(type(error), error, error.__traceback__),
        )
