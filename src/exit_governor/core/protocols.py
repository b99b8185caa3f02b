"""Protocols (interfaces) consumed by the governor.

These define the contracts that infrastructure adapters must satisfy.
The governor depends ONLY on these protocols, never on concrete
implementations, so every collaborator can be swapped in tests.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Protocol, Union


class ExceptionReporter(Protocol):
    """Contract for remote error-reporting sinks.

    Any object that implements :meth:`report` with the correct signature
    satisfies this protocol structurally (no explicit inheritance
    required).
    """

    def report(self, exception: BaseException | None, logs: str) -> None:
        """Submit *exception* together with the captured run *logs*.

        Implementations must not raise.
        """
        ...  # pragma: no cover


ExceptionReporterOrFactory = Union[ExceptionReporter, Callable[[], ExceptionReporter]]
"""A reporter, or a zero-argument factory resolved on first use."""


class TerminalOutput(Protocol):
    """Contract for the styled error stream.

    Implementations may raise :class:`BrokenPipeError` when stderr is
    closed; the governor swallows it.
    """

    def print_error(self, message: str, *, hint: str | None = None) -> None:
        """Render *message* (and an optional *hint*) as an error."""
        ...  # pragma: no cover

    def print_exception(self, error: BaseException) -> None:
        """Render *error* with its traceback."""
        ...  # pragma: no cover


LogReader = Callable[[Path], str]
"""Return the captured run log; must never raise."""
