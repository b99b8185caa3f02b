"""Bundled :class:`~exit_governor.core.protocols.ExceptionReporter` sinks.

Remote backends live outside this package; these two cover the default
(do nothing) and local diagnostics (forward to :mod:`logging`).
"""

from __future__ import annotations

import logging


class NullExceptionReporter:
    """Reporter that discards every report."""

    def report(self, exception: BaseException | None, logs: str) -> None:
        return None


class LoggingExceptionReporter:
    """Forward reports to a stdlib logger at ERROR level.

    Parameters
    ----------
    logger:
        Destination logger.  Defaults to this module's logger.
    tail_lines:
        How many trailing log lines to include in the record.
    """

    def __init__(
        self,
        logger: logging.Logger | None = None,
        *,
        tail_lines: int = 20,
    ) -> None:
        self._logger = logger or logging.getLogger(__name__)
        self._tail_lines = tail_lines

    def report(self, exception: BaseException | None, logs: str) -> None:
        tail = "\n".join(logs.splitlines()[-self._tail_lines:])
        exc_info = None
        if exception is not None:
            exc_info = (type(exception), exception, exception.__traceback__)
        self._logger.error(
            "unexpected termination: %r\n--- log tail ---\n%s",
            exception,
            tail,
            exc_info=exc_info,
        )
