"""Infrastructure: turn fatal OS signals into exceptions.

By default ``SIGTERM`` and ``SIGHUP`` kill the interpreter without
unwinding the stack, so the governor would never see them.  While a
:class:`SignalTrap` is active they raise
:class:`~exit_governor.exceptions.SignalTermination` in the main thread
instead.  ``SIGINT`` is left alone; Python already raises
``KeyboardInterrupt`` for it.

Rules
-----
* Handlers are only installed from the main thread (a CPython limit).
* Previous handlers are always restored.
"""

from __future__ import annotations

import logging
import signal
import threading
from collections.abc import Iterable
from types import FrameType
from typing import Any

from exit_governor.exceptions import SignalTermination

logger = logging.getLogger(__name__)

DEFAULT_TRAPPED_SIGNALS: tuple[str, ...] = ("SIGTERM", "SIGHUP")


def _raise_termination(signum: int, frame: FrameType | None) -> None:
    raise SignalTermination(signum)


class SignalTrap:
    """Context manager installing raising handlers for *names*.

    Names the platform does not define (``SIGHUP`` on Windows) are
    skipped.
    """

    def __init__(self, names: Iterable[str] = DEFAULT_TRAPPED_SIGNALS) -> None:
        self._signums: list[int] = []
        for name in names:
            signum = getattr(signal, name, None)
            if signum is None:
                logger.debug("signal %s not available on this platform", name)
                continue
            self._signums.append(int(signum))
        self._previous: dict[int, Any] = {}

    @property
    def installed(self) -> bool:
        return bool(self._previous)

    def install(self) -> bool:
        """Install the handlers.  Returns ``False`` off the main thread."""
        if self.installed:
            return True
        if threading.current_thread() is not threading.main_thread():
            logger.debug("not on the main thread; signal traps skipped")
            return False
        for signum in self._signums:
            self._previous[signum] = signal.signal(signum, _raise_termination)
        return True

    def restore(self) -> None:
        """Put back the handlers that were active before :meth:`install`."""
        while self._previous:
            signum, handler = self._previous.popitem()
            signal.signal(signum, handler if handler is not None else signal.SIG_DFL)

    def __enter__(self) -> SignalTrap:
        self.install()
        return self

    def __exit__(self, *_args: object) -> None:
        self.restore()
