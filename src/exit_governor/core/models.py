"""Domain models for exit-governor.

Termination conditions and dispositions are **frozen** dataclasses:
immutable value objects created once per run and never mutated.  The
only mutable model is :class:`ReportSlot`, the single-slot handoff
between the protective boundary and the finalizer.
"""

from __future__ import annotations

import enum
import threading
from dataclasses import dataclass
from typing import Union


# ---------------------------------------------------------------------------
# Termination conditions
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Normal:
    """The governed callable returned (or nothing was raised at all)."""


@dataclass(frozen=True, slots=True)
class UserInterrupt:
    """Ctrl-C."""

    error: BaseException | None = None


@dataclass(frozen=True, slots=True)
class AbortRequested:
    """A non-bug :class:`~exit_governor.exceptions.GenericAbort`."""

    silent: bool
    error: BaseException


@dataclass(frozen=True, slots=True)
class BugDetected:
    """A :class:`~exit_governor.exceptions.GenericAbort` flagged as a bug."""

    silent: bool
    error: BaseException


@dataclass(frozen=True, slots=True)
class OSSignal:
    """Termination by a trapped OS signal."""

    name: str
    """Signal name with the ``SIG`` prefix (e.g. ``SIGTERM``)."""

    signum: int
    error: BaseException


@dataclass(frozen=True, slots=True)
class ForcedExit:
    """``sys.exit(code)`` reached the top level."""

    code: int
    error: BaseException


@dataclass(frozen=True, slots=True)
class UncaughtFailure:
    """Anything else, which by definition was not anticipated."""

    error: BaseException


TerminationCondition = Union[
    Normal,
    UserInterrupt,
    AbortRequested,
    BugDetected,
    OSSignal,
    ForcedExit,
    UncaughtFailure,
]


# ---------------------------------------------------------------------------
# Disposition
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ExitDisposition:
    """What to do with a classified condition."""

    exit_code: int
    """Code the governed run terminates with (before OS translation)."""

    payload: BaseException | None = None
    """Exception to submit to the reporter, or ``None`` for no report."""

    @property
    def should_report(self) -> bool:
        return self.payload is not None


# ---------------------------------------------------------------------------
# Run lifecycle
# ---------------------------------------------------------------------------

class GovernorState(enum.Enum):
    """Per-run state machine.

    ``NOT_STARTED → RUNNING → {SUCCEEDED | ABORT_HANDLED | PROPAGATING}
    → FINALIZED``
    """

    NOT_STARTED = "not_started"
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    ABORT_HANDLED = "abort_handled"
    PROPAGATING = "propagating"
    FINALIZED = "finalized"


class ReportSlot:
    """Write-once / read-once holder for a reportable exception.

    Signal handlers may run between any two bytecodes of the main thread;
    every access holds the lock.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._value: BaseException | None = None
        self._written = False

    def put(self, error: BaseException) -> bool:
        """Store *error*.  Returns ``False`` if the slot was already written."""
        with self._lock:
            if self._written:
                return False
            self._value = error
            self._written = True
            return True

    def take(self) -> BaseException | None:
        """Return the stored exception and empty the slot."""
        with self._lock:
            value, self._value = self._value, None
            return value
