"""Custom exception hierarchy for exit-governor.

Hierarchy
---------
GovernorError
├── MissingDependencyError
├── ConfigurationError
├── TargetImportError
├── AbnormalExit
└── GenericAbort
    ├── Abort
    ├── AbortSilent
    ├── Bug
    └── BugSilent

SignalTermination (BaseException)

:class:`GenericAbort` is the control-flow abort raised by governed tools.
Whether an abort is a bug and whether it is printed are two independent
flags; the four subclasses only change their defaults.
"""

from __future__ import annotations

import signal


class GovernorError(Exception):
    """Base exception for all exit-governor errors."""

    def __init__(self, message: str = "", *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


class MissingDependencyError(GovernorError):
    """Raised when an optional third-party package is not installed."""


class ConfigurationError(GovernorError):
    """Raised when a governor is constructed with an invalid configuration."""


class TargetImportError(GovernorError):
    """Raised when a ``module:attr`` reference cannot be imported."""


class AbnormalExit(GovernorError):
    """Reportable stand-in for ``sys.exit(N)`` with an unexpected status."""

    def __init__(self, status: int) -> None:
        super().__init__(f"abnormal termination status: {status}")
        self.status: int = status


# --- Control-flow aborts ---------------------------------------------------

class GenericAbort(GovernorError):
    """Controlled termination requested by the governed tool.

    Parameters
    ----------
    message:
        Text printed to stderr unless *silent*.
    bug:
        When true the abort is forwarded to the exception reporter.
    silent:
        When true nothing is printed.
    hint:
        Optional guidance printed under the message.
    """

    default_bug: bool = False
    default_silent: bool = False

    def __init__(
        self,
        message: str = "",
        *,
        bug: bool | None = None,
        silent: bool | None = None,
        hint: str | None = None,
    ) -> None:
        super().__init__(message, hint=hint)
        self.bug: bool = self.default_bug if bug is None else bug
        self.silent: bool = self.default_silent if silent is None else silent


class Abort(GenericAbort):
    """Expected failure, e.g. invalid user input.  Printed, not reported."""


class AbortSilent(GenericAbort):
    """Expected failure that has already been explained to the user."""

    default_silent = True


class Bug(GenericAbort):
    """Failure caused by a defect.  Printed and reported."""

    default_bug = True


class BugSilent(GenericAbort):
    """Defect worth reporting that the user should not be told about."""

    default_bug = True
    default_silent = True


# --- Signals ---------------------------------------------------------------

class SignalTermination(BaseException):
    """Raised in the main thread when a trapped OS signal arrives.

    Derives from :class:`BaseException` so that ``except Exception``
    blocks in governed code do not swallow it, like ``KeyboardInterrupt``.
    """

    def __init__(self, signum: int) -> None:
        self.signum: int = signum
        self.name: str = signal_name(signum)
        super().__init__(self.name)


def signal_name(signum: int) -> str:
    """Return ``"SIGTERM"``-style names, or ``"SIG<n>"`` when unknown."""
    try:
        return signal.Signals(signum).name
    except ValueError:
        return f"SIG{signum}"
