"""Pure classification and exit-code policy.

Every function in this module is a **pure** transformation with no I/O,
no side effects, fully deterministic, and trivially unit-testable.

Pipeline order (enforced by the governor):

1. **Classify** — map whatever ended the run onto a
   :data:`~exit_governor.core.models.TerminationCondition`.
2. **Decide** — map the condition onto an
   :class:`~exit_governor.core.models.ExitDisposition` (first match wins).
3. **Translate** — hide the internal non-bug sentinel from the shell.
"""

from __future__ import annotations

import errno

from exit_governor import exit_codes
from exit_governor.core.models import (
    AbortRequested,
    BugDetected,
    ExitDisposition,
    ForcedExit,
    Normal,
    OSSignal,
    TerminationCondition,
    UncaughtFailure,
    UserInterrupt,
)
from exit_governor.exceptions import AbnormalExit, GenericAbort, SignalTermination

# External terminations that are expected and never reported.
BENIGN_SIGNALS: frozenset[str] = frozenset({"SIGTERM", "SIGHUP", "SIGINT"})


# ---------------------------------------------------------------------------
# 1. Classify
# ---------------------------------------------------------------------------

def exit_status(error: SystemExit) -> int:
    """Return the process status ``sys.exit`` would produce for *error*."""
    code = error.code
    if code is None:
        return exit_codes.SUCCESS
    if isinstance(code, bool):
        return int(code)
    if isinstance(code, int):
        return code
    return exit_codes.EXIT_BUG


def is_disk_full(error: BaseException) -> bool:
    """True for "no space left on device"."""
    return isinstance(error, OSError) and error.errno == errno.ENOSPC


def classify(error: BaseException | None) -> TerminationCondition:
    """Map a terminating exception (or ``None``) onto a condition."""
    if error is None:
        return Normal()
    if isinstance(error, KeyboardInterrupt):
        return UserInterrupt(error)
    if isinstance(error, GenericAbort):
        if error.bug:
            return BugDetected(silent=error.silent, error=error)
        return AbortRequested(silent=error.silent, error=error)
    if isinstance(error, SignalTermination):
        return OSSignal(name=error.name, signum=error.signum, error=error)
    if isinstance(error, SystemExit):
        return ForcedExit(code=exit_status(error), error=error)
    return UncaughtFailure(error)


# ---------------------------------------------------------------------------
# 2. Decide
# ---------------------------------------------------------------------------

def normalize_signal_name(name: str) -> str:
    """``"term"`` / ``"TERM"`` / ``"SIGTERM"`` → ``"SIGTERM"``."""
    upper = name.upper()
    return upper if upper.startswith("SIG") else f"SIG{upper}"


def abnormal_exit(error: SystemExit, status: int) -> AbnormalExit:
    """Wrap an unexpected ``sys.exit(status)``, keeping its traceback."""
    wrapped = AbnormalExit(status)
    wrapped.__cause__ = error
    return wrapped.with_traceback(error.__traceback__)


def decide(condition: TerminationCondition) -> ExitDisposition:
    """Return the exit code and report decision for *condition*."""
    if isinstance(condition, Normal):
        return ExitDisposition(exit_codes.SUCCESS)

    if isinstance(condition, (UserInterrupt, AbortRequested)):
        return ExitDisposition(exit_codes.FAILURE_NOT_BUG)

    if isinstance(condition, BugDetected):
        return ExitDisposition(exit_codes.FAILURE_NOT_BUG, condition.error)

    if isinstance(condition, OSSignal):
        code = exit_codes.SIGNAL_BASE + condition.signum
        if normalize_signal_name(condition.name) in BENIGN_SIGNALS:
            return ExitDisposition(code)
        return ExitDisposition(code, condition.error)

    if isinstance(condition, ForcedExit):
        if condition.code == exit_codes.SUCCESS:
            return ExitDisposition(exit_codes.SUCCESS)
        if condition.code == exit_codes.FAILURE_NOT_BUG:
            return ExitDisposition(exit_codes.EXIT_BUG)
        error = condition.error
        if isinstance(error, SystemExit):
            payload: BaseException = abnormal_exit(error, condition.code)
        else:
            payload = AbnormalExit(condition.code)
        return ExitDisposition(condition.code, payload)

    return ExitDisposition(exit_codes.EXIT_BUG, condition.error)


# ---------------------------------------------------------------------------
# 3. Translate
# ---------------------------------------------------------------------------

def os_exit_code(code: int) -> int:
    """Translate the internal non-bug sentinel to the conventional ``1``."""
    if code == exit_codes.FAILURE_NOT_BUG:
        return exit_codes.EXIT_BUG
    return code
