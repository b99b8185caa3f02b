"""Tests for the pure classification policy (core/policy.py).

Coverage:
* ``classify`` for every termination shape.
* ``decide`` — the full priority table.
* ``os_exit_code`` sentinel translation.
* Abnormal-exit wrapping keeps the original traceback.
"""

from __future__ import annotations

import errno
import signal

import pytest

from exit_governor import exit_codes
from exit_governor.core.models import (
    AbortRequested,
    BugDetected,
    ExitDisposition,
    ForcedExit,
    Normal,
    OSSignal,
    UncaughtFailure,
    UserInterrupt,
)
from exit_governor.core.policy import (
    abnormal_exit,
    classify,
    decide,
    exit_status,
    is_disk_full,
    normalize_signal_name,
    os_exit_code,
)
from exit_governor.exceptions import (
    AbnormalExit,
    Abort,
    AbortSilent,
    Bug,
    BugSilent,
    SignalTermination,
)


# ---------------------------------------------------------------------------
# classify
# ---------------------------------------------------------------------------

class TestClassify:
    def test_none_is_normal(self) -> None:
        assert classify(None) == Normal()

    def test_keyboard_interrupt(self) -> None:
        assert isinstance(classify(KeyboardInterrupt()), UserInterrupt)

    @pytest.mark.parametrize(
        ("error", "silent"),
        [(Abort("no"), False), (AbortSilent("no"), True)],
    )
    def test_abort(self, error: Abort, silent: bool) -> None:
        condition = classify(error)
        assert isinstance(condition, AbortRequested)
        assert condition.silent is silent
        assert condition.error is error

    @pytest.mark.parametrize(
        ("error", "silent"),
        [(Bug("no"), False), (BugSilent("no"), True)],
    )
    def test_bug(self, error: Bug, silent: bool) -> None:
        condition = classify(error)
        assert isinstance(condition, BugDetected)
        assert condition.silent is silent

    def test_flagged_abort_is_bug(self) -> None:
        assert isinstance(classify(Abort("x", bug=True)), BugDetected)

    def test_signal(self) -> None:
        condition = classify(SignalTermination(signal.SIGTERM))
        assert isinstance(condition, OSSignal)
        assert condition.name == "SIGTERM"
        assert condition.signum == signal.SIGTERM

    @pytest.mark.parametrize(
        ("code", "expected"),
        [(None, 0), (0, 0), (3, 3), (30, 30), ("fatal", 1)],
    )
    def test_system_exit(self, code: object, expected: int) -> None:
        condition = classify(SystemExit(code))
        assert isinstance(condition, ForcedExit)
        assert condition.code == expected

    def test_anything_else_is_uncaught(self) -> None:
        error = ZeroDivisionError("division by zero")
        condition = classify(error)
        assert isinstance(condition, UncaughtFailure)
        assert condition.error is error

    def test_disk_full_is_not_special_here(self) -> None:
        assert isinstance(classify(OSError(errno.ENOSPC, "full")), UncaughtFailure)


class TestHelpers:
    def test_is_disk_full(self) -> None:
        assert is_disk_full(OSError(errno.ENOSPC, "No space left on device"))
        assert not is_disk_full(OSError(errno.EACCES, "Permission denied"))
        assert not is_disk_full(ValueError("nope"))

    def test_exit_status_bool(self) -> None:
        assert exit_status(SystemExit(True)) == 1

    @pytest.mark.parametrize("name", ["TERM", "term", "SIGTERM", "sigterm"])
    def test_normalize_signal_name(self, name: str) -> None:
        assert normalize_signal_name(name) == "SIGTERM"


# ---------------------------------------------------------------------------
# decide
# ---------------------------------------------------------------------------

class TestDecide:
    def test_normal(self) -> None:
        assert decide(Normal()) == ExitDisposition(exit_codes.SUCCESS)

    def test_user_interrupt_not_reported(self) -> None:
        disposition = decide(UserInterrupt(KeyboardInterrupt()))
        assert disposition.exit_code == exit_codes.FAILURE_NOT_BUG
        assert not disposition.should_report

    @pytest.mark.parametrize("silent", [True, False])
    def test_abort_not_reported(self, silent: bool) -> None:
        disposition = decide(AbortRequested(silent=silent, error=Abort("x")))
        assert disposition.exit_code == exit_codes.FAILURE_NOT_BUG
        assert disposition.payload is None

    @pytest.mark.parametrize("silent", [True, False])
    def test_bug_reported(self, silent: bool) -> None:
        error = Bug("x")
        disposition = decide(BugDetected(silent=silent, error=error))
        assert disposition.exit_code == exit_codes.FAILURE_NOT_BUG
        assert disposition.payload is error

    @pytest.mark.parametrize(
        ("name", "signum"),
        [("SIGTERM", 15), ("SIGHUP", 1), ("SIGINT", 2), ("TERM", 15), ("HUP", 1)],
    )
    def test_benign_signals_not_reported(self, name: str, signum: int) -> None:
        disposition = decide(OSSignal(name=name, signum=signum, error=RuntimeError()))
        assert disposition.payload is None
        assert disposition.exit_code == 128 + signum

    @pytest.mark.parametrize(("name", "signum"), [("SIGUSR1", 10), ("SIGQUIT", 3)])
    def test_other_signals_reported_as_is(self, name: str, signum: int) -> None:
        error = RuntimeError(name)
        disposition = decide(OSSignal(name=name, signum=signum, error=error))
        assert disposition.payload is error
        assert disposition.exit_code == 128 + signum

    def test_forced_exit_success(self) -> None:
        disposition = decide(ForcedExit(code=0, error=SystemExit(0)))
        assert disposition == ExitDisposition(exit_codes.SUCCESS)

    def test_forced_exit_sentinel_translated_to_one(self) -> None:
        disposition = decide(ForcedExit(code=30, error=SystemExit(30)))
        assert disposition.exit_code == 1
        assert not disposition.should_report

    def test_forced_exit_other_code_reported(self) -> None:
        original = SystemExit(42)
        disposition = decide(ForcedExit(code=42, error=original))
        assert disposition.exit_code == 42
        assert isinstance(disposition.payload, AbnormalExit)
        assert "42" in str(disposition.payload)
        assert disposition.payload.__cause__ is original

    def test_uncaught_reported_as_is(self) -> None:
        error = ZeroDivisionError("division by zero")
        disposition = decide(UncaughtFailure(error))
        assert disposition.exit_code == exit_codes.EXIT_BUG
        assert disposition.payload is error


class TestAbnormalExit:
    def test_keeps_traceback(self) -> None:
        try:
            raise SystemExit(42)
        except SystemExit as exc:
            original = exc
        wrapped = abnormal_exit(original, 42)
        assert wrapped.__traceback__ is original.__traceback__
        assert str(wrapped) == "abnormal termination status: 42"


# ---------------------------------------------------------------------------
# os_exit_code
# ---------------------------------------------------------------------------

class TestOsExitCode:
    @pytest.mark.parametrize(
        ("code", "expected"),
        [(0, 0), (1, 1), (30, 1), (42, 42), (143, 143)],
    )
    def test_translation(self, code: int, expected: int) -> None:
        assert os_exit_code(code) == expected
