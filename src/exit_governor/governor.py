"""The exit governor — top-level error boundary for command-line tools.

This module is the **only** place that decides how a governed run ends.
It wraps the tool's entry point, handles the expected failure modes
itself (aborts, Ctrl-C, a full disk), and hands everything else to a
finalizer that classifies the termination, submits a report when the
termination looks like a bug, and returns the exit code.

Architecture notes
------------------
* Classification and exit codes come from :mod:`exit_governor.core.policy`;
  nothing here re-implements the table.
* Collaborators (terminal output, log reader, exception reporter) are
  injected through :class:`GovernorConfig`.
* Secondary failures while handling a primary one (closed stderr,
  unreadable log, failing reporter) are swallowed; the governor must
  never fail while reporting a failure.
"""

from __future__ import annotations

import atexit
import logging
import sys
import threading
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import NoReturn

from exit_governor import exit_codes
from exit_governor.core.models import (
    ExitDisposition,
    GovernorState,
    ReportSlot,
    UncaughtFailure,
)
from exit_governor.core.policy import classify, decide, is_disk_full, os_exit_code
from exit_governor.core.protocols import (
    ExceptionReporter,
    ExceptionReporterOrFactory,
    LogReader,
    TerminalOutput,
)
from exit_governor.exceptions import ConfigurationError, GenericAbort, GovernorError
from exit_governor.infra.log_reader import read_log_file
from exit_governor.infra.reporters import NullExceptionReporter
from exit_governor.infra.signals import SignalTrap
from exit_governor.infra.terminal import RichTerminalOutput

logger = logging.getLogger(__name__)

# Raised by a closed (ValueError) or broken (BrokenPipeError) stderr.
_STREAM_ERRORS: tuple[type[Exception], ...] = (OSError, ValueError)


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class GovernorConfig:
    """Immutable, construction-time configuration of a :class:`Governor`."""

    log_file: Path | str
    """Log artifact attached to error reports."""

    exception_reporter: ExceptionReporterOrFactory = field(
        default_factory=NullExceptionReporter,
    )
    """A reporter, or a zero-argument factory resolved on first report."""

    tool_name: str | None = None
    """Shown in the disk-full message."""

    output: TerminalOutput = field(default_factory=RichTerminalOutput)
    log_reader: LogReader = read_log_file
    trap_signals: bool = True
    """Raise ``SignalTermination`` on SIGTERM/SIGHUP while running."""

    def __post_init__(self) -> None:
        if isinstance(self.log_file, str) and not self.log_file.strip():
            raise ConfigurationError("log_file must not be empty.")
        reporter = self.exception_reporter
        if not hasattr(reporter, "report") and not callable(reporter):
            raise ConfigurationError(
                f"exception_reporter must be a reporter or a factory, "
                f"got {type(reporter).__name__}",
                hint="Pass an object with a report(exception, logs) method.",
            )

    @property
    def log_path(self) -> Path:
        return Path(self.log_file)


# ---------------------------------------------------------------------------
# Governor
# ---------------------------------------------------------------------------

class Governor:
    """Run a tool's body and govern how the process terminates.

    One governor is created per process invocation.  Typical use::

        governor = Governor.from_options(log_file="/tmp/mytool.log")
        governor.run_and_exit(main)

    Parameters
    ----------
    config:
        See :class:`GovernorConfig`.
    """

    def __init__(self, config: GovernorConfig) -> None:
        self._config: GovernorConfig = config
        self._state: GovernorState = GovernorState.NOT_STARTED
        self._slot = ReportSlot()
        self._lock = threading.Lock()
        self._finalized = False
        self._final_code: int = exit_codes.SUCCESS
        self._reporter: ExceptionReporter | None = None
        self._installed = False
        self._signal_trap: SignalTrap | None = (
            SignalTrap() if config.trap_signals else None
        )

    @classmethod
    def from_options(
        cls,
        *,
        log_file: Path | str,
        exception_reporter: ExceptionReporterOrFactory | None = None,
        tool_name: str | None = None,
        output: TerminalOutput | None = None,
        log_reader: LogReader = read_log_file,
        trap_signals: bool = True,
    ) -> Governor:
        """Build a governor without spelling out a :class:`GovernorConfig`."""
        if exception_reporter is None:
            exception_reporter = NullExceptionReporter()
        if output is None:
            output = RichTerminalOutput()
        config = GovernorConfig(
            log_file=log_file,
            exception_reporter=exception_reporter,
            tool_name=tool_name,
            output=output,
            log_reader=log_reader,
            trap_signals=trap_signals,
        )
        return cls(config)

    @property
    def config(self) -> GovernorConfig:
        return self._config

    @property
    def state(self) -> GovernorState:
        return self._state

    # ------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------

    def run(self, func: Callable[[], object]) -> int:
        """Execute *func* under the governor and return the exit code.

        The returned code may be :data:`~exit_governor.exit_codes.FAILURE_NOT_BUG`;
        pass it through :func:`~exit_governor.core.policy.os_exit_code`
        (or use :meth:`run_and_exit`) before handing it to the OS.

        Raises
        ------
        GovernorError
            If this governor has already run.
        """
        if self._state is not GovernorState.NOT_STARTED:
            raise GovernorError(
                "This governor has already run.",
                hint="Create one Governor per process invocation.",
            )
        self.install()

        code = exit_codes.SUCCESS
        propagated: BaseException | None = None
        try:
            if self._signal_trap is not None:
                with self._signal_trap:
                    code = self.protect(func)
            else:
                code = self.protect(func)
        except BaseException as exc:  # noqa: BLE001
            self._state = GovernorState.PROPAGATING
            propagated = exc
            self._echo_runtime_output(exc)

        try:
            final_code = self.finalize(propagated)
        finally:
            self._uninstall()

        return code if propagated is None else final_code

    def run_and_exit(self, func: Callable[[], object]) -> NoReturn:
        """:meth:`run` *func*, then exit with the OS-translated code."""
        sys.exit(os_exit_code(self.run(func)))

    # ------------------------------------------------------------------
    # Protective boundary
    # ------------------------------------------------------------------

    def protect(self, func: Callable[[], object]) -> int:
        """Call *func* once, handling only the anticipated failure modes.

        Aborts, ``KeyboardInterrupt`` and a full disk are turned into
        :data:`~exit_governor.exit_codes.FAILURE_NOT_BUG`; bug-class
        aborts are also stashed for the finalizer.  Everything else
        propagates.
        """
        self._state = GovernorState.RUNNING
        try:
            func()
        except GenericAbort as exc:
            if not exc.silent:
                self._print_error(str(exc), hint=exc.hint)
            if exc.bug:
                self.stash(exc)
            self._state = GovernorState.ABORT_HANDLED
            return exit_codes.FAILURE_NOT_BUG
        except KeyboardInterrupt:
            self._print_error("Interrupt")
            self._state = GovernorState.ABORT_HANDLED
            return exit_codes.FAILURE_NOT_BUG
        except OSError as exc:
            if not is_disk_full(exc):
                raise
            self._print_error(self._disk_full_message())
            self._state = GovernorState.ABORT_HANDLED
            return exit_codes.FAILURE_NOT_BUG

        self._state = GovernorState.SUCCEEDED
        return exit_codes.SUCCESS

    def stash(self, error: BaseException) -> None:
        """Hand *error* to the finalizer for reporting (first write wins)."""
        if not self._slot.put(error):
            logger.debug("reportable exception already stashed; ignoring %r", error)

    # ------------------------------------------------------------------
    # Finalizer
    # ------------------------------------------------------------------

    def install(self) -> None:
        """Register the finalizer with :mod:`atexit` (idempotent).

        :meth:`run` finalizes inline; the ``atexit`` hook only matters for
        embedders that call :meth:`protect` directly.
        """
        if self._installed:
            return
        atexit.register(self._finalize_at_exit)
        self._installed = True

    def _uninstall(self) -> None:
        if self._installed:
            atexit.unregister(self._finalize_at_exit)
            self._installed = False

    def _finalize_at_exit(self) -> None:
        # The interpreter records an uncaught exception before atexit runs.
        uncaught = getattr(sys, "last_exc", None) or getattr(sys, "last_value", None)
        self.finalize(uncaught)

    def finalize(self, error: BaseException | None = None) -> int:
        """Classify the run's termination once and report if needed.

        A stashed exception takes precedence over *error*.  Only the
        first call does any work; later calls return the same code.
        """
        with self._lock:
            if self._finalized:
                logger.debug("already finalized; nothing to do")
                return self._final_code
            self._finalized = True

        pending = self._slot.take()
        disposition = self._dispose(pending if pending is not None else error)
        self._final_code = disposition.exit_code
        try:
            if disposition.payload is not None:
                self._submit(disposition.payload)
        finally:
            self._state = GovernorState.FINALIZED
        return self._final_code

    def handle_failure(self, error: BaseException | None) -> int:
        """Classify *error*, submit a report if it is a bug, return the code."""
        disposition = self._dispose(error)
        if disposition.payload is not None:
            self._submit(disposition.payload)
        return disposition.exit_code

    def _dispose(self, error: BaseException | None) -> ExitDisposition:
        condition = classify(error)
        disposition = decide(condition)
        logger.debug(
            "termination %s -> exit code %d (report: %s)",
            type(condition).__name__,
            disposition.exit_code,
            disposition.should_report,
        )
        return disposition

    # ------------------------------------------------------------------
    # Reporting
    # ------------------------------------------------------------------

    @property
    def exception_reporter(self) -> ExceptionReporter:
        """The configured reporter, resolving a factory on first access."""
        if self._reporter is None:
            candidate = self._config.exception_reporter
            if isinstance(candidate, type) or not hasattr(candidate, "report"):
                logger.debug("resolving deferred exception reporter")
                self._reporter = candidate()
            else:
                self._reporter = candidate
        return self._reporter

    def _read_logs(self) -> str:
        try:
            return self._config.log_reader(self._config.log_path)
        except Exception as exc:  # noqa: BLE001
            return f"({type(exc).__name__}: {exc})"

    def _submit(self, payload: BaseException) -> None:
        logs = self._read_logs()
        try:
            self.exception_reporter.report(payload, logs)
        except Exception:  # noqa: BLE001
            logger.warning("exception reporter failed", exc_info=True)

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def _disk_full_message(self) -> str:
        if self._config.tool_name:
            return (
                f"Your disk is full - {self._config.tool_name} "
                "requires free space to operate"
            )
        return "Your disk is full - free space is required to operate"

    def _print_error(self, message: str, *, hint: str | None = None) -> None:
        try:
            self._config.output.print_error(message, hint=hint)
        except _STREAM_ERRORS:
            logger.debug("stderr is unusable; dropped message %r", message, exc_info=True)

    def _echo_runtime_output(self, error: BaseException) -> None:
        """Print what the interpreter would have printed for *error*."""
        try:
            if isinstance(classify(error), UncaughtFailure):
                self._config.output.print_exception(error)
            elif isinstance(error, SystemExit) and isinstance(error.code, str):
                self._config.output.print_error(error.code)
        except _STREAM_ERRORS:
            logger.debug("stderr is unusable; dropped output for %r", error, exc_info=True)
