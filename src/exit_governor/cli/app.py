"""CLI application entry point for exit-governor.

``exit-governor pkg.module:main [-- ARGS...]`` imports a zero-argument
callable and runs it under a :class:`~exit_governor.governor.Governor`,
exiting with the governed, OS-translated code.

Architecture notes
------------------
* No governing logic lives here; the run is delegated to the governor.
* :func:`cli` is the error boundary for the command's *own* failures
  (bad target reference, bad options); failures of the governed callable
  never reach it.
"""

from __future__ import annotations

import argparse
import logging
import sys
import tempfile
from collections.abc import Callable
from pathlib import Path
from typing import Any

from exit_governor import exit_codes
from exit_governor.core.policy import os_exit_code
from exit_governor.core.protocols import ExceptionReporter
from exit_governor.exceptions import GovernorError, TargetImportError
from exit_governor.governor import Governor, GovernorConfig
from exit_governor.infra.terminal import RichTerminalOutput
from exit_governor.utils.imports import import_object
from exit_governor.version import __version__

logger = logging.getLogger(__name__)

DEFAULT_LOG_FILE: Path = Path(tempfile.gettempdir()) / "exit-governor.log"


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    """Construct the top-level argument parser.

    * ``exit-governor <module:function> [args...]`` — governed run
    * ``exit-governor --version``
    """
    parser = argparse.ArgumentParser(
        prog="exit-governor",
        description="Run a Python entry point under the exit governor.",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log governor decisions to stderr.",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=DEFAULT_LOG_FILE,
        help="Run log attached to error reports (default: %(default)s).",
    )
    parser.add_argument(
        "--tool-name",
        default=None,
        help="Tool name shown in the disk-full message.",
    )
    parser.add_argument(
        "--reporter",
        default=None,
        metavar="MODULE:ATTR",
        help="Exception reporter instance or factory, imported only when a report is due.",
    )
    parser.add_argument(
        "--no-signal-traps",
        dest="trap_signals",
        action="store_false",
        help="Leave SIGTERM/SIGHUP handlers untouched.",
    )
    parser.add_argument(
        "target",
        nargs="?",
        default=None,
        help="Entry point to run, as 'package.module:function'.",
    )
    parser.add_argument(
        "args",
        nargs=argparse.REMAINDER,
        help="Arguments exposed to the entry point as sys.argv[1:].",
    )
    return parser


# ---------------------------------------------------------------------------
# Target and reporter resolution
# ---------------------------------------------------------------------------

def _load_target(reference: str) -> Callable[[], object]:
    """Import the governed entry point, failing early if it is not callable."""
    target = import_object(reference)
    if not callable(target):
        raise TargetImportError(
            f"{reference!r} is not callable",
            hint="Point at a function that takes no arguments.",
        )
    return target


def _deferred_reporter(reference: str) -> Callable[[], ExceptionReporter]:
    """Return a factory that imports *reference* when first called.

    *reference* may name a reporter instance, a reporter class, or a
    zero-argument factory function.
    """

    def factory() -> ExceptionReporter:
        obj: Any = import_object(reference)
        if hasattr(obj, "report") and not isinstance(obj, type):
            return obj
        return obj()

    return factory


def _run_with_argv(target: Callable[[], object], argv: list[str]) -> Callable[[], object]:
    """Wrap *target* so it sees *argv* as ``sys.argv`` while it runs."""

    def governed() -> object:
        saved = sys.argv
        sys.argv = argv
        try:
            return target()
        finally:
            sys.argv = saved

    return governed


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """Run the exit-governor CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.

    Returns
    -------
    int
        OS process exit code.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(levelname)s %(name)s: %(message)s",
        )

    if args.target is None:
        parser.print_help()
        return exit_codes.SUCCESS

    target = _load_target(args.target)
    forwarded: list[str] = args.args[1:] if args.args[:1] == ["--"] else args.args

    extra: dict[str, Any] = {}
    if args.reporter:
        extra["exception_reporter"] = _deferred_reporter(args.reporter)
    config = GovernorConfig(
        log_file=args.log_file,
        tool_name=args.tool_name,
        trap_signals=args.trap_signals,
        **extra,
    )

    logger.debug("running %s under the governor", args.target)
    governor = Governor(config)
    code = governor.run(_run_with_argv(target, [args.target, *forwarded]))
    return os_exit_code(code)


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Entry point for the ``exit-governor`` console script."""
    try:
        code = main()
    except GovernorError as exc:
        RichTerminalOutput().print_error(f"Error: {exc}", hint=exc.hint)
        sys.exit(exit_codes.EXIT_BUG)
    sys.exit(code)
