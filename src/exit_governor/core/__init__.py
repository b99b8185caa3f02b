"""Core layer — termination models, policy, and collaborator contracts.

Rules
-----
* No ``print()`` calls.
* No filesystem or network I/O.
* No imports from ``cli`` or ``infra``.
"""

from exit_governor.core.models import (
    AbortRequested,
    BugDetected,
    ExitDisposition,
    ForcedExit,
    GovernorState,
    Normal,
    OSSignal,
    ReportSlot,
    TerminationCondition,
    UncaughtFailure,
    UserInterrupt,
)
from exit_governor.core.policy import classify, decide, os_exit_code
from exit_governor.core.protocols import ExceptionReporter, LogReader, TerminalOutput

__all__: list[str] = [
    "AbortRequested",
    "BugDetected",
    "ExceptionReporter",
    "ExitDisposition",
    "ForcedExit",
    "GovernorState",
    "LogReader",
    "Normal",
    "OSSignal",
    "ReportSlot",
    "TerminalOutput",
    "TerminationCondition",
    "UncaughtFailure",
    "UserInterrupt",
    "classify",
    "decide",
    "os_exit_code",
]
