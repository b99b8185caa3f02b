"""Infrastructure layer — the operating system and the terminal.

Rules
-----
* No imports from ``cli``.
* Must expose clean, typed interfaces consumed by the governor.
"""

from exit_governor.infra.log_reader import read_log_file
from exit_governor.infra.reporters import LoggingExceptionReporter, NullExceptionReporter
from exit_governor.infra.signals import SignalTrap
from exit_governor.infra.terminal import RichTerminalOutput

__all__: list[str] = [
    "LoggingExceptionReporter",
    "NullExceptionReporter",
    "RichTerminalOutput",
    "SignalTrap",
    "read_log_file",
]
