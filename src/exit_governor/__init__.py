"""exit-governor — top-level error handling and exit codes for CLI tools.

Wrap a tool's entry point in a :class:`Governor` to get consistent
messages for expected failures, error reports for bugs, and a correct
process exit code however the run ends.
"""

from exit_governor.exceptions import (
    Abort,
    AbortSilent,
    Bug,
    BugSilent,
    GenericAbort,
    GovernorError,
    SignalTermination,
)
from exit_governor.governor import Governor, GovernorConfig
from exit_governor.infra.reporters import NullExceptionReporter
from exit_governor.version import __version__

__all__: list[str] = [
    "Abort",
    "AbortSilent",
    "Bug",
    "BugSilent",
    "GenericAbort",
    "Governor",
    "GovernorConfig",
    "GovernorError",
    "NullExceptionReporter",
    "SignalTermination",
    "__version__",
]
