"""Exit-code constants used by the governor.

Centralised here so that every exit path uses a well-known, tested
value rather than magic integers scattered across the codebase.
"""

from __future__ import annotations

SUCCESS: int = 0
"""Clean exit: the governed callable returned normally."""

EXIT_BUG: int = 1
"""Generic failure.  Also what callers see for a non-bug failure."""

FAILURE_NOT_BUG: int = 30
"""Expected failure that is not indicative of a bug.

Internal sentinel only: it is translated to :data:`EXIT_BUG` at the OS
boundary so the shell never observes it.
"""

SIGNAL_BASE: int = 128
"""Termination by signal N is reported as ``SIGNAL_BASE + N`` (POSIX)."""
