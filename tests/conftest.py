"""Shared pytest fixtures and configuration for the exit-governor test suite.

Guidelines
----------
* Collaborators (reporter, terminal output) are recorded fakes.
* Signal traps are off unless a test is about signals.
* Tests must not depend on OS state or terminal capabilities.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from exit_governor.governor import Governor, GovernorConfig


class RecordingReporter:
    """Exception reporter that remembers every submission."""

    def __init__(self) -> None:
        self.calls: list[tuple[BaseException | None, str]] = []

    def report(self, exception: BaseException | None, logs: str) -> None:
        self.calls.append((exception, logs))


class RecordingOutput:
    """Terminal output that keeps messages instead of printing them."""

    def __init__(self) -> None:
        self.errors: list[tuple[str, str | None]] = []
        self.exceptions: list[BaseException] = []

    def print_error(self, message: str, *, hint: str | None = None) -> None:
        self.errors.append((message, hint))

    def print_exception(self, error: BaseException) -> None:
        self.exceptions.append(error)


class BrokenPipeOutput:
    """Terminal output whose stream has been closed by the reader."""

    def print_error(self, message: str, *, hint: str | None = None) -> None:
        raise BrokenPipeError(32, "Broken pipe")

    def print_exception(self, error: BaseException) -> None:
        raise BrokenPipeError(32, "Broken pipe")


@pytest.fixture
def reporter() -> RecordingReporter:
    return RecordingReporter()


@pytest.fixture
def output() -> RecordingOutput:
    return RecordingOutput()


@pytest.fixture
def broken_output() -> BrokenPipeOutput:
    return BrokenPipeOutput()


@pytest.fixture
def log_file(tmp_path: Path) -> Path:
    path = tmp_path / "run.log"
    path.write_text("starting\nstep 1 ok\n", encoding="utf-8")
    return path


@pytest.fixture
def make_governor(
    reporter: RecordingReporter,
    output: RecordingOutput,
    log_file: Path,
) -> Callable[..., Governor]:
    """Factory building governors wired to the recording fakes."""

    def factory(**overrides: Any) -> Governor:
        options: dict[str, Any] = {
            "log_file": log_file,
            "exception_reporter": reporter,
            "output": output,
            "trap_signals": False,
        }
        options.update(overrides)
        return Governor(GovernorConfig(**options))

    return factory
