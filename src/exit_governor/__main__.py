"""Allow ``python -m exit_governor`` invocation.

This module simply delegates to the CLI entry point so that
``python -m exit_governor`` behaves identically to the
``exit-governor`` console script.
"""

from __future__ import annotations

from exit_governor.cli.app import cli

if __name__ == "__main__":
    cli()
