"""CLI package for CrossrefQuery command orchestration.

This package contains the modular CLI components, factored into separate
modules for maintainability and testability.
"""

from __future__ import annotations

__all__ = ["CommandRunner", "cli", "main"]

from CrossrefQuery.cli.runner import CommandRunner
from CrossrefQuery.cli.ui import cli


def main() -> None:
    """Run CrossrefQuery CLI.

    Entry point referenced by console script in pyproject.toml.
    """
    cli()
