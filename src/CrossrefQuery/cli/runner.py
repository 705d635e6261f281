"""Command runner for coordinating CLI execution.

Manages logging configuration, component lifecycle and error handling for
command execution.
"""

from __future__ import annotations

import click

from CrossrefQuery.cli.commands import BuildUrlCommand, FetchCommand
from CrossrefQuery.cli.factories import SourceFactory
from CrossrefQuery.config import AppConfig
from CrossrefQuery.sources.crossref.parser import WorkPage
from CrossrefQuery.utils.log import configure_logging, log


class CommandRunner:
    """Orchestrates command execution with proper resource management."""

    def __init__(self, config: AppConfig) -> None:
        """Initialize command runner.

        Args:
            config: Application configuration.
        """
        self.config = config

    def run_url(self, action: str) -> str:
        """Compose the request URL.

        Args:
            action: The CLI command name (e.g. 'url').

        Returns:
            The full request URL.
        """
        self._configure_logging(action)
        return BuildUrlCommand(self.config).execute()

    def run_fetch(self, action: str) -> WorkPage:
        """Fetch one page of works and release the HTTP session afterwards.

        Args:
            action: The CLI command name (e.g. 'fetch').

        Returns:
            Parsed page of works.

        Raises:
            click.Abort: When the fetch fails.
        """
        self._configure_logging(action)
        try:
            source = SourceFactory.create_crossref_source(self.config)
            try:
                return FetchCommand(config=self.config, source=source).execute()
            finally:
                source.close()
        except Exception as e:  # noqa: BLE001 - cli boundary
            log.error("Fetch failed: %s", e)
            raise click.Abort from e

    def _configure_logging(self, action: str) -> None:
        configure_logging(
            level=self.config.runtime.level,
            action=action,
            log_to_file=self.config.runtime.to_file,
            log_dir=self.config.runtime.dir,
        )
