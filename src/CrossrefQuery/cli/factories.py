"""Factory functions for CLI component creation.

Centralizes component instantiation so tests can substitute the source.
"""

from __future__ import annotations

from CrossrefQuery.config import AppConfig
from CrossrefQuery.sources.crossref.client import CrossrefApiClient
from CrossrefQuery.sources.crossref.source import CrossrefSource
from CrossrefQuery.utils.log import log


class SourceFactory:
    """Factory for creating sources."""

    @staticmethod
    def create_crossref_source(config: AppConfig) -> CrossrefSource:
        """Create a Crossref source from the `api` config.

        Args:
            config: Application configuration.

        Returns:
            Configured CrossrefSource instance.
        """
        if config.api.mailto is None:
            log.debug("No contact address configured (%s); using the public pool", config.api.mailto_env)
        return CrossrefSource(
            client=CrossrefApiClient(
                base_url=config.api.base_url,
                mailto=config.api.mailto,
                timeout=config.api.timeout,
            )
        )
