"""Command implementations for CrossrefQuery CLI.

Encapsulates the work behind each command, separated from CLI parameter
handling and output.
"""

from __future__ import annotations

from dataclasses import dataclass

from CrossrefQuery.config import AppConfig
from CrossrefQuery.core.dates import format_date_field
from CrossrefQuery.core.route import routed_component
from CrossrefQuery.core.types import Component
from CrossrefQuery.sources.crossref.parser import WorkPage
from CrossrefQuery.sources.crossref.source import CrossrefSource
from CrossrefQuery.utils.log import log


@dataclass(slots=True)
class BuildUrlCommand:
    """Compose the configured request into a URL."""

    config: AppConfig

    def execute(self) -> str:
        url = self.config.query.to_url(self.config.api.base_url)
        log.debug("Composed URL: %s", url)
        return url


@dataclass(slots=True)
class FetchCommand:
    """Fetch one page of works and log a line per work."""

    config: AppConfig
    source: CrossrefSource

    def execute(self) -> WorkPage:
        """Run the configured request.

        Returns:
            Parsed page of works.

        Raises:
            ValueError: If the configured route does not list works.
        """
        request = self.config.query
        if routed_component(request.resource) is not Component.WORKS:
            raise ValueError(f"fetch only supports works routes, got {request.resource.route()}")

        log.info("Fetching %s", request.route())
        page = self.source.search(request)
        log.info("Total results: %d, page items: %d", page.total_results, len(page.items))

        for work in page.items:
            log.info("%s [%s] %s", work.doi or "-", format_date_field(work.issued), work.title or "Untitled")

        if page.next_cursor:
            log.info("Next cursor: %s", page.next_cursor)
        return page
