"""Crossref source adapter."""

from __future__ import annotations

from dataclasses import dataclass

from CrossrefQuery.core.request import CrossrefRequest
from CrossrefQuery.sources.crossref.client import CrossrefApiClient
from CrossrefQuery.sources.crossref.parser import WorkPage, parse_work_list


@dataclass(slots=True)
class CrossrefSource:
    """Crossref-backed source that returns parsed work pages."""

    client: CrossrefApiClient
    name: str = "crossref"

    def search(self, request: CrossrefRequest) -> WorkPage:
        """Run a composed request and parse the work list.

        Args:
            request: Composed query; its route must list works.

        Returns:
            Parsed page of works.
        """
        message = self.client.fetch(request)
        return parse_work_list(message)

    def close(self) -> None:
        """Close resources held by the Crossref source adapter.
        """
        self.client.close()
