"""Data models for the link audit pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import List


@dataclass
class OutboundLink:
    """A single link found inside one content node of a source page.

    ``status_code`` stays 0 until the link is checked, and is also 0 when the
    last probe failed at the transport level.
    """

    node_id: int
    node_title: str
    url: str
    status_code: int = 0
    status: str = ""
    modified: str = ""

    @property
    def is_bad(self) -> bool:
        return self.status_code != 200

    @property
    def is_modified(self) -> bool:
        return self.modified != ""


@dataclass
class SourcePage:
    """A pathway page listed by the portal, plus everything found on it."""

    name: str
    url: str
    status_code: int = 0
    links: List[OutboundLink] = field(default_factory=list)
    bad_links: int = 0
    modified_links: int = 0

    @property
    def fetched(self) -> bool:
        return self.status_code == 200

    def tally(self) -> None:
        """Recount bad and modified links from the per-link results."""
        self.bad_links = sum(1 for link in self.links if link.is_bad)
        self.modified_links = sum(1 for link in self.links if link.is_modified)


@dataclass
class RunSummary:
    """Totals for a whole run, handed to the report renderer."""

    pages: List[SourcePage]
    total_links: int
    total_bad_links: int
    total_modified_links: int
    generated_at: datetime
    title: str = "Link Check"

    @property
    def percent_bad(self) -> int:
        """Whole percentage of bad links, truncated; 0 for a run with no links."""
        if self.total_links == 0:
            return 0
        return 100 * self.total_bad_links // self.total_links

    @property
    def pages_with_bad_links(self) -> List[SourcePage]:
        return [p for p in self.pages if p.bad_links > 0]

    @property
    def unfetched_pages(self) -> List[SourcePage]:
        return [p for p in self.pages if not p.fetched]
