"""Discovery of the pathway pages to audit."""

from __future__ import annotations

from typing import List
from urllib.parse import urljoin

import httpx
from bs4 import BeautifulSoup

from linkaudit.errors import ListingError
from linkaudit.scraper.models import SourcePage


def parse_listing(html: str, base_url: str) -> List[SourcePage]:
    """Return one unchecked :class:`SourcePage` per ``<a>`` in *html*."""
    soup = BeautifulSoup(html, "html.parser")
    return [
        SourcePage(name=a.get_text(), url=urljoin(base_url, a.get("href", "")))
        for a in soup.find_all("a")
    ]


def list_pages(client: httpx.Client, listing_url: str, base_url: str) -> List[SourcePage]:
    """Fetch the listing widget and return the pages it links to.

    An empty listing is not an error; the run simply has nothing to check.

    Raises:
        ListingError: If the listing cannot be fetched.
    """
    try:
        response = client.get(listing_url)
        response.raise_for_status()
    except httpx.HTTPError as exc:
        raise ListingError(f"Could not fetch page listing {listing_url}: {exc}") from exc
    return parse_listing(response.text, base_url)
