"""Per-page processing: fetch a pathway page, find its links, check them.

A pathway page holds one ``<form name="form_node_content_<n>">`` per content
node inside ``#pwNodeContainer``.  Forms whose name ends in one of the
reserved suffixes are administrative sections and never carry links.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import List

import httpx
from bs4 import BeautifulSoup

from linkaudit.config import settings
from linkaudit.scraper.checker import check_link
from linkaudit.scraper.models import SourcePage
from linkaudit.scraper.normalizer import extract_links

logger = logging.getLogger(__name__)

_NODE_SELECTOR = "#pwNodeContainer form[name^='form_node_content_']"
_RESERVED_SUFFIXES = ("local", "public", "national")


@dataclass
class ContentNode:
    """One content node of a pathway page, with its link-bearing text."""

    node_id: int
    title: str
    text: str


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _input_value(form, name: str, default: str = "") -> str:
    tag = form.select_one(f"input[name='{name}']")
    if tag is None:
        return default
    return tag.get("value", default)


def _parse_node_id(value: str) -> int:
    try:
        return int(value)
    except ValueError:
        return 0


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def fetch_page(
    client: httpx.Client,
    page: SourcePage,
    *,
    max_attempts: int | None = None,
    retry_delay: float | None = None,
) -> str | None:
    """GET ``page.url`` until it returns 200 or the attempts run out.

    The portal drops requests under load, so a failed fetch is simply retried.
    The final status is stored on ``page.status_code`` (0 for a transport
    error).

    Returns:
        The page HTML on success, otherwise ``None``.
    """
    if max_attempts is None:
        max_attempts = settings.max_page_fetch_attempts
    if retry_delay is None:
        retry_delay = settings.page_retry_delay

    for attempt in range(1, max_attempts + 1):
        try:
            # Non-streaming: httpx reads the body and releases the
            # connection before returning, on every attempt.
            response = client.get(page.url)
        except (httpx.HTTPError, httpx.InvalidURL, UnicodeError, ValueError) as exc:
            logger.warning("Error requesting %s: %s", page.url, exc)
            page.status_code = 0
        else:
            page.status_code = response.status_code
            if response.status_code == 200:
                logger.debug("Fetched %s after %d attempt(s)", page.url, attempt)
                return response.text

        if attempt < max_attempts:
            time.sleep(retry_delay)

    logger.warning(
        "Giving up on %s after %d attempts (status %d)",
        page.url, max_attempts, page.status_code,
    )
    return None


def parse_nodes(html: str) -> List[ContentNode]:
    """Return every link-bearing content node in *html*, in document order."""
    # html5lib follows the HTML5 tokenizer, so textarea content stays raw
    # text and unescaped <a href> markup inside it is not turned into tags.
    soup = BeautifulSoup(html, "html5lib")
    nodes: List[ContentNode] = []
    for form in soup.select(_NODE_SELECTOR):
        if form.get("name", "").endswith(_RESERVED_SUFFIXES):
            continue
        body = form.select_one("textarea[name='quickInfoBody']")
        # Both fields are HTML source held as text, so links are found by
        # pattern rather than by walking elements.
        quick_info = body.get_text() if body is not None else ""
        local_info = _input_value(form, "adminInfoTxt")
        nodes.append(
            ContentNode(
                node_id=_parse_node_id(_input_value(form, "id", "0")),
                title=_input_value(form, "quickInfoTitle"),
                text=quick_info + local_info,
            )
        )
    return nodes


def collect_links(page: SourcePage, html: str) -> SourcePage:
    """Append an unchecked link to *page* for every link in every node."""
    for node in parse_nodes(html):
        page.links.extend(extract_links(node.text, node.node_id, node.title))
    return page


def check_page_links(client: httpx.Client, page: SourcePage) -> SourcePage:
    """Check each of the page's links in order, then recount its totals."""
    try:
        for link in page.links:
            check_link(client, link)
    finally:
        page.tally()
    return page


def process_page(client: httpx.Client, page: SourcePage) -> SourcePage:
    """Fetch *page*, extract its outbound links and check every one.

    Everything happens sequentially on the calling thread; *page* is
    mutated in place and returned.
    """
    html = fetch_page(client, page)
    if html is not None:
        collect_links(page, html)
    logger.info("Checking %d link(s) on %s", len(page.links), page.name)
    return check_page_links(client, page)
