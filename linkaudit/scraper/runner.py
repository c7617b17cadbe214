"""Run aggregator: processes every page concurrently and totals the results.

Each page is handled by exactly one worker, which is the only code that
touches that page's fields, so no locking is needed.  The shared
``httpx.Client`` is only read from once the login has completed.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from datetime import datetime
from typing import List

import httpx

from linkaudit.config import settings
from linkaudit.scraper.models import RunSummary, SourcePage
from linkaudit.scraper.pages import process_page

logger = logging.getLogger(__name__)


def check_pages(
    client: httpx.Client,
    pages: List[SourcePage],
    *,
    max_workers: int | None = None,
) -> List[SourcePage]:
    """Process all *pages* concurrently and wait for every one to finish.

    Args:
        client: Authenticated client shared by every worker.
        pages: Pages to process; each is updated in place.
        max_workers: Concurrency cap.  ``None`` uses
            ``settings.max_concurrent_pages``; 0 means one worker per page.

    Returns:
        *pages*, in their original order.
    """
    if not pages:
        return pages
    if max_workers is None:
        max_workers = settings.max_concurrent_pages
    if max_workers <= 0:
        max_workers = len(pages)

    with ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="page") as pool:
        future_to_page = {pool.submit(process_page, client, page): page for page in pages}
        for future in as_completed(future_to_page):
            page = future_to_page[future]
            try:
                future.result()
            except Exception:
                logger.exception("Processing %s failed", page.url)
                continue
            logger.info(
                "Finished %s: %d link(s), %d bad", page.name, len(page.links), page.bad_links
            )

    return pages


def build_summary(
    pages: List[SourcePage],
    *,
    now: datetime | None = None,
) -> RunSummary:
    """Roll up link, bad-link and modified-link totals over *pages*."""
    return RunSummary(
        pages=pages,
        total_links=sum(len(p.links) for p in pages),
        total_bad_links=sum(p.bad_links for p in pages),
        total_modified_links=sum(p.modified_links for p in pages),
        generated_at=now or datetime.now(),
    )


def run(
    client: httpx.Client,
    pages: List[SourcePage],
    *,
    max_workers: int | None = None,
) -> RunSummary:
    """Check every page and return the run totals."""
    check_pages(client, pages, max_workers=max_workers)
    return build_summary(pages)
