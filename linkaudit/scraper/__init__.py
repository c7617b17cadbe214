"""Scraper package: link extraction, link checking and per-run aggregation."""

from linkaudit.scraper.checker import check_link
from linkaudit.scraper.models import OutboundLink, RunSummary, SourcePage
from linkaudit.scraper.normalizer import extract_links, normalize_url
from linkaudit.scraper.pages import process_page
from linkaudit.scraper.runner import build_summary, check_pages, run

__all__ = [
    "check_link",
    "extract_links",
    "normalize_url",
    "process_page",
    "check_pages",
    "build_summary",
    "run",
    "OutboundLink",
    "SourcePage",
    "RunSummary",
]
