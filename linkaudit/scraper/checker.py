"""Reachability probe for a single outbound link."""

from __future__ import annotations

import logging
import time

import httpx

from linkaudit.config import settings
from linkaudit.scraper.models import OutboundLink

logger = logging.getLogger(__name__)

# Substrings that identify a TLS certificate validation failure in the
# error text (OpenSSL via ssl module, and the x509 wording some proxies use).
_CERT_ERROR_MARKERS = ("CERTIFICATE_VERIFY_FAILED", "certificate verify failed", "x509")


def _is_cert_error(message: str) -> bool:
    return any(marker in message for marker in _CERT_ERROR_MARKERS)


def _probe(client: httpx.Client, method: str, url: str) -> httpx.Response:
    """Send one request and close it without reading the body.

    Leaving bodies unread and unclosed exhausts the connection pool, which
    later surfaces as unrelated DNS and connect errors.
    """
    with client.stream(method, url) as response:
        return response


def check_link(
    client: httpx.Client,
    link: OutboundLink,
    *,
    max_attempts: int | None = None,
    retry_delay: float | None = None,
) -> OutboundLink:
    """Probe ``link.url`` and record the outcome on *link* in place.

    The first attempt is a ``HEAD``; some servers reject those, so every
    further attempt is a full ``GET``.  The first HTTP 200 ends the check.
    When the transport error is a certificate failure the URL is downgraded
    from ``https://`` to ``http://`` and later attempts use the new URL.

    Returns:
        The same *link*, for convenient chaining.
    """
    if max_attempts is None:
        max_attempts = settings.max_link_check_attempts
    if retry_delay is None:
        retry_delay = settings.link_retry_delay

    for attempt in range(max_attempts):
        method = "HEAD" if attempt == 0 else "GET"
        # Malformed hosts (bad IDNA labels and the like) surface as
        # UnicodeError or ValueError from URL handling, not as httpx errors.
        try:
            response = _probe(client, method, link.url)
        except (httpx.HTTPError, httpx.InvalidURL, UnicodeError, ValueError) as exc:
            message = str(exc) or type(exc).__name__
            link.status_code = 0
            link.status = f"Request failed, Error = {message}"
            logger.debug("%s %s failed: %s", method, link.url, message)
            if _is_cert_error(message) and link.url.startswith("https://"):
                link.url = link.url.replace("https://", "http://", 1)
                link.modified = f"https -> http, {message}"
                logger.info("Certificate error, retrying over http: %s", link.url)
        else:
            link.status_code = response.status_code
            link.status = f"{response.status_code} {response.reason_phrase}".strip()

        if link.status_code == 200:
            break
        if attempt < max_attempts - 1:
            time.sleep(retry_delay)

    return link
