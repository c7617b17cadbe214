"""Portal login: builds the authenticated client shared by the whole run."""

from __future__ import annotations

import logging

import httpx

from linkaudit.config import Settings, settings
from linkaudit.errors import SessionError

logger = logging.getLogger(__name__)

_DEFAULT_HEADERS = {
    "User-Agent": "Mozilla/5.0 (compatible; LinkAudit/1.0)"
}


def build_client(config: Settings | None = None) -> httpx.Client:
    """Return a cookie-keeping client configured from *config*."""
    config = config or settings
    return httpx.Client(
        headers=_DEFAULT_HEADERS,
        timeout=config.request_timeout,
        follow_redirects=True,
    )


def open_session(config: Settings | None = None) -> httpx.Client:
    """Log into the portal and return the authenticated client.

    Loads the base page first so the portal can set its session cookie, then
    posts the credentials form.  The caller owns the returned client and must
    close it.

    Raises:
        SessionError: If either request fails or returns an error status.
    """
    config = config or settings
    client = build_client(config)
    form = {"userId": config.portal_user_id, "password": config.portal_password}
    try:
        client.get(config.base_url).raise_for_status()
        client.post(config.login_url, data=form).raise_for_status()
    except httpx.HTTPError as exc:
        client.close()
        raise SessionError(f"Login to {config.base_url} failed: {exc}") from exc

    logger.info("Session established with %s", config.base_url)
    return client
