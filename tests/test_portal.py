"""Tests for portal login and pathway discovery.

Mocking strategy:
- ``respx`` patches ``httpx`` at the transport layer; the portal is served
  from ``http://portal.example/mom/250/``.
"""

from __future__ import annotations

import httpx
import pytest
import respx

from linkaudit.config import Settings
from linkaudit.errors import ListingError, SessionError
from linkaudit.portal.listing import list_pages, parse_listing
from linkaudit.portal.session import open_session

_BASE = "http://portal.example/mom/250/"

_LISTING_HTML = """\
<ul>
  <li><a href="pathway.html?id=1">Asthma in adults</a></li>
  <li><a href="pathway.html?id=2">Back pain</a></li>
</ul>
"""


@pytest.fixture
def config() -> Settings:
    return Settings(
        base_url=_BASE,
        portal_user_id="user",
        portal_password="secret",
        request_timeout=5.0,
    )


# ---------------------------------------------------------------------------
# open_session
# ---------------------------------------------------------------------------

class TestOpenSession:
    def test_posts_credentials_and_keeps_cookies(self, config) -> None:
        with respx.mock:
            respx.get(_BASE).mock(
                return_value=httpx.Response(
                    200, headers={"set-cookie": "JSESSIONID=abc123; Path=/"}
                )
            )
            login = respx.post(_BASE + "index.html").mock(return_value=httpx.Response(200))
            client = open_session(config)
            client.close()

        request = login.calls.last.request
        assert request.content == b"userId=user&password=secret"
        assert "JSESSIONID=abc123" in request.headers["cookie"]

    def test_connection_failure_is_fatal(self, config) -> None:
        with respx.mock:
            respx.get(_BASE).mock(side_effect=httpx.ConnectError("no route to host"))
            with pytest.raises(SessionError, match="no route to host"):
                open_session(config)

    def test_rejected_login_is_fatal(self, config) -> None:
        with respx.mock:
            respx.get(_BASE).mock(return_value=httpx.Response(200))
            respx.post(_BASE + "index.html").mock(return_value=httpx.Response(500))
            with pytest.raises(SessionError):
                open_session(config)


# ---------------------------------------------------------------------------
# Listing
# ---------------------------------------------------------------------------

class TestParseListing:
    def test_builds_pages_from_anchors(self) -> None:
        pages = parse_listing(_LISTING_HTML, _BASE)
        assert [(p.name, p.url) for p in pages] == [
            ("Asthma in adults", _BASE + "pathway.html?id=1"),
            ("Back pain", _BASE + "pathway.html?id=2"),
        ]
        assert all(p.links == [] and p.status_code == 0 for p in pages)

    def test_no_anchors_is_empty(self) -> None:
        assert parse_listing("<p>No local pathways</p>", _BASE) == []


class TestListPages:
    def test_fetches_listing(self, config) -> None:
        with respx.mock, httpx.Client() as client:
            respx.get(config.listing_url).mock(
                return_value=httpx.Response(200, text=_LISTING_HTML)
            )
            pages = list_pages(client, config.listing_url, config.base_url)

        assert len(pages) == 2
        assert pages[0].url == _BASE + "pathway.html?id=1"

    def test_fetch_failure_is_fatal(self, config) -> None:
        with respx.mock, httpx.Client() as client:
            respx.get(config.listing_url).mock(return_value=httpx.Response(503))
            with pytest.raises(ListingError):
                list_pages(client, config.listing_url, config.base_url)
