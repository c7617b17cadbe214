"""URL extraction and normalisation for raw node content.

Node content reaches us in three shapes, all of which must yield the same
URL:

* bracketed plain text: ``[http://example.com/page]``
* HTML anchors: ``<a href="http://example.com/page">``
* javascript-opened links whose argument is percent-escaped:
  ``href="javascript:openLink('http%3A%2F%2Fexample.com%2Fpage')"``

Everything here is pure text processing.  Decode and parse failures are
logged and the best-effort text is kept as the URL, never dropped.
"""

from __future__ import annotations

import logging
import re
from typing import List
from urllib.parse import parse_qsl, unquote_to_bytes, urlencode, urlsplit, urlunsplit

from linkaudit.scraper.models import OutboundLink

logger = logging.getLogger(__name__)

# A link starts right after "[", "'" or '"' and runs until whitespace, a
# quote or a closing bracket.
_LINK_PATTERN = re.compile(r"""(?:\[|'|")(?P<url>https?[^'"\s\]]+)""")

_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")
_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _query_unescape(text: str) -> str:
    """Decode ``+`` and ``%XX`` escapes, raising ``ValueError`` on bad input.

    ``urllib.parse.unquote_plus`` silently passes malformed escapes through;
    here a stray ``%`` or an escape sequence that is not valid UTF-8 is an
    error so the caller can fall back to the raw text.
    """
    match = _BAD_ESCAPE.search(text)
    if match:
        raise ValueError(f"invalid escape {text[match.start():match.start() + 3]!r}")
    return unquote_to_bytes(text.replace("+", " ")).decode("utf-8")


def _canonical_query(query: str) -> str:
    """Re-encode *query* as form data with keys in sorted order."""
    pairs = parse_qsl(query, keep_blank_values=True)
    return urlencode(sorted(pairs, key=lambda kv: kv[0]))


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def find_candidates(text: str) -> List[str]:
    """Return every raw link substring in *text*, in discovery order."""
    return [m.group("url") for m in _LINK_PATTERN.finditer(text)]


def normalize_url(raw: str) -> str:
    """Unescape *raw* once and restore a correctly encoded query string.

    Unescaping also decodes the query, which can break its structure, so only
    the query component is re-encoded; scheme, host, path and fragment are
    left as decoded.
    """
    try:
        decoded = _query_unescape(raw)
    except ValueError as exc:
        logger.warning("Error unescaping %s: %s", raw, exc)
        return raw

    try:
        if _CONTROL_CHARS.search(decoded):
            raise ValueError("invalid control character in URL")
        parts = urlsplit(decoded)
        parts.port  # raises ValueError for a non-numeric or out-of-range port
    except ValueError as exc:
        logger.warning("Error parsing url: %s %s", exc, decoded)
        return decoded

    return urlunsplit(parts._replace(query=_canonical_query(parts.query)))


def extract_links(text: str, node_id: int, node_title: str) -> List[OutboundLink]:
    """Build an unchecked :class:`OutboundLink` for every link in *text*.

    Every link is tagged with the node it was found in.
    """
    return [
        OutboundLink(node_id=node_id, node_title=node_title, url=normalize_url(raw))
        for raw in find_candidates(text)
    ]
