"""Fatal errors.  Any of these aborts the run with a non-zero exit code."""

from __future__ import annotations


class LinkAuditError(RuntimeError):
    """Base class for errors that end the whole run."""


class SessionError(LinkAuditError):
    """The portal login handshake could not be completed."""


class ListingError(LinkAuditError):
    """The pathway listing page could not be fetched."""


class ReportError(LinkAuditError):
    """The HTML report could not be rendered or written."""
