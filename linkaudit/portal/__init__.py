"""Portal package: login and page discovery."""

from linkaudit.portal.listing import list_pages
from linkaudit.portal.session import open_session

__all__ = ["open_session", "list_pages"]
