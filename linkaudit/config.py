"""Centralised settings for the link audit run.

All runtime configuration is resolved here in one place.  Values can be
overridden via environment variables or a `.env` file in the project root
(loaded automatically when this module is imported).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env from the project root (one level up from this file)
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_env_path, override=False)


@dataclass
class Settings:
    # ------------------------------------------------------------------
    # Portal
    # ------------------------------------------------------------------
    base_url: str = field(
        default_factory=lambda: os.environ.get(
            "PORTAL_BASE_URL", "http://app.mapofmedicine.com/mom/250/"
        )
    )
    login_path: str = field(
        default_factory=lambda: os.environ.get("PORTAL_LOGIN_PATH", "index.html")
    )
    listing_path: str = field(
        default_factory=lambda: os.environ.get(
            "PORTAL_LISTING_PATH", "widget_localisedpathways.html"
        )
    )
    portal_user_id: str = field(
        default_factory=lambda: os.environ.get("PORTAL_USER_ID", "")
    )
    portal_password: str = field(
        default_factory=lambda: os.environ.get("PORTAL_PASSWORD", "")
    )

    # ------------------------------------------------------------------
    # Retries / timeouts
    # ------------------------------------------------------------------
    max_page_fetch_attempts: int = field(
        default_factory=lambda: int(os.environ.get("MAX_PAGE_FETCH_ATTEMPTS", "10"))
    )
    max_link_check_attempts: int = field(
        default_factory=lambda: int(os.environ.get("MAX_LINK_CHECK_ATTEMPTS", "5"))
    )
    page_retry_delay: float = field(
        default_factory=lambda: float(os.environ.get("PAGE_RETRY_DELAY", "0.05"))
    )
    link_retry_delay: float = field(
        default_factory=lambda: float(os.environ.get("LINK_RETRY_DELAY", "0.025"))
    )
    request_timeout: float = field(
        default_factory=lambda: float(os.environ.get("REQUEST_TIMEOUT", "30.0"))
    )

    # ------------------------------------------------------------------
    # Concurrency
    # ------------------------------------------------------------------
    # 0 means one worker per page.
    max_concurrent_pages: int = field(
        default_factory=lambda: int(os.environ.get("MAX_CONCURRENT_PAGES", "0"))
    )

    # ------------------------------------------------------------------
    # Report / logging
    # ------------------------------------------------------------------
    report_dir: Path = field(
        default_factory=lambda: Path(os.environ.get("REPORT_DIR", "."))
    )
    report_prefix: str = field(
        default_factory=lambda: os.environ.get("REPORT_PREFIX", "LinkCheck")
    )
    log_level: str = field(
        default_factory=lambda: os.environ.get("LOG_LEVEL", "WARNING")
    )

    @property
    def login_url(self) -> str:
        """Absolute URL the credentials form is posted to."""
        return self.base_url + self.login_path

    @property
    def listing_url(self) -> str:
        """Absolute URL of the page that lists every pathway."""
        return self.base_url + self.listing_path


# Module-level singleton, import this everywhere:
#   from linkaudit.config import settings
settings = Settings()
