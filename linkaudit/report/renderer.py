"""HTML report rendering for a finished run."""

from __future__ import annotations

import logging
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, TemplateError, select_autoescape

from linkaudit.config import settings
from linkaudit.errors import ReportError
from linkaudit.scraper.models import RunSummary

logger = logging.getLogger(__name__)

_template_dir = Path(__file__).resolve().parent / "templates"

env = Environment(
    loader=FileSystemLoader(str(_template_dir)),
    autoescape=select_autoescape(["html"]),
)


def format_timestamp(summary: RunSummary) -> str:
    """Human readable generation time, e.g. ``Mon Jan 2, 2006 at 15:04``."""
    ts = summary.generated_at
    return f"{ts:%a %b} {ts.day}, {ts:%Y at %H:%M}"


def report_filename(summary: RunSummary, prefix: str | None = None) -> str:
    """Return ``<prefix>YYYY-MM-DD-HHMM.html`` for *summary*."""
    prefix = settings.report_prefix if prefix is None else prefix
    return f"{prefix}{summary.generated_at:%Y-%m-%d-%H%M}.html"


def render_report(summary: RunSummary) -> str:
    """Render *summary* to an HTML string.

    Raises:
        ReportError: If the template cannot be loaded or rendered.
    """
    try:
        template = env.get_template("report.html")
        return template.render(summary=summary, timestamp=format_timestamp(summary))
    except TemplateError as exc:
        raise ReportError(f"template execution: {exc}") from exc


def write_report(summary: RunSummary, directory: Path | None = None) -> Path:
    """Render *summary* and write it to a timestamped file in *directory*.

    Defaults to ``settings.report_dir``.

    Raises:
        ReportError: If rendering or writing the file fails.
    """
    directory = Path(directory if directory is not None else settings.report_dir)
    html = render_report(summary)
    path = directory / report_filename(summary)
    try:
        path.write_text(html, encoding="utf-8")
    except OSError as exc:
        raise ReportError(f"Could not write report {path}: {exc}") from exc
    logger.info("Report written to %s", path)
    return path
