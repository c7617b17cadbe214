"""Report package: renders a run summary to a static HTML file."""

from linkaudit.report.renderer import render_report, write_report

__all__ = ["render_report", "write_report"]
