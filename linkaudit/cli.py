"""Link audit CLI: entry-point for a full audit run.

Usage:
    linkaudit
    python -m linkaudit.cli

Takes no arguments.  Configuration comes from the environment or a `.env`
file (see ``linkaudit.config``).  The run has four stages:
    login     → authenticate against the portal
    listing   → discover the pathway pages
    checking  → extract and check every page's links concurrently
    report    → write LinkCheck<timestamp>.html to the report directory
"""

from __future__ import annotations

import logging

import typer

from linkaudit.config import settings
from linkaudit.errors import LinkAuditError
from linkaudit.portal import list_pages, open_session
from linkaudit.report import write_report
from linkaudit.scraper import run
from linkaudit.scraper.models import RunSummary

app = typer.Typer(
    name="linkaudit",
    help="Check every pathway page on the portal for broken outbound links.",
    add_completion=False,
)


def _echo_summary(summary: RunSummary) -> None:
    """Print one status line per page followed by the run totals."""
    for i, page in enumerate(summary.pages):
        typer.echo(
            f"  {i}\tStatus {page.status_code}\tLinks {len(page.links)}"
            f"\tBad {page.bad_links}\tMod {page.modified_links} - {page.name[:10]}"
        )
    typer.echo(
        f"[summary] Links: {summary.total_links}  Bad: {summary.total_bad_links}"
        f"  Mods: {summary.total_modified_links}  ({summary.percent_bad}% bad)"
    )


@app.command()
def main() -> None:
    """Log in, check every pathway page's links and write the HTML report."""
    logging.basicConfig(level=settings.log_level.upper(), format="%(message)s")

    try:
        typer.echo(f"[login] Establishing session with {settings.base_url} …")
        client = open_session(settings)
        with client:
            typer.echo("[listing] Getting pathways …")
            pages = list_pages(client, settings.listing_url, settings.base_url)
            typer.echo(f"[listing] Number of pathways added: {len(pages)}")

            typer.echo("[checking] Getting and checking pathway links …")
            summary = run(client, pages)

        _echo_summary(summary)
        typer.echo("[report] Building log HTML …")
        path = write_report(summary)
    except LinkAuditError as exc:
        typer.echo(f"[error] {exc}", err=True)
        raise typer.Exit(1)

    typer.echo(f"[report] Log HTML complete: {path}")


# ---------------------------------------------------------------------------
# Entry-point
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    app()
