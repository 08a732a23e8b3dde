"""CLI interface for the site analytics proxy."""

import json

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ....config.logging import setup_logging
from ....config.settings import settings
from ....core.domain import AnalyticsOutcome, ResultKind
from ....common.exception_handler import format_exception_json
from ..api.deps import build_analytics_service

app = typer.Typer(
    name="site-analytics",
    help="Visitor statistics proxy for the Cloudflare Analytics API",
    add_completion=False,
)

console = Console(legacy_windows=False)


def handle_cli_error(exc: Exception) -> None:
    """Display an error in the CLI with its code and location.

    Args:
        exc: The exception to display.
    """
    error_data = format_exception_json(exc, include_trace=settings.debug)

    if settings.debug:
        console.print(
            Panel(
                json.dumps(error_data, indent=2, default=str),
                title="[bold red]Error Details[/]",
                border_style="red",
            )
        )
        return

    error_code = error_data["error"].get("code", "UNKNOWN")
    console.print(f"\n[red]Error [{error_code}]:[/] {error_data['error']['message']}")
    console.print("[dim]Set DEBUG=true for full details[/]")


def _render_outcome(outcome: AnalyticsOutcome) -> None:
    """Print totals and the country ranking."""
    style = {ResultKind.MOCK: "yellow", ResultKind.REAL: "green", ResultKind.ERROR: "red"}[
        outcome.kind
    ]
    console.print(f"[bold {style}]{outcome.kind.value.upper()}[/] {outcome.message}")
    if outcome.error:
        console.print(f"[red]{outcome.error}[/]")
    if outcome.period:
        since, until = outcome.period
        console.print(f"[dim]Window: {since} .. {until}[/]")

    totals = outcome.totals
    console.print(
        f"\nPage views: [bold]{totals.page_views:,}[/]  "
        f"Unique visitors: [bold]{totals.unique_visitors:,}[/]  "
        f"Requests: [bold]{totals.requests:,}[/]\n"
    )

    if not outcome.countries:
        console.print("[dim]No country data[/]")
        return

    table = Table(title="Top countries")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Country")
    table.add_column("Page views", justify="right")
    table.add_column("Requests", justify="right")
    table.add_column("Share", justify="right")
    for rank, row in enumerate(outcome.countries, start=1):
        table.add_row(
            str(rank),
            row.country,
            f"{row.page_views:,}",
            f"{row.requests:,}",
            f"{row.percentage:.1f}%",
        )
    console.print(table)


@app.command()
def summary(
    as_json: bool = typer.Option(False, "--json", help="Print the raw JSON payload"),
) -> None:
    """Fetch the visitor summary once and print it."""
    try:
        outcome = build_analytics_service(settings).get_summary()
    except Exception as exc:
        handle_cli_error(exc)
        raise typer.Exit(1)

    if as_json:
        typer.echo(json.dumps(outcome.to_payload(), indent=2))
    else:
        _render_outcome(outcome)

    if outcome.kind is ResultKind.ERROR:
        raise typer.Exit(1)


@app.command()
def status() -> None:
    """Show which analytics source is configured."""
    console.print("[bold]Site Analytics Status[/]\n")

    if settings.cf_api_token:
        console.print("✅ API token configured")
    else:
        console.print("❌ API token not set (set CF_API_TOKEN in .env)")

    if settings.cf_zone_id:
        console.print(f"✅ Zone id configured ({settings.masked_zone_id})")
    else:
        console.print("❌ Zone id not set (set CF_ZONE_ID in .env)")

    mode = "Cloudflare GraphQL" if settings.has_credentials else "mock data"
    console.print(f"\nSource: [bold]{mode}[/]")
    console.print(f"Window: {settings.analytics_window_days} days")
    console.print(f"Top countries: {settings.analytics_top_countries}")


@app.command()
def serve(
    host: str = typer.Option("127.0.0.1", help="Bind address"),
    port: int = typer.Option(8000, help="Bind port"),
    reload: bool = typer.Option(False, help="Reload on code changes"),
) -> None:
    """Run the HTTP API with uvicorn."""
    import uvicorn

    setup_logging(
        level=settings.log_level, log_file=settings.log_file, json_format=settings.log_json
    )
    console.print(f"[bold]Serving on http://{host}:{port}[/] (docs at /docs)")
    uvicorn.run(
        "src.adapters.inbound.api.main:app",
        host=host,
        port=port,
        reload=reload,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    app()
