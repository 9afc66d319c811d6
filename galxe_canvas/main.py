"""
Main application entry point for the Galxe canvas service.

Provides the CLI to run the HTTP service, check an address from the terminal
and inspect the effective configuration.
"""

import sys
from typing import Optional

import click
from rich.console import Console
from rich.table import Table
from rich.text import Text

from galxe_canvas.core.config import configuration_summary, get_settings
from galxe_canvas.core.logging import bind_correlation_id, setup_logging
from galxe_canvas.core.models import SubmissionInput
from galxe_canvas.services.submission_service import SubmissionService

console = Console()


@click.group()
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.option("--json-logs", is_flag=True, help="Emit JSON log lines instead of rich output")
@click.pass_context
def main(ctx, debug: bool, json_logs: bool):
    """Galxe NFT balance checker for chat widget canvases."""
    ctx.ensure_object(dict)

    settings = get_settings()
    debug = debug or settings.debug
    setup_logging(debug=debug, rich_output=not (json_logs or settings.log_json))

    ctx.obj["settings"] = settings
    ctx.obj["debug"] = debug


@main.command()
@click.option("--host", help="Interface to bind (default: SERVICE_HOST)")
@click.option("--port", type=int, help="Port to listen on (default: PORT)")
@click.pass_context
def serve(ctx, host: Optional[str], port: Optional[int]):
    """Run the HTTP service."""
    import uvicorn

    from galxe_canvas.api.app import build_app

    settings = ctx.obj["settings"]
    host = host or settings.service_host
    port = port or settings.service_port

    console.print(f"Listening on {host}:{port}...")
    uvicorn.run(build_app(settings), host=host, port=port, reload=False)


@main.command()
@click.option("--address", required=True, help="Wallet address to check")
@click.option("--campaign-id", help="Galxe campaign id")
@click.option("--space-id", help="Galxe space id (all of its campaigns are checked)")
@click.option("--json", "as_json", is_flag=True, help="Print the canvas envelope as JSON")
@click.pass_context
def check(
    ctx,
    address: str,
    campaign_id: Optional[str],
    space_id: Optional[str],
    as_json: bool,
):
    """Run one submission through the pipeline and print the canvas."""
    bind_correlation_id()
    service = SubmissionService(ctx.obj["settings"])
    outcome = service.handle(
        SubmissionInput(address=address, campaign_id=campaign_id, space_id=space_id)
    )

    if as_json:
        click.echo(outcome.envelope().model_dump_json(exclude_none=True, indent=2))
    else:
        title = "Error" if outcome.is_error else f"{outcome.record_count} campaign(s)"
        table = Table(title=title)
        table.add_column("Type", style="cyan")
        table.add_column("Style")
        table.add_column("Text / Label")
        table.add_column("Action", style="magenta")
        for component in outcome.components:
            table.add_row(
                component.type,
                component.style or "",
                Text(component.text or component.label or ""),
                component.action.type if component.action else "",
            )
        console.print(table)

    if outcome.is_error:
        sys.exit(1)


@main.command()
def config():
    """Show the effective configuration."""
    table = Table(title="Galxe Canvas Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")
    for key, value in configuration_summary().items():
        table.add_row(key, Text(str(value)))
    console.print(table)


if __name__ == "__main__":
    main()
