"""Root CLI group for keepsake-mcp with global flags and the serve command."""

from __future__ import annotations

import click

from keepsake_mcp import __version__
from keepsake_mcp.config.logging import configure_logging
from keepsake_mcp.config.settings import KeepsakeSettings
from keepsake_mcp.errors import ConfigurationError


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="keepsake-mcp")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging to stderr.")
@click.option("--log-json", is_flag=True, help="Structured JSON logs to stderr.")
@click.option("--api-url", default=None, help="Override KEEPSAKE_API_URL.")
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    log_json: bool,
    api_url: str | None,
) -> None:
    """keepsake-mcp: Keepsake CRM tools for MCP hosts.

    With no subcommand, serves over stdio (what MCP hosts launch).
    """
    # Unset flags fall through to KEEPSAKE_* env vars.
    settings = KeepsakeSettings.from_cli(
        verbose=verbose or None,
        log_json=log_json or None,
        api_url=api_url,
    )
    configure_logging(
        verbose=settings.verbose,
        log_json=settings.log_json,
        secrets=(settings.api_key,),
    )
    ctx.obj = settings
    if ctx.invoked_subcommand is None:
        ctx.invoke(serve)


@cli.command()
@click.pass_obj
def serve(settings: KeepsakeSettings) -> None:
    """Serve the Keepsake tools over stdio.

    Exits with status 1 before opening the channel if KEEPSAKE_API_KEY
    is unset.
    """
    try:
        settings.require_api_key()
    except ConfigurationError as exc:
        click.echo(f"Error: {exc}", err=True)
        raise SystemExit(1) from None

    from keepsake_mcp.mcp.server import run_stdio

    run_stdio(settings)
