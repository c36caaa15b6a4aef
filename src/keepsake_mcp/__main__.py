"""Allow ``python -m keepsake_mcp``."""

from keepsake_mcp.cli import cli

cli()
