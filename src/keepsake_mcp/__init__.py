"""keepsake-mcp: MCP server for the Keepsake personal CRM."""

__version__ = "1.0.0"
