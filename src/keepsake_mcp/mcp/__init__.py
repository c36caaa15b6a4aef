"""MCP adapter: operation registry, tool catalogue, and stdio server.

Everything except ``server`` is importable and testable without a
running MCP session.
"""
