"""API layer: request building, HTTP transport, and result normalization.

This layer depends on stdlib, pydantic and httpx.
It must never import from mcp or cli.
"""
