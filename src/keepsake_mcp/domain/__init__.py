"""Domain layer: shared enumerations for the Keepsake API.

This layer depends only on stdlib.
It must never import from api, mcp, or config.
"""
