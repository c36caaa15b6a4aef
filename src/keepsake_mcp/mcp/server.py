"""MCP server setup: low-level ``mcp`` Server over stdio.

The SDK's low-level Server is the dispatcher: it answers ``tools/list``
from the registry's descriptors and routes ``tools/call`` through
:meth:`OperationRegistry.invoke`. The registry, not the SDK, validates
arguments, so SDK-side input validation is switched off.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import anyio
from mcp import types
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server

from keepsake_mcp import __version__
from keepsake_mcp.api.client import KeepsakeClient
from keepsake_mcp.mcp.tools import build_registry

if TYPE_CHECKING:
    from keepsake_mcp.config.settings import KeepsakeSettings
    from keepsake_mcp.mcp.registry import OperationDescriptor, OperationRegistry, Sender

__all__ = ["create_server", "run_stdio", "serve_stdio", "to_mcp_tool"]

SERVER_NAME = "keepsake"

logger = logging.getLogger(__name__)


def to_mcp_tool(descriptor: OperationDescriptor) -> types.Tool:
    """Convert a descriptor to the SDK's Tool listing entry."""
    hints = descriptor.annotations
    return types.Tool(
        name=descriptor.name,
        description=descriptor.description,
        inputSchema=descriptor.input_schema,
        annotations=types.ToolAnnotations(
            title=hints.title,
            readOnlyHint=hints.read_only,
            destructiveHint=hints.destructive,
            idempotentHint=hints.idempotent,
            openWorldHint=hints.open_world,
        ),
    )


def create_server(registry: OperationRegistry, client: Sender) -> Server:
    """Create the MCP server and attach the list/call handlers.

    *registry* should already be sealed; *client* performs the remote
    calls and is shared by every invocation.
    """
    server: Server = Server(SERVER_NAME, version=__version__)
    tools = [to_mcp_tool(descriptor) for descriptor in registry.descriptors()]

    @server.list_tools()  # type: ignore[no-untyped-call,untyped-decorator]
    async def list_tools() -> list[types.Tool]:
        return tools

    @server.call_tool(validate_input=False)  # type: ignore[untyped-decorator]
    async def call_tool(name: str, arguments: dict[str, Any] | None) -> list[types.TextContent]:
        content = await registry.invoke(name, arguments, client)
        return [types.TextContent(type="text", text=block.text) for block in content.blocks]

    return server


async def serve_stdio(settings: KeepsakeSettings) -> None:
    """Build the registry, open the HTTP client, and serve until stdin closes."""
    registry = build_registry()
    logger.info("Serving %d operations against %s", len(registry), settings.api_url)
    async with KeepsakeClient(settings) as client:
        server = create_server(registry, client)
        async with stdio_server() as (read_stream, write_stream):
            await server.run(read_stream, write_stream, server.create_initialization_options())


def run_stdio(settings: KeepsakeSettings) -> None:
    """Blocking entry point used by the CLI."""
    anyio.run(serve_stdio, settings)
