"""Exception hierarchy for keepsake-mcp.

Only configuration errors are fatal to the process. Validation and
registry lookup errors surface to the MCP host as error tool results;
transport errors never leave the HTTP client (they become
``NETWORK_ERROR`` failures instead).
"""

from __future__ import annotations


class KeepsakeError(Exception):
    """Base class for all keepsake-mcp errors."""


class ConfigurationError(KeepsakeError):
    """Required configuration is missing or invalid at startup."""


class ToolArgumentError(KeepsakeError):
    """Tool arguments failed validation against the parameter schema.

    Attributes:
        param: Name of the offending parameter.
        constraint: Short identifier of the violated constraint
            (``required``, ``type``, ``enum``, ``uuid``, ``minimum``...).
    """

    def __init__(self, param: str, constraint: str, message: str) -> None:
        super().__init__(f"Invalid argument '{param}' ({constraint}): {message}")
        self.param = param
        self.constraint = constraint


class UnknownOperationError(KeepsakeError):
    """No operation with the requested name is registered."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown tool: {name}")
        self.name = name


class DuplicateOperationError(KeepsakeError):
    """An operation name was registered twice."""


class RegistrySealedError(KeepsakeError):
    """Registration was attempted after the registry was sealed."""
