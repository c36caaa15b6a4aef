"""OperationRegistry: name to (descriptor, handler), validated dispatch.

Built once at startup, sealed, and read-only afterwards. Handlers are
pure translations from validated arguments to a single RemoteCall; the
registry owns the send, normalize, and render steps so every operation
shares them.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any, Protocol

from pydantic import BaseModel

from keepsake_mcp.errors import (
    DuplicateOperationError,
    RegistrySealedError,
    UnknownOperationError,
)
from keepsake_mcp.mcp.content import RenderedContent, render
from keepsake_mcp.mcp.params import ParamSpec, to_json_schema, validate_arguments

if TYPE_CHECKING:
    from keepsake_mcp.api.request import RemoteCall
    from keepsake_mcp.api.result import RemoteResult

logger = logging.getLogger(__name__)

Handler = Callable[[dict[str, Any]], "RemoteCall"]


class Annotations(BaseModel):
    """Safety hints advertised to the host. Not enforced locally."""

    model_config = {"frozen": True}

    title: str
    read_only: bool = False
    destructive: bool = False
    idempotent: bool = False
    open_world: bool = False


class OperationDescriptor(BaseModel):
    """Static metadata for one operation."""

    model_config = {"frozen": True}

    name: str
    description: str
    params: tuple[ParamSpec, ...] = ()
    annotations: Annotations

    @property
    def input_schema(self) -> dict[str, Any]:
        return to_json_schema(self.params)


class Sender(Protocol):
    async def send(self, call: RemoteCall) -> RemoteResult: ...


class Operation:
    """A registered descriptor together with its handler."""

    __slots__ = ("descriptor", "handler")

    def __init__(self, descriptor: OperationDescriptor, handler: Handler) -> None:
        self.descriptor = descriptor
        self.handler = handler

    @property
    def name(self) -> str:
        return self.descriptor.name

    def translate(self, arguments: Mapping[str, Any]) -> RemoteCall:
        """Validate *arguments* and build the RemoteCall without sending it."""
        validated = validate_arguments(self.descriptor.params, arguments)
        call = self.handler(validated)
        if self.descriptor.annotations.read_only and call.method != "GET":
            msg = f"Read-only operation {self.name} produced a {call.method} call"
            raise RuntimeError(msg)
        return call


class OperationRegistry:
    """Process-wide operation table.

    INVARIANT: names are unique and the table never changes after
    :meth:`seal`.
    """

    def __init__(self) -> None:
        self._operations: dict[str, Operation] = {}
        self._sealed = False

    def __len__(self) -> int:
        return len(self._operations)

    def __contains__(self, name: object) -> bool:
        return name in self._operations

    @property
    def sealed(self) -> bool:
        return self._sealed

    def register(self, descriptor: OperationDescriptor, handler: Handler) -> None:
        if self._sealed:
            msg = f"Cannot register {descriptor.name}: registry is sealed"
            raise RegistrySealedError(msg)
        if descriptor.name in self._operations:
            msg = f"Operation already registered: {descriptor.name}"
            raise DuplicateOperationError(msg)
        self._operations[descriptor.name] = Operation(descriptor, handler)
        logger.debug("Registered operation: %s", descriptor.name)

    def seal(self) -> None:
        self._sealed = True

    def get(self, name: str) -> Operation:
        try:
            return self._operations[name]
        except KeyError:
            raise UnknownOperationError(name) from None

    def descriptors(self) -> list[OperationDescriptor]:
        """All descriptors in registration order."""
        return [operation.descriptor for operation in self._operations.values()]

    async def invoke(
        self,
        name: str,
        arguments: Mapping[str, Any] | None,
        client: Sender,
    ) -> RenderedContent:
        """Validate, translate, send once, and render.

        Raises UnknownOperationError or ToolArgumentError before any
        remote call is made. Remote and transport failures are rendered,
        not raised.
        """
        operation = self.get(name)
        call = operation.translate(arguments or {})
        logger.debug("Invoking %s -> %s %s", name, call.method, call.path)
        result = await client.send(call)
        return render(result)
