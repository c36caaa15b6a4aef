"""Parameter descriptors and the generic argument validator.

Every tool parameter is described by a frozen :class:`ParamSpec`. One
function, :func:`validate_arguments`, interprets the descriptors; another,
:func:`to_json_schema`, renders them for ``tools/list``.
"""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from enum import Enum, StrEnum
from typing import Any

from pydantic import BaseModel

from keepsake_mcp.errors import ToolArgumentError

UUID_PATTERN = re.compile(
    r"^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}$"
)


class ParamKind(StrEnum):
    STRING = "string"
    INTEGER = "integer"
    BOOLEAN = "boolean"
    ENUM = "enum"
    ARRAY = "array"


class ParamSpec(BaseModel):
    """Constraint descriptor for one tool parameter.

    Attributes:
        name: Argument name as sent by the host.
        kind: Semantic type.
        description: Text shown to the agent.
        required: Whether the argument must be present.
        choices: Allowed values for ``ENUM``.
        uuid: ``STRING`` values must be UUIDs.
        minimum: Inclusive lower bound for ``INTEGER``.
        exclusive_minimum: Exclusive lower bound for ``INTEGER``.
        items: Element descriptor for ``ARRAY``.
    """

    model_config = {"frozen": True}

    name: str
    kind: ParamKind
    description: str = ""
    required: bool = False
    choices: tuple[str, ...] = ()
    uuid: bool = False
    minimum: int | None = None
    exclusive_minimum: int | None = None
    items: ParamSpec | None = None


# ---------------------------------------------------------------------------
# Constructors
# ---------------------------------------------------------------------------


def string(name: str, description: str, *, required: bool = False) -> ParamSpec:
    return ParamSpec(name=name, kind=ParamKind.STRING, description=description, required=required)


def uuid(name: str, description: str, *, required: bool = False) -> ParamSpec:
    return ParamSpec(
        name=name,
        kind=ParamKind.STRING,
        description=description,
        required=required,
        uuid=True,
    )


def integer(
    name: str,
    description: str,
    *,
    required: bool = False,
    minimum: int | None = None,
    exclusive_minimum: int | None = None,
) -> ParamSpec:
    return ParamSpec(
        name=name,
        kind=ParamKind.INTEGER,
        description=description,
        required=required,
        minimum=minimum,
        exclusive_minimum=exclusive_minimum,
    )


def positive_int(name: str, description: str, *, required: bool = False) -> ParamSpec:
    return integer(name, description, required=required, exclusive_minimum=0)


def boolean(name: str, description: str, *, required: bool = False) -> ParamSpec:
    return ParamSpec(name=name, kind=ParamKind.BOOLEAN, description=description, required=required)


def choice(
    name: str,
    domain: type[Enum],
    description: str,
    *,
    required: bool = False,
) -> ParamSpec:
    return ParamSpec(
        name=name,
        kind=ParamKind.ENUM,
        description=description,
        required=required,
        choices=tuple(str(member.value) for member in domain),
    )


def uuid_list(name: str, description: str, *, required: bool = False) -> ParamSpec:
    return ParamSpec(
        name=name,
        kind=ParamKind.ARRAY,
        description=description,
        required=required,
        items=ParamSpec(name=name, kind=ParamKind.STRING, uuid=True),
    )


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


def _check(spec: ParamSpec, value: Any, label: str) -> Any:
    """Validate one value; return it (integral floats become ints)."""
    if value is None:
        raise ToolArgumentError(label, "type", f"expected {spec.kind}, received null")

    if spec.kind in (ParamKind.STRING, ParamKind.ENUM):
        if not isinstance(value, str):
            raise ToolArgumentError(label, "type", f"expected string, received {_type_name(value)}")
        if spec.kind is ParamKind.ENUM and value not in spec.choices:
            allowed = ", ".join(spec.choices)
            raise ToolArgumentError(label, "enum", f"must be one of: {allowed}")
        if spec.uuid and not UUID_PATTERN.match(value):
            raise ToolArgumentError(label, "uuid", "must be a UUID")
        return value

    if spec.kind is ParamKind.INTEGER:
        if isinstance(value, float) and value.is_integer():
            value = int(value)
        if isinstance(value, bool) or not isinstance(value, int):
            raise ToolArgumentError(
                label, "type", f"expected integer, received {_type_name(value)}"
            )
        if spec.minimum is not None and value < spec.minimum:
            raise ToolArgumentError(label, "minimum", f"must be >= {spec.minimum}")
        if spec.exclusive_minimum is not None and value <= spec.exclusive_minimum:
            raise ToolArgumentError(label, "minimum", f"must be > {spec.exclusive_minimum}")
        return value

    if spec.kind is ParamKind.BOOLEAN:
        if not isinstance(value, bool):
            raise ToolArgumentError(
                label, "type", f"expected boolean, received {_type_name(value)}"
            )
        return value

    if not isinstance(value, list):
        raise ToolArgumentError(label, "type", f"expected array, received {_type_name(value)}")
    if spec.items is None:
        return list(value)
    return [_check(spec.items, item, f"{label}[{index}]") for index, item in enumerate(value)]


def _type_name(value: Any) -> str:
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, dict):
        return "object"
    if isinstance(value, list):
        return "array"
    return type(value).__name__


def validate_arguments(
    params: Sequence[ParamSpec],
    arguments: Mapping[str, Any],
) -> dict[str, Any]:
    """Validate *arguments* against *params*.

    Returns the accepted arguments in declaration order. Names not
    declared in *params* are dropped. Raises ToolArgumentError on the
    first violation.
    """
    validated: dict[str, Any] = {}
    for spec in params:
        if spec.name not in arguments:
            if spec.required:
                raise ToolArgumentError(spec.name, "required", "is required")
            continue
        validated[spec.name] = _check(spec, arguments[spec.name], spec.name)
    return validated


# ---------------------------------------------------------------------------
# JSON Schema
# ---------------------------------------------------------------------------


def _property_schema(spec: ParamSpec) -> dict[str, Any]:
    schema: dict[str, Any]
    if spec.kind is ParamKind.ENUM:
        schema = {"type": "string", "enum": list(spec.choices)}
    elif spec.kind is ParamKind.ARRAY:
        schema = {"type": "array"}
        if spec.items is not None:
            schema["items"] = _property_schema(spec.items)
    else:
        schema = {"type": str(spec.kind)}
    if spec.uuid:
        schema["format"] = "uuid"
    if spec.minimum is not None:
        schema["minimum"] = spec.minimum
    if spec.exclusive_minimum is not None:
        schema["exclusiveMinimum"] = spec.exclusive_minimum
    if spec.description:
        schema["description"] = spec.description
    return schema


def to_json_schema(params: Sequence[ParamSpec]) -> dict[str, Any]:
    """Render *params* as a JSON Schema object for ``inputSchema``."""
    schema: dict[str, Any] = {
        "type": "object",
        "properties": {spec.name: _property_schema(spec) for spec in params},
    }
    required = [spec.name for spec in params if spec.required]
    if required:
        schema["required"] = required
    return schema
