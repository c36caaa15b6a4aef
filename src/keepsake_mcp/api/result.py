"""ApiSuccess and ApiFailure: the normalized outcome of one remote call.

The remote body decides the outcome: a truthy ``error`` field is a
failure, anything else is a success. HTTP status codes are not
interpreted. ``NETWORK_ERROR`` is the only error code produced locally.
"""

from __future__ import annotations

import json
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict

NETWORK_ERROR = "NETWORK_ERROR"


class PageMeta(BaseModel):
    """Pagination info attached to list responses."""

    model_config = ConfigDict(frozen=True, extra="allow")

    total: int | None = None
    limit: int | None = None
    offset: int | None = None


def describe_error(error: Any) -> str:
    """Human-readable message for a remote ``error`` value.

    A bare string is used as is; an object contributes its ``message``
    when that is truthy. Non-string values are JSON-encoded.
    """
    if isinstance(error, str):
        return error
    if isinstance(error, dict) and error.get("message"):
        error = error["message"]
        if isinstance(error, str):
            return error
    return json.dumps(error, ensure_ascii=False, separators=(",", ":"))


class ApiSuccess(BaseModel):
    """Successful round trip. *payload* is the parsed body, verbatim."""

    model_config = {"frozen": True}

    ok: Literal[True] = True
    payload: Any = None

    @property
    def data(self) -> Any:
        if isinstance(self.payload, dict):
            return self.payload.get("data")
        return None

    @property
    def has_data(self) -> bool:
        return self.data is not None

    @property
    def meta(self) -> PageMeta | None:
        if isinstance(self.payload, dict) and isinstance(self.payload.get("meta"), dict):
            return PageMeta.model_validate(self.payload["meta"])
        return None


class ApiFailure(BaseModel):
    """Failed call. *error* is the remote ``error`` value, verbatim."""

    model_config = {"frozen": True}

    ok: Literal[False] = False
    error: Any

    @property
    def code(self) -> str | None:
        if isinstance(self.error, dict) and self.error.get("code") is not None:
            return str(self.error["code"])
        return None

    @property
    def message(self) -> str:
        return describe_error(self.error)


RemoteResult = ApiSuccess | ApiFailure


def _is_error(value: Any) -> bool:
    # Empty objects and arrays still count as errors.
    return value not in (None, False, "")


def normalize(payload: Any) -> RemoteResult:
    """Classify a parsed JSON body as success or failure."""
    if isinstance(payload, dict) and _is_error(payload.get("error")):
        return ApiFailure(error=payload["error"])
    return ApiSuccess(payload=payload)


def network_failure(exc: BaseException) -> ApiFailure:
    """Wrap a transport-level exception as a ``NETWORK_ERROR`` failure."""
    return ApiFailure(error={"code": NETWORK_ERROR, "message": f"{type(exc).__name__}: {exc}"})
