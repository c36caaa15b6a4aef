"""Request builder: turns a logical call into a ``RemoteCall``.

Query strings follow a fixed skipping rule: ``None`` and ``""`` are
dropped, every other value (including ``False`` and ``0``) is kept and
percent-encoded with the ``encodeURIComponent`` unreserved set.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, Literal
from urllib.parse import quote

from pydantic import BaseModel, model_validator

HttpMethod = Literal["GET", "POST", "PATCH", "DELETE"]

# Characters encodeURIComponent leaves alone besides [A-Za-z0-9_.-~].
_UNRESERVED = "!*'()"


class RemoteCall(BaseModel):
    """One HTTP request to the Keepsake API, relative to the base URL.

    Attributes:
        method: HTTP verb.
        path: Path below the base URL, always starting with ``/``.
        query: Encoded query string, either ``""`` or ``"?k=v&..."``.
        body: JSON body; always ``None`` for GET.
    """

    model_config = {"frozen": True}

    method: HttpMethod = "GET"
    path: str
    query: str = ""
    body: dict[str, Any] | None = None

    @model_validator(mode="after")
    def _get_has_no_body(self) -> RemoteCall:
        if self.method == "GET" and self.body is not None:
            msg = "GET requests cannot carry a body"
            raise ValueError(msg)
        return self

    @property
    def target(self) -> str:
        """Path plus query string."""
        return f"{self.path}{self.query}"


def _stringify(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return ",".join(_stringify(item) for item in value)
    return str(value)


def _encode(text: str) -> str:
    return quote(text, safe=_UNRESERVED)


def encode_query(params: Mapping[str, Any]) -> str:
    """Encode *params* in iteration order, skipping ``None`` and ``""``."""
    parts = [
        f"{_encode(str(key))}={_encode(_stringify(value))}"
        for key, value in params.items()
        if value is not None and value != ""
    ]
    if not parts:
        return ""
    return "?" + "&".join(parts)


def path_segment(value: Any) -> str:
    """Percent-encode a value spliced into a URL path."""
    return quote(str(value), safe="")


def pick(arguments: Mapping[str, Any], names: Iterable[str]) -> dict[str, Any]:
    """Select *names* from *arguments* in the given order, absent keys as None."""
    return {name: arguments.get(name) for name in names}


def without(arguments: Mapping[str, Any], *names: str) -> dict[str, Any]:
    """Copy *arguments* minus *names* (path parameters consumed elsewhere)."""
    return {key: value for key, value in arguments.items() if key not in names}


def build_call(
    path: str,
    method: HttpMethod = "GET",
    *,
    query: Mapping[str, Any] | None = None,
    body: Mapping[str, Any] | None = None,
    suffix: str = "",
) -> RemoteCall:
    """Build a RemoteCall.

    *query* is run through :func:`encode_query`. *suffix* is a literal,
    already-encoded query fragment (``"?permanent=true"``) used instead
    of the generic encoder. *body* is discarded for GET.
    """
    encoded = suffix or encode_query(query or {})
    payload = dict(body) if body is not None and method != "GET" else None
    return RemoteCall(method=method, path=path, query=encoded, body=payload)
