"""KeepsakeClient: sends a RemoteCall and normalizes the outcome.

One ``httpx.AsyncClient`` is shared for the lifetime of the server and
is safe for concurrent invocations. Each ``send`` performs exactly one
request: no retry, no backoff, no local timeout.
"""

from __future__ import annotations

from types import TracebackType
from typing import TYPE_CHECKING

import httpx
import structlog

from keepsake_mcp import __version__
from keepsake_mcp.api.result import RemoteResult, network_failure, normalize

if TYPE_CHECKING:
    from keepsake_mcp.api.request import RemoteCall
    from keepsake_mcp.config.settings import KeepsakeSettings

log = structlog.get_logger(__name__)


class KeepsakeClient:
    """Async HTTP client for the Keepsake REST API.

    Usage::

        async with KeepsakeClient(settings) as client:
            result = await client.send(build_call("/contacts"))

    *transport* replaces the network transport (tests pass an
    ``httpx.MockTransport``).
    """

    def __init__(
        self,
        settings: KeepsakeSettings,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = settings.api_url
        self._http = httpx.AsyncClient(
            headers={
                "Authorization": f"Bearer {settings.require_api_key()}",
                "Content-Type": "application/json",
                "User-Agent": f"keepsake-mcp/{__version__}",
            },
            timeout=None,
            transport=transport,
        )

    async def __aenter__(self) -> KeepsakeClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    def url_for(self, call: RemoteCall) -> str:
        """Absolute URL for *call*."""
        return f"{self._base_url}{call.target}"

    async def send(self, call: RemoteCall) -> RemoteResult:
        """Issue *call* once and return the normalized result.

        Transport and URL failures and undecodable bodies come back as
        ``NETWORK_ERROR`` failures; this method does not raise them.
        """
        url = self.url_for(call)
        log.debug("remote call", method=call.method, path=call.path)
        try:
            response = await self._http.request(call.method, url, json=call.body)
            payload = response.json()
        except (httpx.HTTPError, httpx.InvalidURL, ValueError) as exc:
            log.warning("remote call failed", method=call.method, path=call.path, error=str(exc))
            return network_failure(exc)
        log.debug("remote call done", path=call.path, status=response.status_code)
        return normalize(payload)
