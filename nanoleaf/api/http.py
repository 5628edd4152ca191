"""
HTTP request capability used for device configuration calls.

Anything with a matching `request` coroutine can stand in for AiohttpRequester,
which keeps the stream session testable without a device on the network.
"""

import logging
from dataclasses import dataclass
from typing import Any, Optional, Protocol

from aiohttp import ClientSession, ClientTimeout


@dataclass
class HttpResponse:
    status: int
    body: bytes


class HttpRequester(Protocol):
    async def request(self,
                      method: str,
                      url: str,
                      *,
                      headers: Optional[dict[str, str]] = None,
                      json: Any = None) -> HttpResponse:
        ...


class AiohttpRequester:
    """HttpRequester backed by an aiohttp ClientSession"""

    DEFAULT_TIMEOUT = 5.0

    def __init__(self,
                 session: Optional[ClientSession] = None,
                 timeout: float = DEFAULT_TIMEOUT,
                 logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)
        self._session = session
        self._owns_session = session is None
        self._timeout = ClientTimeout(total=timeout)

    async def request(self,
                      method: str,
                      url: str,
                      *,
                      headers: Optional[dict[str, str]] = None,
                      json: Any = None) -> HttpResponse:
        if self._session is None:
            self._session = ClientSession(timeout=self._timeout)
        self.logger.debug(f"HTTP {method} {url}")
        async with self._session.request(method, url, headers=headers, json=json) as resp:
            body = await resp.read()
            self.logger.debug(f"HTTP {method} {url} -> {resp.status} ({len(body)} bytes)")
            return HttpResponse(status=resp.status, body=body)

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def close(self):
        """Close the underlying session if this requester created it"""
        if self._session is not None and self._owns_session:
            await self._session.close()
            self._session = None
