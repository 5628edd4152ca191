import logging
from typing import Iterable, Optional

from colorama import Fore, Style

from ..api import ActivationRequest, ActivationResponse, FrameBatch, PanelFrame, ProtocolVersion, SessionState, Const
from ..api.codec import encode_effect
from ..api.http import AiohttpRequester, HttpRequester
from ..exceptions import (
    DisconnectionError,
    NanoleafConnectionError,
    TransportError,
    UnauthorizedError,
    UnexpectedResponseError,
)
from ..io import NanoleafResolver, StreamClient, DiscoveryConst

"""
===================================================================================
This module takes the Nanoleaf API and wire-level stream and provides a higher
level interface for pushing colours to panels from Python.
===================================================================================

Terms:
Nanoleaf = A handle on one device: its API base URL and auth token.
NanoStream = An external control session on a Nanoleaf. Activated over HTTP,
             then connected over UDP, then fed frame batches.

Example usage:
async def main():
    async with Nanoleaf("http://192.0.2.20:16021/api/v1", token="...") as nanoleaf:
        async with nanoleaf.stream() as stream:
            await stream.activate(ProtocolVersion.V2)
            await stream.connect()
            await stream.write_effect(FrameBatch.solid([1, 2, 3], FrameColor(red=255)))
"""


class Nanoleaf:
    def __init__(self,
                 url: str,
                 token: Optional[str] = None,
                 http: Optional[HttpRequester] = None,
                 logger: Optional[logging.Logger] = None):
        self.url = url.rstrip("/")
        self.token = token
        self.logger = logger or logging.getLogger(__name__)
        self._owns_http = http is None
        self.http: HttpRequester = http or AiohttpRequester(logger=self.logger)

    def __repr__(self) -> str:
        return f"Nanoleaf(url={self.url!r})"

    def stream(self, print_traffic: bool = False) -> "NanoStream":
        """Create a new, inert, external control session on this device"""
        return NanoStream(self, logger=self.logger, print_traffic=print_traffic)

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def close(self):
        """Release the HTTP requester if this handle created it"""
        if self._owns_http and isinstance(self.http, AiohttpRequester):
            await self.http.close()


class NanoStream:
    """
    External control session.

    States: UNINITIALIZED -> ACTIVATED -> CONNECTED -> DISCONNECTED.
    Not safe for concurrent use; callers sharing a session must lock around it.
    """

    def __init__(self,
                 nanoleaf: Nanoleaf,
                 logger: Optional[logging.Logger] = None,
                 print_traffic: bool = False):
        self.nanoleaf = nanoleaf
        self.logger = logger or logging.getLogger(__name__)
        self.print_traffic = print_traffic
        self.address: Optional[str] = None
        self.port: Optional[int] = None
        self.version: Optional[ProtocolVersion] = None
        self._client: Optional[StreamClient] = None
        self._state = SessionState.UNINITIALIZED

    @property
    def state(self) -> SessionState:
        return self._state

    def is_connected(self) -> bool:
        """Check if the stream socket is open"""
        return self._state is SessionState.CONNECTED

    # ============================
    # ACTIVATION
    # ============================

    async def activate(self, version: ProtocolVersion | str):
        """
        Switch the device into external control mode and learn the UDP target.

        Does not open a socket. Re-activating a connected session keeps the
        current socket; a new target only takes effect on the next connect().
        """
        version = ProtocolVersion.parse(version)
        if not self.nanoleaf.token:
            raise UnauthorizedError(f"No auth token for {self.nanoleaf.url}")

        request = ActivationRequest(version=version)
        url = f"{self.nanoleaf.url}/{self.nanoleaf.token}/{Const.EFFECTS_PATH}"
        resp = await self.nanoleaf.http.request(
            "PUT", url,
            headers={"Content-Type": "application/json"},
            json=request.to_json(),
        )

        if resp.status == 401:
            raise UnauthorizedError(f"Auth token rejected by {self.nanoleaf.url}")
        if resp.status != 200:
            raise UnexpectedResponseError(resp.status, f"Activation on {self.nanoleaf.url} returned HTTP {resp.status}")
        target = ActivationResponse.from_bytes(resp.body)

        self.address = target.address
        self.port = target.port
        self.version = version
        if self._state is not SessionState.CONNECTED:
            self._state = SessionState.ACTIVATED
        self.logger.info(f"External control {version.value} active on {self.nanoleaf.url}, stream target {self.address}:{self.port}")

    # ============================
    # TRANSPORT
    # ============================

    async def connect(self):
        """Open the UDP socket to the activated target"""
        if not self.address or self.port is None:
            raise NanoleafConnectionError("Stream has no target address; call activate() first")
        if self._client is not None:
            client, self._client = self._client, None
            self._state = SessionState.DISCONNECTED
            await client.close()
        try:
            self._client = await StreamClient.create((self.address, self.port), logger=self.logger)
        except OSError as e:
            raise NanoleafConnectionError(f"Failed to open stream socket to {self.address}:{self.port}: {e}") from e
        self._state = SessionState.CONNECTED

    async def disconnect(self):
        """Close the UDP socket. Does nothing if the stream is not connected."""
        if self._client is None:
            self.logger.debug("Stream already disconnected")
            return
        client, self._client = self._client, None
        self._state = SessionState.DISCONNECTED
        try:
            await client.close()
        except OSError as e:
            raise DisconnectionError(f"Failed to close stream socket to {client.server[0]}:{client.server[1]}: {e}") from e

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.disconnect()

    # ============================
    # FRAMES
    # ============================

    async def write_effect(self, batch: FrameBatch | Iterable[PanelFrame]):
        """Send one batch as one datagram. An empty batch sends nothing."""
        panels = list(batch)
        if not panels:
            return
        if self._client is None or self._state is not SessionState.CONNECTED:
            raise TransportError("Stream is not connected")
        datagram = encode_effect(panels, self.version)
        if self.print_traffic:
            print(Fore.MAGENTA + f"STREAM {self.version.value} TO: {self.address}:{self.port}"
                  + Fore.CYAN + f"  SEND: [{', '.join(f'0x{b:02X}' for b in datagram)}]"
                  + Style.RESET_ALL)
        await self._client.send(datagram)


async def discover_nanoleafs(timeout: float = DiscoveryConst.DEFAULT_TIMEOUT,
                             resolver: Optional[NanoleafResolver] = None,
                             http: Optional[HttpRequester] = None,
                             logger: Optional[logging.Logger] = None) -> list[Nanoleaf]:
    """
    Discover devices and return one tokenless Nanoleaf per endpoint found.
    Set `token` on each handle before activating a stream.
    """
    resolver = resolver or NanoleafResolver(logger=logger)
    endpoints = await resolver.resolve(timeout)
    return [Nanoleaf(endpoint.url, http=http, logger=logger) for endpoint in endpoints]
