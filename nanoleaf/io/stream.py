"""
Nanoleaf wire-level stream client.

This module implements the UDP side of Nanoleaf external control using asyncio.
It contains the StreamClient class, which owns one connected datagram socket
and sends pre-encoded frame datagrams to the device.

Terms:
- Datagram = One encoded frame batch
- Client = A class which sends Datagrams; the device never answers

Example usage:
async def main():
    client = await StreamClient.create(("192.0.2.10", 60222))
    async with client:
        await client.send(bytes([0x01, 0x00, 0x01, 0x00, 0xFF, 0x00, 0x00, 0x00, 0x01, 0x00]))

asyncio.run(main())
"""

import asyncio
import logging
from typing import Optional, Self, Tuple

from ..exceptions import TransportError


class StreamProtocol(asyncio.DatagramProtocol):
    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)
        self.transport: Optional[asyncio.transports.DatagramTransport] = None
        self.error: Optional[Exception] = None
        self.closed = False

    def connection_made(self, transport):
        self.transport = transport

    def datagram_received(self, data, addr):
        self.logger.debug(f"Ignoring unexpected datagram from {addr[0]}:{addr[1]} ({len(data)} bytes)")

    def error_received(self, exc):
        # Held until the next send so it reaches the caller
        self.logger.debug(f"Stream socket error: {exc}")
        self.error = exc

    def connection_lost(self, exc):
        self.closed = True
        if exc:
            self.logger.error(f"Stream connection lost: {exc}")
        else:
            self.logger.info("Stream connection closed")


class StreamClient:
    """
    Connected UDP socket towards a device's external control port.
      - One send() is one datagram, written in a single call
      - No acknowledgement, sequence numbers, retries or checksums
    """

    def __init__(self, server: Tuple[str, int], logger: Optional[logging.Logger] = None):
        self.server = server
        self.logger = logger or logging.getLogger(__name__)
        self._transport: Optional[asyncio.transports.DatagramTransport] = None
        self._protocol: Optional[StreamProtocol] = None
        self._closed = False

    @classmethod
    async def create(cls, server: Tuple[str, int], logger: Optional[logging.Logger] = None) -> Self:
        self = cls(server, logger)
        loop = asyncio.get_running_loop()
        transport, protocol = await loop.create_datagram_endpoint(
            lambda: StreamProtocol(self.logger),
            remote_addr=server,
        )
        self._transport = transport
        self._protocol = protocol
        self.logger.info(f"Stream socket open towards {server[0]}:{server[1]}")
        return self

    async def send(self, datagram: bytes):
        if not self.is_connected():
            raise TransportError(f"Stream socket to {self.server[0]}:{self.server[1]} is closed")
        if self._protocol.error is not None:
            error, self._protocol.error = self._protocol.error, None
            raise TransportError(f"Stream socket error: {error}") from error
        try:
            self._transport.sendto(datagram)
        except OSError as e:
            raise TransportError(f"Failed to send stream datagram: {e}") from e
        self.logger.debug(f"Sent {len(datagram)} byte datagram to {self.server[0]}:{self.server[1]}")

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    def is_connected(self) -> bool:
        """Check if client is connected"""
        return (self._transport is not None
                and not self._closed
                and not self._protocol.closed
                and not self._transport.is_closing())

    async def close(self):
        """Close the client"""
        if self._transport:
            self._closed = True
            transport, self._transport = self._transport, None
            transport.close()
