import asyncio
import json
from typing import Any, Optional

import pytest
import pytest_asyncio

from nanoleaf import HttpResponse, Nanoleaf


class FakeRequester:
    """Records requests and answers every one with the same canned response"""

    def __init__(self, status: int = 200, body: bytes = b""):
        self.status = status
        self.body = body
        self.calls: list[dict[str, Any]] = []

    async def request(self, method: str, url: str, *, headers: Optional[dict[str, str]] = None, json: Any = None) -> HttpResponse:
        self.calls.append({"method": method, "url": url, "headers": headers, "json": json})
        return HttpResponse(status=self.status, body=self.body)


class DatagramSink(asyncio.DatagramProtocol):
    """Local UDP endpoint standing in for the device's stream port"""

    def __init__(self):
        self.datagrams: asyncio.Queue = asyncio.Queue()
        self.port: int = 0

    def datagram_received(self, data, addr):
        self.datagrams.put_nowait(data)

    async def next(self, timeout: float = 1.0) -> bytes:
        return await asyncio.wait_for(self.datagrams.get(), timeout=timeout)


def activation_body(port: int, address: str = "127.0.0.1") -> bytes:
    return json.dumps({"streamControlIpAddr": address, "streamControlPort": port}).encode()


@pytest.fixture
def requester() -> FakeRequester:
    return FakeRequester(status=200, body=activation_body(60222))


@pytest.fixture
def nanoleaf(requester) -> Nanoleaf:
    return Nanoleaf("http://192.0.2.20:16021/api/v1", token="secret", http=requester)


@pytest_asyncio.fixture
async def sink():
    loop = asyncio.get_running_loop()
    transport, protocol = await loop.create_datagram_endpoint(DatagramSink, local_addr=("127.0.0.1", 0))
    protocol.port = transport.get_extra_info("sockname")[1]
    yield protocol
    transport.close()


@pytest_asyncio.fixture
async def connected_stream(requester, nanoleaf, sink):
    """A v2 stream activated against, and connected to, the local sink"""
    requester.body = activation_body(sink.port)
    stream = nanoleaf.stream()
    await stream.activate("v2")
    await stream.connect()
    yield stream
    await stream.disconnect()
