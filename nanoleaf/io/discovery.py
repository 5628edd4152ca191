"""
Nanoleaf wire-level service discovery.

This module finds Nanoleaf devices on the local network with mDNS/DNS-SD.
Each query is a single bounded window: every answer received before the
timeout becomes an Endpoint, and nothing is remembered between queries.

Example usage:
async def main():
    endpoints = await NanoleafResolver().resolve(timeout=5.0)
    for endpoint in endpoints:
        print(endpoint.url)

asyncio.run(main())
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Optional, Protocol

from zeroconf import Error as ZeroconfError
from zeroconf import IPVersion, ServiceStateChange, Zeroconf
from zeroconf.asyncio import AsyncServiceBrowser, AsyncServiceInfo, AsyncZeroconf

from ..exceptions import DiscoveryError


# Constants
class DiscoveryConst:
    """Constants for discovery"""
    SERVICE_TYPE = "_nanoleafapi._tcp"
    API_PATH = "/api/v1"
    DEFAULT_TIMEOUT = 5.0
    INFO_TIMEOUT_MS = 3000


@dataclass(frozen=True)
class Endpoint:
    """A discovered device's HTTP API address"""
    host: str
    port: int
    path: str = DiscoveryConst.API_PATH

    @property
    def url(self) -> str:
        return f"http://{self.host}:{self.port}{self.path}"


class ServiceBrowser(Protocol):
    async def browse(self, service_type: str, timeout: float) -> list[tuple[str, int]]:
        ...


class ZeroconfBrowser:
    """ServiceBrowser backed by python-zeroconf"""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)

    @staticmethod
    def qualify_service_type(service_type: str) -> str:
        """
        >>> ZeroconfBrowser.qualify_service_type("_nanoleafapi._tcp")
        '_nanoleafapi._tcp.local.'
        """
        if service_type.endswith(".local."):
            return service_type
        return service_type.rstrip(".") + ".local."

    async def browse(self, service_type: str, timeout: float) -> list[tuple[str, int]]:
        fqn = self.qualify_service_type(service_type)
        answers: list[tuple[str, int]] = []
        lookups: set[asyncio.Task] = set()

        async def lookup(zeroconf: Zeroconf, type_: str, name: str):
            info = AsyncServiceInfo(type_, name)
            if not await info.async_request(zeroconf, DiscoveryConst.INFO_TIMEOUT_MS):
                self.logger.debug(f"No service info for {name}")
                return
            for address in info.parsed_addresses(IPVersion.V4Only):
                self.logger.debug(f"Found {name} at {address}:{info.port}")
                answers.append((address, info.port))

        def on_service_state_change(zeroconf: Zeroconf, service_type: str, name: str, state_change: ServiceStateChange):
            if state_change is ServiceStateChange.Added:
                lookups.add(asyncio.ensure_future(lookup(zeroconf, service_type, name)))

        aiozc = AsyncZeroconf(ip_version=IPVersion.V4Only)
        try:
            self.logger.info(f"Browsing for {fqn} for {timeout:.1f}s")
            browser = AsyncServiceBrowser(aiozc.zeroconf, [fqn], handlers=[on_service_state_change])
            try:
                await asyncio.sleep(timeout)
            finally:
                await browser.async_cancel()
                # Answers still resolving at the deadline are dropped
                for task in lookups:
                    task.cancel()
                for result in await asyncio.gather(*lookups, return_exceptions=True):
                    if isinstance(result, Exception):
                        self.logger.debug(f"Service info lookup failed: {result!r}")
        finally:
            await aiozc.async_close()
        return answers


class NanoleafResolver:
    """Turns a discovery query into Endpoints, one per answer received"""

    def __init__(self,
                 browser: Optional[ServiceBrowser] = None,
                 service_type: str = DiscoveryConst.SERVICE_TYPE,
                 logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)
        self.browser = browser or ZeroconfBrowser(self.logger)
        self.service_type = service_type

    async def resolve(self, timeout: float = DiscoveryConst.DEFAULT_TIMEOUT) -> list[Endpoint]:
        if timeout < 0:
            raise ValueError(f"Discovery timeout must not be negative, received {timeout}")
        try:
            answers = await self.browser.browse(self.service_type, timeout)
        except (OSError, ZeroconfError) as e:
            raise DiscoveryError(f"Discovery of {self.service_type} failed: {e}") from e
        # No dedup: a device answering twice yields two endpoints
        endpoints = [Endpoint(host=host, port=port) for host, port in answers]
        self.logger.info(f"Discovered {len(endpoints)} {self.service_type} endpoint(s)")
        return endpoints
