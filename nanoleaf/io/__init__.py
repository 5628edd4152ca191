"""
Wire-level implementation.

This module contains the lowest-level communication components:
- StreamClient - Raw UDP datagram sending
- NanoleafResolver, ZeroconfBrowser - mDNS service discovery
- Endpoint - A discovered device address
"""

from .stream import StreamClient, StreamProtocol
from .discovery import NanoleafResolver, ZeroconfBrowser, ServiceBrowser, Endpoint, DiscoveryConst

__all__ = [
    "StreamClient",
    "StreamProtocol",
    "NanoleafResolver",
    "ZeroconfBrowser",
    "ServiceBrowser",
    "Endpoint",
    "DiscoveryConst",
]
