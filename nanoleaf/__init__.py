"""
Nanoleaf Python Library

A Python library for discovering Nanoleaf panel arrays and streaming colours
to them over the external control (UDP) protocol.

This library provides three distinct layers of abstraction:

1. **nanoleaf.io**: Wire-level implementation (UDP datagrams, mDNS discovery)
2. **nanoleaf.api**: Device API using nanoleaf.io (activation handshake, frame encoding)
3. **nanoleaf.interface**: Pythonic interface to devices using nanoleaf.api (high-level objects)

Example usage:
    import nanoleaf

    nanoleafs = await nanoleaf.discover_nanoleafs(timeout=5.0)
    device = nanoleafs[0]
    device.token = "..."
    async with device.stream() as stream:
        await stream.activate(nanoleaf.ProtocolVersion.V2)
        await stream.connect()
        await stream.write_effect(nanoleaf.FrameBatch.solid([101, 102], nanoleaf.FrameColor(red=255)))
"""

# High-level interface (recommended for most users)
from .interface import Nanoleaf, NanoStream, discover_nanoleafs

# API-level models
from .api import FrameColor, PanelFrame, FrameBatch, ActivationRequest, ActivationResponse
from .api import encode_effect, decode_effect, HttpRequester, HttpResponse, AiohttpRequester

# Low-level models
from .io import StreamClient, NanoleafResolver, ZeroconfBrowser, Endpoint

# Shared types and exceptions
from .api.types import ProtocolVersion, SessionState
from .exceptions import (
    NanoleafError,
    InvalidVersionError,
    UnauthorizedError,
    UnexpectedResponseError,
    ParseError,
    NanoleafConnectionError,
    DisconnectionError,
    TransportError,
    DiscoveryError,
)

# Configuration and utilities
from .config import NanoleafConfig, load_config
from .utils import run_with_keyboard_interrupt

__version__ = "0.1.0"

# Public API - these are the main classes users should import
__all__ = [
    # High-level interface (recommended)
    "Nanoleaf",
    "NanoStream",
    "discover_nanoleafs",

    # API-level models (for advanced users)
    "FrameColor",
    "PanelFrame",
    "FrameBatch",
    "ActivationRequest",
    "ActivationResponse",
    "encode_effect",
    "decode_effect",
    "HttpRequester",
    "HttpResponse",
    "AiohttpRequester",

    # Low-level models (for advanced users)
    "StreamClient",
    "NanoleafResolver",
    "ZeroconfBrowser",
    "Endpoint",

    # Exceptions
    "NanoleafError",
    "InvalidVersionError",
    "UnauthorizedError",
    "UnexpectedResponseError",
    "ParseError",
    "NanoleafConnectionError",
    "DisconnectionError",
    "TransportError",
    "DiscoveryError",

    # Types and enums
    "ProtocolVersion",
    "SessionState",

    # Configuration and utilities
    "NanoleafConfig",
    "load_config",
    "run_with_keyboard_interrupt",
]
