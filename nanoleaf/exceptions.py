"""
Nanoleaf library exceptions.

This module defines all custom exceptions used throughout the library.
"""

from typing import Optional


class NanoleafError(Exception):
    """Base exception for Nanoleaf errors"""
    pass


class InvalidVersionError(NanoleafError, ValueError):
    """Raised when a stream protocol version is not v1 or v2"""
    pass


class UnauthorizedError(NanoleafError):
    """Raised when the device rejects the auth token"""
    pass


class UnexpectedResponseError(NanoleafError):
    """Raised when the device answers with an unexpected HTTP status"""

    def __init__(self, status: int, message: Optional[str] = None):
        self.status = status
        super().__init__(message or f"Unexpected HTTP status {status}")


class ParseError(NanoleafError):
    """Raised when a response body cannot be parsed"""
    pass


class NanoleafConnectionError(NanoleafError):
    """Raised when the UDP stream socket cannot be opened"""
    pass


class DisconnectionError(NanoleafError):
    """Raised when the UDP stream socket cannot be closed"""
    pass


class TransportError(NanoleafError):
    """Raised when a frame cannot be sent"""
    pass


class DiscoveryError(NanoleafError):
    """Raised when the network service discovery query fails"""
    pass
