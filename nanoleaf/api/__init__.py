"""
API-level models and device API access.

This module contains models and types that belong to the API layer:
- FrameColor, PanelFrame, FrameBatch (what gets streamed)
- ActivationRequest, ActivationResponse (the external control handshake)
- encode_effect / decode_effect (the versioned binary frame layout)
- HttpRequester, AiohttpRequester (HTTP access to the device)
- Types and enums used by the API layer
"""

from .types import ProtocolVersion, SessionState, Const
from .models import FrameColor, PanelFrame, FrameBatch, ActivationRequest, ActivationResponse
from .codec import encode_effect, decode_effect
from .http import HttpRequester, HttpResponse, AiohttpRequester

__all__ = [
    # API-level models
    "FrameColor",
    "PanelFrame",
    "FrameBatch",
    "ActivationRequest",
    "ActivationResponse",

    # Wire encoding
    "encode_effect",
    "decode_effect",

    # HTTP
    "HttpRequester",
    "HttpResponse",
    "AiohttpRequester",

    # API-level types
    "ProtocolVersion",
    "SessionState",
    "Const",
]
