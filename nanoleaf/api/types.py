"""
API-level type definitions.

This module contains types and enums that belong to the API layer:
- Stream protocol versions and session states
- Constants used by the API layer
"""

from enum import Enum
from typing import Self

from ..exceptions import InvalidVersionError


class ProtocolVersion(str, Enum):
    V1 = "v1"
    V2 = "v2"

    @classmethod
    def parse(cls, version: "ProtocolVersion | str") -> Self:
        if isinstance(version, cls):
            return version
        for member in cls:
            if version == member.value:
                return member
        raise InvalidVersionError(f"Unsupported stream version {version!r}, expected one of: {', '.join(m.value for m in cls)}")


class SessionState(Enum):
    UNINITIALIZED = 0
    ACTIVATED = 1
    CONNECTED = 2
    DISCONNECTED = 3


# API-level constants
class Const:
    """API-level constants"""
    # Activation handshake
    EFFECTS_PATH = "effects"
    EXT_CONTROL_COMMAND = "display"
    EXT_CONTROL_ANIM_TYPE = "extControl"
    KEY_ADDRESS = "streamControlIpAddr"
    KEY_PORT = "streamControlPort"

    # Frames
    FRAMES_PER_PANEL = 1
    DEFAULT_TRANSITION = 1
