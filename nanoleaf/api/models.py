"""
Nanoleaf API-level models.

This module contains models that belong to the api layer:
- FrameColor, PanelFrame, FrameBatch (what gets streamed to panels)
- ActivationRequest, ActivationResponse (the external control handshake)
"""

import json
from dataclasses import dataclass, field
from typing import Any, Iterable, Iterator, Self

from ..exceptions import ParseError
from .types import Const, ProtocolVersion


@dataclass
class FrameColor:
    """An RGBW colour and its transition time in device units (deciseconds)"""
    red: int = 0
    green: int = 0
    blue: int = 0
    white: int = 0
    transition: int = Const.DEFAULT_TRANSITION

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        return cls(
            red=int(data.get("red", 0)),
            green=int(data.get("green", 0)),
            blue=int(data.get("blue", 0)),
            white=int(data.get("white", 0)),
            transition=int(data.get("transition", Const.DEFAULT_TRANSITION)),
        )

    def to_dict(self) -> dict[str, int]:
        return {
            "red": self.red,
            "green": self.green,
            "blue": self.blue,
            "white": self.white,
            "transition": self.transition,
        }


@dataclass
class PanelFrame:
    """A frame targeting a single panel"""
    panel_id: int
    frame: FrameColor

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        return cls(panel_id=int(data["id"]), frame=FrameColor.from_dict(data.get("frame", {})))

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.panel_id, "frame": self.frame.to_dict()}


@dataclass
class FrameBatch:
    """
    Frames sent together in one datagram.

    Order is kept exactly as given. Duplicate panel ids are not merged.
    """
    panels: list[PanelFrame] = field(default_factory=list)

    @classmethod
    def solid(cls, panel_ids: Iterable[int], color: FrameColor) -> Self:
        return cls(panels=[PanelFrame(panel_id=panel_id, frame=color) for panel_id in panel_ids])

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        return cls(panels=[PanelFrame.from_dict(p) for p in data.get("panels", [])])

    def to_dict(self) -> dict[str, Any]:
        return {"panels": [p.to_dict() for p in self.panels]}

    def __len__(self) -> int:
        return len(self.panels)

    def __iter__(self) -> Iterator[PanelFrame]:
        return iter(self.panels)


@dataclass(frozen=True)
class ActivationRequest:
    """Body of the PUT that switches the device into external control mode"""
    version: ProtocolVersion
    command: str = Const.EXT_CONTROL_COMMAND
    anim_type: str = Const.EXT_CONTROL_ANIM_TYPE

    def to_json(self) -> dict[str, Any]:
        return {
            "write": {
                "command": self.command,
                "animType": self.anim_type,
                "extControlVersion": self.version.value,
            }
        }


@dataclass(frozen=True)
class ActivationResponse:
    """Where the device expects stream datagrams"""
    address: str
    port: int

    @classmethod
    def from_bytes(cls, body: bytes) -> Self:
        try:
            data = json.loads(body)
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise ParseError(f"Activation response is not valid JSON: {e}") from e
        if not isinstance(data, dict):
            raise ParseError(f"Activation response is not a JSON object: {data!r}")
        address = data.get(Const.KEY_ADDRESS)
        port = data.get(Const.KEY_PORT)
        if not isinstance(address, str):
            raise ParseError(f"Activation response has no string {Const.KEY_ADDRESS}: {address!r}")
        # bool is an int subclass
        if not isinstance(port, int) or isinstance(port, bool):
            raise ParseError(f"Activation response has no integer {Const.KEY_PORT}: {port!r}")
        return cls(address=address, port=port)
