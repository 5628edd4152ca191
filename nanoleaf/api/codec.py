"""
Binary encoding of frame batches for the external control stream.

All fields are little-endian and truncated to their width, never validated:
a red value of 256 goes out as 0x00 under either version.

v1: [nPanels:1] then per panel [id:1][nFrames:1][R:1][G:1][B:1][W:1][transition:1]
v2: [nPanels:2] then per panel [id:2][R:1][G:1][B:1][W:1][transition:2]
"""

import struct
from typing import Iterable

from ..exceptions import ParseError
from .models import FrameColor, PanelFrame
from .types import Const, ProtocolVersion


class CodecConst:
    """Per-version struct layouts"""
    V1_HEADER = struct.Struct("<B")
    V1_PANEL = struct.Struct("<BBBBBBB")
    V2_HEADER = struct.Struct("<H")
    V2_PANEL = struct.Struct("<HBBBBH")


def _u8(value: int) -> int:
    return value & 0xFF


def _u16(value: int) -> int:
    return value & 0xFFFF


def encode_effect(panels: Iterable[PanelFrame], version: ProtocolVersion) -> bytes:
    """Encode panels, in the order given, as one stream datagram"""
    panels = list(panels)
    if not panels:
        return b""
    match ProtocolVersion.parse(version):
        case ProtocolVersion.V1:
            buf = bytearray(CodecConst.V1_HEADER.pack(_u8(len(panels))))
            for panel in panels:
                frame = panel.frame
                buf += CodecConst.V1_PANEL.pack(
                    _u8(panel.panel_id),
                    Const.FRAMES_PER_PANEL,
                    _u8(frame.red),
                    _u8(frame.green),
                    _u8(frame.blue),
                    _u8(frame.white),
                    _u8(frame.transition),
                )
        case ProtocolVersion.V2:
            buf = bytearray(CodecConst.V2_HEADER.pack(_u16(len(panels))))
            for panel in panels:
                frame = panel.frame
                buf += CodecConst.V2_PANEL.pack(
                    _u16(panel.panel_id),
                    _u8(frame.red),
                    _u8(frame.green),
                    _u8(frame.blue),
                    _u8(frame.white),
                    _u16(frame.transition),
                )
    return bytes(buf)


def decode_effect(data: bytes, version: ProtocolVersion) -> list[PanelFrame]:
    """Decode a stream datagram back into panels; used for tracing and tests"""
    if not data:
        return []
    version = ProtocolVersion.parse(version)
    match version:
        case ProtocolVersion.V1:
            header, body = CodecConst.V1_HEADER, CodecConst.V1_PANEL
        case ProtocolVersion.V2:
            header, body = CodecConst.V2_HEADER, CodecConst.V2_PANEL
    if len(data) < header.size:
        raise ParseError(f"Datagram too short for header: {len(data)} bytes")
    (count,) = header.unpack_from(data, 0)
    expected = header.size + count * body.size
    if len(data) != expected:
        raise ParseError(f"Datagram length {len(data)} does not match {count} panels ({expected} bytes)")
    panels = []
    for offset in range(header.size, expected, body.size):
        fields = body.unpack_from(data, offset)
        if version == ProtocolVersion.V1:
            panel_id, n_frames, red, green, blue, white, transition = fields
            if n_frames != Const.FRAMES_PER_PANEL:
                raise ParseError(f"Panel {panel_id} carries {n_frames} frames, expected {Const.FRAMES_PER_PANEL}")
        else:
            panel_id, red, green, blue, white, transition = fields
        panels.append(PanelFrame(panel_id=panel_id, frame=FrameColor(red, green, blue, white, transition)))
    return panels
