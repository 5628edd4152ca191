"""Tests for the versioned binary frame layout."""
import struct

import pytest

from nanoleaf import FrameBatch, FrameColor, PanelFrame, ParseError, ProtocolVersion, decode_effect, encode_effect


def _panel(panel_id, red=0, green=0, blue=0, white=0, transition=1) -> PanelFrame:
    return PanelFrame(panel_id, FrameColor(red, green, blue, white, transition))


def test_empty_batch_encodes_to_nothing():
    assert encode_effect([], ProtocolVersion.V1) == b""
    assert encode_effect(FrameBatch(), ProtocolVersion.V2) == b""


def test_v2_single_red_panel():
    data = encode_effect([_panel(1, red=255)], ProtocolVersion.V2)
    assert data == bytes.fromhex("0100" "0100" "ff000000" "0100")


def test_v1_single_red_panel():
    data = encode_effect([_panel(1, red=255)], ProtocolVersion.V1)
    # count, id, frame count, R G B W, transition
    assert data == bytes.fromhex("01" "01" "01" "ff000000" "01")


def test_version_accepts_string():
    panels = [_panel(7, green=9)]
    assert encode_effect(panels, "v2") == encode_effect(panels, ProtocolVersion.V2)


def test_v2_layout_is_little_endian():
    data = encode_effect([_panel(0x1234, 1, 2, 3, 4, transition=0x0A0B)], ProtocolVersion.V2)
    count, panel_id, r, g, b, w, transition = struct.unpack("<HHBBBBH", data)
    assert (count, panel_id, r, g, b, w, transition) == (1, 0x1234, 1, 2, 3, 4, 0x0A0B)


def test_panels_keep_submitted_order_and_duplicates():
    panels = [_panel(9, red=1), _panel(3, red=2), _panel(9, red=3)]
    data = encode_effect(panels, ProtocolVersion.V1)
    assert data[0] == 3
    assert [data[1 + i * 7] for i in range(3)] == [9, 3, 9]
    assert [data[1 + i * 7 + 2] for i in range(3)] == [1, 2, 3]


@pytest.mark.parametrize("version", [ProtocolVersion.V1, ProtocolVersion.V2])
def test_colour_channels_truncate(version):
    data = encode_effect([_panel(1, red=256, green=257, blue=-1, white=511)], version)
    colour_offset = 3 if version is ProtocolVersion.V1 else 4
    assert data[colour_offset:colour_offset + 4] == bytes([0x00, 0x01, 0xFF, 0xFF])


def test_v1_truncates_id_and_transition_to_one_byte():
    data = encode_effect([_panel(300, transition=258)], ProtocolVersion.V1)
    assert data[1] == 300 & 0xFF
    assert data[-1] == 258 & 0xFF


def test_v2_truncates_id_and_transition_to_two_bytes():
    data = encode_effect([_panel(0x10005, transition=0x10002)], ProtocolVersion.V2)
    assert data[2:4] == bytes([0x05, 0x00])
    assert data[-2:] == bytes([0x02, 0x00])


def test_v1_panel_count_wraps():
    panels = [_panel(i) for i in range(256)]
    data = encode_effect(panels, ProtocolVersion.V1)
    assert data[0] == 0
    assert len(data) == 1 + 256 * 7


def test_decode_recovers_panels():
    panels = [_panel(2, 10, 20, 30, 40, 5), _panel(1, 255, 0, 0, 0, 1)]
    for version in ProtocolVersion:
        assert decode_effect(encode_effect(panels, version), version) == panels


def test_decode_rejects_length_mismatch():
    data = encode_effect([_panel(1)], ProtocolVersion.V2)
    with pytest.raises(ParseError):
        decode_effect(data[:-1], ProtocolVersion.V2)
