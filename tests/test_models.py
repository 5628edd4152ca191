"""Tests for frame models and the activation schema."""
import pytest

from nanoleaf import (
    ActivationRequest,
    ActivationResponse,
    Endpoint,
    FrameBatch,
    FrameColor,
    InvalidVersionError,
    ParseError,
    ProtocolVersion,
)


def test_protocol_version_parse():
    assert ProtocolVersion.parse("v1") is ProtocolVersion.V1
    assert ProtocolVersion.parse(ProtocolVersion.V2) is ProtocolVersion.V2
    for bad in ("v3", "V1", "", None):
        with pytest.raises(InvalidVersionError):
            ProtocolVersion.parse(bad)


def test_invalid_version_is_value_error():
    with pytest.raises(ValueError):
        ProtocolVersion.parse("v0")


def test_endpoint_url():
    endpoint = Endpoint("192.0.2.20", 16021)
    assert endpoint.url == "http://192.0.2.20:16021/api/v1"


def test_batch_dict_round_trip():
    data = {"panels": [{"id": 5, "frame": {"red": 1, "green": 2, "blue": 3, "white": 4, "transition": 6}}]}
    batch = FrameBatch.from_dict(data)
    assert len(batch) == 1
    assert batch.panels[0].panel_id == 5
    assert batch.panels[0].frame == FrameColor(1, 2, 3, 4, 6)
    assert batch.to_dict() == data


def test_solid_batch_keeps_id_order():
    batch = FrameBatch.solid([3, 1, 2], FrameColor(blue=255))
    assert [p.panel_id for p in batch] == [3, 1, 2]
    assert all(p.frame.blue == 255 for p in batch)


def test_activation_request_body():
    assert ActivationRequest(ProtocolVersion.V1).to_json() == {
        "write": {"command": "display", "animType": "extControl", "extControlVersion": "v1"}
    }


def test_activation_response_parses():
    resp = ActivationResponse.from_bytes(b'{"streamControlIpAddr": "192.0.2.20", "streamControlPort": 60222, "extra": 1}')
    assert resp == ActivationResponse("192.0.2.20", 60222)


@pytest.mark.parametrize("body", [
    b"",
    b"not json",
    b"\xff\xfe",
    b"[]",
    b'{"streamControlPort": 60222}',
    b'{"streamControlIpAddr": "192.0.2.20"}',
    b'{"streamControlIpAddr": 12, "streamControlPort": 60222}',
    b'{"streamControlIpAddr": "192.0.2.20", "streamControlPort": "60222"}',
    b'{"streamControlIpAddr": "192.0.2.20", "streamControlPort": true}',
])
def test_activation_response_rejects(body):
    with pytest.raises(ParseError):
        ActivationResponse.from_bytes(body)
