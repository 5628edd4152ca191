"""Tests for YAML configuration loading and the command line tool."""
import logging

import pytest

from nanoleaf import InvalidVersionError, NanoleafConfig, ProtocolVersion, load_config
from nanoleaf.cli import build_parser, main
from nanoleaf.config import parse_config


def test_empty_config_uses_defaults(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("")
    assert load_config(str(path)) == NanoleafConfig()


def test_full_config(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(
        "nanoleaf:\n"
        "  - url: http://192.0.2.20:16021/api/v1\n"
        "    token: abc\n"
        "stream:\n"
        "  version: v1\n"
        "  transition: 3\n"
        "discovery:\n"
        "  timeout: 2\n"
        "logging:\n"
        "  level: debug\n"
        "  file: nanoleaf.log\n"
    )
    config = load_config(str(path))
    assert config.devices[0].url == "http://192.0.2.20:16021/api/v1"
    assert config.devices[0].token == "abc"
    assert config.version is ProtocolVersion.V1
    assert config.transition == 3
    assert config.discovery_timeout == 2.0
    assert config.log_level == "DEBUG"
    assert config.log_file == "nanoleaf.log"


@pytest.mark.parametrize("raw", [
    {"nanoleaf": {"url": "http://x"}},
    {"nanoleaf": [{"url": "http://192.0.2.20:16021/api/v1"}]},
    {"nanoleaf": [{"url": "192.0.2.20", "token": "abc"}]},
    {"stream": {"transition": -1}},
    {"discovery": {"timeout": 0}},
    {"discovery": {"timeout": "soon"}},
    {"logging": {"level": "chatty"}},
])
def test_invalid_config(raw):
    with pytest.raises(ValueError):
        parse_config(raw)


@pytest.mark.parametrize("raw", [
    {"stream": ["v2"]},
    {"discovery": 5},
    {"logging": "debug"},
])
def test_section_must_be_mapping(raw):
    with pytest.raises(ValueError, match="must be a mapping"):
        parse_config(raw)


def test_invalid_version_in_config():
    with pytest.raises(InvalidVersionError):
        parse_config({"stream": {"version": "v9"}})


def test_parser_solid_arguments():
    args = build_parser().parse_args(["solid", "--panels", "1", "2", "--rgbw", "1", "2", "3", "4", "--version", "v1"])
    assert args.panels == [1, 2]
    assert args.rgbw == [1, 2, 3, 4]
    assert args.version == "v1"


def test_solid_without_device_exits_non_zero(tmp_path, capsys):
    path = tmp_path / "config.yaml"
    path.write_text("")
    with pytest.raises(SystemExit) as excinfo:
        main(["--config", str(path), "solid", "--panels", "1"])
    assert excinfo.value.code == 1
    assert "token are required" in capsys.readouterr().out
    logging.getLogger("nanoleaf").handlers.clear()
