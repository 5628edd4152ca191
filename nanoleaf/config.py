"""
Configuration loading for the nanoleaf-stream tool.

Example config.yaml:

    nanoleaf:
      - url: http://192.168.1.20:16021/api/v1
        token: abcdef0123456789
    stream:
      version: v2
      transition: 1
    discovery:
      timeout: 5.0
    logging:
      level: INFO
      file: nanoleaf.log
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Optional

import yaml

from .api.types import Const, ProtocolVersion
from .io import DiscoveryConst


@dataclass
class DeviceConfig:
    url: str
    token: str


@dataclass
class NanoleafConfig:
    devices: list[DeviceConfig] = field(default_factory=list)
    version: ProtocolVersion = ProtocolVersion.V2
    transition: int = Const.DEFAULT_TRANSITION
    discovery_timeout: float = DiscoveryConst.DEFAULT_TIMEOUT
    log_level: str = "INFO"
    log_file: Optional[str] = None


def load_config(path: str) -> NanoleafConfig:
    with open(path) as f:
        raw = yaml.safe_load(f)
    return parse_config(raw or {})


def parse_config(raw: dict[str, Any]) -> NanoleafConfig:
    """Validate a loaded YAML document, section by section"""
    if not isinstance(raw, dict):
        raise ValueError("Config must be a mapping")
    config = NanoleafConfig()

    # Devices
    devices = raw.get("nanoleaf", [])
    if not isinstance(devices, list):
        raise ValueError("nanoleaf config must be a list")
    device_required = ["url", "token"]
    for i, device in enumerate(devices):
        if not isinstance(device, dict):
            raise ValueError(f"Nanoleaf config entry {i} must be a mapping")
        missing = [f for f in device_required if not device.get(f)]
        if missing:
            raise ValueError(f"Missing Nanoleaf config fields in entry {i}: {', '.join(missing)}")
        url = str(device["url"])
        if not url.startswith(("http://", "https://")):
            raise ValueError(f"Invalid URL in Nanoleaf config {i}: {url}")
        config.devices.append(DeviceConfig(url=url, token=str(device["token"])))

    # Stream
    stream = raw.get("stream", {}) or {}
    if not isinstance(stream, dict):
        raise ValueError("stream config must be a mapping")
    if "version" in stream:
        # InvalidVersionError is also a ValueError
        config.version = ProtocolVersion.parse(str(stream["version"]))
    if "transition" in stream:
        transition = stream["transition"]
        if not isinstance(transition, int) or isinstance(transition, bool) or transition < 0:
            raise ValueError(f"Invalid stream transition: {transition}")
        config.transition = transition

    # Discovery
    discovery = raw.get("discovery", {}) or {}
    if not isinstance(discovery, dict):
        raise ValueError("discovery config must be a mapping")
    if "timeout" in discovery:
        timeout = discovery["timeout"]
        if not isinstance(timeout, (int, float)) or isinstance(timeout, bool) or timeout <= 0:
            raise ValueError(f"Invalid discovery timeout: {timeout}")
        config.discovery_timeout = float(timeout)

    # Logging
    log = raw.get("logging", {}) or {}
    if not isinstance(log, dict):
        raise ValueError("logging config must be a mapping")
    level = str(log.get("level", config.log_level)).upper()
    if level not in logging.getLevelNamesMapping():
        raise ValueError(f"Invalid logging level: {level}")
    config.log_level = level
    config.log_file = log.get("file")

    return config
