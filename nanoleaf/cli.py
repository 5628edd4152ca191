"""
nanoleaf-stream command line tool.

    nanoleaf-stream discover --timeout 5
    nanoleaf-stream solid --url http://192.0.2.20:16021/api/v1 --token abc --panels 101 102 --rgbw 255 0 0 0
"""

import argparse
import logging
import os
from logging.handlers import RotatingFileHandler
from typing import Optional

from .api import FrameBatch, FrameColor, ProtocolVersion
from .config import DeviceConfig, NanoleafConfig, load_config
from .interface import Nanoleaf, discover_nanoleafs
from .utils import run_with_keyboard_interrupt


class Const:
    DEFAULT_CONFIG = "config.yaml"
    LOG_MAX_BYTES = 5 * 1024 * 1024  # 5MB
    LOG_BACKUP_COUNT = 5


def setup_logging(config: NanoleafConfig) -> logging.Logger:
    """Configure the package logger with console and optional file handlers."""
    logger = logging.getLogger("nanoleaf")
    logger.setLevel(config.log_level)

    # Console handler
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(logging.Formatter(
        '%(asctime)s.%(msecs)03d %(levelname)s: %(message)s', datefmt='%H:%M:%S'
    ))
    logger.addHandler(console_handler)

    # File handler
    if config.log_file:
        file_handler = RotatingFileHandler(
            config.log_file,
            maxBytes=Const.LOG_MAX_BYTES,
            backupCount=Const.LOG_BACKUP_COUNT
        )
        file_handler.setFormatter(logging.Formatter(fmt="%(asctime)s\t%(levelname)s\t%(message)s", datefmt="%Y-%m-%d %H:%M:%S"))
        logger.addHandler(file_handler)

    return logger


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="nanoleaf-stream", description="Discover Nanoleaf devices and stream colours to them")
    ap.add_argument("--config", default=None, help=f"YAML config file (default: {Const.DEFAULT_CONFIG} if present)")
    sub = ap.add_subparsers(dest="command", required=True)

    disc = sub.add_parser("discover", help="List devices answering on the local network")
    disc.add_argument("--timeout", type=float, default=None, help="Seconds to wait for answers")

    solid = sub.add_parser("solid", help="Set panels to one colour over the external control stream")
    solid.add_argument("--url", help="Device API base URL (default: first configured device)")
    solid.add_argument("--token", help="Device auth token")
    solid.add_argument("--version", choices=[v.value for v in ProtocolVersion], default=None, help="Stream protocol version")
    solid.add_argument("--panels", type=int, nargs="+", required=True, help="Panel ids to colour")
    solid.add_argument("--rgbw", type=int, nargs=4, metavar=("R", "G", "B", "W"), default=[255, 255, 255, 0])
    solid.add_argument("--transition", type=int, default=None, help="Transition time in deciseconds")
    solid.add_argument("--trace", action="store_true", help="Print every datagram sent")
    return ap


def read_config(path: Optional[str]) -> NanoleafConfig:
    if path is None:
        if not os.path.exists(Const.DEFAULT_CONFIG):
            return NanoleafConfig()
        path = Const.DEFAULT_CONFIG
    return load_config(path)


async def discover(args: argparse.Namespace, config: NanoleafConfig, logger: logging.Logger) -> None:
    timeout = args.timeout if args.timeout is not None else config.discovery_timeout
    nanoleafs = await discover_nanoleafs(timeout, logger=logger)
    if not nanoleafs:
        print("No devices found")
    for nanoleaf in nanoleafs:
        print(nanoleaf.url)
        await nanoleaf.close()


async def solid(args: argparse.Namespace, config: NanoleafConfig, logger: logging.Logger) -> None:
    device = config.devices[0] if config.devices else None
    url = args.url or (device.url if device else None)
    token = args.token or (device.token if device else None)
    if not url or not token:
        raise ValueError("A device URL and token are required, either on the command line or in the config")
    device = DeviceConfig(url=url, token=token)

    version = ProtocolVersion.parse(args.version) if args.version else config.version
    transition = args.transition if args.transition is not None else config.transition
    red, green, blue, white = args.rgbw
    batch = FrameBatch.solid(args.panels, FrameColor(red, green, blue, white, transition))

    async with Nanoleaf(device.url, device.token, logger=logger) as nanoleaf:
        async with nanoleaf.stream(print_traffic=args.trace) as stream:
            await stream.activate(version)
            await stream.connect()
            await stream.write_effect(batch)
            logger.info(f"Sent {len(batch)} panel frame(s) to {nanoleaf.url}")


def main(argv: Optional[list[str]] = None) -> None:
    args = build_parser().parse_args(argv)

    async def run():
        config = read_config(args.config)
        logger = setup_logging(config)
        match args.command:
            case "discover":
                await discover(args, config, logger)
            case "solid":
                await solid(args, config, logger)

    run_with_keyboard_interrupt(run)


if __name__ == "__main__":
    main()
