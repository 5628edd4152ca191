"""
Chase a single lit panel around a Nanoleaf array over the external control stream.

    python examples/chase.py examples/config.example.yaml 101 102 103 104
"""
import asyncio
import logging
import sys

from nanoleaf import FrameBatch, FrameColor, Nanoleaf, PanelFrame, load_config, run_with_keyboard_interrupt

STEP_DELAY = 0.2
ROUNDS = 10


async def main():
    config = load_config(sys.argv[1])
    panel_ids = [int(p) for p in sys.argv[2:]]
    if not config.devices or not panel_ids:
        raise ValueError("Need a configured device and at least one panel id")
    logging.basicConfig(level=config.log_level, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')

    device = config.devices[0]
    on = FrameColor(red=255, green=80, blue=0, white=0, transition=config.transition)
    off = FrameColor(transition=config.transition)

    async with Nanoleaf(device.url, device.token) as nanoleaf:
        async with nanoleaf.stream(print_traffic=True) as stream:
            await stream.activate(config.version)
            await stream.connect()
            for step in range(ROUNDS * len(panel_ids)):
                lit = panel_ids[step % len(panel_ids)]
                batch = FrameBatch([PanelFrame(p, on if p == lit else off) for p in panel_ids])
                await stream.write_effect(batch)
                await asyncio.sleep(STEP_DELAY)


if __name__ == "__main__":
    run_with_keyboard_interrupt(main)
