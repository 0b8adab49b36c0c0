#!/usr/bin/env python
"""Push one LED strip frame to a Yeelight device."""
from __future__ import annotations

import argparse
import asyncio
import logging
import os
from pathlib import Path

from yeelight_lan import const
from yeelight_lan.client import YeelightClient
from yeelight_lan.color import ColorMatrix


def build_frame(args: argparse.Namespace) -> ColorMatrix:
    """Build the frame from an image or a list of hex colors."""
    if args.image:
        return ColorMatrix.from_image(Path(args.image).read_bytes(), args.leds)
    colors = args.colors or ["ffffff"]
    return ColorMatrix.from_hex_list(
        colors[i % len(colors)] for i in range(args.leds)
    )


async def run(args: argparse.Namespace) -> None:
    """Run the example."""
    frame = build_frame(args)
    print(f"frame leds={len(frame)} payload={frame.to_compact_text()}")
    if args.preview:
        Path(args.preview).write_bytes(frame.to_jpeg())
        print(f"preview written to {args.preview}")

    async with YeelightClient(
        args.address, persistent=True, timeout=args.timeout
    ) as client:
        response = await client.async_activate_fx_mode("direct")
        print(f"activate_fx_mode: {response}")
        response = await client.async_update_leds(frame)
        if response.timed_out:
            print("update_leds: no answer")
        else:
            print(f"update_leds: {response.result}")


def parse_args() -> argparse.Namespace:
    """Parse CLI arguments."""
    parser = argparse.ArgumentParser(
        description="Push an LED strip frame to a Yeelight device."
    )
    parser.add_argument(
        "--address",
        default=os.environ.get("YEELIGHT_ADDRESS", f"yeelight.local:{const.DEFAULT_PORT}"),
        help="Device host:port (env: YEELIGHT_ADDRESS)",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=const.DEFAULT_TIMEOUT,
        help=f"Connect and response timeout in seconds (default: {const.DEFAULT_TIMEOUT})",
    )
    parser.add_argument(
        "--leds",
        type=int,
        default=30,
        help="Number of LEDs in the frame",
    )
    parser.add_argument(
        "--image",
        help="Sample the frame from an image file (requires Pillow)",
    )
    parser.add_argument(
        "--preview",
        help="Write a JPEG preview of the frame (requires Pillow)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "colors",
        nargs="*",
        help="Hex colors repeated along the strip",
    )
    return parser.parse_args()


def main() -> None:
    """Entry point."""
    args = parse_args()
    if args.debug:
        logging.basicConfig(level=logging.DEBUG)
    asyncio.run(run(args))


if __name__ == "__main__":
    main()
