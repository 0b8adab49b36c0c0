"""Debug helper for the Yeelight LAN control protocol.

Configured through the environment::

    YEELIGHT_ADDRESS=192.168.1.20:55443 YEELIGHT_TOGGLE=1 \
        python -m yeelight_lan.debug_yeelight
"""
import asyncio
import logging
import os

from yeelight_lan import const
from yeelight_lan.client import YeelightClient
from yeelight_lan.color import Color, ColorMatrix
from yeelight_lan.config import YeelightConfig
from yeelight_lan.exceptions import YeelightError

DEBUG_PROPERTIES = [
    const.PROP_POWER,
    const.PROP_BRIGHT,
    const.PROP_RGB,
    const.PROP_CT,
]


def _env_bool(name: str, default: bool = False) -> bool:
    val = os.environ.get(name)
    if val is None:
        return default
    return val.strip().lower() in {"1", "true", "yes", "on", "y"}


def _env_int(name: str, default: int) -> int:
    val = os.environ.get(name)
    if val is None:
        return default
    try:
        return int(val.strip())
    except ValueError:
        print("ignoring", name, val)
        return default


def _print_response(label: str, response) -> None:
    if response.timed_out:
        print(label, "timed out")
    else:
        print(label, response.result)


def _test_frame(leds: int) -> ColorMatrix:
    """Return a red/green/blue repeating frame."""
    palette = [Color(0xFF0000), Color(0x00FF00), Color(0x0000FF)]
    return ColorMatrix([palette[i % len(palette)] for i in range(leds)])


async def _push_frame(yc: YeelightClient, leds: int) -> None:
    frame = _test_frame(leds)
    print("frame", frame.to_compact_text())
    _print_response("activate-fx-mode", await yc.async_activate_fx_mode("direct"))
    _print_response("update-leds", await yc.async_update_leds(frame))


async def main() -> None:
    if _env_bool("YEELIGHT_DEBUG"):
        logging.basicConfig(level=logging.DEBUG)

    config = YeelightConfig.from_env()
    print("config", config)

    async with YeelightClient.from_config(config) as yc:
        try:
            _print_response(
                "properties", await yc.async_get_properties(DEBUG_PROPERTIES)
            )

            if _env_bool("YEELIGHT_TOGGLE"):
                _print_response("toggle", await yc.async_toggle())
                print("is-on", await yc.async_is_on())

            color = os.environ.get("YEELIGHT_COLOR")
            if color:
                _print_response("set-rgb", await yc.async_set_hex_color(color))
                print("rgb", await yc.async_get_hex_color())

            bright = _env_int("YEELIGHT_BRIGHT", 0)
            if bright > 0:
                _print_response("set-bright", await yc.async_set_bright(bright))
                print("bright", await yc.async_get_bright())

            leds = _env_int("YEELIGHT_FRAME_LEDS", 0)
            if leds > 0:
                await _push_frame(yc, leds)
        except YeelightError as exc:
            print("error", exc)


if __name__ == "__main__":
    asyncio.run(main())
