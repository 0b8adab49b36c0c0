"""Yeelight Client package.

A Python library for controlling Yeelight smart lights over the LAN
control protocol (line-delimited JSON over TCP).

Supports:
- Persistent and per-command connections
- Timeout-bounded command/response correlation
- Power, brightness, RGB and color temperature control
- Sleep timers (cron)
- LED strip frames using the compact color encoding
- Effect modes
"""

from yeelight_lan.client import YeelightClient
from yeelight_lan.color import Color, ColorMatrix
from yeelight_lan.command import Command, Response, build_command
from yeelight_lan.config import YeelightConfig
from yeelight_lan.connection import YeelightConnection
from yeelight_lan.exceptions import (
    ColorParseError,
    YeelightCommandError,
    YeelightConnectionError,
    YeelightDecodingError,
    YeelightEncodingError,
    YeelightError,
    YeelightReadError,
    YeelightResponseError,
    YeelightWriteError,
)

__version__ = "0.1.0"

__all__ = [
    "Color",
    "ColorMatrix",
    "ColorParseError",
    "Command",
    "Response",
    "YeelightClient",
    "YeelightCommandError",
    "YeelightConfig",
    "YeelightConnection",
    "YeelightConnectionError",
    "YeelightDecodingError",
    "YeelightEncodingError",
    "YeelightError",
    "YeelightReadError",
    "YeelightResponseError",
    "YeelightWriteError",
    "build_command",
]
