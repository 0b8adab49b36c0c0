"""Errors raised by the Yeelight client."""
from __future__ import annotations

from typing import Any


class YeelightError(Exception):
    """Base error for the Yeelight client."""


class YeelightConnectionError(YeelightError):
    """The TCP connection to the device could not be established."""


class YeelightWriteError(YeelightError):
    """A command frame could not be written to the device."""


class YeelightReadError(YeelightError):
    """The response line could not be read from the device."""


class YeelightEncodingError(YeelightError):
    """A command could not be serialized to JSON."""


class YeelightDecodingError(YeelightError):
    """A response line was not a valid JSON object."""


class ColorParseError(YeelightError, ValueError):
    """Hex color text could not be parsed."""


class YeelightCommandError(YeelightError):
    """The device answered a command with an error payload."""

    def __init__(self, method: str, error: Any) -> None:
        super().__init__(f"{method} failed: {error}")
        self.method = method
        self.error = error


class YeelightResponseError(YeelightError):
    """A response did not carry the expected result."""
