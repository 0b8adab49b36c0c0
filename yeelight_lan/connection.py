"""TCP connection handling for a single Yeelight device."""
from __future__ import annotations

import asyncio
import logging
from typing import Any

from yeelight_lan.config import YeelightConfig
from yeelight_lan.exceptions import (
    YeelightConnectionError,
    YeelightReadError,
    YeelightWriteError,
)

_LOGGER = logging.getLogger(__name__)


class YeelightConnection:
    """Owns the socket to one device.

    Not safe for concurrent use: issue one command at a time per
    connection.
    """

    def __init__(self, config: YeelightConfig) -> None:
        self._config = config
        self._host, self._port = config.host, config.port
        self._reader: asyncio.StreamReader | None = None
        self._writer: asyncio.StreamWriter | None = None
        self.connect_count = 0

    @property
    def address(self) -> str:
        return self._config.address

    @property
    def persistent(self) -> bool:
        return self._config.persistent

    @property
    def timeout(self) -> float:
        return self._config.timeout

    @property
    def connected(self) -> bool:
        """Return whether a live socket is installed."""
        return (
            self._writer is not None
            and self._reader is not None
            and not self._writer.is_closing()
            and not self._reader.at_eof()
        )

    async def __aenter__(self) -> YeelightConnection:
        await self.open()
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def open(self) -> None:
        """Make sure a live socket is installed.

        A live socket on a persistent connection is reused; anything else
        is replaced by a fresh dial.

        Raises:
            YeelightConnectionError: If the device cannot be reached
                within the timeout.
        """
        if self.persistent and self.connected:
            return
        if self._writer is not None:
            _LOGGER.debug("Replacing stale connection to %s", self.address)
            await self.close()

        try:
            reader, writer = await asyncio.wait_for(
                asyncio.open_connection(self._host, self._port),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError as err:
            raise YeelightConnectionError(
                f"Timed out connecting to {self.address} after {self.timeout:.1f}s"
            ) from err
        except OSError as err:
            raise YeelightConnectionError(
                f"Could not connect to {self.address}: {err}"
            ) from err

        self._reader = reader
        self._writer = writer
        self.connect_count += 1
        _LOGGER.debug("Connected to %s", self.address)

    async def close(self) -> None:
        """Close the socket, ignoring errors raised while closing."""
        writer = self._writer
        self._reader = None
        self._writer = None
        if writer is None:
            return
        try:
            writer.close()
            await writer.wait_closed()
        except Exception as err:  # pylint: disable=broad-except
            _LOGGER.debug("Error closing connection to %s: %s", self.address, err)
        else:
            _LOGGER.debug("Disconnected from %s", self.address)

    async def write(self, frame: bytes) -> None:
        """Write a complete frame.

        Raises:
            YeelightConnectionError: If no socket is installed.
            YeelightWriteError: If the write fails.
        """
        if self._writer is None:
            raise YeelightConnectionError(f"Not connected to {self.address}")
        try:
            self._writer.write(frame)
            await self._writer.drain()
        except OSError as err:
            raise YeelightWriteError(
                f"Could not write to {self.address}: {err}"
            ) from err
        _LOGGER.debug("Sent to %s: %r", self.address, frame)

    async def read_line(self) -> bytes:
        """Read one line, including its trailing ``\\n``.

        Raises:
            YeelightConnectionError: If no socket is installed.
            YeelightReadError: If the connection fails or closes before a
                full line arrives.
        """
        if self._reader is None:
            raise YeelightConnectionError(f"Not connected to {self.address}")
        try:
            line = await self._reader.readuntil(b"\n")
        except asyncio.IncompleteReadError as err:
            raise YeelightReadError(
                f"Connection to {self.address} closed before a full response "
                f"({len(err.partial)} bytes received)"
            ) from err
        except asyncio.LimitOverrunError as err:
            raise YeelightReadError(
                f"Response line from {self.address} is too long"
            ) from err
        except OSError as err:
            raise YeelightReadError(
                f"Could not read from {self.address}: {err}"
            ) from err
        _LOGGER.debug("Received from %s: %r", self.address, line)
        return line
