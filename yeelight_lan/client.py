"""Client for the Yeelight LAN control protocol."""
from __future__ import annotations

import asyncio
import logging
from typing import Any, Iterable, Sequence

from yeelight_lan import const
from yeelight_lan.color import Color, ColorMatrix
from yeelight_lan.command import Command, Param, Response, build_command
from yeelight_lan.config import YeelightConfig
from yeelight_lan.connection import YeelightConnection
from yeelight_lan.exceptions import YeelightCommandError, YeelightResponseError

_LOGGER = logging.getLogger(__name__)


class YeelightClient:
    """Send commands to one Yeelight device.

    With ``persistent=False`` (the default) every command dials the device
    and closes the socket when done. With ``persistent=True`` the socket is
    kept open until :meth:`async_close` (or the end of an ``async with``
    block).

    Commands must not be issued concurrently on one client.
    """

    def __init__(
        self,
        address: str,
        *,
        persistent: bool = False,
        timeout: float | None = const.DEFAULT_TIMEOUT,
        smooth: int = const.DEFAULT_SMOOTH,
    ) -> None:
        self._config = YeelightConfig(
            address, persistent=persistent, timeout=timeout, smooth=smooth
        )
        self._connection = YeelightConnection(self._config)

    @classmethod
    def from_config(cls, config: YeelightConfig) -> YeelightClient:
        """Create a client from a :class:`YeelightConfig`."""
        return cls(
            config.address,
            persistent=config.persistent,
            timeout=config.timeout,
            smooth=config.smooth,
        )

    @property
    def config(self) -> YeelightConfig:
        return self._config

    @property
    def connection(self) -> YeelightConnection:
        return self._connection

    async def __aenter__(self) -> YeelightClient:
        if self._config.persistent:
            await self._connection.open()
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.async_close()

    async def async_connect(self) -> None:
        """Open the connection ahead of the first command."""
        await self._connection.open()

    async def async_close(self) -> None:
        """Close the connection."""
        await self._connection.close()

    async def async_send_command(self, command: Command) -> Response:
        """Send a command and wait for its response.

        If no line arrives within the configured timeout, an empty
        response with ``timed_out`` set is returned rather than raising.
        A persistent socket is closed on timeout and redialled by the next
        command, so a late reply is never handed to another command.

        Raises:
            YeelightConnectionError: If the device cannot be reached.
            YeelightEncodingError: If the params cannot be serialized.
            YeelightWriteError: If the command cannot be written.
            YeelightReadError: If the connection fails while reading.
            YeelightDecodingError: If the response is not valid JSON.
        """
        command.generate_id()
        await self._connection.open()
        try:
            await self._connection.write(command.to_frame())
            response = await self._await_response()
        finally:
            if not self._config.persistent:
                await self._connection.close()

        # TODO: match ids before allowing more than one command in flight
        if not response.timed_out and response.id not in (0, command.id):
            _LOGGER.debug(
                "Response id %d does not match %s request id %d",
                response.id,
                command.method,
                command.id,
            )
        return response

    async def _await_response(self) -> Response:
        """Race one line read against the timeout."""
        read_task = asyncio.create_task(self._connection.read_line())
        try:
            done, _ = await asyncio.wait(
                {read_task}, timeout=self._config.timeout
            )
        finally:
            if not read_task.done():
                read_task.cancel()
        if read_task not in done:
            try:
                await read_task
            except asyncio.CancelledError:
                pass
            _LOGGER.debug(
                "No response from %s within %.2fs",
                self._config.address,
                self._config.timeout,
            )
            if self._config.persistent:
                # A late reply would otherwise be read by the next command.
                await self._connection.close()
            return Response(timed_out=True)
        return Response.from_json(read_task.result())

    async def async_send(
        self, method: str, params: Sequence[Param] | None = None
    ) -> Response:
        """Build and send a command, raising if the device reports an error."""
        response = await self.async_send_command(build_command(method, params))
        if response.error is not None:
            raise YeelightCommandError(method, response.error)
        return response

    # Properties

    async def async_get_properties(self, names: Iterable[str]) -> Response:
        """Query device properties; values come back in request order."""
        return await self.async_send(const.METHOD_GET_PROP, list(names))

    async def async_get_property(self, name: str) -> Response:
        """Query a single device property."""
        return await self.async_get_properties([name])

    async def _async_get_value(self, name: str) -> str:
        response = await self.async_get_property(name)
        if response.timed_out:
            raise YeelightResponseError(
                f"No answer from {self._config.address} for {name}"
            )
        if not response.result:
            raise YeelightResponseError(f"Empty result for {name}")
        return str(response.result[0])

    # Power

    async def async_set_power(self, on: bool) -> Response:
        """Switch the light on or off."""
        state = const.KEY_ON if on else const.KEY_OFF
        return await self.async_send(
            const.METHOD_SET_POWER, [state, *self._config.effect_params()]
        )

    async def async_turn_on(self) -> Response:
        return await self.async_set_power(True)

    async def async_turn_off(self) -> Response:
        return await self.async_set_power(False)

    async def async_toggle(self) -> Response:
        return await self.async_send(const.METHOD_TOGGLE, [])

    async def async_is_on(self) -> bool:
        """Return whether the light reports power on."""
        return await self._async_get_value(const.PROP_POWER) == const.KEY_ON

    # Brightness

    async def async_set_bright(self, value: int) -> Response:
        """Set brightness in percent (1-100)."""
        if not const.BRIGHT_MIN <= value <= const.BRIGHT_MAX:
            raise ValueError(
                f"Brightness must be {const.BRIGHT_MIN}-{const.BRIGHT_MAX}, "
                f"got {value}"
            )
        return await self.async_send(
            const.METHOD_SET_BRIGHT, [value, *self._config.effect_params()]
        )

    async def async_get_bright(self) -> int:
        """Return the brightness in percent."""
        value = await self._async_get_value(const.PROP_BRIGHT)
        try:
            return int(value)
        except ValueError as err:
            raise YeelightResponseError(f"Invalid brightness {value!r}") from err

    # Color

    async def async_set_rgb(self, color: Color) -> Response:
        """Set an RGB color."""
        return await self.async_send(
            const.METHOD_SET_RGB, [int(color), *self._config.effect_params()]
        )

    async def async_set_hex_color(self, text: str) -> Response:
        """Set a color given as ``#rrggbb`` text."""
        return await self.async_set_rgb(Color.from_hex(text))

    async def async_get_hex_color(self) -> str:
        """Return the current RGB color as ``rrggbb``."""
        value = await self._async_get_value(const.PROP_RGB)
        try:
            return Color(int(value)).to_hex()
        except ValueError as err:
            raise YeelightResponseError(f"Invalid rgb value {value!r}") from err

    async def async_set_color_temp(self, kelvin: int) -> Response:
        """Set the white color temperature in Kelvin."""
        if not const.CT_MIN <= kelvin <= const.CT_MAX:
            raise ValueError(
                f"Color temperature must be {const.CT_MIN}-{const.CT_MAX}K, "
                f"got {kelvin}"
            )
        return await self.async_send(
            const.METHOD_SET_CT_ABX, [kelvin, *self._config.effect_params()]
        )

    # Timers, frames and effects

    async def async_cron_add(self, minutes: int) -> Response:
        """Schedule the light to power off after ``minutes``."""
        if minutes <= 0:
            raise ValueError(f"Timer must be a positive number of minutes, got {minutes}")
        return await self.async_send(
            const.METHOD_CRON_ADD, [const.CRON_TYPE_POWER_OFF, minutes]
        )

    async def async_update_leds(self, matrix: ColorMatrix) -> Response:
        """Push one LED strip frame."""
        return await self.async_send(
            const.METHOD_UPDATE_LEDS, [matrix.to_compact_text()]
        )

    async def async_activate_fx_mode(self, mode: str) -> Response:
        """Switch the device into an effect mode (e.g. ``"direct"``)."""
        return await self.async_send(
            const.METHOD_ACTIVATE_FX_MODE, [{const.KEY_MODE: mode}]
        )
