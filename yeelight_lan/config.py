"""Connection settings for a Yeelight device."""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from yeelight_lan import const

_LOGGER = logging.getLogger(__name__)

ENV_ADDRESS = "YEELIGHT_ADDRESS"
ENV_HOST = "YEELIGHT_HOST"
ENV_PORT = "YEELIGHT_PORT"
ENV_PERSISTENT = "YEELIGHT_PERSISTENT"
ENV_TIMEOUT = "YEELIGHT_TIMEOUT"
ENV_SMOOTH = "YEELIGHT_SMOOTH"


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
        _LOGGER.warning("Invalid %s=%s; defaulting to %d", name, val, default)
        return default


def _env_float(name: str, default: float) -> float:
    val = os.environ.get(name)
    if val is None:
        return default
    try:
        return float(val.strip())
    except ValueError:
        _LOGGER.warning("Invalid %s=%s; defaulting to %.1f", name, val, default)
        return default


def split_address(address: str) -> tuple[str, int]:
    """Split ``host:port`` into its parts.

    A missing port falls back to the LAN control port. IPv6 literals must
    be bracketed (``[fe80::1]:55443``).
    """
    address = address.strip()
    if not address:
        raise ValueError("Device address must not be empty")
    if address.startswith("["):
        host, sep, rest = address[1:].partition("]")
        if not sep:
            raise ValueError(f"Unterminated IPv6 address: {address!r}")
        port_text = rest.removeprefix(":")
    elif address.count(":") == 1:
        host, port_text = address.split(":")
    else:
        host, port_text = address, ""
    if not host:
        raise ValueError(f"Missing host in address: {address!r}")
    if not port_text:
        return host, const.DEFAULT_PORT
    try:
        port = int(port_text)
    except ValueError as err:
        raise ValueError(f"Invalid port in address: {address!r}") from err
    if not 0 < port < 65536:
        raise ValueError(f"Port out of range in address: {address!r}")
    return host, port


@dataclass(slots=True)
class YeelightConfig:
    """Settings for one device.

    ``timeout`` is in seconds and bounds both connecting and waiting for a
    response; ``None`` or ``0`` selects the default. ``smooth`` is the
    transition duration in milliseconds sent with state changes; ``0``
    switches the device to sudden transitions.
    """

    address: str
    persistent: bool = False
    timeout: float | None = const.DEFAULT_TIMEOUT
    smooth: int = const.DEFAULT_SMOOTH

    def __post_init__(self) -> None:
        split_address(self.address)
        if not self.timeout:
            self.timeout = const.DEFAULT_TIMEOUT
        elif self.timeout < 0:
            raise ValueError(f"Timeout must not be negative, got {self.timeout}")
        if self.smooth and self.smooth < const.MIN_SMOOTH:
            raise ValueError(
                f"Smooth duration must be 0 or >= {const.MIN_SMOOTH} ms, "
                f"got {self.smooth}"
            )

    @property
    def host(self) -> str:
        return split_address(self.address)[0]

    @property
    def port(self) -> int:
        return split_address(self.address)[1]

    def effect_params(self) -> list[str | int]:
        """Return the trailing transition params for state changes."""
        if self.smooth:
            return [const.KEY_SMOOTH, self.smooth]
        return [const.KEY_SUDDEN, 0]

    @classmethod
    def from_env(cls, address: str | None = None) -> YeelightConfig:
        """Build a config from ``YEELIGHT_*`` environment variables."""
        if address is None:
            address = os.environ.get(ENV_ADDRESS)
        if address is None:
            host = os.environ.get(ENV_HOST)
            if not host:
                raise ValueError(
                    f"Set {ENV_ADDRESS} or {ENV_HOST} to select a device"
                )
            port = _env_int(ENV_PORT, const.DEFAULT_PORT)
            address = f"[{host}]:{port}" if ":" in host else f"{host}:{port}"
        return cls(
            address=address,
            persistent=_env_bool(ENV_PERSISTENT),
            timeout=_env_float(ENV_TIMEOUT, const.DEFAULT_TIMEOUT),
            smooth=_env_int(ENV_SMOOTH, const.DEFAULT_SMOOTH),
        )
