"""Tests for device configuration."""
from __future__ import annotations

import pytest

from yeelight_lan import const
from yeelight_lan.config import YeelightConfig, split_address


@pytest.mark.parametrize(
    ("address", "expected"),
    [
        ("192.168.1.20:55443", ("192.168.1.20", 55443)),
        ("bulb.local:1234", ("bulb.local", 1234)),
        ("192.168.1.20", ("192.168.1.20", const.DEFAULT_PORT)),
        ("[fe80::1]:55443", ("fe80::1", 55443)),
        ("[fe80::1]", ("fe80::1", const.DEFAULT_PORT)),
        ("fe80::1", ("fe80::1", const.DEFAULT_PORT)),
    ],
)
def test_split_address(address: str, expected: tuple[str, int]) -> None:
    assert split_address(address) == expected


@pytest.mark.parametrize("address", ["", ":55443", "host:port", "host:70000", "[::1"])
def test_split_address_rejects_invalid(address: str) -> None:
    with pytest.raises(ValueError):
        split_address(address)


def test_defaults() -> None:
    config = YeelightConfig("10.0.0.2:55443")
    assert config.persistent is False
    assert config.timeout == const.DEFAULT_TIMEOUT
    assert config.smooth == const.DEFAULT_SMOOTH


@pytest.mark.parametrize("timeout", [None, 0, 0.0])
def test_zero_timeout_uses_default(timeout) -> None:
    assert YeelightConfig("10.0.0.2", timeout=timeout).timeout == const.DEFAULT_TIMEOUT


def test_negative_timeout_rejected() -> None:
    with pytest.raises(ValueError):
        YeelightConfig("10.0.0.2", timeout=-1)


def test_smooth_below_device_minimum_rejected() -> None:
    with pytest.raises(ValueError):
        YeelightConfig("10.0.0.2", smooth=10)


def test_effect_params() -> None:
    assert YeelightConfig("10.0.0.2", smooth=500).effect_params() == ["smooth", 500]
    assert YeelightConfig("10.0.0.2", smooth=0).effect_params() == ["sudden", 0]


def test_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("YEELIGHT_ADDRESS", "10.0.0.9:1000")
    monkeypatch.setenv("YEELIGHT_PERSISTENT", "yes")
    monkeypatch.setenv("YEELIGHT_TIMEOUT", "0.5")
    monkeypatch.setenv("YEELIGHT_SMOOTH", "300")
    config = YeelightConfig.from_env()
    assert config.address == "10.0.0.9:1000"
    assert config.persistent is True
    assert config.timeout == 0.5
    assert config.smooth == 300


def test_from_env_host_and_port(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("YEELIGHT_ADDRESS", raising=False)
    monkeypatch.setenv("YEELIGHT_HOST", "bulb.local")
    monkeypatch.setenv("YEELIGHT_PORT", "4000")
    config = YeelightConfig.from_env()
    assert (config.host, config.port) == ("bulb.local", 4000)


def test_from_env_invalid_values_fall_back(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("YEELIGHT_ADDRESS", "10.0.0.9")
    monkeypatch.setenv("YEELIGHT_TIMEOUT", "soon")
    monkeypatch.setenv("YEELIGHT_SMOOTH", "fast")
    config = YeelightConfig.from_env()
    assert config.timeout == const.DEFAULT_TIMEOUT
    assert config.smooth == const.DEFAULT_SMOOTH


def test_from_env_requires_device(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("YEELIGHT_ADDRESS", raising=False)
    monkeypatch.delenv("YEELIGHT_HOST", raising=False)
    with pytest.raises(ValueError):
        YeelightConfig.from_env()
