"""Tests for the device connection."""
from __future__ import annotations

import asyncio
import socket

import pytest

from mock_device import MockDevice, echo_ok
from yeelight_lan.config import YeelightConfig
from yeelight_lan.connection import YeelightConnection
from yeelight_lan.exceptions import (
    YeelightConnectionError,
    YeelightReadError,
)


def _unused_address() -> str:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        port = sock.getsockname()[1]
    return f"127.0.0.1:{port}"


@pytest.mark.asyncio
async def test_open_and_close() -> None:
    async with MockDevice(echo_ok) as device:
        conn = YeelightConnection(YeelightConfig(device.address))
        assert not conn.connected
        await conn.open()
        assert conn.connected
        await conn.close()
        assert not conn.connected


@pytest.mark.asyncio
async def test_close_without_socket_is_noop() -> None:
    conn = YeelightConnection(YeelightConfig("127.0.0.1:1"))
    await conn.close()
    await conn.close()
    assert not conn.connected


@pytest.mark.asyncio
async def test_open_refused_raises_connection_error() -> None:
    conn = YeelightConnection(YeelightConfig(_unused_address(), timeout=1.0))
    with pytest.raises(YeelightConnectionError):
        await conn.open()
    assert not conn.connected


@pytest.mark.asyncio
async def test_open_times_out(monkeypatch: pytest.MonkeyPatch) -> None:
    async def never_connects(*args, **kwargs):
        await asyncio.sleep(10)

    monkeypatch.setattr(asyncio, "open_connection", never_connects)
    conn = YeelightConnection(YeelightConfig("10.255.255.1:55443", timeout=0.05))
    loop = asyncio.get_running_loop()
    start = loop.time()
    with pytest.raises(YeelightConnectionError):
        await conn.open()
    assert loop.time() - start < 1.0


@pytest.mark.asyncio
async def test_persistent_open_reuses_socket() -> None:
    async with MockDevice(echo_ok) as device:
        conn = YeelightConnection(YeelightConfig(device.address, persistent=True))
        await conn.open()
        await conn.open()
        assert conn.connect_count == 1
        await conn.close()


@pytest.mark.asyncio
async def test_non_persistent_open_redials() -> None:
    async with MockDevice(echo_ok) as device:
        conn = YeelightConnection(YeelightConfig(device.address))
        await conn.open()
        await conn.open()
        assert conn.connect_count == 2
        await conn.close()


@pytest.mark.asyncio
async def test_write_and_read_line() -> None:
    async with MockDevice(echo_ok) as device:
        async with YeelightConnection(YeelightConfig(device.address)) as conn:
            await conn.write(b'{"id":5,"method":"toggle","params":[]}\r\n')
            line = await conn.read_line()
        assert line == b'{"id": 5, "result": ["ok"]}\r\n'


@pytest.mark.asyncio
async def test_write_without_socket_raises() -> None:
    conn = YeelightConnection(YeelightConfig("127.0.0.1:1"))
    with pytest.raises(YeelightConnectionError):
        await conn.write(b"{}\r\n")


@pytest.mark.asyncio
async def test_read_after_peer_close_raises() -> None:
    async def handle(reader, writer):
        writer.write(b'{"id":1')
        await writer.drain()
        writer.close()

    server = await asyncio.start_server(handle, "127.0.0.1", 0)
    port = server.sockets[0].getsockname()[1]
    try:
        async with YeelightConnection(YeelightConfig(f"127.0.0.1:{port}")) as conn:
            with pytest.raises(YeelightReadError):
                await conn.read_line()
    finally:
        server.close()
        await server.wait_closed()
