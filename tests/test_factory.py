"""Tests for ConnectionFactory."""

import asyncio
import re

import pytest

from avatica_client.core.channel import HttpChannel
from avatica_client.core.config import ClientConfig
from avatica_client.core.connection import Connection
from avatica_client.core.exceptions import NetworkError, TimeoutError
from avatica_client.core.factory import ConnectionFactory
from tests.fakes import FakeChannel

_CONNECTION_ID_RE = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-1[0-9a-f]{3}-[0-9a-f]{4}-[0-9a-f]{12}@py-client$"
)


@pytest.mark.unit
def test_connection_ids_are_unique_uuid1():
    factory = ConnectionFactory("http://localhost:8765/", channel=FakeChannel())
    ids = {factory.new_connection_id() for _ in range(100)}
    assert len(ids) == 100
    for connection_id in ids:
        assert _CONNECTION_ID_RE.match(connection_id)


@pytest.mark.unit
def test_custom_client_host():
    factory = ConnectionFactory(
        "http://localhost:8765/", channel=FakeChannel(), client_host="etl-01"
    )
    assert factory.new_connection_id().endswith("@etl-01")


@pytest.mark.unit
def test_default_channel_is_http():
    factory = ConnectionFactory("http://localhost:8765/")
    assert isinstance(factory._channel, HttpChannel)
    assert factory._channel.url == "http://localhost:8765/"


@pytest.mark.unit
@pytest.mark.asyncio
async def test_connect_sends_open_connection():
    channel = FakeChannel()
    factory = ConnectionFactory(
        "http://localhost:8765/", "sa", "secret", channel=channel
    )

    conn = await factory.connect()

    assert isinstance(conn, Connection)
    request = channel.requests[0]
    assert request["request"] == "openConnection"
    assert request["connectionId"] == conn.connection_id
    assert request["info"] == {"user": "sa", "password": "secret"}
    assert conn.max_frame_size == 100
    assert conn.max_row_count == 9999999


@pytest.mark.unit
@pytest.mark.asyncio
async def test_connect_without_credentials_sends_empty_info():
    channel = FakeChannel()
    factory = ConnectionFactory("http://localhost:8765/", channel=channel)

    await factory.connect()

    assert channel.requests[0]["info"] == {}


@pytest.mark.unit
@pytest.mark.asyncio
async def test_connect_applies_limits():
    channel = FakeChannel()
    factory = ConnectionFactory(
        "http://localhost:8765/", channel=channel, max_frame_size=10, max_row_count=50
    )

    conn = await factory.connect()

    assert conn.max_frame_size == 10
    assert conn.max_row_count == 50


@pytest.mark.unit
@pytest.mark.asyncio
async def test_connect_failure_propagates():
    channel = FakeChannel().on("openConnection", NetworkError("refused"))
    factory = ConnectionFactory("http://localhost:8765/", channel=channel)

    with pytest.raises(NetworkError, match="refused"):
        await factory.connect()
    assert len(channel.requests) == 1


@pytest.mark.unit
@pytest.mark.asyncio
async def test_connect_timeout():
    async def hang(request):
        await asyncio.sleep(10)

    channel = FakeChannel().on("openConnection", hang)
    factory = ConnectionFactory("http://localhost:8765/", channel=channel)

    with pytest.raises(TimeoutError, match="openConnection timed out"):
        await factory.connect(timeout=0.01)


@pytest.mark.unit
@pytest.mark.asyncio
async def test_from_config():
    channel = FakeChannel()
    config = ClientConfig(
        url="http://localhost:8765/",
        user="sa",
        max_frame_size=20,
        client_host="batch-host",
    )

    factory = ConnectionFactory.from_config(config, channel=channel)
    conn = await factory.connect()

    assert factory.url == "http://localhost:8765/"
    assert conn.max_frame_size == 20
    assert conn.connection_id.endswith("@batch-host")
    assert channel.requests[0]["info"] == {"user": "sa"}


@pytest.mark.unit
@pytest.mark.asyncio
async def test_aclose_leaves_injected_channel_alone():
    channel = FakeChannel()
    async with ConnectionFactory("http://localhost:8765/", channel=channel) as factory:
        await factory.connect()
    assert channel.names() == ["openConnection"]
