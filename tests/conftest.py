"""Shared test fixtures for the Avatica client."""

import pytest

from avatica_client.core.connection import Connection
from tests.fakes import CONNECTION_ID, FakeChannel


@pytest.fixture
def channel() -> FakeChannel:
    return FakeChannel()


@pytest.fixture
def connection(channel: FakeChannel) -> Connection:
    return Connection(CONNECTION_ID, channel, max_frame_size=5, max_row_count=1000)
