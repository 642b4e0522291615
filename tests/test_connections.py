"""Tests for channel acquisition and chain id resolution."""

from __future__ import annotations

import asyncio
from types import SimpleNamespace
from typing import Any, cast
from unittest.mock import AsyncMock

import pytest
from web3 import AsyncWeb3

from arb_bootstrap.connections import ChannelConnector
from arb_bootstrap.exceptions import ConnectionFailureError, IdentityQueryError


class _Awaitable:
    """Stand-in for web3's awaitable ``eth.chain_id`` property."""

    def __init__(self, value: Any = None, error: Exception | None = None) -> None:
        self._value = value
        self._error = error

    def __await__(self):
        if self._error is not None:
            raise self._error
        return self._value
        yield  # pragma: no cover - makes this a generator


def _channel(chain_id: Any = None, error: Exception | None = None) -> AsyncWeb3:
    return cast(AsyncWeb3, SimpleNamespace(eth=SimpleNamespace(chain_id=_Awaitable(chain_id, error))))


class TestOpenEventChannel:
    @pytest.mark.parametrize("url", ["http://mock:8546", "mock:8546", "ws://"])
    def test_rejects_non_websocket_url(self, url):
        with pytest.raises(ConnectionFailureError) as excinfo:
            asyncio.run(ChannelConnector().open_event_channel(url))

        assert excinfo.value.step == "event_channel"
        assert excinfo.value.endpoint == url

    def test_refused_connection_is_fatal(self):
        connector = ChannelConnector(request_timeout=1.0)

        with pytest.raises(ConnectionFailureError) as excinfo:
            asyncio.run(connector.open_event_channel("ws://127.0.0.1:1"))

        assert excinfo.value.step == "event_channel"
        assert "error" in excinfo.value.details


class TestOpenTransactionalChannel:
    @pytest.mark.parametrize("url", ["ws://mock:8545", "ftp://mock", "not a url"])
    def test_rejects_non_http_url(self, url):
        with pytest.raises(ConnectionFailureError) as excinfo:
            asyncio.run(ChannelConnector().open_transactional_channel(url))

        assert excinfo.value.step == "transactional_channel"
        assert excinfo.value.endpoint == url

    def test_unreachable_endpoint_is_fatal(self):
        connector = ChannelConnector(request_timeout=1.0)

        with pytest.raises(ConnectionFailureError) as excinfo:
            asyncio.run(connector.open_transactional_channel("http://127.0.0.1:1"))

        assert excinfo.value.step == "transactional_channel"


class TestCloseTransactionalChannel:
    def test_disconnects_provider_session(self):
        disconnect = AsyncMock()
        channel = cast(AsyncWeb3, SimpleNamespace(provider=SimpleNamespace(disconnect=disconnect)))

        asyncio.run(ChannelConnector().close_transactional_channel(channel))

        disconnect.assert_awaited_once()


class TestResolveChainId:
    def test_returns_node_chain_id(self):
        chain_id = asyncio.run(ChannelConnector().resolve_chain_id(_channel(1337), "ws://mock"))
        assert chain_id == 1337

    def test_query_failure(self):
        channel = _channel(error=TimeoutError("timed out"))

        with pytest.raises(IdentityQueryError) as excinfo:
            asyncio.run(ChannelConnector().resolve_chain_id(channel, "ws://mock"))

        assert excinfo.value.step == "chain_identity"
        assert excinfo.value.endpoint == "ws://mock"
        assert excinfo.value.details["error"] == "timed out"

    @pytest.mark.parametrize("value", [None, "0x1", -1, True])
    def test_invalid_answer(self, value):
        with pytest.raises(IdentityQueryError):
            asyncio.run(ChannelConnector().resolve_chain_id(_channel(value)))
