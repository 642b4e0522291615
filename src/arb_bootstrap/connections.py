"""Connection helpers for the event and transactional channels."""

from __future__ import annotations

import logging

from aiohttp import ClientTimeout
from web3 import AsyncHTTPProvider, AsyncWeb3, WebSocketProvider

from .constants import DEFAULT_REQUEST_TIMEOUT, HTTP_SCHEMES, WS_SCHEMES
from .exceptions import ConnectionFailureError, IdentityQueryError
from .utils import redact_url, require_url_scheme

logger = logging.getLogger(__name__)


class ChannelConnector:
    """Open the node channels the execution context is built from."""

    def __init__(self, *, request_timeout: float = DEFAULT_REQUEST_TIMEOUT) -> None:
        self.request_timeout = request_timeout

    # ------------------------------------------------------------------
    # Event channel
    # ------------------------------------------------------------------
    async def open_event_channel(self, url: str) -> AsyncWeb3:
        """Connect a persistent WebSocket provider; one attempt, no retry."""

        problem = require_url_scheme(url, WS_SCHEMES)
        if problem is not None:
            raise ConnectionFailureError(
                f"Invalid event channel URL: {problem}", endpoint=url, step="event_channel"
            )

        provider = WebSocketProvider(
            url,
            max_connection_retries=1,
            request_timeout=self.request_timeout,
        )
        web3 = AsyncWeb3(provider)
        try:
            await web3.provider.connect()
        except Exception as exc:
            raise ConnectionFailureError(
                "Unable to open event channel",
                endpoint=url,
                step="event_channel",
                details={"error": str(exc)},
            ) from exc

        logger.info("Connected event channel at %s", redact_url(url))
        return web3

    async def close_event_channel(self, channel: AsyncWeb3) -> None:
        await channel.provider.disconnect()

    # ------------------------------------------------------------------
    # Transactional channel
    # ------------------------------------------------------------------
    async def open_transactional_channel(self, url: str) -> AsyncWeb3:
        """Build an HTTP client for RPC calls; it cannot sign yet."""

        problem = require_url_scheme(url, HTTP_SCHEMES)
        if problem is not None:
            raise ConnectionFailureError(
                f"Invalid transactional channel URL: {problem}",
                endpoint=url,
                step="transactional_channel",
            )

        provider = AsyncHTTPProvider(
            url, request_kwargs={"timeout": ClientTimeout(total=self.request_timeout)}
        )
        web3 = AsyncWeb3(provider)
        try:
            reachable = await web3.is_connected()
        except Exception as exc:  # pragma: no cover - is_connected reports False
            raise ConnectionFailureError(
                "Unable to reach transactional channel",
                endpoint=url,
                step="transactional_channel",
                details={"error": str(exc)},
            ) from exc

        if not reachable:
            await self.close_transactional_channel(web3)
            raise ConnectionFailureError(
                "Unable to reach transactional channel",
                endpoint=url,
                step="transactional_channel",
            )

        logger.info("Connected transactional channel at %s", redact_url(url))
        return web3

    async def close_transactional_channel(self, channel: AsyncWeb3) -> None:
        """Close the HTTP session cached by the provider."""

        await channel.provider.disconnect()

    # ------------------------------------------------------------------
    # Chain identity
    # ------------------------------------------------------------------
    async def resolve_chain_id(self, channel: AsyncWeb3, endpoint: str | None = None) -> int:
        """Ask the node which chain it serves."""

        try:
            chain_id = await channel.eth.chain_id
        except Exception as exc:
            raise IdentityQueryError(
                "Failed to query chain id",
                endpoint=endpoint,
                details={"error": str(exc)},
            ) from exc

        if isinstance(chain_id, bool) or not isinstance(chain_id, int) or chain_id < 0:
            raise IdentityQueryError(
                "Node returned an invalid chain id",
                endpoint=endpoint,
                details={"chain_id": chain_id},
            )

        logger.info(
            "Node at %s reports chain id %s", redact_url(endpoint) if endpoint else None, chain_id
        )
        return chain_id
