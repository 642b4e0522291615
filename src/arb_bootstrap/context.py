"""Execution context assembled once at bot startup."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass

from web3 import AsyncWeb3
from web3.types import ChecksumAddress

from .config import EnvironmentConfig, load_environment
from .connections import ChannelConnector
from .constants import DEFAULT_FORK_HOST, DEFAULT_OPERATOR_ADDRESS
from .exceptions import BootstrapError
from .signing import AuthorizedChannel, authorize_channel, build_signer
from .utils import normalise_address

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExecutionContext:
    """Channels, identity and fork settings shared by the bot's components."""

    event_channel: AsyncWeb3
    transactional_channel: AuthorizedChannel
    node_endpoint_address: str
    operator_address: ChecksumAddress
    fork_port: int
    fork_chain_id: int

    @property
    def chain_id(self) -> int:
        return self.transactional_channel.chain_id

    @property
    def signer_address(self) -> ChecksumAddress:
        return self.transactional_channel.address

    @property
    def fork_url(self) -> str:
        return f"http://{DEFAULT_FORK_HOST}:{self.fork_port}"

    async def close(self) -> None:
        """Disconnect both channels; call once at process shutdown."""

        try:
            await self.transactional_channel.web3.provider.disconnect()
        finally:
            await self.event_channel.provider.disconnect()


class ExecutionContextBuilder:
    """Run the bootstrap steps in order and produce an ``ExecutionContext``.

    Steps: open the event channel, open the transactional channel, query the
    chain id over the event channel, derive the signer bound to that chain id
    and authorize the transactional channel with it. Any failure aborts the
    whole build; nothing is retried.
    """

    def __init__(
        self,
        config: EnvironmentConfig,
        *,
        connector: ChannelConnector | None = None,
        operator_address: str = DEFAULT_OPERATOR_ADDRESS,
    ) -> None:
        self._config = config
        self._connector = connector or ChannelConnector()
        self._operator_address = operator_address

    @classmethod
    def from_environment(
        cls,
        environ: Mapping[str, str] | None = None,
        **kwargs,
    ) -> ExecutionContextBuilder:
        return cls(load_environment(environ), **kwargs)

    async def build(self) -> ExecutionContext:
        config = self._config
        operator_address = normalise_address(self._operator_address, field="operator_address")
        if operator_address == normalise_address(DEFAULT_OPERATOR_ADDRESS):
            logger.warning("Using placeholder operator address %s", operator_address)

        event_channel = await self._connector.open_event_channel(config.wss_url)
        http_channel: AsyncWeb3 | None = None
        try:
            http_channel = await self._connector.open_transactional_channel(config.http_url)
            chain_id = await self._connector.resolve_chain_id(event_channel, config.wss_url)
            signer = build_signer(config.private_key, chain_id)
            transactional_channel = authorize_channel(http_channel, signer)
        except BootstrapError:
            await self._abort(event_channel, http_channel)
            raise
        except Exception as exc:  # pragma: no cover - defensive
            await self._abort(event_channel, http_channel)
            raise BootstrapError(
                "Failed to build execution context", details={"error": str(exc)}
            ) from exc

        context = ExecutionContext(
            event_channel=event_channel,
            transactional_channel=transactional_channel,
            node_endpoint_address=config.http_url,
            operator_address=operator_address,
            fork_port=config.fork.port,
            fork_chain_id=config.fork.chain_id,
        )
        logger.info(
            "Execution context ready chain_id=%s signer=%s operator=%s fork=%s (chain %s)",
            context.chain_id,
            context.signer_address,
            context.operator_address,
            context.fork_url,
            context.fork_chain_id,
        )
        return context

    async def _abort(self, event_channel: AsyncWeb3, http_channel: AsyncWeb3 | None) -> None:
        if http_channel is not None:
            try:
                await self._connector.close_transactional_channel(http_channel)
            except Exception:  # pragma: no cover - already failing
                logger.warning("Transactional channel close failed during abort", exc_info=True)
        try:
            await self._connector.close_event_channel(event_channel)
        except Exception:  # pragma: no cover - already failing
            logger.warning("Event channel disconnect failed during abort", exc_info=True)


async def bootstrap(
    environ: Mapping[str, str] | None = None,
    *,
    connector: ChannelConnector | None = None,
    operator_address: str = DEFAULT_OPERATOR_ADDRESS,
) -> ExecutionContext:
    """Load configuration and build the execution context in one call."""

    builder = ExecutionContextBuilder.from_environment(
        environ, connector=connector, operator_address=operator_address
    )
    return await builder.build()
