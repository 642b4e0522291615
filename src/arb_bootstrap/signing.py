"""Signing identity and authorized transactional channel."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, cast

from eth_account import Account
from eth_account.datastructures import SignedTransaction
from eth_account.signers.local import LocalAccount
from hexbytes import HexBytes
from web3 import AsyncWeb3
from web3.middleware import SignAndSendRawMiddlewareBuilder
from web3.types import ChecksumAddress, Wei

from .exceptions import SigningKeyParseError, ValidationError
from .utils import normalise_address

logger = logging.getLogger(__name__)


def _parse_chain_id(value: Any) -> int:
    """Accept an int or a decimal/``0x`` hex string chain id."""
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, str):
        try:
            return int(value, 0)
        except ValueError as exc:
            raise ValidationError(
                "Transaction chainId is not an integer", field="chainId", value=value
            ) from exc
    raise ValidationError("Transaction chainId is not an integer", field="chainId", value=value)


@dataclass(frozen=True)
class ChainBoundSigner:
    """A local account that only signs for one chain."""

    account: LocalAccount
    chain_id: int

    @property
    def address(self) -> ChecksumAddress:
        return cast(ChecksumAddress, self.account.address)

    def bind(self, transaction: Mapping[str, Any]) -> dict[str, Any]:
        """Return a copy of ``transaction`` carrying the bound chain id."""

        tx = dict(transaction)
        requested = tx.get("chainId")
        if requested is not None and _parse_chain_id(requested) != self.chain_id:
            raise ValidationError(
                f"Transaction targets chain {requested}, signer is bound to {self.chain_id}",
                field="chainId",
                value=requested,
            )
        tx["chainId"] = self.chain_id
        return tx

    def sign_transaction(self, transaction: Mapping[str, Any]) -> SignedTransaction:
        return self.account.sign_transaction(self.bind(transaction))


def build_signer(private_key: str, chain_id: int) -> ChainBoundSigner:
    """Parse hex key material and bind it to ``chain_id``."""

    try:
        account = cast(LocalAccount, Account.from_key(private_key))
    except Exception as exc:
        # the key itself is never echoed back
        raise SigningKeyParseError(
            "Failed to derive signer account from provided private key",
            details={"error": type(exc).__name__},
        ) from exc

    logger.debug("Derived signer %s bound to chain id %s", account.address, chain_id)
    return ChainBoundSigner(account=account, chain_id=chain_id)


@dataclass(frozen=True)
class AuthorizedChannel:
    """Transactional channel that signs outgoing transactions with its signer."""

    web3: AsyncWeb3
    signer: ChainBoundSigner

    @property
    def address(self) -> ChecksumAddress:
        return self.signer.address

    @property
    def chain_id(self) -> int:
        return self.signer.chain_id

    async def get_balance(self, address: str | None = None) -> Wei:
        target = self.address if address is None else normalise_address(address)
        return await self.web3.eth.get_balance(target)

    async def send_transaction(self, transaction: Mapping[str, Any]) -> HexBytes:
        tx = self.signer.bind(transaction)
        sender = tx.get("from", self.address)
        if normalise_address(sender, field="from") != self.address:
            raise ValidationError(
                "Transaction sender does not match the signer", field="from", value=sender
            )
        tx["from"] = self.address

        tx_hash = await self.web3.eth.send_transaction(tx)  # type: ignore[arg-type]
        logger.info("Transaction sent from %s hash=%s", self.address, tx_hash.to_0x_hex())
        return tx_hash


def authorize_channel(web3: AsyncWeb3, signer: ChainBoundSigner) -> AuthorizedChannel:
    """Attach ``signer`` to ``web3`` so sent transactions are signed locally."""

    web3.middleware_onion.add(SignAndSendRawMiddlewareBuilder.build(signer.account))  # type: ignore[arg-type]
    web3.eth.default_account = signer.address
    return AuthorizedChannel(web3=web3, signer=signer)
