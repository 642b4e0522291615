"""Configuration containers and environment loading for the bootstrap."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, field

from dotenv import load_dotenv

from .constants import (
    DEFAULT_FORK_CHAIN_ID,
    DEFAULT_FORK_PORT,
    REQUIRED_VARIABLES,
    EnvVar,
)
from .exceptions import MissingConfigurationError
from .utils import parse_unsigned

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ForkParameters:
    """Port and chain id of the local simulation fork."""

    port: int = DEFAULT_FORK_PORT
    chain_id: int = DEFAULT_FORK_CHAIN_ID


@dataclass(frozen=True)
class EnvironmentConfig:
    """Everything the bootstrap reads from the environment."""

    wss_url: str
    http_url: str
    private_key: str = field(repr=False)
    fork: ForkParameters = ForkParameters()


def resolve_fork_parameters(environ: Mapping[str, str]) -> ForkParameters:
    """Read the optional fork settings, defaulting only when they are absent.

    A value that is present but malformed raises ``NumericParseError``
    instead of falling back to the default.
    """

    raw_port = environ.get(EnvVar.FORK_PORT.value)
    raw_chain_id = environ.get(EnvVar.FORK_CHAIN_ID.value)

    port = (
        DEFAULT_FORK_PORT
        if raw_port is None
        else parse_unsigned(raw_port, 16, EnvVar.FORK_PORT.value)
    )
    chain_id = (
        DEFAULT_FORK_CHAIN_ID
        if raw_chain_id is None
        else parse_unsigned(raw_chain_id, 64, EnvVar.FORK_CHAIN_ID.value)
    )

    logger.debug("Resolved fork parameters port=%s chain_id=%s", port, chain_id)
    return ForkParameters(port=port, chain_id=chain_id)


def _require(environ: Mapping[str, str], variable: EnvVar) -> str:
    value = environ.get(variable.value)
    if not value:
        raise MissingConfigurationError(variable.value)
    return value


def load_environment(
    environ: Mapping[str, str] | None = None,
    *,
    env_file: str | os.PathLike[str] | None = None,
) -> EnvironmentConfig:
    """Build an ``EnvironmentConfig`` from ``environ`` or the process environment.

    When ``environ`` is omitted a ``.env`` file is loaded first (without
    overriding variables that are already set).
    """

    if environ is None:
        load_dotenv(env_file)
        environ = os.environ

    wss_url, http_url, private_key = (_require(environ, var) for var in REQUIRED_VARIABLES)

    return EnvironmentConfig(
        wss_url=wss_url,
        http_url=http_url,
        private_key=private_key,
        fork=resolve_fork_parameters(environ),
    )
