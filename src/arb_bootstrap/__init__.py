"""Startup context for an on-chain arbitrage bot.

Builds the immutable ``ExecutionContext`` holding the WebSocket event
channel, the signing HTTP channel bound to the node's chain id, the operator
address and the local fork settings.
"""

from .config import EnvironmentConfig, ForkParameters, load_environment, resolve_fork_parameters
from .connections import ChannelConnector
from .constants import DEFAULT_FORK_CHAIN_ID, DEFAULT_FORK_PORT, DEFAULT_OPERATOR_ADDRESS, EnvVar
from .context import ExecutionContext, ExecutionContextBuilder, bootstrap
from .exceptions import (
    BootstrapError,
    ConnectionFailureError,
    IdentityQueryError,
    MissingConfigurationError,
    NumericParseError,
    SigningKeyParseError,
    ValidationError,
)
from .signing import AuthorizedChannel, ChainBoundSigner, authorize_channel, build_signer

__version__ = "0.1.0"

__all__ = [
    # Context
    "ExecutionContext",
    "ExecutionContextBuilder",
    "bootstrap",
    # Steps
    "ChannelConnector",
    "ChainBoundSigner",
    "AuthorizedChannel",
    "build_signer",
    "authorize_channel",
    # Configuration
    "EnvironmentConfig",
    "ForkParameters",
    "EnvVar",
    "load_environment",
    "resolve_fork_parameters",
    "DEFAULT_FORK_PORT",
    "DEFAULT_FORK_CHAIN_ID",
    "DEFAULT_OPERATOR_ADDRESS",
    # Exceptions
    "BootstrapError",
    "MissingConfigurationError",
    "ConnectionFailureError",
    "IdentityQueryError",
    "SigningKeyParseError",
    "NumericParseError",
    "ValidationError",
]
