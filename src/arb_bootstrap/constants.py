"""Constants shared by the bootstrap modules."""

from enum import Enum


class EnvVar(str, Enum):
    """Environment variables read at startup."""

    WSS = "WSS"
    HTTP = "HTTP"
    PRIVATE_KEY = "PRIVATE_KEY"
    FORK_PORT = "FORK_PORT"
    FORK_CHAIN_ID = "FORK_CHAIN_ID"


REQUIRED_VARIABLES = (EnvVar.WSS, EnvVar.HTTP, EnvVar.PRIVATE_KEY)

DEFAULT_FORK_PORT = 8545
DEFAULT_FORK_CHAIN_ID = 31337
DEFAULT_FORK_HOST = "127.0.0.1"

DEFAULT_REQUEST_TIMEOUT = 10.0

# Placeholder; replace with the mainnet address the bot operates as.
DEFAULT_OPERATOR_ADDRESS = "0x4162a3316fb46e2c9e1cedf459c42f669dcabc3e"

WS_SCHEMES = ("ws", "wss")
HTTP_SCHEMES = ("http", "https")
