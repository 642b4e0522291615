"""Exception hierarchy for the execution context bootstrap."""

from typing import Any


class BootstrapError(Exception):
    """Base exception for every bootstrap failure."""

    step = "bootstrap"

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class MissingConfigurationError(BootstrapError):
    """Raised when a required environment variable is absent."""

    step = "configuration"

    def __init__(self, variable: str, details: dict | None = None):
        super().__init__(f"{variable} not found in environment variables", details)
        self.variable = variable


class ConnectionFailureError(BootstrapError):
    """Raised when a channel to the node cannot be opened."""

    def __init__(
        self,
        message: str,
        endpoint: str | None = None,
        step: str | None = None,
        details: dict | None = None,
    ):
        super().__init__(message, details)
        self.endpoint = endpoint
        if step is not None:
            self.step = step


class IdentityQueryError(BootstrapError):
    """Raised when the chain id round trip fails."""

    step = "chain_identity"

    def __init__(
        self,
        message: str,
        endpoint: str | None = None,
        details: dict | None = None,
    ):
        super().__init__(message, details)
        self.endpoint = endpoint


class SigningKeyParseError(BootstrapError):
    """Raised when the private key does not decode into a signing key."""

    step = "signing_identity"


class NumericParseError(BootstrapError):
    """Raised when an explicitly supplied numeric setting is malformed."""

    step = "fork_parameters"

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: Any | None = None,
        details: dict | None = None,
    ):
        super().__init__(message, details)
        self.field = field
        self.value = value


class ValidationError(BootstrapError):
    """Raised when input validation fails."""

    step = "validation"

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: Any | None = None,
        details: dict | None = None,
    ):
        super().__init__(message, details)
        self.field = field
        self.value = value
