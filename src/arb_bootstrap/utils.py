"""Utility functions for the bootstrap modules."""

import re
from collections.abc import Sequence
from urllib.parse import urlparse

from web3 import Web3
from web3.types import ChecksumAddress

from .exceptions import NumericParseError, ValidationError

_UNSIGNED_RE = re.compile(r"\+?[0-9]+")


def parse_unsigned(raw: str, bits: int, field: str) -> int:
    """Parse a decimal string into an unsigned integer of ``bits`` width."""
    if not isinstance(raw, str) or _UNSIGNED_RE.fullmatch(raw) is None:
        raise NumericParseError(
            f"{field} must be an unsigned integer, got {raw!r}", field=field, value=raw
        )

    digits = raw.lstrip("+").lstrip("0") or "0"
    limit = 2**bits - 1
    # bounded by length first so int() never sees an arbitrarily long string
    if len(digits) > len(str(limit)) or int(digits) > limit:
        raise NumericParseError(
            f"{field} exceeds uint{bits} maximum", field=field, value=raw
        )

    return int(digits)


def require_url_scheme(url: str, schemes: Sequence[str]) -> str | None:
    """Return an error description if ``url`` is not a ``schemes`` URL with a host."""
    try:
        parsed = urlparse(url)
    except ValueError as exc:
        return str(exc)

    if parsed.scheme.lower() not in schemes:
        expected = "/".join(schemes)
        return f"expected a {expected} URL, got scheme {parsed.scheme or '<none>'!r}"
    if not parsed.hostname:
        return "URL has no host"
    return None


def normalise_address(address: str, field: str = "address") -> ChecksumAddress:
    """Validate a 20-byte hex address and return its checksummed form."""
    if not isinstance(address, str) or not Web3.is_address(address):
        raise ValidationError("Invalid address", field=field, value=address)
    return Web3.to_checksum_address(address)


def redact_url(url: str) -> str:
    """Reduce ``url`` to scheme, host and port for logging."""
    parsed = urlparse(url)
    netloc = parsed.hostname or ""
    if parsed.port is not None:
        netloc = f"{netloc}:{parsed.port}"
    return f"{parsed.scheme}://{netloc}"
