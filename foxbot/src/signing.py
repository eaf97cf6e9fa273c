"""
Request signature for the FoxESS Cloud Open API.

The server recomputes an MD5 digest over the request path, the API key and
the millisecond timestamp and rejects the call on mismatch, so the scheme
must match the vendor's byte for byte. The separator is the escaped text
``\\r\\n`` (four characters), not a real CR-LF pair.

CHANGELOG:
- 2026-10-19: Initial creation (STORY-002)

TODO:
- None
"""

from __future__ import annotations

import hashlib

from foxbot.src.config import ConfigurationError

SEPARATOR = r"\r\n"
"""Literal separator placed between the signed fields."""


class SigningError(ConfigurationError):
    """A signature was requested without a usable API key."""


def sign(path: str, api_key: str | None, timestamp_ms: int) -> str:
    """Compute the request signature for *path* at *timestamp_ms*.

    This is a pure function: the same (path, key, timestamp) triple always
    yields the same signature.

    Args:
        path: API path including the leading slash, e.g.
            ``/op/v0/device/real/query``.
        api_key: FoxESS Open API key.
        timestamp_ms: Milliseconds since the epoch, identical to the value
            sent in the ``timestamp`` header.

    Returns:
        Lowercase hex MD5 digest.

    Raises:
        SigningError: If *api_key* is empty or ``None``.
    """
    if not api_key:
        raise SigningError("API key is required to sign FoxESS requests")
    payload = f"{path}{SEPARATOR}{api_key}{SEPARATOR}{timestamp_ms}"
    return hashlib.md5(payload.encode("utf-8")).hexdigest()
