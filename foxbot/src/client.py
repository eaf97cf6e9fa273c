"""
Signed HTTPS client for the FoxESS Cloud Open API.

Each call captures the current time in milliseconds, signs the request path
with it (see :mod:`foxbot.src.signing`) and issues exactly one GET or POST.
There is no retry, no backoff and no timeout override: httpx defaults apply
and a slow vendor simply makes the user wait.

The decoded JSON body is returned even when the vendor reports a failure in
its ``errno`` field; :func:`check_errno` is the single place that turns a
nonzero ``errno`` into a :class:`VendorError`.

Operations:
- FoxESSClient.call(path, params, method): Signed request, returns raw JSON.
- check_errno(body): Validate the response envelope, raise on errno != 0.

CHANGELOG:
- 2026-10-19: Single masked_token helper used by the entrypoint too
- 2026-10-19: Include vendor msg in VendorError for diagnostics
- 2026-10-19: Initial creation (STORY-005)

TODO:
- None
"""

from __future__ import annotations

import hashlib
import logging
import time
from typing import Any

import httpx

from foxbot.src.models import Envelope
from foxbot.src.signing import sign

logger = logging.getLogger(__name__)

_METHODS = ("GET", "POST")


class VendorError(Exception):
    """The vendor answered but reported a failure (``errno != 0``).

    Attributes:
        errno: Vendor error code.
        msg: Vendor error text, when the response carries one.
    """

    def __init__(self, errno: int, msg: str | None = None) -> None:
        self.errno = errno
        self.msg = msg
        text = f"FoxESS request failed: errno={errno}"
        if msg:
            text += f": {msg}"
        super().__init__(text)


def check_errno(body: Any) -> Envelope:
    """Validate the response envelope and return it on success.

    Args:
        body: Decoded JSON body as returned by :meth:`FoxESSClient.call`.

    Returns:
        The validated :class:`~foxbot.src.models.Envelope`.

    Raises:
        pydantic.ValidationError: If *body* is not an envelope.
        VendorError: If ``errno`` is nonzero.
    """
    envelope = Envelope.model_validate(body)
    if envelope.errno != 0:
        raise VendorError(envelope.errno, envelope.msg)
    return envelope


def masked_token(value: str | None) -> str:
    """Return a short non-reversible token fingerprint for diagnostics."""
    if not value:
        return "empty"
    digest = hashlib.sha256(value.encode("utf-8")).hexdigest()[:10]
    return f"len={len(value)} sha256={digest}"


class FoxESSClient:
    """Single-shot signed client for the FoxESS Cloud Open API.

    The underlying :class:`httpx.AsyncClient` is safe for concurrent use,
    so one instance serves every chat for the process lifetime.

    Args:
        base_url: FoxESS Cloud base URL, e.g. ``https://www.foxesscloud.com``.
            Must start with ``https://``.
        api_key: Open API key; sent as the ``token`` header and used for
            signing.
        lang: Value of the ``lang`` header.
        http_client: Optional pre-built client. When omitted the instance
            creates and owns one, and :meth:`aclose` closes it.

    Raises:
        ValueError: If *base_url* does not start with ``https://``.

    Usage::

        async with FoxESSClient("https://www.foxesscloud.com", key) as client:
            body = await client.call("/op/v0/device/detail", {"sn": sn}, "GET")
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        lang: str = "en",
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        if not base_url.lower().startswith("https://"):
            raise ValueError(f"FoxESS base URL must use HTTPS (got: '{base_url}').")
        self._base_url = base_url.rstrip("/")
        self._api_key = api_key
        self._lang = lang
        self._owns_http = http_client is None
        self._http = http_client if http_client is not None else httpx.AsyncClient(verify=True)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def base_url(self) -> str:
        return self._base_url

    def headers(self, path: str, timestamp_ms: int) -> dict[str, str]:
        """Build the signed header set for *path* at *timestamp_ms*."""
        return {
            "Content-Type": "application/json",
            "token": self._api_key,
            "signature": sign(path, self._api_key, timestamp_ms),
            "lang": self._lang,
            "timestamp": str(timestamp_ms),
        }

    async def call(
        self,
        path: str,
        params: dict[str, Any] | None = None,
        method: str = "POST",
    ) -> Any:
        """Issue one signed request and return the decoded JSON body.

        Args:
            path: API path, e.g. ``/op/v0/device/real/query``.
            params: Query parameters for GET, JSON body for POST.
            method: ``"GET"`` or ``"POST"`` (case-insensitive).

        Returns:
            The decoded JSON body, regardless of its ``errno``.

        Raises:
            ValueError: If *method* is not GET or POST.
            SigningError: If the API key is empty.
            httpx.HTTPStatusError: On a non-2xx HTTP status.
            httpx.HTTPError: On any other transport failure.
        """
        method = method.upper()
        if method not in _METHODS:
            raise ValueError(f"Unsupported HTTP method '{method}' (expected GET or POST)")

        timestamp_ms = round(time.time() * 1000)
        headers = self.headers(path, timestamp_ms)
        url = f"{self._base_url}{path}"
        logger.debug(
            "FoxESS %s %s (token %s, timestamp %d)",
            method,
            path,
            masked_token(self._api_key),
            timestamp_ms,
        )

        if method == "GET":
            response = await self._http.get(url, params=params or {}, headers=headers)
        else:
            response = await self._http.post(url, json=params or {}, headers=headers)

        response.raise_for_status()
        return response.json()

    async def aclose(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._owns_http:
            await self._http.aclose()

    async def __aenter__(self) -> FoxESSClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
