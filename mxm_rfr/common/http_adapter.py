"""
HTTP adapter for mxm-rfr (requests-based).

This module provides a thin adapter for issuing a single HTTP request and
returning a transport-level result. The adapter focuses on performing one
request with sensible defaults (User-Agent, Accept headers, timeout). Status
interpretation is left to the caller: the page scraper and the download cache
each map a non-200 status onto their own error type.

Design notes
------------
- Headers are stored and exposed as ``Mapping[str, str]`` (no ``bytes`` values).
- Default headers and timeout are injected at construction time.
- Network/client exceptions (``requests.RequestException``) are propagated.
- No retry, backoff or politeness delays: each call is exactly one request.

Thread-safety
-------------
This adapter does not guarantee thread safety. Use one instance per worker or
provide synchronization if you share an underlying ``requests.Session``.
"""

from __future__ import annotations

import dataclasses as dc
from datetime import timedelta
from types import MappingProxyType, TracebackType
from typing import Any, Mapping, Optional, Protocol, Type

import requests
from requests import Response, Session

DEFAULT_USER_AGENT = "mxm-rfr/0.1 (contact@moneyexmachina.com)"


@dc.dataclass(frozen=True, slots=True)
class HttpResult:
    """Raw body and transport metadata of a single HTTP response."""

    data: bytes
    status: int
    url: str
    content_type: Optional[str] = None
    headers: Mapping[str, str] = dc.field(default_factory=dict)
    elapsed_ms: Optional[int] = None

    @property
    def ok(self) -> bool:
        return self.status == 200

    def text(self, encoding: str = "utf-8") -> str:
        """Body decoded with replacement of undecodable bytes."""
        return self.data.decode(encoding, errors="replace")


class Fetcher(Protocol):
    """Anything that can GET a URL and return an `HttpResult`."""

    def fetch(
        self,
        url: str,
        *,
        headers: Optional[Mapping[str, str]] = None,
        timeout: Optional[float] = None,
    ) -> HttpResult: ...


def _elapsed_ms(resp: Response) -> Optional[int]:
    """Return the elapsed time in milliseconds for a ``requests.Response``.

    If the response has no timing information, returns ``None``.
    """
    elapsed: Optional[timedelta] = getattr(resp, "elapsed", None)
    if elapsed is None:
        return None
    return int(round(elapsed.total_seconds() * 1000.0))


def _headers_dict(headers: Mapping[str, Any]) -> dict[str, str]:
    """Convert a headers mapping to ``dict[str, str]`` with string values only."""
    return {str(k): str(v) for k, v in headers.items()}


class HttpRequestsAdapter:
    """Requests-based HTTP adapter implementing the `Fetcher` protocol.

    The adapter issues GET requests using an internal ``requests.Session`` and
    returns the raw body and transport metadata. Default headers and timeout
    are configured at construction; per-request overrides are keyword args.

    Parameters
    ----------
    user_agent:
        String for the ``User-Agent`` header. Will be inserted into default
        headers if not already present.
    default_timeout:
        Timeout in seconds applied when a per-request timeout is not supplied.
    default_headers:
        Mapping of default headers applied to all requests. All values must be
        ``str``; header names are handled case-insensitively by the HTTP stack.

    Notes
    -----
    Usable as a context manager; the session is closed on exit.
    """

    # Clarify attribute type for Pyright
    default_headers: Mapping[str, str]

    def __init__(
        self,
        *,
        user_agent: str = DEFAULT_USER_AGENT,
        default_timeout: float = 30.0,
        default_headers: Optional[Mapping[str, str]] = None,
    ) -> None:
        """Initialize the adapter with default headers and timeout."""
        self._session: Session = requests.Session()

        base: dict[str, str] = {
            "User-Agent": user_agent,
            "Accept": "*/*",
            "Accept-Encoding": "gzip, deflate",
            "Connection": "keep-alive",
        }
        if default_headers:
            base.update(default_headers)
        self._session.headers.update(base)

        self._default_timeout = float(default_timeout)

        coerced: dict[str, str] = _headers_dict(self._session.headers)
        self.default_headers = MappingProxyType(coerced)

    @property
    def default_timeout(self) -> float:
        return self._default_timeout

    def fetch(
        self,
        url: str,
        *,
        headers: Optional[Mapping[str, str]] = None,
        timeout: Optional[float] = None,
    ) -> HttpResult:
        """GET `url` and return the response as an `HttpResult`.

        The status code is not checked here; callers decide what counts as
        success.

        Raises
        ------
        ValueError
            If ``url`` is empty.
        requests.RequestException
            On connection, timeout or other transport failures.
        """
        if not isinstance(url, str) or not url:
            raise ValueError("HttpRequestsAdapter.fetch: url must be a non-empty string.")

        resp: Response = self._session.request(
            method="GET",
            url=url,
            headers=dict(headers or {}),
            timeout=float(timeout or self._default_timeout),
            allow_redirects=True,
        )
        return HttpResult(
            data=resp.content,
            status=resp.status_code,
            url=resp.url,
            content_type=resp.headers.get("Content-Type"),
            headers=_headers_dict(resp.headers),
            elapsed_ms=_elapsed_ms(resp),
        )

    def describe(self) -> str:
        """Human-readable description of this adapter (for logs and diagnostics)."""
        return f"HTTP adapter via 'requests' (timeout={self._default_timeout:g}s)"

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self._session.close()

    def __enter__(self) -> HttpRequestsAdapter:
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        self.close()


__all__ = ["DEFAULT_USER_AGENT", "Fetcher", "HttpResult", "HttpRequestsAdapter"]
