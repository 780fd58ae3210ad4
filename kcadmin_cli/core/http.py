"""Minimal HTTP helpers for the client.

The default transport uses :mod:`urllib` from the Python standard library.
A transport is any callable taking a :class:`Request` and returning a
:class:`Response`; tests and callers with their own HTTP stack can pass one
in instead of :func:`urllib_transport`.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Callable, Dict
from urllib.error import HTTPError
from urllib.request import Request as _UrlRequest, urlopen

DEFAULT_TIMEOUT = 60


@dataclass(frozen=True)
class Request:
    method: str
    url: str
    headers: Dict[str, str] = field(default_factory=dict)
    payload: Any = None


@dataclass(frozen=True)
class Response:
    status_code: int
    body: Any = None


Transport = Callable[[Request], Response]


def build_request(
    method: str,
    url: str,
    token: str,
    payload: Any = None,
) -> Request:
    """Return a bearer-authenticated JSON request descriptor."""
    headers = {"Accept": "application/json", "Authorization": f"Bearer {token}"}
    if payload is not None:
        headers["Content-Type"] = "application/json"
    return Request(method=method.upper(), url=url, headers=headers, payload=payload)


def decode_body(raw: bytes, content_type: str | None) -> Any:
    """Return parsed JSON, raw bytes, or ``None`` for an empty body."""
    if not raw:
        return None
    if "application/json" in (content_type or "").lower():
        try:
            return json.loads(raw.decode("utf-8"))
        except ValueError:
            # Body claims JSON but is not; hand it back untouched
            return raw
    return raw


def urllib_transport(request: Request, *, timeout: float = DEFAULT_TIMEOUT) -> Response:
    """Send ``request`` with :func:`urllib.request.urlopen`.

    HTTP error statuses come back as a normal :class:`Response` so that the
    caller decides which codes are acceptable.  Connection failures
    (:class:`urllib.error.URLError` and friends) are not caught here.
    """

    data = None
    if request.payload is not None:
        data = json.dumps(request.payload).encode("utf-8")
    req = _UrlRequest(
        url=request.url,
        method=request.method,
        headers=dict(request.headers),
        data=data,
    )
    try:
        with urlopen(req, timeout=timeout) as resp:
            raw = resp.read()
            return Response(resp.status, decode_body(raw, resp.headers.get("Content-Type")))
    except HTTPError as e:
        raw = e.read() if e.fp is not None else b""
        ctype = e.headers.get("Content-Type") if e.headers is not None else None
        return Response(e.code, decode_body(raw, ctype))
