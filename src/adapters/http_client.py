"""httpx wrapper.

- Standardizes timeouts, headers and the proxy policy for every lookup.
- Makes testing easy: the eligibility client takes a client factory that
  tests replace with one backed by `httpx.MockTransport`.
"""

from __future__ import annotations

from typing import Callable

import httpx

from core.config import AppSettings

ClientFactory = Callable[[str | None], httpx.AsyncClient]


def build_async_client(
    settings: AppSettings | None = None,
    *,
    proxy: str | None = None,
    extra_headers: dict[str, str] | None = None,
) -> httpx.AsyncClient:
    """Create an `httpx.AsyncClient` with safe defaults.

    `proxy` routes every request of the client through that proxy URL.
    Environment proxies are ignored so that the configured policy is the
    only one in effect.
    """

    settings = settings or AppSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "application/json, text/plain;q=0.9, */*;q=0.8",
    }
    if extra_headers:
        headers.update(extra_headers)
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=True,
        headers=headers,
        proxy=proxy,
        trust_env=False,
    )


def client_factory(settings: AppSettings) -> ClientFactory:
    """Bind `settings` into a `proxy -> AsyncClient` factory."""

    def factory(proxy: str | None) -> httpx.AsyncClient:
        return build_async_client(settings, proxy=proxy)

    return factory
