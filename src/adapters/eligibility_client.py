"""Eligibility lookup over HTTP.

One `fetch` is exactly one GET against the program's URL template, optionally
through the next proxy of the rotation. There are no retries: every failure
surfaces as `EligibilityLookupError` and the caller decides what to do.
"""

from __future__ import annotations

import logging

import httpx

from adapters.http_client import ClientFactory, client_factory
from adapters.proxy_selector import ProxySelector, mask_proxy
from adapters.response_parsers import parse_response
from core.config import AppSettings
from core.domain.errors import EligibilityLookupError, ParserMismatch
from core.domain.models import Program

logger = logging.getLogger(__name__)


class EligibilityClient:
    """Implements `core.interfaces.fetcher.EligibilityFetcher` with httpx."""

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        proxy_selector: ProxySelector | None = None,
        use_proxy: bool | None = None,
        factory: ClientFactory | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._selector = proxy_selector or ProxySelector()
        self._use_proxy = self._settings.use_proxy if use_proxy is None else use_proxy
        self._factory = factory or client_factory(self._settings)

    @property
    def proxying(self) -> bool:
        """True when lookups go through the proxy rotation.

        An empty proxy list is equivalent to proxying disabled.
        """

        return self._use_proxy and bool(self._selector)

    async def fetch(self, program: Program, address: str) -> str:
        url = program.url_for(address)
        proxy = self._selector.next() if self.proxying else None

        def failure(message: str, status_code: int | None = None) -> EligibilityLookupError:
            return EligibilityLookupError(
                message,
                program=program.name,
                address=address,
                status_code=status_code,
            )

        logger.debug(
            "GET %s via %s",
            url,
            mask_proxy(proxy) if proxy else "direct",
        )
        try:
            async with self._factory(proxy) as client:
                response = await client.get(url)
        except httpx.HTTPError as exc:
            logger.warning("%s lookup for %s failed: %s", program.name, address, exc)
            raise failure(f"request failed: {exc.__class__.__name__}: {exc}") from exc

        if not response.is_success:
            logger.warning("%s lookup for %s returned HTTP %s", program.name, address, response.status_code)
            raise failure(f"HTTP {response.status_code}", status_code=response.status_code)

        try:
            payload = response.json()
        except ValueError as exc:
            raise failure("response body is not JSON", status_code=response.status_code) from exc

        try:
            amount = parse_response(
                program.parser,
                payload,
                field=program.amount_field,
                decimals=program.decimals,
            )
        except (ParserMismatch, ValueError, TypeError, ArithmeticError) as exc:
            logger.warning("%s payload for %s did not match %s parser: %s", program.name, address, program.parser.value, exc)
            raise ParserMismatch(
                str(exc),
                program=program.name,
                address=address,
                status_code=response.status_code,
            ) from exc

        logger.debug("%s %s -> %s", program.name, address, amount)
        return amount
