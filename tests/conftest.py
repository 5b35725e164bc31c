"""Shared fixtures and test doubles."""

from __future__ import annotations

import asyncio
from typing import Any, Callable

import httpx
import pytest

from core.config import AppSettings
from core.domain.chain import ChainFamily
from core.domain.errors import EligibilityLookupError
from core.domain.models import ParserKind, Program

EVM_LOWER = "0x" + "ab" * 20
EVM_UPPER = "0x" + "AB" * 20
EVM_OTHER = "0x" + "12" * 20
EVM_THIRD = "0x" + "cd" * 20
SOL_ADDRESS = "7EcDhSYGxXyscszYEp35KHN8vvw3svAuLKTzXwCFLtV"
FUEL_ADDRESS = "fuel" + "q9" * 19


class RecordingFetcher:
    """Fetcher double that records call order and concurrency."""

    def __init__(self, responses: dict[str, Any] | None = None, *, default: str = "0") -> None:
        self.responses = responses or {}
        self.default = default
        self.calls: list[str] = []
        self.in_flight = 0
        self.max_in_flight = 0
        self.gates: dict[str, asyncio.Event] = {}

    async def fetch(self, program: Program, address: str) -> str:
        self.calls.append(address)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            gate = self.gates.get(address)
            if gate is not None:
                await gate.wait()
            # give other submitters a chance to run while this one is in flight
            await asyncio.sleep(0)
            outcome = self.responses.get(address, self.default)
            if isinstance(outcome, BaseException):
                raise outcome
            return outcome
        finally:
            self.in_flight -= 1


def mock_client_factory(
    handler: Callable[[httpx.Request], httpx.Response],
    proxies_seen: list[str | None] | None = None,
) -> Callable[[str | None], httpx.AsyncClient]:
    def factory(proxy: str | None) -> httpx.AsyncClient:
        if proxies_seen is not None:
            proxies_seen.append(proxy)
        return httpx.AsyncClient(transport=httpx.MockTransport(handler))

    return factory


def lookup_error(address: str, message: str = "boom") -> EligibilityLookupError:
    return EligibilityLookupError(message, program="Test", address=address, status_code=503)


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(_env_file=None)


@pytest.fixture
def evm_program() -> Program:
    return Program(
        name="Test",
        url_template="https://x/{address}",
        chain_family=ChainFamily.EVM,
        parser=ParserKind.SCALED_INTEGER,
    )


@pytest.fixture
def sol_program() -> Program:
    return Program(
        name="SolTest",
        url_template="https://sol.example/eligibility/{address}",
        chain_family=ChainFamily.SOL,
        parser=ParserKind.DIRECT_NUMERIC,
        amount_field="totalUnclaimed",
    )


@pytest.fixture(autouse=True)
def _isolated_config(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    """Keep user config and data lookups away from the real home directory."""

    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("AIRDROP_CHECKER_DATA_DIR", str(tmp_path / "data"))
    # env_file is resolved at import; drop it so no real .env leaks into tests
    monkeypatch.setitem(AppSettings.model_config, "env_file", None)
    for name in (
        "AIRDROP_CHECKER_USE_PROXY",
        "AIRDROP_CHECKER_PROXIES",
        "AIRDROP_CHECKER_PROXIES_PATH",
        "AIRDROP_CHECKER_PROGRAMS_PATH",
        "AIRDROP_CHECKER_MAX_ADDRESSES",
    ):
        monkeypatch.delenv(name, raising=False)
