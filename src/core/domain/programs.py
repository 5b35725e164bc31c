"""Program registry.

The registry is built once at startup from configuration and is read-only
afterwards. Programs are looked up by display name, case-insensitively, and
keep their configuration order for menus.
"""

from __future__ import annotations

from typing import Iterable, Iterator

from core.domain.chain import ChainFamily
from core.domain.errors import UnknownProgram
from core.domain.models import ParserKind, Program

DEFAULT_PROGRAMS: tuple[Program, ...] = (
    Program(
        name="Fuel",
        url_template="https://mainnet-14236c37.fuel.network/allocations?accounts={address}",
        chain_family=ChainFamily.FUEL,
        parser=ParserKind.SCALED_INTEGER,
        amount_field="amount",
    ),
    Program(
        name="$Pingu",
        url_template="https://api.clusters.xyz/v0.1/airdrops/pengu/eligibility/{address}",
        chain_family=ChainFamily.SOL,
        parser=ParserKind.DIRECT_NUMERIC,
        amount_field="totalUnclaimed",
    ),
    Program(
        name="USUAL",
        url_template="https://app.usual.money/api/points/{address}",
        chain_family=ChainFamily.EVM,
        parser=ParserKind.IDENTITY_AMOUNT,
        amount_field="amount",
    ),
)


class ProgramRegistry:
    def __init__(self, programs: Iterable[Program]) -> None:
        ordered = tuple(programs)
        by_key: dict[str, Program] = {}
        for program in ordered:
            key = program.name.casefold()
            if key in by_key:
                raise ValueError(f"Duplicate program name: {program.name!r}")
            by_key[key] = program
        self._programs = ordered
        self._by_key = by_key

    @classmethod
    def default(cls) -> "ProgramRegistry":
        return cls(DEFAULT_PROGRAMS)

    def get(self, name: str) -> Program:
        try:
            return self._by_key[name.strip().casefold()]
        except KeyError:
            raise UnknownProgram(name, self.names()) from None

    def names(self) -> list[str]:
        return [program.name for program in self._programs]

    def __iter__(self) -> Iterator[Program]:
        return iter(self._programs)

    def __len__(self) -> int:
        return len(self._programs)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.strip().casefold() in self._by_key
