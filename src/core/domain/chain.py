"""Chain families supported by the eligibility checker.

This module centralizes the address-format categories that programs are
bound to. Keeping it in the domain layer lets validation, configuration and
the CLI share a single source of truth without importing adapters.
"""

from __future__ import annotations

from enum import Enum


class ChainFamily(str, Enum):
    """Blockchain address format category."""

    EVM = "EVM"
    SOL = "SOL"
    FUEL = "FUEL"

    @classmethod
    def parse(cls, value: str) -> "ChainFamily":
        """Resolve a family from user input (`evm`, `Sol`, ...)."""

        try:
            return cls(value.strip().upper())
        except ValueError:
            choices = ", ".join(member.value for member in cls)
            raise ValueError(f"Unknown chain family {value!r} (expected one of: {choices})") from None

    @property
    def display_name(self) -> str:
        """Human readable label for prompts."""

        return _DISPLAY_NAMES[self]

    @property
    def case_insensitive(self) -> bool:
        """Whether two addresses differing only in letter case are the same address.

        Hex (EVM) and bech32-style (Fuel) addresses are; base58 (Solana) is not.
        """

        return self is not ChainFamily.SOL


_DISPLAY_NAMES: dict[ChainFamily, str] = {
    ChainFamily.EVM: "Ethereum-compatible addresses (0x...)",
    ChainFamily.SOL: "Solana addresses",
    ChainFamily.FUEL: "Fuel addresses (fuel...)",
}


def get_display_name(family: ChainFamily) -> str:
    return family.display_name
