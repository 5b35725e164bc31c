"""Structural address validation per chain family.

Rules:
- Pure predicate: no I/O, no side effects, never raises for string input.
- Hex-style families accept any letter case, so validating a lower-cased
  address gives the same verdict as validating it as typed.
- Solana addresses are base58 and stay case-sensitive.
"""

from __future__ import annotations

import re

from core.domain.chain import ChainFamily
from core.domain.errors import ValidationFailure

EVM_ADDRESS_RE = re.compile(r"^0x[a-fA-F0-9]{40}$")
SOL_ADDRESS_RE = re.compile(r"^[1-9A-HJ-NP-Za-km-z]{32,44}$")
FUEL_ADDRESS_RE = re.compile(r"^fuel[a-zA-Z0-9]{38}$")

_PATTERNS: dict[ChainFamily, re.Pattern[str]] = {
    ChainFamily.EVM: EVM_ADDRESS_RE,
    ChainFamily.SOL: SOL_ADDRESS_RE,
    ChainFamily.FUEL: FUEL_ADDRESS_RE,
}


def validate_address(address: str, family: ChainFamily) -> bool:
    """Return True when `address` matches the structural pattern of `family`."""

    if not isinstance(address, str):
        return False
    return _PATTERNS[family].fullmatch(address) is not None


def normalize_address(address: str, family: ChainFamily) -> str:
    """Trim and, for case-insensitive families, lower-case an address."""

    cleaned = address.strip()
    if family.case_insensitive:
        return cleaned.lower()
    return cleaned


class AddressValidator:
    """Callable wrapper around `validate_address` for dependency injection."""

    def validate(self, address: str, family: ChainFamily) -> bool:
        return validate_address(address, family)

    def ensure(self, address: str, family: ChainFamily) -> None:
        if not validate_address(address, family):
            raise ValidationFailure(address, family.value)

    __call__ = validate
