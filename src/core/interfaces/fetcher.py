"""Eligibility lookup contract.

Rules:
- `fetch` is asynchronous because it performs network I/O.
- It returns a canonical decimal string or raises `EligibilityLookupError`.
- The resolution queue depends on this protocol, not on the HTTP client, so
  tests can plug in a recording double.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.domain.models import Program


@runtime_checkable
class EligibilityFetcher(Protocol):
    """Minimal contract for a single (program, address) lookup."""

    async def fetch(self, program: Program, address: str) -> str:
        """Look up `address` on `program` and return its canonical amount."""

        ...
