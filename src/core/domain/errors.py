"""Error taxonomy of the eligibility engine.

- `ValidationFailure`: the address does not match its chain family. It is
  routed to the invalid bucket and never escapes a batch.
- `EligibilityLookupError`: one lookup failed (network, HTTP status, body,
  parser). It is routed to the errored bucket and never aborts a batch.
- `ParserMismatch`: the provider payload does not have the configured shape.
  It is a lookup failure.
- `EmptyBatch` / `BatchTooLarge` / `UnknownProgram`: request-level rejections,
  raised before any network activity starts.
"""

from __future__ import annotations


class AirdropCheckerError(Exception):
    """Base class for all errors raised by the engine."""


class ValidationFailure(AirdropCheckerError, ValueError):
    def __init__(self, address: str, family: str) -> None:
        super().__init__(f"{address!r} is not a valid {family} address")
        self.address = address
        self.family = family


class EligibilityLookupError(AirdropCheckerError, LookupError):
    """A single eligibility lookup could not produce an amount."""

    def __init__(
        self,
        message: str,
        *,
        program: str | None = None,
        address: str | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.program = program
        self.address = address
        self.status_code = status_code


class ParserMismatch(EligibilityLookupError):
    """The provider response does not match the shape its parser expects."""


class EmptyBatch(AirdropCheckerError, ValueError):
    def __init__(self) -> None:
        super().__init__("No addresses were provided")


class BatchTooLarge(AirdropCheckerError, ValueError):
    def __init__(self, count: int, limit: int) -> None:
        super().__init__(f"Too many addresses: {count} (maximum is {limit})")
        self.count = count
        self.limit = limit


class UnknownProgram(AirdropCheckerError, KeyError):
    def __init__(self, name: str, known: list[str]) -> None:
        super().__init__(name)
        self.name = name
        self.known = known

    def __str__(self) -> str:
        return f"Unknown program {self.name!r} (available: {', '.join(self.known) or 'none'})"
