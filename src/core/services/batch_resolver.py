"""Batch eligibility resolution.

This module owns the request-level flow: normalize and deduplicate the raw
input, validate per chain family, fan the valid addresses out to the
resolution queue and fold the settled results into an `EligibilityReport`.
Presentation (tables, progress) stays in the CLI through `ResolveHooks`.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Callable, Iterable, Sequence

from core.domain.addresses import AddressValidator, normalize_address
from core.domain.errors import BatchTooLarge, EligibilityLookupError, EmptyBatch, ValidationFailure
from core.domain.models import (
    AddressAmount,
    AddressFailure,
    EligibilityReport,
    Program,
)
from core.services.resolution_queue import ResolutionQueue

logger = logging.getLogger(__name__)

NOT_ELIGIBLE = "0"


@dataclass
class ResolveHooks:
    """Optional callbacks for UI layers."""

    submitted: Callable[[int], None] | None = None
    settled: Callable[[str], None] | None = None


def dedupe_addresses(addresses: Iterable[str]) -> list[str]:
    """Remove duplicates keeping the first occurrence."""

    seen: set[str] = set()
    deduped: list[str] = []
    for address in addresses:
        if address in seen:
            continue
        seen.add(address)
        deduped.append(address)
    return deduped


def split_address_lines(text: str) -> list[str]:
    """Split free-form user input (one address per line, commas tolerated)."""

    out: list[str] = []
    for line in text.splitlines():
        out.extend(part for part in line.replace(",", " ").split() if part)
    return out


class BatchResolver:
    def __init__(
        self,
        queue: ResolutionQueue,
        *,
        max_addresses: int = 80,
        validator: AddressValidator | None = None,
    ) -> None:
        self._queue = queue
        self._max_addresses = max_addresses
        self._validator = validator or AddressValidator()

    def prepare(self, program: Program, raw_addresses: Sequence[str]) -> list[str]:
        """Trim, case-normalize and deduplicate; reject empty or oversized batches."""

        family = program.chain_family
        normalized = [normalize_address(raw, family) for raw in raw_addresses]
        addresses = dedupe_addresses(a for a in normalized if a)
        if not addresses:
            raise EmptyBatch()
        if len(addresses) > self._max_addresses:
            raise BatchTooLarge(len(addresses), self._max_addresses)
        return addresses

    async def resolve(
        self,
        program: Program,
        raw_addresses: Sequence[str],
        *,
        hooks: ResolveHooks | None = None,
    ) -> EligibilityReport:
        hooks = hooks or ResolveHooks()
        addresses = self.prepare(program, raw_addresses)

        valid: list[str] = []
        invalid: list[str] = []
        for address in addresses:
            try:
                self._validator.ensure(address, program.chain_family)
            except ValidationFailure as exc:
                logger.debug("Skipping lookup: %s", exc)
                invalid.append(address)
            else:
                valid.append(address)

        handles = [self._queue.submit(program, address) for address in valid]
        if hooks.submitted:
            hooks.submitted(len(handles))
        if hooks.settled:
            for address, handle in zip(valid, handles):
                handle.add_done_callback(lambda _f, a=address: hooks.settled(a))

        outcomes = await asyncio.gather(*handles, return_exceptions=True)

        report = EligibilityReport(program=program.name, invalid=invalid)
        for address, outcome in zip(valid, outcomes):
            if isinstance(outcome, asyncio.CancelledError):
                raise outcome
            if isinstance(outcome, BaseException):
                status = outcome.status_code if isinstance(outcome, EligibilityLookupError) else None
                report.errored.append(AddressFailure(address=address, error=str(outcome), status_code=status))
            elif outcome == NOT_ELIGIBLE:
                report.not_eligible.append(AddressAmount(address=address, amount=outcome))
            else:
                report.eligible.append(AddressAmount(address=address, amount=outcome))

        logger.info(
            "%s: %d eligible, %d not eligible, %d errored, %d invalid",
            program.name,
            len(report.eligible),
            len(report.not_eligible),
            len(report.errored),
            len(report.invalid),
        )
        return report
