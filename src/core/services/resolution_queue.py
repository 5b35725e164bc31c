"""Single-flight FIFO queue for eligibility lookups.

Every lookup in the process goes through one `ResolutionQueue`:

- `submit` appends a work item and returns its future immediately.
- One drain task services items strictly in submission order, with at most
  one fetch in flight, whoever submitted them.
- Each future settles exactly once, with an amount or an
  `EligibilityLookupError`. Items cannot be withdrawn once submitted.

Only the drain task pops from the pending deque and only `submit` starts it;
both run on the event loop thread, so no lock is needed.
"""

from __future__ import annotations

import asyncio
import logging
from collections import deque
from dataclasses import dataclass, field

from core.domain.errors import EligibilityLookupError
from core.domain.models import Program
from core.interfaces.fetcher import EligibilityFetcher

logger = logging.getLogger(__name__)


@dataclass
class WorkItem:
    program: Program
    address: str
    handle: asyncio.Future[str] = field(repr=False)

    def resolve(self, amount: str) -> None:
        # A submitter that gave up (e.g. wait_for timeout) cancels the future;
        # the lookup still runs but nobody observes it.
        if not self.handle.done():
            self.handle.set_result(amount)

    def reject(self, error: EligibilityLookupError) -> None:
        if not self.handle.done():
            self.handle.set_exception(error)


class ResolutionQueue:
    def __init__(self, fetcher: EligibilityFetcher) -> None:
        self._fetcher = fetcher
        self._pending: deque[WorkItem] = deque()
        self._busy = False
        self._drainer: asyncio.Task[None] | None = None

    @property
    def busy(self) -> bool:
        return self._busy

    @property
    def pending(self) -> int:
        """Items waiting for service (the one in flight is not counted)."""

        return len(self._pending)

    def submit(self, program: Program, address: str) -> asyncio.Future[str]:
        """Enqueue a lookup; must be called from within a running event loop."""

        loop = asyncio.get_running_loop()
        item = WorkItem(program=program, address=address, handle=loop.create_future())
        self._pending.append(item)
        if not self._busy:
            self._busy = True
            self._drainer = loop.create_task(self._drain(), name="resolution-queue-drain")
        return item.handle

    async def _drain(self) -> None:
        try:
            while self._pending:
                item = self._pending.popleft()
                await self._service(item)
        except asyncio.CancelledError:
            self._reject_all("resolution queue was shut down")
            raise
        finally:
            self._busy = False

    async def _service(self, item: WorkItem) -> None:
        try:
            amount = await self._fetcher.fetch(item.program, item.address)
        except EligibilityLookupError as exc:
            item.reject(exc)
        except asyncio.CancelledError:
            item.reject(self._lookup_error(item, "lookup cancelled"))
            raise
        except Exception as exc:
            logger.exception("Unexpected error looking up %s on %s", item.address, item.program.name)
            error = self._lookup_error(item, f"{exc.__class__.__name__}: {exc}")
            error.__cause__ = exc
            item.reject(error)
        else:
            item.resolve(amount)

    def _reject_all(self, reason: str) -> None:
        while self._pending:
            item = self._pending.popleft()
            item.reject(self._lookup_error(item, reason))

    @staticmethod
    def _lookup_error(item: WorkItem, message: str) -> EligibilityLookupError:
        return EligibilityLookupError(message, program=item.program.name, address=item.address)
