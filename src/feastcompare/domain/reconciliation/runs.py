"""Latest-run tracking for reconciliation.

Every submitted run gets a monotonically increasing generation. Submitting a
new run cancels the one in flight, and a finished run only becomes the
session's latest table when its generation is still the newest one, so a
superseded run can never overwrite the result of a newer run.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable
    from datetime import date

    from feastcompare.domain.types import CalendarId, ComparisonTable

log = getLogger(__name__)


def _observe_outcome(task: asyncio.Task[ComparisonTable | None]) -> None:
    # a superseded run is never awaited; its failure is retrieved here
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None:
        log.warning("Comparison run %s failed: %s", task.get_name(), exc)


class Reconciler(Protocol):
    async def reconcile(
        self,
        target: date,
        calendar_ids: Iterable[CalendarId],
    ) -> ComparisonTable: ...


@dataclass(slots=True, kw_only=True)
class ComparisonRun:
    """Handle for one submitted reconciliation run."""

    generation: int
    target: date
    calendar_ids: tuple[CalendarId, ...]
    task: asyncio.Task[ComparisonTable | None] = field(repr=False)

    def cancel(self) -> None:
        self.task.cancel()

    def done(self) -> bool:
        return self.task.done()

    async def result(self) -> ComparisonTable | None:
        """Wait for the run; ``None`` when it was cancelled or superseded."""

        await asyncio.wait({self.task})
        if self.task.cancelled():
            return None
        return self.task.result()


class ComparisonSession:
    """Own the latest comparison table across successive runs."""

    def __init__(
        self,
        reconciler: Reconciler,
        *,
        on_update: Callable[[ComparisonTable], None] | None = None,
    ) -> None:
        self._reconciler = reconciler
        self._on_update = on_update
        self._generation = 0
        self._current: ComparisonRun | None = None
        self._latest: ComparisonTable | None = None

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def latest(self) -> ComparisonTable | None:
        return self._latest

    def submit(self, target: date, calendar_ids: Iterable[CalendarId]) -> ComparisonRun:
        """Start a run for ``target``, superseding any run still in flight.

        Must be called while an event loop is running.
        """

        self.cancel()
        self._generation += 1
        generation = self._generation
        selection = tuple(calendar_ids)
        task = asyncio.create_task(
            self._run(generation, target, selection),
            name=f"comparison-run-{generation}",
        )
        task.add_done_callback(_observe_outcome)
        run = ComparisonRun(
            generation=generation,
            target=target,
            calendar_ids=selection,
            task=task,
        )
        self._current = run
        return run

    def cancel(self) -> None:
        """Cancel the run in flight, if any."""

        current = self._current
        if current is not None and not current.done():
            log.debug("Cancelling comparison run %s", current.generation)
            current.cancel()
        self._current = None

    async def refresh(
        self,
        target: date,
        calendar_ids: Iterable[CalendarId],
    ) -> ComparisonTable | None:
        """Submit a run and wait for it."""

        return await self.submit(target, calendar_ids).result()

    async def _run(
        self,
        generation: int,
        target: date,
        calendar_ids: tuple[CalendarId, ...],
    ) -> ComparisonTable | None:
        table = await self._reconciler.reconcile(target, calendar_ids)
        if generation != self._generation:
            log.debug("Discarding stale comparison run %s", generation)
            return None
        self._latest = table
        if self._on_update is not None:
            self._on_update(table)
        return table
