"""Job-category selection and wage-set loading.

Selecting a job category hands out a ``FetchTicket``. Only the response that
carries the current ticket may replace the wage snapshot, so a slow response
for an earlier selection can never overwrite a newer one.
"""

from typing import Callable, List, Optional, Sequence

from wagemap.domain.models import WageArea
from wagemap.logging import get_logger
from wagemap.logging.context import log_context
from wagemap.lookup.base import BaseWageLookup
from wagemap.lookup.exceptions import WageLookupError

from .models import EMPTY_SNAPSHOT, FetchTicket, LoadState, WageSnapshot

logger = get_logger(__name__, component="loader")

SnapshotListener = Callable[[WageSnapshot, LoadState], None]


class WageDataLoader:
    """Owns the current wage snapshot and its loading state."""

    def __init__(self, lookup: BaseWageLookup):
        self.lookup = lookup
        self._generation = 0
        self._active_soc: Optional[str] = None
        self._state = LoadState.IDLE
        self._snapshot = EMPTY_SNAPSHOT
        self._last_error: Optional[Exception] = None
        self._listeners: List[SnapshotListener] = []

    @property
    def state(self) -> LoadState:
        return self._state

    @property
    def snapshot(self) -> WageSnapshot:
        return self._snapshot

    @property
    def active_soc(self) -> Optional[str]:
        return self._active_soc

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def last_error(self) -> Optional[Exception]:
        return self._last_error

    @property
    def is_loading(self) -> bool:
        return self._state == LoadState.LOADING

    def add_listener(self, listener: SnapshotListener) -> Callable[[], None]:
        """Register a listener called after every state change.

        Returns:
            Callable that unregisters the listener
        """
        self._listeners.append(listener)

        def remove() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return remove

    def begin(self, soc_code: str) -> FetchTicket:
        """Start a fetch for soc_code, superseding any fetch still in flight."""
        self._generation += 1
        self._active_soc = soc_code
        self._state = LoadState.LOADING
        self._last_error = None
        ticket = FetchTicket(generation=self._generation, soc_code=soc_code)

        logger.debug(
            "Wage fetch started",
            extra={"event": "loader.fetch.started", "soc_code": soc_code, "generation": ticket.generation},
        )
        self._notify()
        return ticket

    def complete(self, ticket: FetchTicket, wages: Sequence[WageArea]) -> bool:
        """Apply a fetch result.

        Returns:
            False when the ticket was superseded and the result discarded
        """
        if not self._is_current(ticket):
            return False

        self._snapshot = WageSnapshot.build(ticket.generation, ticket.soc_code, wages)
        self._state = LoadState.READY

        logger.info(
            "Wage set loaded",
            extra={
                "event": "loader.fetch.completed",
                "soc_code": ticket.soc_code,
                "generation": ticket.generation,
                "area_count": len(self._snapshot.by_area),
            },
        )
        self._notify()
        return True

    def fail(self, ticket: FetchTicket, error: Exception) -> bool:
        """Record a failed fetch: no data is shown and nothing is retried.

        Returns:
            False when the ticket was superseded and the failure ignored
        """
        if not self._is_current(ticket):
            return False

        self._snapshot = WageSnapshot(generation=ticket.generation, soc_code=ticket.soc_code)
        self._state = LoadState.ERROR
        self._last_error = error

        logger.error(
            f"Wage fetch failed: {error}",
            extra={
                "event": "loader.fetch.failed",
                "soc_code": ticket.soc_code,
                "generation": ticket.generation,
                "error_type": type(error).__name__,
            },
        )
        self._notify()
        return True

    def load(self, soc_code: str) -> WageSnapshot:
        """Fetch synchronously through the lookup service and apply the result."""
        ticket = self.begin(soc_code)
        with log_context(soc_code=soc_code, generation=ticket.generation):
            try:
                wages = self.lookup.fetch_wages(soc_code)
            except WageLookupError as e:
                self.fail(ticket, e)
            else:
                self.complete(ticket, wages)
        return self._snapshot

    def clear(self) -> None:
        """Deselect the job category; pending fetches become stale."""
        self._generation += 1
        self._active_soc = None
        self._state = LoadState.IDLE
        self._last_error = None
        self._snapshot = WageSnapshot(generation=self._generation)

        logger.debug(
            "Job category cleared",
            extra={"event": "loader.cleared", "generation": self._generation},
        )
        self._notify()

    def _is_current(self, ticket: FetchTicket) -> bool:
        if ticket.generation == self._generation:
            return True
        logger.info(
            "Discarding superseded wage response",
            extra={
                "event": "loader.fetch.discarded",
                "soc_code": ticket.soc_code,
                "ticket_generation": ticket.generation,
                "current_generation": self._generation,
            },
        )
        return False

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self._snapshot, self._state)
