"""Latest-request-wins guard for overlapping computations.

A view that recomputes whenever its parameters change may receive results
out of order. Each computation takes a ticket before starting; only the
result of the most recent ticket is accepted.
"""

import itertools
import threading
from dataclasses import dataclass
from typing import Hashable, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class RequestTicket:
    """Handle identifying one computation and the parameters it ran with."""

    serial: int
    params: Hashable


class LatestRequestGate:
    """Accept only the result of the most recently started computation."""

    def __init__(self) -> None:
        self._counter = itertools.count(1)
        self._lock = threading.Lock()
        self._latest: RequestTicket | None = None

    def begin(self, params: Hashable) -> RequestTicket:
        """Register a new computation, superseding any in flight."""
        with self._lock:
            ticket = RequestTicket(serial=next(self._counter), params=params)
            self._latest = ticket
            return ticket

    def is_current(self, ticket: RequestTicket) -> bool:
        with self._lock:
            return self._latest is not None and self._latest.serial == ticket.serial

    def accept(self, ticket: RequestTicket, result: T) -> T | None:
        """Return ``result`` when ``ticket`` is current, otherwise None.

        Args:
            ticket: Ticket returned by ``begin``.
            result: Result of the computation started with ``ticket``.

        Returns:
            The result, or None when a newer computation has started since.
        """
        if self.is_current(ticket):
            return result
        return None


__all__ = ["RequestTicket", "LatestRequestGate"]
