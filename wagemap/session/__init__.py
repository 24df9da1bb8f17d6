"""Wage-set loading and the map session that ties the components together."""

from .models import EMPTY_SNAPSHOT, FetchTicket, LoadState, WageSnapshot
from .loader import WageDataLoader
from .controller import MapSession

__all__ = [
    "LoadState",
    "FetchTicket",
    "WageSnapshot",
    "EMPTY_SNAPSHOT",
    "WageDataLoader",
    "MapSession",
]
