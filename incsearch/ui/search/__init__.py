"""
Incremental search - debounced, paged, cancellable.

Provides:
- SearchController: the state machine behind the search screen
- Debouncer, CancellableRequestSlot, PageCursorState: its building blocks
- SearchScreen / SearchApp: Textual views over the controller
"""

from .debouncer import Debouncer
from .page_cursor import PageCursorState
from .request_slot import CancellableRequestSlot
from .scheduler import AsyncioScheduler, Scheduler
from .search_controller import (
    FetchState,
    SearchController,
    SearchObserver,
    SearchPhase,
    SearchStateVM,
    SubscriptionSet,
)

__all__ = [
    "AsyncioScheduler",
    "CancellableRequestSlot",
    "Debouncer",
    "FetchState",
    "PageCursorState",
    "Scheduler",
    "SearchController",
    "SearchObserver",
    "SearchPhase",
    "SearchStateVM",
    "SubscriptionSet",
]
