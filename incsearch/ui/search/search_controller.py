"""
Controller for incremental search.

Turns a stream of typed text into paged fetches against a SearchService and
pushes immutable snapshots to an observer (the view).

Flow:
- Every keystroke goes through a Debouncer; only the debounced commit
  changes the committed query.
- A changed query resets pagination and cancels the in-flight fetch.
- Reaching the bottom of the list asks for the next page of the same query.
- Completions are redelivered on the event loop and dropped when they belong
  to a superseded generation.
"""

from __future__ import annotations

import dataclasses
import functools
import logging
from asyncio import Task
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import Enum
from typing import Any, Protocol

from ...config.constants import DEFAULT_DEBOUNCE_MS
from ...exceptions import IndexOutOfRangeError, MissingCredentialError, TransientFetchFailure
from ...services.types import Page, SearchService
from .debouncer import Debouncer
from .page_cursor import PageCursorState
from .request_slot import CancellableRequestSlot
from .scheduler import AsyncioScheduler, Scheduler

logger = logging.getLogger(__name__)


class FetchState(Enum):
    IDLE = "idle"
    FETCHING = "fetching"


class SearchPhase(Enum):
    """Where the controller is in its state machine."""

    EMPTY = "empty"  # No committed query
    FETCHING = "fetching"  # One page request outstanding
    IDLE = "idle"  # Waiting for a trigger, more pages may exist
    EXHAUSTED = "exhausted"  # No more pages for this query


@dataclass(frozen=True)
class SearchStateVM:
    """Snapshot of the search state for the UI."""

    query: str = ""
    items: tuple[Any, ...] = ()
    total_count: int = 0
    fetch_state: FetchState = FetchState.IDLE
    phase: SearchPhase = SearchPhase.EMPTY

    @property
    def is_loading(self) -> bool:
        return self.fetch_state is FetchState.FETCHING

    @property
    def count_label(self) -> str:
        return f"{len(self.items)}/{self.total_count}"

    @property
    def status_text(self) -> str:
        if self.phase is SearchPhase.EMPTY:
            return "Type to search"
        if self.phase is SearchPhase.FETCHING:
            return f"{self.count_label} | loading..."
        if self.phase is SearchPhase.EXHAUSTED:
            return f"{self.count_label} | all results loaded"
        return f"{self.count_label} | scroll for more"


class SearchObserver(Protocol):
    """Passive sink for controller output. Called synchronously."""

    def state_changed(self, state: SearchStateVM) -> None: ...

    def show_record(self, record: Any) -> None: ...

    def auth_error(self) -> None: ...

    def fetch_failed(self, reason: TransientFetchFailure) -> None: ...


# A subscribe function registers with some notification source and returns
# the callable that undoes it.
Subscribe = Callable[[], Callable[[], None]]


class SubscriptionSet:
    """Disposers for the external subscriptions held while active."""

    def __init__(self) -> None:
        self._disposers: list[Callable[[], None]] = []

    def __len__(self) -> int:
        return len(self._disposers)

    def add(self, dispose: Callable[[], None]) -> None:
        self._disposers.append(dispose)

    def dispose(self) -> None:
        disposers, self._disposers = self._disposers, []
        for dispose in reversed(disposers):
            dispose()


class SearchController:
    """
    Owns the committed query, pagination state and fetch state.

    The observer and the service never mutate controller state; they only
    receive snapshots or feed input. All state changes happen on the
    scheduler's single execution context.
    """

    def __init__(
        self,
        service: SearchService,
        observer: SearchObserver,
        *,
        debounce_seconds: float = DEFAULT_DEBOUNCE_MS / 1000,
        scheduler: Scheduler | None = None,
        subscriptions: Iterable[Subscribe] = (),
    ) -> None:
        self._service = service
        self._observer = observer
        self._scheduler = scheduler or AsyncioScheduler()
        self._debouncer = Debouncer(debounce_seconds, self._scheduler)
        self._slot = CancellableRequestSlot()
        self._pages = PageCursorState()
        self._query = ""
        self._generation = 0
        self._is_fetching = False
        self._at_bottom = False
        self._auth_blocked = False
        self._subscribe_fns = list(subscriptions)
        self._subscriptions = SubscriptionSet()
        self._state = SearchStateVM()

    @property
    def state(self) -> SearchStateVM:
        return self._state

    @property
    def query(self) -> str:
        """The committed query."""
        return self._query

    @property
    def pages(self) -> PageCursorState:
        return self._pages

    @property
    def is_fetching(self) -> bool:
        return self._is_fetching

    @property
    def is_active(self) -> bool:
        return len(self._subscriptions) > 0

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------

    def on_input_changed(self, raw_text: str) -> None:
        """Forward typed text to the debouncer; nothing changes until it commits."""
        self._debouncer.submit(functools.partial(self._commit, raw_text))

    def on_reached_bottom_changed(self, is_at_bottom: bool) -> None:
        """Load the next page when the view scrolls onto the bottom edge."""
        was_at_bottom = self._at_bottom
        self._at_bottom = is_at_bottom
        if is_at_bottom and not was_at_bottom:
            self._attempt_fetch()

    def load_next_page(self) -> bool:
        """Explicitly request the next page. Returns whether a fetch started."""
        return self._attempt_fetch()

    def select_record(self, index: int) -> None:
        """Ask the observer to show the record at `index`."""
        items = self._pages.items
        if not 0 <= index < len(items):
            raise IndexOutOfRangeError(index=index, count=len(items))
        self._observer.show_record(items[index])

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def activate(self) -> None:
        """Subscribe to the external notification sources."""
        if self.is_active:
            return
        for subscribe in self._subscribe_fns:
            self._subscriptions.add(subscribe())

    def deactivate(self) -> None:
        """Dispose every subscription taken in activate()."""
        self._subscriptions.dispose()

    def shutdown(self) -> None:
        """Drop pending input and abandon the in-flight fetch."""
        self._debouncer.cancel()
        self._generation += 1
        self._slot.clear()
        self._is_fetching = False
        self.deactivate()

    # ------------------------------------------------------------------
    # State machine
    # ------------------------------------------------------------------

    def _commit(self, text: str) -> None:
        # A commit is the user action that lifts an auth block.
        self._auth_blocked = False
        if text != self._query:
            logger.debug("Committing query %r (was %r)", text, self._query)
            self._query = text
            self._generation += 1
            self._slot.clear()
            self._is_fetching = False
            self._pages.reset()
            self._set_state(
                query=text,
                items=(),
                total_count=0,
                fetch_state=FetchState.IDLE,
            )
        # Unchanged queries still try, which covers the first load.
        self._attempt_fetch()

    def _attempt_fetch(self) -> bool:
        if self._auth_blocked:
            return False
        in_flight = self._is_fetching or self._slot.is_occupied()
        if not self._pages.can_fetch(self._query, in_flight):
            return False

        generation = self._generation
        query = self._query
        cursor = self._pages.cursor
        self._is_fetching = True
        self._set_state(fetch_state=FetchState.FETCHING)

        logger.debug("Fetching %r after cursor %r", query, cursor)
        task = self._scheduler.spawn(self._service.search(query, after=cursor))
        self._slot.install(task)
        task.add_done_callback(functools.partial(self._on_fetch_done, generation))
        return True

    def _on_fetch_done(self, generation: int, task: Task[Page[Any]]) -> None:
        if generation != self._generation or not self._slot.holds(task):
            logger.debug("Discarding result of superseded fetch (generation %d)", generation)
            if not task.cancelled():
                # Mark the outcome as retrieved so asyncio does not report it.
                task.exception()
            return

        self._slot.clear()
        self._is_fetching = False

        if task.cancelled():
            self._set_state(fetch_state=FetchState.IDLE)
            return

        error = task.exception()
        if error is None:
            self._pages.apply_page(task.result())
            self._set_state(
                items=tuple(self._pages.items),
                total_count=self._pages.total_count,
                fetch_state=FetchState.IDLE,
            )
            return

        if not isinstance(error, Exception):
            raise error

        self._set_state(fetch_state=FetchState.IDLE)
        if isinstance(error, MissingCredentialError):
            logger.info("Search for %r needs credentials: %s", self._query, error)
            self._auth_blocked = True
            self._observer.auth_error()
            return

        failure = TransientFetchFailure.from_error(error, query=self._query)
        logger.warning("Fetch for %r failed: %s", self._query, error)
        self._observer.fetch_failed(failure)

    def _set_state(self, **changes: Any) -> None:
        state = dataclasses.replace(self._state, **changes)
        self._state = dataclasses.replace(state, phase=self._phase_for(state))
        self._observer.state_changed(self._state)

    def _phase_for(self, state: SearchStateVM) -> SearchPhase:
        if not state.query.strip():
            return SearchPhase.EMPTY
        if state.fetch_state is FetchState.FETCHING:
            return SearchPhase.FETCHING
        if self._pages.exhausted:
            return SearchPhase.EXHAUSTED
        return SearchPhase.IDLE
