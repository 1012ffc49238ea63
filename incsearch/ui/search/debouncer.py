"""Debounce helper that coalesces rapid-fire submissions into one action."""

from __future__ import annotations

import functools
import logging
from collections.abc import Callable

from .scheduler import Cancellable, Scheduler

logger = logging.getLogger(__name__)


class Debouncer:
    """
    Runs the most recently submitted action once the input goes quiet.

    Every `submit` restarts the quiescence window and supersedes whatever was
    pending. Each submission gets a token; a deferred callback only fires if
    its token is still the newest one, so a timer that could not be cancelled
    in time is a no-op.

    Not thread-safe: submit, cancel and the timers all run on the
    scheduler's loop.
    """

    def __init__(self, delay: float, scheduler: Scheduler) -> None:
        if delay < 0:
            raise ValueError("Debounce delay must not be negative")
        self.delay = delay
        self._scheduler = scheduler
        self._token = 0
        self._action: Callable[[], None] | None = None
        self._handle: Cancellable | None = None
        self._deadline: float | None = None

    @property
    def pending(self) -> bool:
        """Whether an action is waiting for the window to close."""
        return self._action is not None

    @property
    def deadline(self) -> float | None:
        """Scheduler time at which the pending action is due."""
        return self._deadline

    def submit(self, action: Callable[[], None]) -> None:
        """Schedule `action`, replacing any pending one."""
        if self._handle is not None:
            self._handle.cancel()
        self._token += 1
        self._action = action
        self._deadline = self._scheduler.now() + self.delay
        self._handle = self._scheduler.call_later(
            self.delay, functools.partial(self._fire, self._token)
        )

    def cancel(self) -> None:
        """Drop the pending action, if any."""
        if self._handle is not None:
            self._handle.cancel()
        self._token += 1
        self._action = None
        self._handle = None
        self._deadline = None

    def _fire(self, token: int) -> None:
        if token != self._token or self._action is None:
            logger.debug("Skipping superseded debounce callback %d", token)
            return
        action = self._action
        self._action = None
        self._handle = None
        self._deadline = None
        action()
