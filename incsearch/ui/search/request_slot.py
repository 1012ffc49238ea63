"""Single-occupancy holder for the in-flight page fetch."""

from __future__ import annotations

from .scheduler import Cancellable


class CancellableRequestSlot:
    """Holds at most one cancellable operation.

    Installing a new handle cancels the old one, so there is never more than
    one fetch the controller still cares about.
    """

    def __init__(self) -> None:
        self._handle: Cancellable | None = None

    def install(self, handle: Cancellable) -> None:
        self.clear()
        self._handle = handle

    def clear(self) -> None:
        handle, self._handle = self._handle, None
        if handle is not None:
            handle.cancel()

    def is_occupied(self) -> bool:
        return self._handle is not None

    def holds(self, handle: Cancellable) -> bool:
        """Whether `handle` is the operation currently installed."""
        return self._handle is not None and self._handle is handle
