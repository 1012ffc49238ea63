"""Tests for CancellableRequestSlot."""

from unittest.mock import MagicMock

from incsearch.ui.search.request_slot import CancellableRequestSlot


def test_starts_empty() -> None:
    slot = CancellableRequestSlot()
    assert not slot.is_occupied()


def test_install_occupies_slot() -> None:
    slot = CancellableRequestSlot()
    handle = MagicMock()

    slot.install(handle)

    assert slot.is_occupied()
    assert slot.holds(handle)
    handle.cancel.assert_not_called()


def test_install_cancels_previous_handle() -> None:
    slot = CancellableRequestSlot()
    first, second = MagicMock(), MagicMock()

    slot.install(first)
    slot.install(second)

    first.cancel.assert_called_once()
    second.cancel.assert_not_called()
    assert not slot.holds(first)
    assert slot.holds(second)


def test_clear_cancels_and_empties() -> None:
    slot = CancellableRequestSlot()
    handle = MagicMock()
    slot.install(handle)

    slot.clear()

    handle.cancel.assert_called_once()
    assert not slot.is_occupied()
    assert not slot.holds(handle)


def test_clear_on_empty_slot_is_noop() -> None:
    slot = CancellableRequestSlot()
    slot.clear()
    assert not slot.is_occupied()
