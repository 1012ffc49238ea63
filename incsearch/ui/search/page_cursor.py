"""Pagination accumulator for a single query."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ...services.types import Page


@dataclass
class PageCursorState:
    """
    Records received so far for the committed query, plus where to resume.

    `items` only grows between resets and keeps arrival order. `total_count`
    is whatever the service last reported, not `len(items)`.
    """

    items: list[Any] = field(default_factory=list)
    total_count: int = 0
    cursor: str | None = None
    exhausted: bool = False

    def reset(self) -> None:
        self.items = []
        self.total_count = 0
        self.cursor = None
        self.exhausted = False

    def apply_page(self, page: Page[Any]) -> None:
        # No dedup: the service does not repeat records within one query.
        self.items.extend(page.records)
        self.total_count = page.total_count
        self.cursor = page.next_cursor
        self.exhausted = not page.has_next_page or page.next_cursor is None

    def can_fetch(self, query: str, is_fetching: bool) -> bool:
        """Fetch eligibility: a non-empty query, nothing in flight, more pages."""
        return bool(query.strip()) and not is_fetching and not self.exhausted
