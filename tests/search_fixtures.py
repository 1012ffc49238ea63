"""Builders for search test data."""

from incsearch.services.types import GitHubUser, Page
from incsearch.ui.testing import drain

DEBOUNCE = 0.3


def make_page(records, next_cursor=None, has_next_page=None, total_count=None):
    """Build a Page; has_next_page defaults to whether a cursor was given."""
    if has_next_page is None:
        has_next_page = next_cursor is not None
    if total_count is None:
        total_count = len(records)
    return Page(
        records=tuple(records),
        next_cursor=next_cursor,
        has_next_page=has_next_page,
        total_count=total_count,
    )


def make_user(login, user_id=1, user_type="User"):
    return GitHubUser(
        login=login,
        id=user_id,
        html_url=f"https://github.com/{login}",
        type=user_type,
        score=1.0,
    )


async def commit(controller, scheduler, text):
    """Type `text` and let the debounce window close."""
    controller.on_input_changed(text)
    scheduler.advance(DEBOUNCE)
    await drain()
