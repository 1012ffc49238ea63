"""Types shared by search services and the search controller."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Generic, Protocol, Sequence, TypeVar

RecordT = TypeVar("RecordT")


@dataclass(frozen=True)
class Page(Generic[RecordT]):
    """One page of search results as returned by a SearchService."""

    records: Sequence[RecordT] = field(default_factory=tuple)
    next_cursor: str | None = None
    has_next_page: bool = False
    total_count: int = 0


class SearchService(Protocol):
    """A remote, paged search.

    `search` raises ServiceError subclasses on failure; MissingCredentialError
    signals that the user has to authenticate before searching.
    """

    async def search(self, query: str, after: str | None = None) -> Page[Any]: ...


@dataclass(frozen=True)
class GitHubUser:
    """A user record from the GitHub search API."""

    login: str
    id: int
    html_url: str = ""
    avatar_url: str = ""
    type: str = "User"
    score: float = 0.0

    @classmethod
    def from_api_json(cls, data: dict[str, Any]) -> GitHubUser:
        """Create a GitHubUser from one entry of the `items` array."""
        return cls(
            login=str(data.get("login", "")),
            id=int(data.get("id", 0)),
            html_url=str(data.get("html_url") or ""),
            avatar_url=str(data.get("avatar_url") or ""),
            type=str(data.get("type") or "User"),
            score=float(data.get("score") or 0.0),
        )
