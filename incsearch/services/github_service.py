"""GitHub user search - wraps `gh api search/users` with async execution.

Uses the `gh` CLI for GitHub API access, so authentication is whatever
`gh auth login` (or GH_TOKEN) provides. Each page is a separate `gh api`
call; the cursor handed back to the controller is the next page number.
"""

import asyncio
import contextlib
import json
import logging
from typing import Any, Dict, List, Optional, Tuple

from ..config.constants import (
    DEFAULT_PAGE_SIZE,
    GH_COMMAND_TIMEOUT_SECONDS,
    GITHUB_SEARCH_RESULT_LIMIT,
)
from ..exceptions import (
    ApiConnectionError,
    ApiRateLimitError,
    MissingCredentialError,
    ServiceResponseError,
)
from .types import GitHubUser, Page

logger = logging.getLogger(__name__)

SERVICE_NAME = "github"

# stderr fragments gh prints when it has no usable token
_AUTH_MARKERS = ("gh auth login", "http 401", "bad credentials", "authentication required")
_RATE_LIMIT_MARKERS = ("rate limit", "http 429")


def parse_search_page(data: Dict[str, Any], page: int, per_page: int) -> Page[GitHubUser]:
    """Build a Page from a search/users response body.

    Args:
        data: Decoded JSON body
        page: The 1-based page number that was requested
        per_page: Page size that was requested

    Returns:
        Page whose cursor is the next page number, or None when done
    """
    if not isinstance(data, dict) or not isinstance(data.get("items"), list):
        raise ServiceResponseError("Search response has no items", service=SERVICE_NAME)

    records = [GitHubUser.from_api_json(item) for item in data["items"] if isinstance(item, dict)]
    total_count = int(data.get("total_count") or 0)

    reachable = min(total_count, GITHUB_SEARCH_RESULT_LIMIT)
    has_next = bool(records) and page * per_page < reachable
    return Page(
        records=tuple(records),
        next_cursor=str(page + 1) if has_next else None,
        has_next_page=has_next,
        total_count=total_count,
    )


class GitHubUserSearchService:
    """SearchService for GitHub users via the gh CLI."""

    def __init__(
        self,
        page_size: int = DEFAULT_PAGE_SIZE,
        timeout: int = GH_COMMAND_TIMEOUT_SECONDS,
    ):
        self.page_size = page_size
        self.timeout = timeout
        self._authenticated = False

    async def _run_gh_command(self, args: List[str]) -> Tuple[int, str, str]:
        """Run a gh CLI command asynchronously.

        Args:
            args: Command arguments (without 'gh' prefix)

        Returns:
            Tuple of (exit_code, stdout, stderr)
        """
        cmd = ["gh"] + args
        logger.debug(f"Running gh command: {' '.join(cmd)}")

        try:
            process = await asyncio.create_subprocess_exec(
                *cmd,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except FileNotFoundError as e:
            raise ApiConnectionError(
                "gh CLI not found. Install from https://cli.github.com/",
                service=SERVICE_NAME,
            ) from e

        try:
            stdout, stderr = await asyncio.wait_for(
                process.communicate(), timeout=self.timeout
            )
        except asyncio.TimeoutError as e:
            with contextlib.suppress(ProcessLookupError):
                process.kill()
            await process.wait()
            raise ApiConnectionError(
                f"gh command timed out after {self.timeout}s", service=SERVICE_NAME
            ) from e
        except asyncio.CancelledError:
            # Superseded by a newer query; don't leave gh running.
            with contextlib.suppress(ProcessLookupError):
                process.kill()
            raise

        return (
            process.returncode if process.returncode is not None else -1,
            stdout.decode("utf-8", errors="replace"),
            stderr.decode("utf-8", errors="replace"),
        )

    async def check_auth(self) -> bool:
        """Check if gh is authenticated. A positive answer is cached."""
        if self._authenticated:
            return True

        exit_code, _, _ = await self._run_gh_command(["auth", "status"])
        self._authenticated = exit_code == 0
        return self._authenticated

    async def search(self, query: str, after: Optional[str] = None) -> Page[GitHubUser]:
        """Fetch one page of users matching `query`.

        Args:
            query: GitHub user search query (qualifiers like `type:org` allowed)
            after: Cursor from the previous page, or None for the first page

        Raises:
            MissingCredentialError: gh is not logged in
            ApiConnectionError: gh is missing or timed out
            ApiRateLimitError: GitHub refused because of rate limiting
            ServiceResponseError: any other gh failure or malformed output
        """
        page = self._page_from_cursor(after)

        if not await self.check_auth():
            raise MissingCredentialError(
                "Not authenticated with gh. Run 'gh auth login'", service=SERVICE_NAME
            )

        exit_code, stdout, stderr = await self._run_gh_command(
            [
                "api",
                "-X",
                "GET",
                "search/users",
                "-f",
                f"q={query.strip()}",
                "-f",
                f"per_page={self.page_size}",
                "-f",
                f"page={page}",
            ]
        )
        if exit_code != 0:
            raise self._classify_failure(exit_code, stderr)

        try:
            data = json.loads(stdout)
        except json.JSONDecodeError as e:
            raise ServiceResponseError(
                "gh returned invalid JSON", service=SERVICE_NAME
            ) from e

        result = parse_search_page(data, page, self.page_size)
        logger.debug(
            "Search %r page %d: %d users of %d",
            query,
            page,
            len(result.records),
            result.total_count,
        )
        return result

    def _page_from_cursor(self, after: Optional[str]) -> int:
        if after is None:
            return 1
        try:
            page = int(after)
        except ValueError:
            page = 0
        if page < 1:
            raise ServiceResponseError("Invalid page cursor", service=SERVICE_NAME, cursor=after)
        return page

    def _classify_failure(self, exit_code: int, stderr: str) -> Exception:
        """Map a failed gh call onto the service error taxonomy."""
        lowered = stderr.lower()
        if any(marker in lowered for marker in _AUTH_MARKERS):
            self._authenticated = False
            return MissingCredentialError(
                "GitHub rejected the gh credentials. Run 'gh auth login'",
                service=SERVICE_NAME,
            )
        if any(marker in lowered for marker in _RATE_LIMIT_MARKERS):
            return ApiRateLimitError(service=SERVICE_NAME)
        logger.warning(f"gh search failed: {stderr.strip()}")
        return ServiceResponseError(
            "gh search failed", exit_code=exit_code, stderr=stderr.strip(), service=SERVICE_NAME
        )
