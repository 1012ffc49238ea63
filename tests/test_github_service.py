"""Tests for the gh-backed GitHub user search service."""

import asyncio
import json
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from incsearch.exceptions import (
    ApiConnectionError,
    ApiRateLimitError,
    MissingCredentialError,
    ServiceResponseError,
)
from incsearch.services.github_service import GitHubUserSearchService, parse_search_page
from incsearch.services.types import GitHubUser


def _user_json(login, user_id):
    return {
        "login": login,
        "id": user_id,
        "html_url": f"https://github.com/{login}",
        "avatar_url": f"https://avatars.githubusercontent.com/u/{user_id}",
        "type": "User",
        "score": 1.0,
    }


def _body(total_count, logins):
    return json.dumps(
        {
            "total_count": total_count,
            "incomplete_results": False,
            "items": [_user_json(login, i) for i, login in enumerate(logins, start=1)],
        }
    )


class TestGitHubUser:
    def test_from_api_json(self) -> None:
        user = GitHubUser.from_api_json(_user_json("octocat", 583231))
        assert user.login == "octocat"
        assert user.id == 583231
        assert user.html_url == "https://github.com/octocat"
        assert user.type == "User"

    def test_from_api_json_missing_fields(self) -> None:
        user = GitHubUser.from_api_json({"login": "ghost", "id": 10137, "score": None})
        assert user.html_url == ""
        assert user.type == "User"
        assert user.score == 0.0


class TestParseSearchPage:
    def test_more_pages_available(self) -> None:
        data = json.loads(_body(75, ["a", "b", "c"]))
        page = parse_search_page(data, page=1, per_page=3)

        assert [u.login for u in page.records] == ["a", "b", "c"]
        assert page.total_count == 75
        assert page.has_next_page is True
        assert page.next_cursor == "2"

    def test_last_page(self) -> None:
        data = json.loads(_body(5, ["e", "f"]))
        page = parse_search_page(data, page=2, per_page=3)

        assert page.has_next_page is False
        assert page.next_cursor is None

    def test_empty_result(self) -> None:
        page = parse_search_page({"total_count": 0, "items": []}, page=1, per_page=30)
        assert page.records == ()
        assert page.next_cursor is None

    def test_search_ceiling_stops_paging(self) -> None:
        data = json.loads(_body(250000, ["x"] * 100))
        page = parse_search_page(data, page=10, per_page=100)

        assert page.total_count == 250000
        assert page.has_next_page is False

    def test_missing_items_is_rejected(self) -> None:
        with pytest.raises(ServiceResponseError):
            parse_search_page({"message": "Validation Failed"}, page=1, per_page=30)


class TestSearch:
    @pytest.mark.asyncio
    async def test_first_page_request(self) -> None:
        service = GitHubUserSearchService(page_size=3)
        run = AsyncMock(side_effect=[(0, "", ""), (0, _body(75, ["a", "b", "c"]), "")])

        with patch.object(service, "_run_gh_command", run):
            page = await service.search("  tom  ")

        assert run.call_args_list[0].args[0] == ["auth", "status"]
        args = run.call_args_list[1].args[0]
        assert args[:4] == ["api", "-X", "GET", "search/users"]
        assert "q=tom" in args
        assert "per_page=3" in args
        assert "page=1" in args
        assert page.next_cursor == "2"

    @pytest.mark.asyncio
    async def test_cursor_selects_page_and_auth_is_cached(self) -> None:
        service = GitHubUserSearchService(page_size=3)
        run = AsyncMock(
            side_effect=[
                (0, "", ""),
                (0, _body(5, ["a", "b", "c"]), ""),
                (0, _body(5, ["d", "e"]), ""),
            ]
        )

        with patch.object(service, "_run_gh_command", run):
            first = await service.search("tom")
            second = await service.search("tom", after=first.next_cursor)

        assert run.await_count == 3
        assert "page=2" in run.call_args_list[2].args[0]
        assert [u.login for u in second.records] == ["d", "e"]
        assert second.next_cursor is None

    @pytest.mark.asyncio
    async def test_not_logged_in_raises_missing_credential(self) -> None:
        service = GitHubUserSearchService()
        run = AsyncMock(return_value=(1, "", "You are not logged into any GitHub hosts."))

        with patch.object(service, "_run_gh_command", run):
            with pytest.raises(MissingCredentialError):
                await service.search("tom")

        assert run.await_count == 1

    @pytest.mark.asyncio
    async def test_http_401_raises_missing_credential_and_rechecks_auth(self) -> None:
        service = GitHubUserSearchService()
        run = AsyncMock(
            side_effect=[
                (0, "", ""),
                (1, "", "gh: Bad credentials (HTTP 401)"),
                (0, "", ""),
                (0, _body(1, ["a"]), ""),
            ]
        )

        with patch.object(service, "_run_gh_command", run):
            with pytest.raises(MissingCredentialError):
                await service.search("tom")
            await service.search("tom")

        assert run.call_args_list[2].args[0] == ["auth", "status"]

    @pytest.mark.asyncio
    async def test_rate_limit(self) -> None:
        service = GitHubUserSearchService()
        run = AsyncMock(
            side_effect=[(0, "", ""), (1, "", "gh: API rate limit exceeded for user (HTTP 403)")]
        )

        with patch.object(service, "_run_gh_command", run):
            with pytest.raises(ApiRateLimitError) as exc_info:
                await service.search("tom")

        assert exc_info.value.retryable is True

    @pytest.mark.asyncio
    async def test_other_failure(self) -> None:
        service = GitHubUserSearchService()
        run = AsyncMock(side_effect=[(0, "", ""), (1, "", "gh: Validation Failed (HTTP 422)")])

        with patch.object(service, "_run_gh_command", run):
            with pytest.raises(ServiceResponseError) as exc_info:
                await service.search("tom")

        assert exc_info.value.context["exit_code"] == 1

    @pytest.mark.asyncio
    async def test_invalid_json(self) -> None:
        service = GitHubUserSearchService()
        run = AsyncMock(side_effect=[(0, "", ""), (0, "not json", "")])

        with patch.object(service, "_run_gh_command", run):
            with pytest.raises(ServiceResponseError):
                await service.search("tom")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("cursor", ["0", "-2", "abc"])
    async def test_invalid_cursor(self, cursor) -> None:
        service = GitHubUserSearchService()
        with pytest.raises(ServiceResponseError):
            await service.search("tom", after=cursor)


class TestRunGhCommand:
    @pytest.mark.asyncio
    async def test_gh_not_installed(self) -> None:
        service = GitHubUserSearchService()
        with patch(
            "asyncio.create_subprocess_exec", AsyncMock(side_effect=FileNotFoundError("gh"))
        ):
            with pytest.raises(ApiConnectionError) as exc_info:
                await service._run_gh_command(["--version"])

        assert "gh CLI not found" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_success_decodes_output(self) -> None:
        process = MagicMock()
        process.returncode = 0
        process.communicate = AsyncMock(return_value=(b'{"ok": true}', b""))
        service = GitHubUserSearchService()

        with patch("asyncio.create_subprocess_exec", AsyncMock(return_value=process)) as spawn:
            exit_code, stdout, stderr = await service._run_gh_command(["api", "user"])

        assert spawn.call_args.args[:3] == ("gh", "api", "user")
        assert (exit_code, stdout, stderr) == (0, '{"ok": true}', "")

    @pytest.mark.asyncio
    async def test_timeout_kills_process(self) -> None:
        async def hang():
            await asyncio.sleep(10)

        process = MagicMock()
        process.communicate = hang
        process.wait = AsyncMock(return_value=-9)
        service = GitHubUserSearchService(timeout=0.01)

        with patch("asyncio.create_subprocess_exec", AsyncMock(return_value=process)):
            with pytest.raises(ApiConnectionError):
                await service._run_gh_command(["api", "search/users"])

        process.kill.assert_called_once()

    @pytest.mark.asyncio
    async def test_cancellation_kills_process(self) -> None:
        started = asyncio.Event()

        async def hang():
            started.set()
            await asyncio.sleep(10)

        process = MagicMock()
        process.communicate = hang
        service = GitHubUserSearchService()

        with patch("asyncio.create_subprocess_exec", AsyncMock(return_value=process)):
            task = asyncio.create_task(service._run_gh_command(["api", "search/users"]))
            await started.wait()
            task.cancel()
            with pytest.raises(asyncio.CancelledError):
                await task

        process.kill.assert_called_once()

    @pytest.mark.asyncio
    async def test_cancellation_after_process_exit(self) -> None:
        started = asyncio.Event()

        async def hang():
            started.set()
            await asyncio.sleep(10)

        process = MagicMock()
        process.communicate = hang
        process.kill.side_effect = ProcessLookupError()
        service = GitHubUserSearchService()

        with patch("asyncio.create_subprocess_exec", AsyncMock(return_value=process)):
            task = asyncio.create_task(service._run_gh_command(["api", "search/users"]))
            await started.wait()
            task.cancel()
            with pytest.raises(asyncio.CancelledError):
                await task

        process.kill.assert_called_once()
