"""Search service modules for incsearch."""

from .github_service import GitHubUserSearchService
from .types import GitHubUser, Page, SearchService

__all__ = ["GitHubUser", "GitHubUserSearchService", "Page", "SearchService"]
