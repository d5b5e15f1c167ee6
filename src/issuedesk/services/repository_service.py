"""Service for the repository list."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ..github import GitHubAuthError
from ..models import Repository
from ..storage import CacheWriteError, RepositoryListCache

if TYPE_CHECKING:
    from ..github import GitHubClient

logger = logging.getLogger(__name__)


class RepositoryService:
    """Fetches the repository list and keeps it cached on disk."""

    def __init__(self, client: GitHubClient | None, cache: RepositoryListCache) -> None:
        """
        Args:
            client: GitHub client, or None when no credential is configured
            cache: Repository list cache
        """
        self._client = client
        self._cache = cache
        self._repositories: list[Repository] = []

    @property
    def repositories(self) -> list[Repository]:
        return self._repositories

    def load_cached(self) -> list[Repository]:
        """Seed the list from disk; empty when nothing is cached."""
        self._repositories = self._cache.load() or []
        return self._repositories

    def refresh(self, username: str | None = None) -> list[Repository]:
        """Fetch the repository list from GitHub and cache it.

        Raises:
            GitHubClientError: The fetch failed; the cached list is kept
        """
        if self._client is None:
            raise GitHubAuthError("No GitHub token configured. Add your token in settings.")

        repositories = self._client.list_repositories(username or None)
        self._repositories = repositories
        try:
            self._cache.save(repositories)
        except CacheWriteError as e:
            logger.warning("Repository list not cached: %s", e)
        logger.info("Loaded %d repositories", len(repositories))
        return repositories

    def find(self, full_name: str) -> Repository | None:
        """Look up a repository by owner/name."""
        for repository in self._repositories:
            if repository.full_name == full_name:
                return repository
        return None
