"""Service for issue lists and the mutations a user can make to them."""

from __future__ import annotations

import logging
import threading
from collections.abc import Sequence

from ..github import GitHubAuthError, GitHubClient, GitHubClientError
from ..models import (
    Comment,
    Issue,
    IssueListResult,
    IssueState,
    IssueStateFilter,
    ManualStatus,
    Repository,
)
from ..storage import AnnotationStore, CacheWriteError, repository_key
from ..sync import merge_upstream, reconcile, replace_issue

logger = logging.getLogger(__name__)


class IssueService:
    """Owns the in-memory issue list of each repository.

    Every change to a list is persisted to the annotation store. Cache
    write failures never abort an operation; they are returned as warnings
    alongside the updated list. Remote failures propagate as
    GitHubClientError, except for the best-effort state change made when a
    manual status is set.

    Refreshes are numbered per repository. A refresh that finishes after a
    newer one has started is discarded and reported as stale, so a slow
    response can never overwrite a newer one.
    """

    def __init__(
        self,
        client: GitHubClient | None,
        store: AnnotationStore,
        state_filter: IssueStateFilter = IssueStateFilter.ALL,
    ) -> None:
        """
        Args:
            client: GitHub client, or None when no credential is configured
            store: Local annotation store
            state_filter: Which issues to fetch (open, closed or all)
        """
        self._client = client
        self._store = store
        self._state_filter = state_filter
        self._issues: dict[str, list[Issue]] = {}
        self._generations: dict[str, int] = {}
        self._lock = threading.RLock()

    @staticmethod
    def key_for(repository: Repository) -> str:
        return repository_key(repository.name)

    # --- Reading ---

    def load_cached(self, repository: Repository) -> list[Issue]:
        """Seed a repository's list from disk before any network call."""
        key = self.key_for(repository)
        issues = self._store.load(key) or []
        with self._lock:
            self._issues[key] = issues
        return list(issues)

    def current(self, repository: Repository) -> list[Issue]:
        """The in-memory list for a repository (empty if never loaded)."""
        with self._lock:
            return list(self._issues.get(self.key_for(repository), []))

    def get_issue(self, repository: Repository, issue_id: int) -> Issue:
        """Look up an issue in the in-memory list.

        Raises:
            KeyError: No issue with that id is loaded
        """
        with self._lock:
            issues = self._ensure_loaded(self.key_for(repository))
            return _find(issues, issue_id)

    def refresh(self, repository: Repository) -> IssueListResult:
        """Fetch issues from GitHub and reconcile them with local annotations.

        Raises:
            GitHubClientError: The fetch failed; cached state is untouched
        """
        key = self.key_for(repository)
        with self._lock:
            generation = self._generations.get(key, 0) + 1
            self._generations[key] = generation

        fetched = self._require_client().list_issues(
            repository.owner, repository.name, self._state_filter
        )

        with self._lock:
            if self._generations[key] != generation:
                logger.info(
                    "Discarding superseded refresh of %s (generation %d)",
                    repository.full_name,
                    generation,
                )
                return IssueListResult(issues=list(self._issues.get(key, [])), stale=True)

            cached = self._ensure_loaded(key)
            merged = reconcile(fetched, cached)
            warnings = self._commit(key, merged)

        logger.info("Refreshed %s: %d issues", repository.full_name, len(merged))
        return IssueListResult(issues=list(merged), warnings=warnings)

    def list_comments(self, repository: Repository, issue_id: int) -> list[Comment]:
        issue = self.get_issue(repository, issue_id)
        return self._require_client().list_comments(
            repository.owner, repository.name, issue.number
        )

    # --- Local-only mutations ---

    def set_note(
        self, repository: Repository, issue_id: int, notes: str | None
    ) -> IssueListResult:
        """Replace an issue's private notes. Blank notes are cleared."""
        cleaned = notes if notes and notes.strip() else None
        return self._update_local(repository, issue_id, private_notes=cleaned)

    def toggle_archive(self, repository: Repository, issue_id: int) -> IssueListResult:
        issue = self.get_issue(repository, issue_id)
        return self._update_local(repository, issue_id, is_archived=not issue.is_archived)

    # --- Mutations with an upstream side effect ---

    def set_manual_status(
        self, repository: Repository, issue_id: int, status: ManualStatus
    ) -> IssueListResult:
        """Set an issue's manual status, moving the issue upstream to match.

        Red and yellow reopen a closed issue; light and dark green close an
        open one. That remote call is best-effort: a failure is logged and
        reported as a warning, and the status is applied anyway. A full
        refresh follows to pick up GitHub's current state; its failure is
        also reported as a warning.
        """
        issue = self.get_issue(repository, issue_id)
        warnings: list[str] = []

        target: IssueState | None = None
        if status.implies_open and issue.is_closed:
            target = IssueState.OPEN
        elif status.implies_closed and issue.is_open:
            target = IssueState.CLOSED

        if target is not None:
            try:
                self._require_client().set_issue_state(
                    repository.owner, repository.name, issue.number, target
                )
            except GitHubClientError as e:
                logger.warning(
                    "Could not set #%d to %s on GitHub: %s", issue.number, target.value, e
                )
                warnings.append(f"Could not set #{issue.number} to {target.value} on GitHub: {e}")

        local = self._update_local(repository, issue_id, manual_status=status)
        warnings.extend(local.warnings)

        try:
            refreshed = self.refresh(repository)
        except GitHubClientError as e:
            logger.warning("Refresh after setting #%d failed: %s", issue.number, e)
            warnings.append(f"Could not refresh from GitHub: {e}")
            return IssueListResult(issues=self.current(repository), warnings=warnings)
        if refreshed.stale:
            return IssueListResult(issues=self.current(repository), warnings=warnings)
        refreshed.warnings[:0] = warnings
        return refreshed

    def set_open_state(
        self, repository: Repository, issue_id: int, open_: bool
    ) -> IssueListResult:
        """Close or reopen an issue on GitHub, then re-fetch it.

        Only the issue's upstream attributes change locally.

        Raises:
            GitHubClientError: The remote call failed
        """
        issue = self.get_issue(repository, issue_id)
        client = self._require_client()
        target = IssueState.OPEN if open_ else IssueState.CLOSED
        if issue.state != target:
            client.set_issue_state(repository.owner, repository.name, issue.number, target)
        fresh = client.get_issue(repository.owner, repository.name, issue.number)
        return self._apply_upstream(repository, fresh)

    def toggle_open(self, repository: Repository, issue_id: int) -> IssueListResult:
        issue = self.get_issue(repository, issue_id)
        return self.set_open_state(repository, issue_id, not issue.is_open)

    def create_issue(
        self, repository: Repository, title: str, body: str | None = None
    ) -> IssueListResult:
        """Create an issue on GitHub and refresh the list.

        Raises:
            ValueError: The title is blank
            GitHubClientError: The remote call failed
        """
        if not title.strip():
            raise ValueError("Issue title cannot be empty")
        created = self._require_client().create_issue(
            repository.owner, repository.name, title.strip(), body or None
        )
        result = self.refresh(repository)
        if result.find(created.id) is None and not result.stale:
            # Outside the fetched page; keep it visible anyway
            with self._lock:
                key = self.key_for(repository)
                merged = replace_issue(self._ensure_loaded(key), created)
                result.warnings.extend(self._commit(key, merged))
                result.issues = list(merged)
        return result

    def update_issue(
        self,
        repository: Repository,
        issue_id: int,
        title: str | None = None,
        body: str | None = None,
    ) -> IssueListResult:
        """Edit an issue's title and/or body on GitHub."""
        issue = self.get_issue(repository, issue_id)
        if title is not None and not title.strip():
            raise ValueError("Issue title cannot be empty")
        fresh = self._require_client().update_issue(
            repository.owner, repository.name, issue.number, title=title, body=body
        )
        return self._apply_upstream(repository, fresh)

    def add_comment(self, repository: Repository, issue_id: int, body: str) -> IssueListResult:
        """Comment on an issue, then re-fetch it so its comment count is current."""
        if not body.strip():
            raise ValueError("Comment cannot be empty")
        issue = self.get_issue(repository, issue_id)
        client = self._require_client()
        client.create_comment(repository.owner, repository.name, issue.number, body)
        fresh = client.get_issue(repository.owner, repository.name, issue.number)
        return self._apply_upstream(repository, fresh)

    # --- Internals ---

    def _require_client(self) -> GitHubClient:
        if self._client is None:
            raise GitHubAuthError("No GitHub token configured. Add your token in settings.")
        return self._client

    def _ensure_loaded(self, key: str) -> list[Issue]:
        """In-memory list for a key, seeded from disk on first use."""
        if key not in self._issues:
            self._issues[key] = self._store.load(key) or []
        return self._issues[key]

    def _commit(self, key: str, issues: Sequence[Issue]) -> list[str]:
        """Replace the in-memory list and persist it; returns warnings."""
        self._issues[key] = list(issues)
        try:
            self._store.save(key, issues)
        except CacheWriteError as e:
            return [f"Local cache not saved: {e.reason}"]
        return []

    def _update_local(
        self, repository: Repository, issue_id: int, **changes
    ) -> IssueListResult:
        key = self.key_for(repository)
        with self._lock:
            issues = self._ensure_loaded(key)
            updated = _find(issues, issue_id).model_copy(update=changes)
            merged = replace_issue(issues, updated)
            warnings = self._commit(key, merged)
        logger.debug("Updated #%d locally: %s", updated.number, sorted(changes))
        return IssueListResult(issues=list(merged), warnings=warnings)

    def _apply_upstream(self, repository: Repository, fresh: Issue) -> IssueListResult:
        """Merge one re-fetched issue into the list, keeping its local attributes."""
        key = self.key_for(repository)
        with self._lock:
            issues = self._ensure_loaded(key)
            try:
                merged_issue = merge_upstream(_find(issues, fresh.id), fresh)
            except KeyError:
                merged_issue = fresh
            merged = replace_issue(issues, merged_issue)
            warnings = self._commit(key, merged)
        return IssueListResult(issues=list(merged), warnings=warnings)


def _find(issues: Sequence[Issue], issue_id: int) -> Issue:
    for issue in issues:
        if issue.id == issue_id:
            return issue
    raise KeyError(issue_id)
