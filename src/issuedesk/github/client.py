"""GitHub REST API client."""

from __future__ import annotations

import logging
import os
import subprocess
import time
from collections.abc import Callable
from typing import Any, TypeVar

import httpx
from pydantic import ValidationError

from ..models import Comment, GitHubConfig, Issue, IssueState, IssueStateFilter, Repository

logger = logging.getLogger(__name__)

T = TypeVar("T")


class GitHubClientError(Exception):
    """Base exception for GitHub client errors."""

    pass


class GitHubAuthError(GitHubClientError):
    """No credential available, or authentication failed."""

    pass


class GitHubNotFoundError(GitHubClientError):
    """Resource not found."""

    pass


class GitHubForbiddenError(GitHubClientError):
    """Permission denied."""

    pass


class GitHubHTTPError(GitHubClientError):
    """Any other non-2xx response."""

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(f"GitHub API error: HTTP {status_code}: {message}")
        self.status_code = status_code


class GitHubResponseError(GitHubClientError):
    """Response body is not JSON or does not match the expected shape."""

    pass


class GitHubClient:
    """GitHub REST API client.

    A thin wrapper around the v3 REST API that:
    - authenticates with a bearer token
    - supports Enterprise hosts via a custom base_url
    - maps failures onto the GitHubClientError hierarchy
    - translates payloads into issuedesk models
    """

    API_VERSION = "2022-11-28"

    def __init__(self, token: str, base_url: str = "api.github.com", page_size: int = 100):
        """Initialize the GitHub client.

        Args:
            token: GitHub personal access token
            base_url: API host (default: api.github.com, use custom for Enterprise)
            page_size: Items requested per list call; only the first page is read
        """
        if not token:
            raise GitHubAuthError(
                "No GitHub token configured. Add your token in settings."
            )
        self.token = token
        self.base_url = base_url
        self.page_size = page_size
        self._api_url = f"https://{base_url}"
        self._client = httpx.Client(
            base_url=self._api_url,
            headers={
                "Authorization": f"Bearer {token}",
                "Accept": "application/vnd.github+json",
                "X-GitHub-Api-Version": self.API_VERSION,
            },
        )

    def close(self) -> None:
        """Close the HTTP client."""
        self._client.close()

    def __enter__(self) -> GitHubClient:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    @classmethod
    def from_config(cls, config: GitHubConfig, page_size: int = 100) -> GitHubClient:
        """Create a client from the `github` section of the app config.

        Tries in order:
        1. The token stored in config.yml
        2. GITHUB_TOKEN environment variable
        3. gh auth token (if gh CLI is installed and authenticated)

        Raises:
            GitHubAuthError: If no token is available
        """
        token = config.token.strip()
        if token:
            logger.debug("Using token from config file")
            return cls(token, config.base_url, page_size)
        return cls.from_environment(config.base_url, page_size)

    @classmethod
    def from_environment(
        cls, base_url: str = "api.github.com", page_size: int = 100
    ) -> GitHubClient:
        """Create a client from GITHUB_TOKEN or the gh CLI.

        Raises:
            GitHubAuthError: If no token is available
        """
        token = os.environ.get("GITHUB_TOKEN")
        if token:
            logger.debug("Using token from GITHUB_TOKEN environment variable")
            return cls(token, base_url, page_size)

        try:
            result = subprocess.run(
                ["gh", "auth", "token"],
                capture_output=True,
                text=True,
                check=True,
            )
            token = result.stdout.strip()
            if token:
                logger.debug("Using token from gh CLI")
                return cls(token, base_url, page_size)
        except (subprocess.CalledProcessError, FileNotFoundError):
            logger.debug("gh CLI not available or not authenticated")

        logger.error("No GitHub token found")
        raise GitHubAuthError(
            "No GitHub token found. Either:\n"
            "  - Add a token in settings (stored in config.yml)\n"
            "  - Set GITHUB_TOKEN environment variable\n"
            "  - Run 'gh auth login' to authenticate with GitHub CLI"
        )

    # --- Transport ---

    def request(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
    ) -> Any:
        """Send a request and return the decoded JSON body.

        Raises:
            GitHubAuthError: Authentication failed
            GitHubForbiddenError: Permission denied
            GitHubNotFoundError: Resource not found
            GitHubHTTPError: Any other non-2xx status
            GitHubResponseError: Body is not valid JSON
            GitHubClientError: Transport failure or malformed URL
        """
        logger.debug("%s %s params=%s", method, path, params)

        start_time = time.monotonic()
        try:
            response = self._client.request(method, path, params=params, json=json)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            elapsed_ms = (time.monotonic() - start_time) * 1000
            logger.error("%s %s failed after %.0fms: %s", method, path, elapsed_ms, e)
            raise GitHubClientError(f"Request failed: {e}") from e

        elapsed_ms = (time.monotonic() - start_time) * 1000
        status = response.status_code

        if status == 401:
            logger.error("%s %s: 401 Unauthorized (%.0fms)", method, path, elapsed_ms)
            raise GitHubAuthError("Authentication failed. Check your GitHub token.")
        if status == 403:
            logger.error("%s %s: 403 Forbidden (%.0fms)", method, path, elapsed_ms)
            raise GitHubForbiddenError(
                "Permission denied. Check that your token has the 'repo' scope."
            )
        if status == 404:
            logger.error("%s %s: 404 Not Found (%.0fms)", method, path, elapsed_ms)
            raise GitHubNotFoundError(f"Not found: {path}")
        if status >= 400:
            logger.error("%s %s: HTTP %d (%.0fms)", method, path, status, elapsed_ms)
            raise GitHubHTTPError(status, _error_message(response))

        try:
            result = response.json()
        except ValueError as e:
            logger.error("%s %s: Invalid JSON response (%.0fms)", method, path, elapsed_ms)
            raise GitHubResponseError(f"Invalid JSON response: {e}") from e

        logger.info("%s %s: %d (%.0fms)", method, path, status, elapsed_ms)
        return result

    def _parse(self, parser: Callable[[dict[str, Any]], T], payload: Any) -> T:
        """Translate one payload, turning shape mismatches into GitHubResponseError."""
        try:
            return parser(payload)
        except (KeyError, TypeError, ValidationError) as e:
            logger.error("Unexpected response shape: %s", e)
            raise GitHubResponseError(f"Unexpected response from GitHub: {e}") from e

    def _parse_list(self, parser: Callable[[dict[str, Any]], T], payload: Any) -> list[T]:
        if not isinstance(payload, list):
            raise GitHubResponseError("Unexpected response from GitHub: expected a list")
        return [self._parse(parser, item) for item in payload]

    # --- Repositories ---

    def list_repositories(self, username: str | None = None) -> list[Repository]:
        """List repositories, most recently updated first.

        Args:
            username: Account to list; the authenticated user when empty
        """
        path = f"/users/{username}/repos" if username else "/user/repos"
        payload = self.request(
            "GET", path, params={"per_page": self.page_size, "sort": "updated"}
        )
        return self._parse_list(Repository.from_api, payload)

    # --- Issues ---

    def list_issues(
        self,
        owner: str,
        repo: str,
        state: IssueStateFilter = IssueStateFilter.ALL,
    ) -> list[Issue]:
        """List one page of issues for a repository.

        The issues endpoint also returns pull requests; those are skipped.
        """
        payload = self.request(
            "GET",
            f"/repos/{owner}/{repo}/issues",
            params={"state": state.value, "per_page": self.page_size},
        )
        if not isinstance(payload, list):
            raise GitHubResponseError("Unexpected response from GitHub: expected a list")
        issues = [
            item
            for item in payload
            if not (isinstance(item, dict) and "pull_request" in item)
        ]
        return self._parse_list(Issue.from_api, issues)

    def get_issue(self, owner: str, repo: str, number: int) -> Issue:
        payload = self.request("GET", f"/repos/{owner}/{repo}/issues/{number}")
        return self._parse(Issue.from_api, payload)

    def create_issue(self, owner: str, repo: str, title: str, body: str | None = None) -> Issue:
        data: dict[str, Any] = {"title": title}
        if body:
            data["body"] = body
        payload = self.request("POST", f"/repos/{owner}/{repo}/issues", json=data)
        issue = self._parse(Issue.from_api, payload)
        logger.info("Created issue %s/%s#%d", owner, repo, issue.number)
        return issue

    def update_issue(
        self,
        owner: str,
        repo: str,
        number: int,
        title: str | None = None,
        body: str | None = None,
    ) -> Issue:
        """Update an issue's title and/or body. Omitted fields are left unchanged."""
        data: dict[str, Any] = {}
        if title is not None:
            data["title"] = title
        if body is not None:
            data["body"] = body
        payload = self.request("PATCH", f"/repos/{owner}/{repo}/issues/{number}", json=data)
        return self._parse(Issue.from_api, payload)

    def set_issue_state(self, owner: str, repo: str, number: int, state: IssueState) -> Issue:
        payload = self.request(
            "PATCH",
            f"/repos/{owner}/{repo}/issues/{number}",
            json={"state": state.value},
        )
        logger.info("Set %s/%s#%d to %s", owner, repo, number, state.value)
        return self._parse(Issue.from_api, payload)

    def close_issue(self, owner: str, repo: str, number: int) -> Issue:
        return self.set_issue_state(owner, repo, number, IssueState.CLOSED)

    def reopen_issue(self, owner: str, repo: str, number: int) -> Issue:
        return self.set_issue_state(owner, repo, number, IssueState.OPEN)

    # --- Comments ---

    def list_comments(self, owner: str, repo: str, number: int) -> list[Comment]:
        payload = self.request(
            "GET",
            f"/repos/{owner}/{repo}/issues/{number}/comments",
            params={"per_page": self.page_size},
        )
        return self._parse_list(Comment.from_api, payload)

    def create_comment(self, owner: str, repo: str, number: int, body: str) -> Comment:
        payload = self.request(
            "POST",
            f"/repos/{owner}/{repo}/issues/{number}/comments",
            json={"body": body},
        )
        return self._parse(Comment.from_api, payload)


def _error_message(response: httpx.Response) -> str:
    """Extract GitHub's `message` field from an error response, if any."""
    try:
        body = response.json()
    except ValueError:
        return response.text
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return response.text
