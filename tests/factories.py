"""Factories for issues and GitHub payloads."""

from datetime import UTC, datetime, timedelta
from typing import Any

from issuedesk.models import Issue, IssueState, IssueUser

BASE_TIME = datetime(2024, 1, 1, 12, 0, tzinfo=UTC)


def make_issue(issue_id: int = 1, **overrides: Any) -> Issue:
    """Build an issue with sensible defaults; number follows id."""
    values: dict[str, Any] = {
        "id": issue_id,
        "number": issue_id,
        "title": f"Issue {issue_id}",
        "state": IssueState.OPEN,
        "author": IssueUser(login="octocat"),
        "created_at": BASE_TIME + timedelta(hours=issue_id),
        "updated_at": BASE_TIME + timedelta(hours=issue_id),
    }
    values.update(overrides)
    return Issue(**values)


def issue_payload(issue_id: int = 1, **overrides: Any) -> dict[str, Any]:
    """A GitHub REST issue payload."""
    payload: dict[str, Any] = {
        "id": issue_id,
        "number": issue_id,
        "title": f"Issue {issue_id}",
        "body": "Body text",
        "state": "open",
        "user": {"login": "octocat", "avatar_url": "https://example.com/a.png"},
        "labels": [{"name": "bug", "color": "d73a4a"}],
        "comments": 0,
        "created_at": "2024-01-01T12:00:00Z",
        "updated_at": "2024-01-02T12:00:00Z",
        "closed_at": None,
        "html_url": f"https://github.com/octocat/hello/issues/{issue_id}",
    }
    payload.update(overrides)
    return payload


def repository_payload(name: str = "hello", **overrides: Any) -> dict[str, Any]:
    """A GitHub REST repository payload."""
    payload: dict[str, Any] = {
        "id": 42,
        "name": name,
        "full_name": f"octocat/{name}",
        "owner": {"login": "octocat"},
        "description": "A repository",
        "html_url": f"https://github.com/octocat/{name}",
        "clone_url": f"https://github.com/octocat/{name}.git",
        "ssh_url": f"git@github.com:octocat/{name}.git",
        "language": "Python",
        "open_issues_count": 3,
        "private": False,
        "fork": False,
        "archived": False,
        "created_at": "2020-01-01T00:00:00Z",
        "updated_at": "2024-01-01T00:00:00Z",
        "pushed_at": "2024-01-01T00:00:00Z",
    }
    payload.update(overrides)
    return payload
