"""GitHub repository model."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict


class Repository(BaseModel):
    """A GitHub repository. Immutable once fetched."""

    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    full_name: str
    owner: str
    description: str | None = None
    url: str = ""
    clone_url: str = ""
    ssh_url: str = ""
    homepage: str | None = None
    language: str | None = None
    forks_count: int = 0
    stargazers_count: int = 0
    watchers_count: int = 0
    size: int = 0  # KB
    default_branch: str = "main"
    open_issues_count: int = 0
    is_private: bool = False
    is_fork: bool = False
    is_archived: bool = False
    has_wiki: bool = False
    has_pages: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None
    pushed_at: datetime | None = None

    @property
    def display_name(self) -> str:
        """Name with separators turned into spaces, title-cased."""
        return self.name.replace("-", " ").replace("_", " ").title()

    @classmethod
    def from_api(cls, payload: dict[str, Any]) -> Repository:
        """Translate a GitHub REST repository payload."""
        return cls(
            id=payload["id"],
            name=payload["name"],
            full_name=payload["full_name"],
            owner=payload["owner"]["login"],
            description=payload.get("description"),
            url=payload.get("html_url") or "",
            clone_url=payload.get("clone_url") or "",
            ssh_url=payload.get("ssh_url") or "",
            homepage=payload.get("homepage") or None,
            language=payload.get("language"),
            forks_count=payload.get("forks_count", 0),
            stargazers_count=payload.get("stargazers_count", 0),
            watchers_count=payload.get("watchers_count", 0),
            size=payload.get("size", 0),
            default_branch=payload.get("default_branch") or "main",
            open_issues_count=payload.get("open_issues_count", 0),
            is_private=payload.get("private", False),
            is_fork=payload.get("fork", False),
            is_archived=payload.get("archived", False),
            has_wiki=payload.get("has_wiki", False),
            has_pages=payload.get("has_pages", False),
            created_at=payload.get("created_at"),
            updated_at=payload.get("updated_at"),
            pushed_at=payload.get("pushed_at"),
        )
