"""Data models."""

from .app_config import AppConfig, GitHubConfig, PathConfig, UIConfig
from .comment import Comment
from .enums import IssueState, IssueStateFilter, ManualStatus, StatusCategory
from .issue import Issue, IssueLabel, IssueUser, LocalAttributes
from .repository import Repository
from .results import IssueListResult
from .status import StatusProjection, derive_category, project_status, sort_issues

__all__ = [
    "AppConfig",
    "Comment",
    "GitHubConfig",
    "Issue",
    "IssueLabel",
    "IssueListResult",
    "IssueState",
    "IssueStateFilter",
    "IssueUser",
    "LocalAttributes",
    "ManualStatus",
    "PathConfig",
    "Repository",
    "StatusCategory",
    "StatusProjection",
    "UIConfig",
    "derive_category",
    "project_status",
    "sort_issues",
]
