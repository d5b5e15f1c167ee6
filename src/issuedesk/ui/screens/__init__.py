"""Screen components."""

from .issue_list import IssueListScreen
from .repository_list import RepositoryListScreen

__all__ = [
    "IssueListScreen",
    "RepositoryListScreen",
]
