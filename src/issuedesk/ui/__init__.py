"""UI components."""

from .screens.issue_list import IssueListScreen
from .screens.repository_list import RepositoryListScreen
from .widgets.issue_card import IssueCard
from .widgets.issue_list import IssueList

__all__ = [
    "IssueCard",
    "IssueList",
    "IssueListScreen",
    "RepositoryListScreen",
]
