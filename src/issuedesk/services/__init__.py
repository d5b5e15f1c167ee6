"""Service layer for business logic."""

from .config_service import ConfigService
from .issue_service import IssueService
from .repository_service import RepositoryService

__all__ = [
    "ConfigService",
    "IssueService",
    "RepositoryService",
]
