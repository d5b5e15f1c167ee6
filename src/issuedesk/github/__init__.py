"""GitHub REST API integration."""

from .client import (
    GitHubAuthError,
    GitHubClient,
    GitHubClientError,
    GitHubForbiddenError,
    GitHubHTTPError,
    GitHubNotFoundError,
    GitHubResponseError,
)

__all__ = [
    "GitHubAuthError",
    "GitHubClient",
    "GitHubClientError",
    "GitHubForbiddenError",
    "GitHubHTTPError",
    "GitHubNotFoundError",
    "GitHubResponseError",
]
