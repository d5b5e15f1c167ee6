"""issuedesk - GitHub issues with private local notes."""

__version__ = "0.1.0"
