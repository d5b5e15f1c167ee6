"""Result objects returned by the issue service."""

from dataclasses import dataclass, field

from .issue import Issue


@dataclass
class IssueListResult:
    """Issue list after a refresh or a mutation."""

    issues: list[Issue] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)  # Non-fatal problems, e.g. cache writes
    stale: bool = False  # Superseded by a newer refresh, not applied

    @property
    def has_warnings(self) -> bool:
        """Whether any warnings were recorded."""
        return len(self.warnings) > 0

    def find(self, issue_id: int) -> Issue | None:
        """Return the issue with the given id, if present."""
        for issue in self.issues:
            if issue.id == issue_id:
                return issue
        return None
