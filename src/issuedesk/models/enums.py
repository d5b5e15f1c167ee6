"""Enumerations shared by the issue model and the status projection."""

from enum import Enum


class IssueState(str, Enum):
    """Upstream state of a GitHub issue."""

    OPEN = "open"
    CLOSED = "closed"


class IssueStateFilter(str, Enum):
    """State filter accepted by the GitHub issue listing endpoint."""

    OPEN = "open"
    CLOSED = "closed"
    ALL = "all"


class ManualStatus(str, Enum):
    """Status tag set by hand on an issue.

    NONE means the status is derived automatically from the issue's
    upstream state and local flags.
    """

    NONE = "none"
    RED = "red"
    YELLOW = "yellow"
    LIGHT_GREEN = "lightGreen"
    DARK_GREEN = "darkGreen"

    @property
    def label(self) -> str:
        """Human readable name for selectors."""
        return _MANUAL_STATUS_LABELS[self]

    @property
    def implies_open(self) -> bool:
        """Whether setting this status should leave the issue open upstream."""
        return self in (ManualStatus.RED, ManualStatus.YELLOW)

    @property
    def implies_closed(self) -> bool:
        """Whether setting this status should close the issue upstream."""
        return self in (ManualStatus.LIGHT_GREEN, ManualStatus.DARK_GREEN)


_MANUAL_STATUS_LABELS = {
    ManualStatus.NONE: "Automatic",
    ManualStatus.RED: "Red",
    ManualStatus.YELLOW: "Yellow",
    ManualStatus.LIGHT_GREEN: "Light green",
    ManualStatus.DARK_GREEN: "Dark green",
}


class StatusCategory(str, Enum):
    """Display category produced by the status projection."""

    RED = "red"
    YELLOW = "yellow"
    LIGHT_GREEN = "light_green"
    DARK_GREEN = "dark_green"

    @property
    def priority(self) -> int:
        """Sort priority (0 is most urgent)."""
        return _CATEGORY_PRIORITY[self]


_CATEGORY_PRIORITY = {
    StatusCategory.RED: 0,
    StatusCategory.YELLOW: 1,
    StatusCategory.LIGHT_GREEN: 2,
    StatusCategory.DARK_GREEN: 3,
}
