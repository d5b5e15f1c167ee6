"""Derived status projection.

Maps an issue to a display category and a sort priority. The projection is
never persisted; it is recomputed on every render.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from .enums import ManualStatus, StatusCategory
from .issue import Issue

MANUAL_STATUS_CATEGORY: dict[ManualStatus, StatusCategory] = {
    ManualStatus.RED: StatusCategory.RED,
    ManualStatus.YELLOW: StatusCategory.YELLOW,
    ManualStatus.LIGHT_GREEN: StatusCategory.LIGHT_GREEN,
    ManualStatus.DARK_GREEN: StatusCategory.DARK_GREEN,
}


@dataclass(frozen=True)
class StatusProjection:
    """Display category and sort priority for one issue."""

    category: StatusCategory

    @property
    def priority(self) -> int:
        return self.category.priority


def derive_category(issue: Issue) -> StatusCategory:
    """Apply the status rules in order; the first match wins."""
    if issue.manual_status is not ManualStatus.NONE:
        return MANUAL_STATUS_CATEGORY[issue.manual_status]
    if issue.is_archived:
        return StatusCategory.DARK_GREEN
    if issue.is_closed:
        return StatusCategory.LIGHT_GREEN
    if issue.comment_count == 0:
        return StatusCategory.RED
    return StatusCategory.YELLOW


def project_status(issue: Issue) -> StatusProjection:
    """Project an issue onto its display category."""
    return StatusProjection(category=derive_category(issue))


def sort_issues(issues: Iterable[Issue], newest_first: bool = True) -> list[Issue]:
    """Sort by status priority, then by creation time.

    Both sorts are stable, so issues created at the same instant keep
    their incoming order.
    """
    by_created = sorted(issues, key=lambda issue: issue.created_at, reverse=newest_first)
    return sorted(by_created, key=lambda issue: derive_category(issue).priority)
