"""Issue domain model.

An issue carries two disjoint groups of attributes:

- upstream attributes, owned by GitHub and replaced on every fetch
- local attributes, owned by issuedesk and never read from the network
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, ClassVar

from pydantic import BaseModel, Field, field_validator

from .enums import IssueState, ManualStatus

logger = logging.getLogger(__name__)


class IssueUser(BaseModel):
    """GitHub account that authored an issue or comment."""

    login: str
    avatar_url: str = ""

    @classmethod
    def from_api(cls, payload: dict[str, Any]) -> IssueUser:
        """Create from a GitHub `user` object."""
        return cls(login=payload["login"], avatar_url=payload.get("avatar_url") or "")


class IssueLabel(BaseModel):
    """Label attached to an issue."""

    name: str
    color: str = ""  # hex without '#', as GitHub returns it


class LocalAttributes(BaseModel):
    """The locally owned part of an issue record."""

    private_notes: str | None = None
    is_archived: bool = False
    manual_status: ManualStatus = ManualStatus.NONE


class Issue(BaseModel):
    """A GitHub issue augmented with private local annotations."""

    UPSTREAM_FIELDS: ClassVar[tuple[str, ...]] = (
        "id",
        "number",
        "title",
        "body",
        "state",
        "author",
        "labels",
        "comment_count",
        "created_at",
        "updated_at",
        "closed_at",
        "url",
    )
    LOCAL_FIELDS: ClassVar[tuple[str, ...]] = (
        "private_notes",
        "is_archived",
        "manual_status",
    )

    # Upstream attributes
    id: int  # globally unique GitHub identifier, the reconciliation key
    number: int
    title: str
    body: str | None = None
    state: IssueState = IssueState.OPEN
    author: IssueUser
    labels: list[IssueLabel] = Field(default_factory=list)
    comment_count: int = 0
    created_at: datetime
    updated_at: datetime
    closed_at: datetime | None = None
    url: str = ""

    # Local attributes
    private_notes: str | None = None
    is_archived: bool = False
    manual_status: ManualStatus = ManualStatus.NONE

    @field_validator("manual_status", mode="before")
    @classmethod
    def coerce_manual_status(cls, value: Any) -> Any:
        """Load missing or unknown status tags as automatic."""
        if value is None:
            return ManualStatus.NONE
        if isinstance(value, ManualStatus):
            return value
        try:
            return ManualStatus(value)
        except ValueError:
            logger.warning("Ignoring unknown manual status %r", value)
            return ManualStatus.NONE

    @property
    def is_open(self) -> bool:
        return self.state == IssueState.OPEN

    @property
    def is_closed(self) -> bool:
        return self.state == IssueState.CLOSED

    @property
    def label_names(self) -> list[str]:
        return [label.name for label in self.labels]

    @property
    def has_notes(self) -> bool:
        return bool(self.private_notes and self.private_notes.strip())

    def local_attributes(self) -> LocalAttributes:
        """Return the locally owned attributes."""
        return LocalAttributes(
            private_notes=self.private_notes,
            is_archived=self.is_archived,
            manual_status=self.manual_status,
        )

    def upstream_attributes(self) -> dict[str, Any]:
        """Return the GitHub owned attributes as a dict."""
        return {name: getattr(self, name) for name in self.UPSTREAM_FIELDS}

    def with_local(self, local: LocalAttributes) -> Issue:
        """Copy of this issue carrying the given local attributes."""
        return self.model_copy(update=dict(local))

    def with_upstream(self, other: Issue) -> Issue:
        """Copy of this issue carrying `other`'s upstream attributes."""
        return self.model_copy(update=other.upstream_attributes())

    @classmethod
    def from_api(cls, payload: dict[str, Any]) -> Issue:
        """Translate a GitHub REST issue payload into an Issue.

        Local attributes always take their defaults here.
        """
        return cls(
            id=payload["id"],
            number=payload["number"],
            title=payload["title"],
            body=payload.get("body"),
            state=payload["state"],
            author=IssueUser.from_api(payload["user"]),
            labels=[
                IssueLabel(name=label["name"], color=label.get("color") or "")
                for label in payload.get("labels") or []
            ],
            comment_count=payload.get("comments", 0),
            created_at=payload["created_at"],
            updated_at=payload["updated_at"],
            closed_at=payload.get("closed_at"),
            url=payload.get("html_url") or "",
        )
