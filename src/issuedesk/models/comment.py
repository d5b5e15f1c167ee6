"""Issue comment model."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel

from .issue import IssueUser


class Comment(BaseModel):
    """A comment on a GitHub issue."""

    id: int
    body: str = ""
    author: IssueUser
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_api(cls, payload: dict[str, Any]) -> Comment:
        return cls(
            id=payload["id"],
            body=payload.get("body") or "",
            author=IssueUser.from_api(payload["user"]),
            created_at=payload["created_at"],
            updated_at=payload["updated_at"],
        )
