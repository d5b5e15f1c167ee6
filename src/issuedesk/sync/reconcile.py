"""Reconciliation of freshly fetched issues with cached local annotations.

GitHub owns the upstream attributes of an issue and issuedesk owns the
local ones (notes, archive flag, manual status). Reconciling a fetch keeps
the former from the network and the latter from the cache:

- the result has exactly one record per fetched issue, in fetch order
- issues are matched on their GitHub id, never on their number
- fetched issues with no cached counterpart get default local attributes
- cached issues missing from the fetch are dropped

Duplicate ids resolve as "last wins" on both sides: a duplicated fetched
issue is emitted once, at the position of its last occurrence, with that
occurrence's data; a duplicated cached issue contributes the local
attributes of its last occurrence.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from ..models import Issue, LocalAttributes

_DEFAULT_LOCAL = LocalAttributes()


def reconcile(fetched: Sequence[Issue], cached: Iterable[Issue]) -> list[Issue]:
    """Merge a fetched issue list with the previously cached list.

    Pure: neither input is modified and the output depends only on the
    inputs.
    """
    local_by_id: dict[int, LocalAttributes] = {
        issue.id: issue.local_attributes() for issue in cached
    }

    last_index = {issue.id: index for index, issue in enumerate(fetched)}

    merged: list[Issue] = []
    for index, issue in enumerate(fetched):
        if last_index[issue.id] != index:
            continue
        merged.append(issue.with_local(local_by_id.get(issue.id, _DEFAULT_LOCAL)))
    return merged


def merge_upstream(existing: Issue, fresh: Issue) -> Issue:
    """Take `fresh`'s upstream attributes and keep `existing`'s local ones."""
    return existing.with_upstream(fresh)


def replace_issue(issues: Sequence[Issue], updated: Issue) -> list[Issue]:
    """Copy of `issues` with the record sharing `updated`'s id replaced.

    The issue is appended when no record matches.
    """
    result = list(issues)
    for index, issue in enumerate(result):
        if issue.id == updated.id:
            result[index] = updated
            return result
    result.append(updated)
    return result
