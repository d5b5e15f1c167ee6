"""Merging of upstream issue data with local annotations."""

from .reconcile import merge_upstream, reconcile, replace_issue

__all__ = [
    "merge_upstream",
    "reconcile",
    "replace_issue",
]
