"""Widget components."""

from .issue_card import IssueCard
from .issue_list import EmptyListMessage, IssueList
from .issue_preview_modal import IssuePreviewModal, format_issue_for_preview
from .new_issue_modal import NewIssue, NewIssueModal
from .settings_modal import SettingsModal, SettingsUpdate
from .state_change_modal import StateChangeModal, state_change_lines
from .status_selector import StatusSelectorModal
from .text_edit_modal import TextEditModal

__all__ = [
    "EmptyListMessage",
    "IssueCard",
    "IssueList",
    "IssuePreviewModal",
    "NewIssue",
    "NewIssueModal",
    "SettingsModal",
    "SettingsUpdate",
    "StateChangeModal",
    "StatusSelectorModal",
    "TextEditModal",
    "format_issue_for_preview",
    "state_change_lines",
]
