"""Issue list screen for one repository."""

from __future__ import annotations

import logging
from collections.abc import Callable

from textual import work
from textual.app import ComposeResult
from textual.binding import Binding
from textual.screen import Screen
from textual.widgets import Footer, Header, Static

from ...github import GitHubClientError
from ...models import Issue, IssueListResult, ManualStatus, Repository, sort_issues
from ...services import IssueService
from ..widgets import (
    IssueList,
    IssuePreviewModal,
    NewIssue,
    NewIssueModal,
    StateChangeModal,
    StatusSelectorModal,
    TextEditModal,
)

logger = logging.getLogger(__name__)


class IssueListScreen(Screen):
    """Issues of one repository, sorted by derived status."""

    BINDINGS = [
        Binding("escape", "back", "Back", show=True),
        Binding("r", "refresh", "Refresh", show=True),
        # Navigation - vim style
        Binding("j", "nav_down", "↓ Issue", show=False),
        Binding("k", "nav_up", "↑ Issue", show=False),
        # Navigation - arrow keys
        Binding("down", "nav_down", "↓ Issue", show=False),
        Binding("up", "nav_up", "↑ Issue", show=False),
        # Jump navigation
        Binding("g", "nav_first", "First", show=False),
        Binding("G", "nav_last", "Last", show=False),
        Binding("home", "nav_first", "First", show=False),
        Binding("end", "nav_last", "Last", show=False),
        # Issue actions
        Binding("enter", "preview", "Preview", show=False),
        Binding("n", "new_issue", "New", show=True),
        Binding("e", "edit_notes", "Notes", show=True),
        Binding("E", "edit_body", "Edit body", show=False),
        Binding("s", "set_status", "Status", show=True),
        Binding("a", "toggle_archive", "Archive", show=True),
        Binding("x", "toggle_open", "Close/Reopen", show=True),
        Binding("c", "comment", "Comment", show=True),
        Binding("o", "toggle_sort", "Sort", show=False),
    ]

    def __init__(self, repository: Repository, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.repository = repository
        self._current = 0
        self._newest_first = True
        self._pending_focus_id: int | None = None

    @property
    def service(self) -> IssueService:
        return self.app.issue_service  # pyrefly: ignore[missing-attribute]

    def compose(self) -> ComposeResult:
        yield Header()
        yield Static("", id="issue-status", classes="status-bar")
        yield IssueList(id="issue-list")
        yield Footer()

    def on_mount(self) -> None:
        self.sub_title = self.repository.full_name
        config = self.app.config_service.get_config()  # pyrefly: ignore[missing-attribute]
        self._newest_first = config.ui.newest_first
        self.reload()

    def reload(self) -> None:
        """Show cached issues immediately, then refresh from GitHub."""
        self._show(self.service.load_cached(self.repository))
        self.action_refresh()

    # --- Display ---

    def _show(self, issues: list[Issue], focus_issue_id: int | None = None) -> None:
        """Sort and display issues, keeping focus on the same issue if possible."""
        issue_list = self.query_one(IssueList)
        if focus_issue_id is None:
            current = self.get_current_issue()
            focus_issue_id = current.id if current else None

        ordered = sort_issues(issues, newest_first=self._newest_first)
        issue_list.set_issues(ordered, empty_message="No issues")
        self._update_status(ordered)

        self._pending_focus_id = focus_issue_id
        # Cards are mounted after the next refresh
        self.call_after_refresh(self._schedule_pending_focus)

    def _schedule_pending_focus(self) -> None:
        self.call_after_refresh(self._apply_pending_focus)

    def _apply_pending_focus(self) -> None:
        issue_list = self.query_one(IssueList)
        if self._pending_focus_id is not None:
            index = issue_list.index_of(self._pending_focus_id)
            if index is not None:
                self._current = index
        if issue_list.issue_count:
            self._current = max(0, min(self._current, issue_list.issue_count - 1))
        else:
            self._current = 0
        self._pending_focus_id = None
        self._update_focus()

    def _update_status(self, issues: list[Issue], loading: bool = False) -> None:
        open_count = sum(1 for issue in issues if issue.is_open)
        order = "newest first" if self._newest_first else "oldest first"
        text = f"[dim]{open_count} open · {len(issues) - open_count} closed · {order}[/]"
        if loading:
            text += " [dim]· refreshing…[/]"
        self.query_one("#issue-status", Static).update(text)

    def _apply_result(
        self, result: IssueListResult, message: str | None = None, focus_issue_id: int | None = None
    ) -> None:
        """Apply a service result on the UI thread."""
        if result.stale:
            return
        for warning in result.warnings:
            self.notify(warning, severity="warning", timeout=5)
        self._show(result.issues, focus_issue_id)
        if message:
            self.notify(message, timeout=2)

    def _report_error(self, message: str) -> None:
        """Show an error, re-rendering whatever the service holds now.

        A failed action may still have changed local attributes first.
        """
        self._show(self.service.current(self.repository))
        self.notify(message, severity="error", timeout=5)

    # --- Navigation ---

    def navigate(self, delta: int) -> None:
        issue_list = self.query_one(IssueList)
        if issue_list.issue_count == 0:
            return
        new_index = max(0, min(self._current + delta, issue_list.issue_count - 1))
        if new_index != self._current:
            self._current = new_index
            self._update_focus()

    def navigate_to(self, index: int) -> None:
        """Navigate to an index (-1 for last)."""
        issue_list = self.query_one(IssueList)
        if issue_list.issue_count == 0:
            return
        last = issue_list.issue_count - 1
        self._current = last if index < 0 else min(index, last)
        self._update_focus()

    def _update_focus(self) -> None:
        self.query_one(IssueList).focus_issue(self._current)

    def get_current_issue(self) -> Issue | None:
        return self.query_one(IssueList).get_issue(self._current)

    def action_nav_down(self) -> None:
        self.navigate(1)

    def action_nav_up(self) -> None:
        self.navigate(-1)

    def action_nav_first(self) -> None:
        self.navigate_to(0)

    def action_nav_last(self) -> None:
        self.navigate_to(-1)

    def action_back(self) -> None:
        self.app.pop_screen()

    def action_toggle_sort(self) -> None:
        self._newest_first = not self._newest_first
        self._show(self.service.current(self.repository))

    # --- Network work ---

    def action_refresh(self) -> None:
        self._update_status(self.service.current(self.repository), loading=True)
        self.refresh_issues()

    @work(thread=True, group="refresh")
    def refresh_issues(self) -> None:
        """Fetch and reconcile issues off the UI thread."""
        try:
            result = self.service.refresh(self.repository)
        except GitHubClientError as e:
            logger.warning("Refresh of %s failed: %s", self.repository.full_name, e)
            self.app.call_from_thread(self._report_error, str(e))
            return
        if result.stale:
            return
        self.app.call_from_thread(self._apply_result, result)

    @work(thread=True, group="mutation")
    def run_mutation(
        self,
        operation: Callable[[], IssueListResult],
        message: str | None = None,
        focus_issue_id: int | None = None,
    ) -> None:
        """Run a service call that talks to GitHub, then apply its result."""
        try:
            result = operation()
        except (GitHubClientError, ValueError, KeyError) as e:
            logger.warning("Issue action failed on %s: %s", self.repository.full_name, e)
            self.app.call_from_thread(self._report_error, str(e))
            return
        self.app.call_from_thread(self._apply_result, result, message, focus_issue_id)

    # --- Issue actions ---

    def action_preview(self) -> None:
        issue = self.get_current_issue()
        if issue is None:
            return
        self.app.push_screen(IssuePreviewModal(self.repository, issue))

    def action_new_issue(self) -> None:
        self.app.push_screen(  # pyrefly: ignore[no-matching-overload]
            NewIssueModal(self.repository.full_name),
            callback=self._handle_new_issue,
        )

    def _handle_new_issue(self, new_issue: NewIssue | None) -> None:
        if new_issue is None:
            return
        self.run_mutation(
            lambda: self.service.create_issue(self.repository, new_issue.title, new_issue.body),
            "Issue created",
        )

    def action_edit_notes(self) -> None:
        issue = self.get_current_issue()
        if issue is None:
            return

        def save(notes: str | None) -> None:
            if notes is None:
                return
            result = self.service.set_note(self.repository, issue.id, notes)
            self._apply_result(result, "Notes saved", issue.id)

        self.app.push_screen(  # pyrefly: ignore[no-matching-overload]
            TextEditModal(f"Private notes for #{issue.number}", issue.private_notes or ""),
            callback=save,
        )

    def action_edit_body(self) -> None:
        issue = self.get_current_issue()
        if issue is None:
            return

        def save(body: str | None) -> None:
            if body is None or body == (issue.body or ""):
                return
            self.run_mutation(
                lambda: self.service.update_issue(self.repository, issue.id, body=body),
                "Issue updated",
                issue.id,
            )

        self.app.push_screen(  # pyrefly: ignore[no-matching-overload]
            TextEditModal(f"Description of #{issue.number}", issue.body or "", "Update"),
            callback=save,
        )

    def action_set_status(self) -> None:
        issue = self.get_current_issue()
        if issue is None:
            return

        def apply(status: ManualStatus | None) -> None:
            if status is None or status is issue.manual_status:
                return
            self.run_mutation(
                lambda: self.service.set_manual_status(self.repository, issue.id, status),
                f"Status: {status.label}",
                issue.id,
            )

        self.app.push_screen(  # pyrefly: ignore[no-matching-overload]
            StatusSelectorModal(issue.manual_status),
            callback=apply,
        )

    def action_toggle_archive(self) -> None:
        issue = self.get_current_issue()
        if issue is None:
            return
        result = self.service.toggle_archive(self.repository, issue.id)
        message = "Unarchived" if issue.is_archived else "Archived"
        self._apply_result(result, message, issue.id)

    def action_toggle_open(self) -> None:
        issue = self.get_current_issue()
        if issue is None:
            return

        def confirmed(ok: bool) -> None:
            if not ok:
                return
            self.run_mutation(
                lambda: self.service.toggle_open(self.repository, issue.id),
                f"#{issue.number} {'closed' if issue.is_open else 'reopened'}",
                issue.id,
            )

        self.app.push_screen(  # pyrefly: ignore[no-matching-overload]
            StateChangeModal(issue),
            callback=confirmed,
        )

    def action_comment(self) -> None:
        issue = self.get_current_issue()
        if issue is None:
            return

        def post(body: str | None) -> None:
            if body is None or not body.strip():
                return
            self.run_mutation(
                lambda: self.service.add_comment(self.repository, issue.id, body),
                "Comment added",
                issue.id,
            )

        self.app.push_screen(  # pyrefly: ignore[no-matching-overload]
            TextEditModal(f"Comment on #{issue.number}", save_label="Comment"),
            callback=post,
        )
