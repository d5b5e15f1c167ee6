"""Issue preview modal: body, private notes and comments."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from rich.markdown import Markdown
from textual import work
from textual.app import ComposeResult
from textual.containers import VerticalScroll
from textual.screen import ModalScreen
from textual.widgets import Static

from ...github import GitHubClientError
from ...models import Comment, Issue, Repository, project_status

logger = logging.getLogger(__name__)


def format_issue_for_preview(issue: Issue, comments: Sequence[Comment] | None = None) -> str:
    """Render an issue as markdown for the preview modal.

    Args:
        issue: The issue to show
        comments: Loaded comments; None while they are still loading
    """
    status = project_status(issue).category.value.replace("_", " ")
    lines = [
        f"# #{issue.number} {issue.title}",
        "",
        f"**{issue.state.value}** · status: {status} · opened by @{issue.author.login} "
        f"on {issue.created_at:%Y-%m-%d}",
    ]
    if issue.labels:
        lines.append("")
        lines.append("Labels: " + ", ".join(f"`{name}`" for name in issue.label_names))
    if issue.url:
        lines.append("")
        lines.append(issue.url)

    lines.extend(["", "---", "", issue.body or "*No description provided.*"])

    if issue.has_notes:
        lines.extend(["", "---", "", "## Private notes", "", issue.private_notes or ""])

    lines.extend(["", "---", "", f"## Comments ({issue.comment_count})"])
    if comments is None:
        lines.extend(["", "*Loading…*"])
    elif not comments:
        lines.extend(["", "*No comments.*"])
    else:
        for comment in comments:
            lines.extend(
                [
                    "",
                    f"**@{comment.author.login}** · {comment.created_at:%Y-%m-%d %H:%M}",
                    "",
                    comment.body,
                ]
            )
    return "\n".join(lines)


class IssuePreviewModal(ModalScreen[None]):
    """Read-only view of an issue. Any non-scroll key closes it."""

    DEFAULT_CSS = """
    IssuePreviewModal {
        align: center middle;
    }

    IssuePreviewModal > VerticalScroll {
        width: 100%;
        height: 100%;
        border: solid $primary;
        background: $surface;
        margin: 1 2;
    }

    IssuePreviewModal > VerticalScroll > #content {
        width: 100%;
        height: auto;
        padding: 0 1;
    }

    IssuePreviewModal > VerticalScroll > #footer-bar {
        height: 1;
        width: 100%;
        background: $surface-lighten-1;
        color: $text-muted;
        text-align: center;
        dock: bottom;
    }
    """

    # Keys that should scroll content, not dismiss
    SCROLL_KEYS = {"up", "down", "pageup", "pagedown", "home", "end"}

    def __init__(self, repository: Repository, issue: Issue) -> None:
        super().__init__()
        self._repository = repository
        self._issue = issue

    def compose(self) -> ComposeResult:
        with VerticalScroll():
            yield Static(Markdown(format_issue_for_preview(self._issue)), id="content")
            yield Static("[any key] Close", id="footer-bar")

    def on_mount(self) -> None:
        self.load_comments()

    @work(thread=True, exclusive=True)
    def load_comments(self) -> None:
        """Fetch comments off the UI thread."""
        service = self.app.issue_service  # pyrefly: ignore[missing-attribute]
        try:
            comments = service.list_comments(self._repository, self._issue.id)
        except GitHubClientError as e:
            logger.warning("Could not load comments for #%d: %s", self._issue.number, e)
            self.app.call_from_thread(
                self.app.notify, f"Could not load comments: {e}", severity="error", timeout=5
            )
            comments = []
        self.app.call_from_thread(self._show_comments, comments)

    def _show_comments(self, comments: list[Comment]) -> None:
        if not self.is_attached:
            return
        content = self.query_one("#content", Static)
        content.update(Markdown(format_issue_for_preview(self._issue, comments)))

    def on_key(self, event) -> None:
        """Scroll keys scroll, anything else dismisses."""
        if event.key in self.SCROLL_KEYS:
            return
        event.stop()
        self.dismiss(None)
