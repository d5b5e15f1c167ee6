"""Issue card widget."""

from __future__ import annotations

from rich.markup import escape
from textual.app import ComposeResult
from textual.containers import Horizontal
from textual.widget import Widget
from textual.widgets import Static

from ...models import Issue, ManualStatus, StatusCategory, project_status
from ...utils import format_age

# Display mapping per category: (symbol, rich color, css class)
CATEGORY_DISPLAY: dict[StatusCategory, tuple[str, str, str]] = {
    StatusCategory.RED: ("●", "red", "-red"),
    StatusCategory.YELLOW: ("●", "yellow", "-yellow"),
    StatusCategory.LIGHT_GREEN: ("●", "green", "-light-green"),
    StatusCategory.DARK_GREEN: ("●", "dark_green", "-dark-green"),
}


class IssueCard(Widget, can_focus=True):
    """One issue in the issue list, colored by its derived status."""

    def __init__(self, issue: Issue, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._issue = issue
        self._category = project_status(issue).category
        self.add_class(CATEGORY_DISPLAY[self._category][2])

    @property
    def issue(self) -> Issue:
        return self._issue

    def compose(self) -> ComposeResult:
        """Create card layout."""
        symbol, color, _ = CATEGORY_DISPLAY[self._category]
        title = escape(self._truncate(self._issue.title, 70))
        yield Static(
            f"[{color}]{symbol}[/] [b]#{self._issue.number}[/] {title}",
            classes="issue-title",
        )

        with Horizontal(classes="issue-meta"):
            yield Static(self._format_meta(), classes="issue-info")
            if self._issue.labels:
                yield Static(self._format_labels(), classes="issue-labels")
            flags = self._format_flags()
            if flags:
                yield Static(flags, classes="issue-flags")

        if self._issue.has_notes:
            preview = escape(self._first_line(self._issue.private_notes or ""))
            yield Static(f"[dim]✎ {preview}[/]", classes="issue-notes")

    def _format_meta(self) -> str:
        state = "open" if self._issue.is_open else "closed"
        comments = self._issue.comment_count
        noun = "comment" if comments == 1 else "comments"
        age = format_age(self._issue.created_at)
        author = escape(self._issue.author.login)
        return f"[dim]{state} · {comments} {noun} · @{author} · {age}[/]"

    def _format_labels(self) -> str:
        """Format labels as chips (at most three)."""
        max_labels = 3
        names = self._issue.label_names
        formatted = " ".join(f"[dim]#{escape(name)}[/]" for name in names[:max_labels])
        if len(names) > max_labels:
            formatted += f" [dim]+{len(names) - max_labels}[/]"
        return formatted

    def _format_flags(self) -> str:
        flags: list[str] = []
        if self._issue.manual_status is not ManualStatus.NONE:
            flags.append(f"[b]{self._issue.manual_status.label}[/]")
        if self._issue.is_archived:
            flags.append("archived")
        return " ".join(f"[reverse] {flag} [/]" for flag in flags)

    def _first_line(self, text: str) -> str:
        for line in text.splitlines():
            line = line.strip()
            if line:
                return self._truncate(line, 60)
        return ""

    def _truncate(self, text: str, max_len: int) -> str:
        """Truncate text with ellipsis."""
        if len(text) <= max_len:
            return text
        return text[: max_len - 1] + "…"
