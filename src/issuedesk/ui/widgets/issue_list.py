"""Scrollable list of issue cards."""

from textual.actions import SkipAction
from textual.app import ComposeResult
from textual.containers import VerticalScroll
from textual.widget import Widget
from textual.widgets import Static

from ...models import Issue
from .issue_card import IssueCard


class IssueListScroll(VerticalScroll):
    """Scroll container for issue cards.

    Raises SkipAction for navigation keys so they bubble up to the screen
    for issue navigation instead of being handled as scroll actions.
    """

    def action_scroll_up(self) -> None:
        raise SkipAction()

    def action_scroll_down(self) -> None:
        raise SkipAction()

    def action_scroll_home(self) -> None:
        raise SkipAction()

    def action_scroll_end(self) -> None:
        raise SkipAction()


class EmptyListMessage(Static):
    """Displayed when there are no issues."""

    pass


class IssueList(Widget):
    """Issue cards in display order."""

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._issues: list[Issue] = []
        self._empty_message = "No issues"

    def compose(self) -> ComposeResult:
        yield IssueListScroll(id="issue-scroll")

    def set_issues(self, issues: list[Issue], empty_message: str = "No issues") -> None:
        """Set the issues to display, in order."""
        self._issues = issues
        self._empty_message = empty_message
        # Use call_after_refresh to ensure DOM is ready
        self.call_after_refresh(self._refresh_cards)

    async def _refresh_cards(self) -> None:
        content = self.query_one("#issue-scroll", IssueListScroll)
        await content.remove_children()

        if not self._issues:
            await content.mount(EmptyListMessage(self._empty_message))
            return

        await content.mount_all(IssueCard(issue, id=f"issue-{issue.id}") for issue in self._issues)

    @property
    def issues(self) -> list[Issue]:
        return self._issues

    @property
    def issue_count(self) -> int:
        return len(self._issues)

    def get_issue(self, index: int) -> Issue | None:
        """Get issue at index."""
        if 0 <= index < len(self._issues):
            return self._issues[index]
        return None

    def index_of(self, issue_id: int) -> int | None:
        for index, issue in enumerate(self._issues):
            if issue.id == issue_id:
                return index
        return None

    def focus_issue(self, index: int) -> bool:
        """
        Focus the card at the given index.

        Returns:
            True if a card was focused, False otherwise
        """
        issue = self.get_issue(index)
        if issue is None:
            return False
        cards = self.query(f"#issue-{issue.id}")
        if not cards:
            return False
        card = cards.first()
        card.focus()
        card.scroll_visible()
        return True
