"""Close/reopen confirmation for one issue."""

from rich.markup import escape
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Label, Static

from ...models import Issue, IssueState


def target_state(issue: Issue) -> IssueState:
    """The state toggling an issue moves it to on GitHub."""
    return IssueState.CLOSED if issue.is_open else IssueState.OPEN


def state_change_lines(issue: Issue) -> list[str]:
    """Markup lines describing what confirming will do."""
    target = target_state(issue)
    lines = [
        f"[b]#{issue.number}[/] {escape(issue.title)}",
        f"[dim]{issue.state.value}[/] → [b]{target.value}[/] on GitHub",
    ]
    status = issue.manual_status
    if (target is IssueState.CLOSED and status.implies_open) or (
        target is IssueState.OPEN and status.implies_closed
    ):
        lines.append(f"[yellow]Manual status stays {status.label}[/]")
    return lines


class StateChangeModal(ModalScreen[bool]):
    """Ask before closing or reopening an issue on GitHub.

    Dismisses with True when confirmed. Local notes and status are not touched.
    """

    DEFAULT_CSS = """
    StateChangeModal {
        align: center middle;
    }

    StateChangeModal > Vertical {
        width: 60;
        height: auto;
        padding: 1 2;
        background: $surface;
        border: solid $warning;
    }

    StateChangeModal #state-change-title {
        width: 100%;
        text-style: bold;
        margin-bottom: 1;
    }

    StateChangeModal #state-change-detail {
        margin-bottom: 1;
    }

    StateChangeModal Horizontal {
        width: 100%;
        height: auto;
        align: center middle;
    }

    StateChangeModal Button {
        margin: 0 1;
    }
    """

    BINDINGS = [
        Binding("y", "confirm", "Yes"),
        Binding("n", "cancel", "No"),
        Binding("escape", "cancel", "Cancel"),
    ]

    def __init__(self, issue: Issue) -> None:
        super().__init__()
        self.issue = issue
        self.target = target_state(issue)

    def compose(self) -> ComposeResult:
        verb = "Close" if self.target is IssueState.CLOSED else "Reopen"
        with Vertical():
            yield Label(f"{verb} issue?", id="state-change-title")
            yield Static("\n".join(state_change_lines(self.issue)), id="state-change-detail")
            with Horizontal():
                yield Button(f"{verb} (y)", id="confirm", variant="warning")
                yield Button("Cancel (n)", id="cancel")

    def on_mount(self) -> None:
        self.query_one("#cancel", Button).focus()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        self.dismiss(event.button.id == "confirm")

    def action_confirm(self) -> None:
        self.dismiss(True)

    def action_cancel(self) -> None:
        self.dismiss(False)
