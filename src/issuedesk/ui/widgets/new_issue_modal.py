"""Modal for creating a GitHub issue."""

from dataclasses import dataclass

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Label, TextArea


@dataclass(frozen=True)
class NewIssue:
    """Title and body entered by the user."""

    title: str
    body: str | None = None


class NewIssueModal(ModalScreen[NewIssue | None]):
    """Collect a title and optional body for a new issue."""

    DEFAULT_CSS = """
    NewIssueModal {
        align: center middle;
    }

    NewIssueModal > Vertical {
        width: 80%;
        height: 70%;
        padding: 1 2;
        background: $surface;
        border: solid $primary;
    }

    NewIssueModal Label {
        margin-top: 1;
    }

    NewIssueModal TextArea {
        height: 1fr;
    }

    NewIssueModal #error {
        color: $error;
        height: auto;
    }

    NewIssueModal .buttons {
        height: auto;
        align: right middle;
        margin-top: 1;
    }

    NewIssueModal Button {
        margin-left: 1;
    }
    """

    BINDINGS = [
        Binding("ctrl+s", "create", "Create"),
        Binding("escape", "cancel", "Cancel"),
    ]

    def __init__(self, repository_name: str) -> None:
        super().__init__()
        self._repository_name = repository_name

    def compose(self) -> ComposeResult:
        with Vertical():
            yield Label(f"[b]New issue in {self._repository_name}[/]")
            yield Label("Title")
            yield Input(placeholder="Issue title", id="title")
            yield Label("Description (optional, markdown)")
            yield TextArea(id="body")
            yield Label("", id="error")
            with Horizontal(classes="buttons"):
                yield Button("Create (ctrl+s)", id="create", variant="primary")
                yield Button("Cancel", id="cancel")

    def on_mount(self) -> None:
        self.query_one("#title", Input).focus()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        """Enter in the title moves on to the body."""
        event.stop()
        self.query_one("#body", TextArea).focus()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "create":
            self.action_create()
        else:
            self.action_cancel()

    def action_create(self) -> None:
        title = self.query_one("#title", Input).value.strip()
        if not title:
            self.query_one("#error", Label).update("A title is required")
            self.query_one("#title", Input).focus()
            return
        body = self.query_one("#body", TextArea).text.strip()
        self.dismiss(NewIssue(title=title, body=body or None))

    def action_cancel(self) -> None:
        self.dismiss(None)
