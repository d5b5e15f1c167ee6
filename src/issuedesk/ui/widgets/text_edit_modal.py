"""Multi-line text entry modal (private notes, comments)."""

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Label, TextArea


class TextEditModal(ModalScreen[str | None]):
    """Edit a block of text.

    Dismisses with the text on save and None when cancelled.
    """

    DEFAULT_CSS = """
    TextEditModal {
        align: center middle;
    }

    TextEditModal > Vertical {
        width: 80%;
        height: 60%;
        padding: 1 2;
        background: $surface;
        border: solid $primary;
    }

    TextEditModal Label {
        width: 100%;
        text-style: bold;
        margin-bottom: 1;
    }

    TextEditModal TextArea {
        height: 1fr;
    }

    TextEditModal .buttons {
        height: auto;
        align: right middle;
        margin-top: 1;
    }

    TextEditModal Button {
        margin-left: 1;
    }
    """

    BINDINGS = [
        Binding("ctrl+s", "save", "Save"),
        Binding("escape", "cancel", "Cancel"),
    ]

    def __init__(self, heading: str, initial: str = "", save_label: str = "Save") -> None:
        super().__init__()
        self._heading = heading
        self._initial = initial
        self._save_label = save_label

    def compose(self) -> ComposeResult:
        with Vertical():
            yield Label(self._heading)
            yield TextArea(self._initial, id="text")
            with Horizontal(classes="buttons"):
                yield Button(f"{self._save_label} (ctrl+s)", id="save", variant="primary")
                yield Button("Cancel", id="cancel")

    def on_mount(self) -> None:
        self.query_one(TextArea).focus()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "save":
            self.action_save()
        else:
            self.action_cancel()

    def action_save(self) -> None:
        self.dismiss(self.query_one(TextArea).text)

    def action_cancel(self) -> None:
        self.dismiss(None)
