"""Manual status selector modal."""

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.screen import ModalScreen
from textual.widgets import Label, OptionList
from textual.widgets.option_list import Option

from ...models import ManualStatus

STATUS_COLORS = {
    ManualStatus.NONE: "dim",
    ManualStatus.RED: "red",
    ManualStatus.YELLOW: "yellow",
    ManualStatus.LIGHT_GREEN: "green",
    ManualStatus.DARK_GREEN: "dark_green",
}

STATUS_HINTS = {
    ManualStatus.NONE: "derive from GitHub",
    ManualStatus.RED: "reopens if closed",
    ManualStatus.YELLOW: "reopens if closed",
    ManualStatus.LIGHT_GREEN: "closes if open",
    ManualStatus.DARK_GREEN: "closes if open",
}


class StatusSelectorModal(ModalScreen[ManualStatus | None]):
    """Pick a manual status. Dismisses with None when cancelled."""

    DEFAULT_CSS = """
    StatusSelectorModal {
        align: center middle;
    }

    StatusSelectorModal > Vertical {
        width: 44;
        height: auto;
        padding: 1 2;
        background: $surface;
        border: solid $primary;
    }

    StatusSelectorModal Label {
        width: 100%;
        text-align: center;
        margin-bottom: 1;
        text-style: bold;
    }

    StatusSelectorModal OptionList {
        height: auto;
        max-height: 10;
    }
    """

    BINDINGS = [
        Binding("escape", "cancel", "Cancel"),
    ]

    def __init__(self, current: ManualStatus = ManualStatus.NONE) -> None:
        super().__init__()
        self._current = current

    def compose(self) -> ComposeResult:
        with Vertical():
            yield Label("Set Status")
            option_list = OptionList(id="status-list")
            for status in ManualStatus:
                marker = "›" if status is self._current else " "
                label = (
                    f"{marker} [{STATUS_COLORS[status]}]●[/] {status.label} "
                    f"[dim]({STATUS_HINTS[status]})[/]"
                )
                option_list.add_option(Option(label, id=status.value))
            yield option_list

    def on_mount(self) -> None:
        option_list = self.query_one(OptionList)
        option_list.highlighted = list(ManualStatus).index(self._current)
        option_list.focus()

    def on_option_list_option_selected(self, event: OptionList.OptionSelected) -> None:
        """Handle option selection via click or enter."""
        if event.option.id is not None:
            self.dismiss(ManualStatus(event.option.id))

    def action_cancel(self) -> None:
        self.dismiss(None)
